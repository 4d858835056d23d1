"""
Timezone utilities for the Video Sync Streaming Server.

Session timestamps are reported in the configured timezone.
"""

import datetime
import logging
from typing import Optional

import pytz


class TimezoneManager:
    """Manages timezone-aware datetime operations"""

    def __init__(self, timezone_name: str = "UTC"):
        self.logger = logging.getLogger(__name__)
        try:
            self.timezone = pytz.timezone(timezone_name)
            self.timezone_name = timezone_name
        except pytz.UnknownTimeZoneError:
            self.logger.warning(f"Unknown timezone {timezone_name!r}, falling back to UTC")
            self.timezone = pytz.UTC
            self.timezone_name = "UTC"

    def now(self) -> datetime.datetime:
        """Get current time in the configured timezone"""
        return datetime.datetime.now(self.timezone)

    def to_local(self, dt: datetime.datetime) -> datetime.datetime:
        """Convert datetime to the configured timezone"""
        if dt.tzinfo is None:
            # Assume UTC if no timezone info
            dt = pytz.UTC.localize(dt)
        return dt.astimezone(self.timezone)

    def format_timestamp(self, dt: Optional[datetime.datetime] = None) -> str:
        """Format datetime as ISO-8601 with offset"""
        if dt is None:
            dt = self.now()
        return self.to_local(dt).isoformat()
