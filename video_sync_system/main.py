"""
Main Application Coordinator for the Video Sync Streaming Server.

This module wires the system components together and runs the API server.
"""

import asyncio
import logging
import sys
from typing import Optional
from datetime import datetime

from .core.config import Config
from .core.logging_config import setup_logging, get_error_tracker, get_performance_logger
from .core.timezone_utils import TimezoneManager
from .sessions.store import SessionStore
from .sync.hub import SyncHub
from .video.integration import VideoModule
from .api.server import APIServer


class VideoSyncSystem:
    """Main application coordinator for the Video Sync Streaming Server"""

    def __init__(self, config_file: Optional[str] = None):
        # Load configuration first (basic logging will be used initially)
        self.config = Config(config_file)

        self.logger_setup = setup_logging(log_level=self.config.system.log_level, log_file=self.config.system.log_file)
        self.logger = logging.getLogger(__name__)

        self.error_tracker = get_error_tracker("main_system")
        self.performance_logger = get_performance_logger("main_system")

        with self.performance_logger.timed("system_init"):
            self.timezone_manager = TimezoneManager(self.config.system.timezone)
            self.video_module = VideoModule(self.config)
            self.session_store = SessionStore(ttl_seconds=self.config.sessions.session_ttl_seconds, timezone_manager=self.timezone_manager)
            self.sync_hub = SyncHub(self.session_store, self.video_module.video_service, send_timeout=self.config.sessions.control_send_timeout_seconds)
            self.api_server = APIServer(self.config, self.video_module, self.session_store, self.sync_hub)

        self.start_time: Optional[datetime] = None

        self.logger.info("Video Sync Streaming Server initialized")

    def run(self) -> None:
        """Run the system (blocking call)"""
        self.start_time = datetime.now()
        video_count = len(asyncio.run(self.video_module.video_service.list_videos()))
        self.logger.info(f"Serving {video_count} videos from {self.config.storage.videos_dir}")

        try:
            self.api_server.run()
        except KeyboardInterrupt:
            self.logger.info("Keyboard interrupt received")
        except Exception as e:
            self.error_tracker.log_error(e, "api_server")
            raise
        finally:
            self.stop()

    def stop(self) -> None:
        """Stop the system gracefully"""
        self.api_server.stop()

        if self.start_time:
            uptime = (datetime.now() - self.start_time).total_seconds()
            self.logger.info(f"System uptime: {uptime:.1f} seconds")

        self.logger.info("Video Sync Streaming Server stopped")

    def get_system_status(self) -> dict:
        """Get system status summary"""
        return {
            "start_time": self.start_time.isoformat() if self.start_time else None,
            "uptime_seconds": (datetime.now() - self.start_time).total_seconds() if self.start_time else 0,
            "api_server": self.api_server.get_server_info(),
            "video_module": self.video_module.get_module_status(),
            "sessions": self.session_store.count(),
            "errors": self.error_tracker.get_error_stats(),
        }


def main():
    """Main entry point for the application"""
    import argparse

    parser = argparse.ArgumentParser(description="Video Sync Streaming Server")
    parser.add_argument("--config", type=str, help="Path to configuration file", default="config.json")
    parser.add_argument("--log-level", type=str, choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Override log level", default=None)

    args = parser.parse_args()

    system = VideoSyncSystem(args.config)

    if args.log_level:
        logging.getLogger().setLevel(getattr(logging, args.log_level))

    try:
        system.run()
    except Exception as e:
        logging.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
