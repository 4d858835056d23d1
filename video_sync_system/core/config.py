"""
Configuration management for the Video Sync Streaming Server.

This module handles all configuration settings including the video storage
location, playback session lifecycle, and server parameters.
"""

import json
import logging
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, asdict, field
from pathlib import Path


@dataclass
class StorageConfig:
    """Video storage configuration"""

    videos_dir: str = "videos"
    catalog_manifest: Optional[str] = None  # JSON file with per-filename title/duration
    default_duration_seconds: int = 120  # Used when the manifest has no duration
    chunk_size_bytes: int = 64 * 1024  # Read size while streaming


@dataclass
class SessionConfig:
    """Playback session lifecycle configuration"""

    session_ttl_seconds: int = 3600  # Idle sessions older than this are purged
    session_sweep_interval_seconds: int = 60
    control_send_timeout_seconds: float = 5.0  # Clients slower than this are dropped from broadcasts


@dataclass
class SystemConfig:
    """System-wide configuration"""

    log_level: str = "INFO"
    log_file: Optional[str] = "video_sync_system.log"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    enable_api: bool = True
    timezone: str = "UTC"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


class Config:
    """Main configuration manager"""

    def __init__(self, config_file: Optional[str] = None, save_defaults: bool = True):
        self.config_file = config_file or "config.json"
        self.save_defaults = save_defaults
        self.logger = logging.getLogger(__name__)

        # Default configurations
        self.storage = StorageConfig()
        self.sessions = SessionConfig()
        self.system = SystemConfig()

        # Load configuration
        self.load_config()

        # Ensure the video directory exists
        self._ensure_storage_directories()

    def load_config(self) -> None:
        """Load configuration from file"""
        config_path = Path(self.config_file)

        if config_path.exists():
            try:
                with open(config_path, "r") as f:
                    config_data = json.load(f)

                if "storage" in config_data:
                    self.storage = StorageConfig(**config_data["storage"])

                if "sessions" in config_data:
                    self.sessions = SessionConfig(**config_data["sessions"])

                if "system" in config_data:
                    self.system = SystemConfig(**config_data["system"])

                self.logger.info(f"Configuration loaded from {config_path}")

            except Exception as e:
                self.logger.error(f"Error loading config from {config_path}: {e}")
        else:
            self.logger.info(f"Config file {config_path} not found, using defaults")
            if self.save_defaults:
                self.save_config()

    def save_config(self) -> None:
        """Save current configuration to file"""
        try:
            with open(self.config_file, "w") as f:
                json.dump(self.to_dict(), f, indent=2)
            self.logger.info(f"Configuration saved to {self.config_file}")
        except Exception as e:
            self.logger.error(f"Error saving config to {self.config_file}: {e}")

    def _ensure_storage_directories(self) -> None:
        """Ensure the video directory exists"""
        try:
            Path(self.storage.videos_dir).mkdir(parents=True, exist_ok=True)
            self.logger.info("Video directory verified/created")
        except Exception as e:
            self.logger.error(f"Error creating video directory: {e}")

    @property
    def videos_path(self) -> Path:
        return Path(self.storage.videos_dir)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {"storage": asdict(self.storage), "sessions": asdict(self.sessions), "system": asdict(self.system)}
