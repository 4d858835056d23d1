"""
Logging configuration for the Video Sync Streaming Server.

Console output is colored by level, the optional log file rotates, and each
subsystem (video streaming, sync control channel, HTTP API) gets its own
logger level so that range requests and control frames can be traced
without turning on debug output for uvicorn.
"""

import contextlib
import logging
import logging.handlers
import os
import sys
import time
from collections import Counter
from datetime import datetime
from typing import Dict, Iterator, List, Optional

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 5

CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'

# logger name -> (level when debugging, level otherwise)
COMPONENT_LEVELS = {
    'video_sync_system.video': (logging.DEBUG, logging.INFO),
    'video_sync_system.sessions': (logging.DEBUG, logging.INFO),
    'video_sync_system.sync': (logging.DEBUG, logging.INFO),
    'video_sync_system.api': (logging.DEBUG, logging.INFO),
    'uvicorn': (logging.INFO, logging.WARNING),
    'uvicorn.access': (logging.INFO, logging.WARNING),
    'fastapi': (logging.WARNING, logging.WARNING),
}


class ColoredFormatter(logging.Formatter):
    """Level-colored formatter for terminal output"""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname)
        if color is None:
            return super().format(record)

        # Other handlers share the record and must keep the plain level name
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


class VideoSyncLogger:
    """Root logger setup: console handler, rotating file handler, component levels"""

    def __init__(self, log_level: str = "INFO", log_file: Optional[str] = None,
                 enable_console: bool = True, enable_rotation: bool = True):
        self.log_level = log_level.upper()
        self.log_file = log_file
        self.enable_console = enable_console
        self.enable_rotation = enable_rotation
        self.handlers: List[logging.Handler] = []

        self._setup_logging()

    @property
    def debugging(self) -> bool:
        return self.log_level == 'DEBUG'

    def _setup_logging(self) -> None:
        level = logging.getLevelName(self.log_level)
        if not isinstance(level, int):
            level = logging.INFO
            self.log_level = 'INFO'

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()

        if self.enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            if sys.stdout.isatty():
                console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT))
            else:
                console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
            self._add_handler(root_logger, console_handler)

        if self.log_file:
            file_handler = self._create_file_handler()
            if file_handler is not None:
                self._add_handler(root_logger, file_handler)

        self._setup_component_loggers()

        logging.getLogger(__name__).info(f"Logging initialized - Level: {self.log_level}, File: {self.log_file}")

    def _create_file_handler(self) -> Optional[logging.Handler]:
        try:
            log_dir = os.path.dirname(self.log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            if self.enable_rotation:
                handler = logging.handlers.RotatingFileHandler(self.log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUP_COUNT)
            else:
                handler = logging.FileHandler(self.log_file)
        except OSError as e:
            print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)
            return None

        # File gets everything the loggers let through
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(FILE_FORMAT))
        return handler

    def _add_handler(self, logger: logging.Logger, handler: logging.Handler) -> None:
        logger.addHandler(handler)
        self.handlers.append(handler)

    def _setup_component_loggers(self) -> None:
        for name, (debug_level, normal_level) in COMPONENT_LEVELS.items():
            logging.getLogger(name).setLevel(debug_level if self.debugging else normal_level)

    @staticmethod
    def setup_exception_logging() -> None:
        """Route uncaught exceptions through logging"""

        def handle_exception(exc_type, exc_value, exc_traceback):
            if issubclass(exc_type, KeyboardInterrupt):
                sys.__excepthook__(exc_type, exc_value, exc_traceback)
                return

            logging.getLogger("uncaught_exception").critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))

        sys.excepthook = handle_exception


class PerformanceLogger:
    """Named wall-clock timers; several may run at once"""

    def __init__(self, name: str):
        self.logger = logging.getLogger(f"performance.{name}")
        self._started: Dict[str, float] = {}

    def start_timer(self, operation: str) -> None:
        self._started[operation] = time.perf_counter()
        self.logger.debug(f"Started: {operation}")

    def end_timer(self, operation: str) -> float:
        started = self._started.pop(operation, None)
        if started is None:
            self.logger.warning(f"Timer not started for: {operation}")
            return 0.0

        duration = time.perf_counter() - started
        self.logger.info(f"Completed: {operation} in {duration:.3f}s")
        return duration

    @contextlib.contextmanager
    def timed(self, operation: str) -> Iterator[None]:
        self.start_timer(operation)
        try:
            yield
        finally:
            self.end_timer(operation)


class ErrorTracker:
    """Count and log errors of one component, grouped by context"""

    def __init__(self, component_name: str):
        self.component_name = component_name
        self.logger = logging.getLogger(f"errors.{component_name}")
        self.error_count = 0
        self.errors_by_context: Counter = Counter()
        self.last_error_time: Optional[datetime] = None

    def log_error(self, error: Exception, context: str = "", additional_data: Optional[dict] = None) -> None:
        self.error_count += 1
        self.errors_by_context[context or "unspecified"] += 1
        self.last_error_time = datetime.now()

        where = f"{self.component_name} ({context})" if context else self.component_name
        message = f"Error in {where}: {error}"
        if additional_data:
            message += f" | Data: {additional_data}"

        self.logger.error(message, exc_info=error)

    def get_error_stats(self) -> dict:
        return {
            "component": self.component_name,
            "error_count": self.error_count,
            "by_context": dict(self.errors_by_context),
            "last_error_time": self.last_error_time.isoformat() if self.last_error_time else None,
        }


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> VideoSyncLogger:
    """Configure logging for the whole process"""
    logger_setup = VideoSyncLogger(log_level=log_level, log_file=log_file)
    VideoSyncLogger.setup_exception_logging()
    return logger_setup


def get_performance_logger(component_name: str) -> PerformanceLogger:
    return PerformanceLogger(component_name)


def get_error_tracker(component_name: str) -> ErrorTracker:
    return ErrorTracker(component_name)
