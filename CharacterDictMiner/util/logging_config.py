"""
CharacterDictMiner Logging Configuration

A centralized logging system using loguru. Provides a colourised console
handler, a rotating per-run log file and a dedicated error log, with component
tags derived from the file that emitted each record.
"""

import os
import sys
from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from loguru import Logger

from loguru import logger as _logger

# Remove default handler
_logger.remove()


class LoggerManager:
    """
    Manages the loguru logger with context-aware configuration.
    Supports separate log files for the main run and errors, plus cleanup.
    """

    # Component to file patterns mapping for automatic context tagging
    COMPONENT_PATTERNS = {
        "LEXICON": ["lexicon_index.py"],
        "SEGMENT": ["segmenter.py", "name_parser.py"],
        "ANILIST": ["anilist_api_client.py", "clients/"],
        "DICT": ["dict_builder.py", "content_builder.py", "character_catalog.py"],
        "TEXT": ["description_utils.py", "spoiler_utils.py"],
        "CONFIG": ["configuration.py"],
    }

    def __init__(self):
        self._initialized = False
        self._log_dir: Optional[Path] = None
        self._handlers = {}

    def _get_app_directory(self) -> Path:
        """Get the application config directory (platform-aware)."""
        if sys.platform == 'win32':
            appdata_dir = os.getenv('APPDATA')
        else:
            appdata_dir = os.path.expanduser('~/.config')

        config_dir = Path(appdata_dir) / 'CharacterDictMiner'
        config_dir.mkdir(parents=True, exist_ok=True)
        return config_dir

    def _get_log_directory(self) -> Path:
        """Get or create the logs directory."""
        if self._log_dir is None:
            self._log_dir = self._get_app_directory() / 'logs'
            self._log_dir.mkdir(parents=True, exist_ok=True)
        return self._log_dir

    def _detect_component_tag(self, record) -> str:
        """
        Detect the component tag based on the file path in the log record.
        Returns fixed-width component tag for consistent formatting.
        """
        try:
            file_path = record.get("file", {})
            if isinstance(file_path, dict):
                file_name = file_path.get("path", "")
            else:
                file_name = str(getattr(file_path, "path", file_path))

            # Normalize path separators
            file_name = file_name.replace("\\", "/")

            for component, patterns in self.COMPONENT_PATTERNS.items():
                for pattern in patterns:
                    if pattern in file_name:
                        return component.ljust(8)

            return "MAIN".ljust(8)
        except Exception:
            return "MAIN".ljust(8)

    def _add_console_handler(self, logger_name: str = "characterdictminer", level: str = "INFO"):
        """Add a console handler with appropriate formatting and color."""
        def format_with_component(record):
            record["extra"]["component_tag"] = self._detect_component_tag(record)
            return True

        handler_id = _logger.add(
            sys.stdout,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <dim>{extra[component_tag]}</dim> | <level>{message}</level>",
            level=level,
            colorize=True,
            backtrace=False,
            diagnose=False,
            filter=format_with_component,
        )
        self._handlers[f"{logger_name}_console"] = handler_id
        return handler_id

    def _add_file_handler(self, logger_name: str = "characterdictminer", level: str = "DEBUG"):
        """Add a rotating file handler for the specified logger."""
        log_file = self._get_log_directory() / f"{logger_name}.log"

        def format_with_component(record):
            record["extra"]["component_tag"] = self._detect_component_tag(record)
            return True

        handler_id = _logger.add(
            str(log_file),
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[component_tag]}{name}:{function}:{line} | {message}",
            level=level,
            rotation="5 MB",
            retention="7 days",
            compression="zip",
            encoding="utf-8",
            backtrace=True,
            diagnose=True,
            enqueue=True,  # Thread-safe logging
            filter=format_with_component,
        )
        self._handlers[f"{logger_name}_file"] = handler_id
        return handler_id

    def _add_error_handler(self):
        """Add a dedicated error log file for ERROR and CRITICAL messages."""
        error_log = self._get_log_directory() / "error.log"

        def format_with_component(record):
            record["extra"]["component_tag"] = self._detect_component_tag(record)
            return record["level"].no >= 40

        handler_id = _logger.add(
            str(error_log),
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[component_tag]}{name}:{function}:{line} - {message}\n{exception}",
            level="ERROR",
            rotation="5 MB",
            retention="14 days",
            compression="zip",
            encoding="utf-8",
            backtrace=True,
            diagnose=True,
            enqueue=True,
            filter=format_with_component,
        )
        self._handlers["error_file"] = handler_id
        return handler_id

    def initialize(self, logger_name: Optional[str] = None, console_level: str = "INFO", file_level: str = "DEBUG"):
        """
        Initialize the logging system with handlers.

        Args:
            logger_name: Name of the log file stem (defaults to "characterdictminer")
            console_level: Minimum level for console output (INFO, DEBUG, etc.)
            file_level: Minimum level for file output
        """
        if self._initialized:
            return

        logger_name = logger_name or "characterdictminer"

        self._add_console_handler(logger_name, level=console_level)
        self._add_file_handler(logger_name, level=file_level)
        self._add_error_handler()

        _logger.configure(extra={"logger_name": logger_name})

        self._initialized = True
        _logger.debug(f"Logging initialized for {logger_name}, log directory: {self._get_log_directory()}")

    def cleanup_old_logs(self, days: int = 7):
        """
        Clean up log files older than specified days.

        Args:
            days: Number of days to retain logs
        """
        import time

        log_dir = self._get_log_directory()
        cutoff = time.time() - (days * 86400)

        if not log_dir.exists():
            return

        cleaned_count = 0
        for log_file in log_dir.iterdir():
            if log_file.is_file():
                try:
                    if log_file.stat().st_mtime < cutoff:
                        log_file.unlink()
                        cleaned_count += 1
                        _logger.debug(f"Deleted old log file: {log_file}")
                except OSError as e:
                    _logger.warning(f"Error deleting log file {log_file}: {e}")

        if cleaned_count > 0:
            _logger.info(f"Cleaned up {cleaned_count} old log files")

    def get_logger(self) -> "Logger":
        """Get the configured loguru logger instance."""
        if not self._initialized:
            self.initialize()
        return _logger


# Global logger manager instance
_manager = LoggerManager()


def get_logger(name: Optional[str] = None) -> "Logger":
    """
    Get the configured logger instance.

    Args:
        name: Optional log file stem

    Returns:
        Configured loguru logger
    """
    if not _manager._initialized:
        _manager.initialize(logger_name=name)
    return _manager.get_logger()


def initialize_logging(logger_name: Optional[str] = None, console_level: str = "INFO", file_level: str = "DEBUG"):
    """Initialize the logging system (convenience function)."""
    _manager.initialize(logger_name=logger_name, console_level=console_level, file_level=file_level)


def cleanup_old_logs(days: int = 7):
    """Clean up old log files (convenience function)."""
    _manager.cleanup_old_logs(days=days)


# Export the logger directly for convenience
logger = get_logger()

__all__ = [
    'logger',
    'get_logger',
    'initialize_logging',
    'cleanup_old_logs',
    'LoggerManager',
]
