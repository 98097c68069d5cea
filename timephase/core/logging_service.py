"""
Logging Service - Structured logging with configurable levels
Writes to stderr so messages never tear the status bar on stdout.
"""
import sys
import logging
from typing import Optional


class LoggingService:
    """
    Centralized logging service with structured output.
    """

    def __init__(self, name: str = 'timephase', level: str = 'WARNING'):
        """
        Initialize logging service.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        self._logger = logging.getLogger(name)
        self._set_level(level)
        self._setup_handlers()

    def _set_level(self, level: str) -> None:
        """Set logging level from string"""
        level_map = {
            'DEBUG': logging.DEBUG,
            'INFO': logging.INFO,
            'WARNING': logging.WARNING,
            'ERROR': logging.ERROR,
            'CRITICAL': logging.CRITICAL
        }
        log_level = level_map.get(str(level).upper(), logging.WARNING)
        self._logger.setLevel(log_level)

    def _setup_handlers(self) -> None:
        """Setup stderr handler with formatting"""
        # Remove existing handlers
        self._logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(self._logger.level)

        formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler.setFormatter(formatter)

        self._logger.addHandler(console_handler)

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message"""
        self._logger.debug(message, extra=kwargs)

    def info(self, message: str, **kwargs) -> None:
        """Log info message"""
        self._logger.info(message, extra=kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message"""
        self._logger.warning(message, extra=kwargs)

    def error(self, message: str, **kwargs) -> None:
        """Log error message"""
        self._logger.error(message, extra=kwargs)

    def exception(self, message: str, **kwargs) -> None:
        """Log exception with traceback"""
        self._logger.exception(message, extra=kwargs)

    def set_level(self, level: str) -> None:
        """
        Change logging level dynamically.

        Args:
            level: New log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        self._set_level(level)
        for handler in self._logger.handlers:
            handler.setLevel(self._logger.level)

    def log_startup(self, version: str, settings: dict) -> None:
        """
        Log application startup information.

        Args:
            version: Application version
            settings: Resolved timing settings
        """
        self.info("=" * 60)
        self.info(f"timephase v{version} starting up")
        self.info(f"Python: {sys.version.split()[0]}")
        self.info(f"Timezone: {settings.get('timezone') or 'local'}")
        self.info(
            f"Interval: {settings.get('interval')} "
            f"(threshold {settings.get('threshold')}, offset {settings.get('offset')})"
        )
        self.info("=" * 60)

    def log_shutdown(self) -> None:
        """Log application shutdown"""
        self.info("=" * 60)
        self.info("timephase shutting down")
        self.info("=" * 60)


# Global singleton instance
_logging_service: Optional[LoggingService] = None


def get_logger(name: str = 'timephase', level: str = 'WARNING') -> LoggingService:
    """
    Get or create logging service singleton.

    Args:
        name: Logger name
        level: Log level, only used when the singleton is created

    Returns:
        LoggingService instance
    """
    global _logging_service
    if _logging_service is None:
        _logging_service = LoggingService(name, level)
    return _logging_service
