"""
Palette Atlas Structured Logging
Centralized loguru setup. Every record carries a `service` field, and
request-scoped fields (request_id, timings) are bound per call.
"""
import sys
from typing import Dict, Any, Optional

from loguru import logger

from palette_atlas.config import config

SERVICE_NAME = "palette-atlas"


class StructuredLogger:
    """Structured logger for the palette and atlas services."""
    
    def __init__(self, service: str = SERVICE_NAME):
        self.service = service
        self._configure_logger()
        self._log = logger.bind(service=service)
    
    def _configure_logger(self):
        """Replace loguru's default handler with the service sink."""
        logger.remove()
        # Default extra applies to module-level `loguru.logger` calls as well
        logger.configure(extra={"service": self.service})
        logger.add(
            sys.stdout,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {extra[service]} | {message} | {extra}",
            level=config.LOG_LEVEL,
            serialize=config.LOG_JSON
        )
    
    def _emit(self, level: str, message: str, extra: Optional[Dict[str, Any]]):
        target = self._log.bind(**extra) if extra else self._log
        target.log(level, message)
    
    def bind(self, **fields):
        """Loguru logger carrying the service field plus `fields`."""
        return self._log.bind(**fields)
    
    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("INFO", message, extra)
    
    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("WARNING", message, extra)
    
    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("ERROR", message, extra)
    
    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("DEBUG", message, extra)


# Global logger instance
_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create global logger instance."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger()
    return _logger
