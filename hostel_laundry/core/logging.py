"""
Logger factory and request context.

Loggers returned by get_logger carry the current request and user ids
(set by the request middleware) into every record's ``extra``.
"""

import logging
from contextvars import ContextVar
from typing import Any, Dict, Optional

# Context variables for request tracking
request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
user_id: ContextVar[Optional[str]] = ContextVar('user_id', default=None)


class LoggerAdapter:
    """Logger adapter that adds request context and ad-hoc fields"""

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.context: Dict[str, Any] = {}

    def add_context(self, **kwargs):
        """Add persistent context fields"""
        self.context.update(kwargs)

    def remove_context(self, *keys):
        for key in keys:
            self.context.pop(key, None)

    def _log(self, level: int, message: str, *args, **kwargs):
        extra = dict(self.context)
        req_id = request_id.get()
        if req_id:
            extra['request_id'] = req_id
        uid = user_id.get()
        if uid:
            extra['user_id'] = uid
        extra.update(kwargs.pop('extra', None) or {})
        self.logger.log(level, message, *args, extra=extra, **kwargs)

    def debug(self, message: str, *args, **kwargs):
        self._log(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self._log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self._log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self._log(logging.ERROR, message, *args, **kwargs)

    def exception(self, message: str, *args, **kwargs):
        kwargs.setdefault('exc_info', True)
        self._log(logging.ERROR, message, *args, **kwargs)

    def critical(self, message: str, *args, **kwargs):
        self._log(logging.CRITICAL, message, *args, **kwargs)


def get_logger(name: Optional[str] = None) -> LoggerAdapter:
    """
    Get configured logger instance.

    Args:
        name: Logger name (defaults to caller's module)

    Returns:
        Enhanced logger adapter
    """
    if name is None:
        import inspect
        frame = inspect.currentframe()
        caller_frame = frame.f_back
        name = caller_frame.f_globals.get('__name__', 'hostel_laundry')

    return LoggerAdapter(logging.getLogger(name))
