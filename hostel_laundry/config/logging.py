"""
Logging configuration for the hostel laundry service.
Provides console and rotating file handlers with plain, coloured or JSON output.
"""

import os
import logging
import logging.config
from typing import Dict, Any
from datetime import datetime

import structlog
from pythonjsonlogger import jsonlogger

from hostel_laundry.config.settings import Settings, settings
from hostel_laundry.core.logging import request_id, user_id


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with additional fields"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        """Add custom fields to the log record"""
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.utcnow().isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['environment'] = settings.ENVIRONMENT

        if hasattr(record, 'request_id'):
            log_record['request_id'] = record.request_id

        if hasattr(record, 'user_id'):
            log_record['user_id'] = record.user_id

        if record.exc_info:
            log_record['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': self.formatException(record.exc_info)
            }


def build_logging_config(config: Settings) -> Dict[str, Any]:
    """Create the dictConfig mapping for the given settings"""
    if config.LOG_FORMAT == "json":
        console_formatter = 'json'
    elif config.LOG_FORMAT == "colored" or config.is_development():
        console_formatter = 'colored'
    else:
        console_formatter = 'standard'

    handlers: Dict[str, Any] = {
        'console': {
            'level': 'DEBUG' if config.DEBUG else 'INFO',
            'class': 'logging.StreamHandler',
            'formatter': console_formatter
        },
    }
    if config.LOG_TO_FILE:
        os.makedirs(config.LOG_DIR, exist_ok=True)
        handlers['file'] = {
            'level': 'INFO',
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': os.path.join(config.LOG_DIR, 'app.log'),
            'maxBytes': 10485760,  # 10MB
            'backupCount': 10,
            'formatter': 'standard',
            'encoding': 'utf8'
        }
        handlers['error_file'] = {
            'level': 'ERROR',
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': os.path.join(config.LOG_DIR, 'error.log'),
            'maxBytes': 10485760,  # 10MB
            'backupCount': 10,
            'formatter': 'json',
            'encoding': 'utf8'
        }

    app_handlers = list(handlers)
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
            },
            'json': {
                '()': CustomJsonFormatter,
                'format': '%(timestamp)s %(level)s %(logger)s %(message)s'
            },
            'colored': {
                '()': 'colorlog.ColoredFormatter',
                'format': '%(log_color)s%(asctime)s [%(levelname)s] %(name)s: %(message)s',
                'log_colors': {
                    'DEBUG': 'cyan',
                    'INFO': 'green',
                    'WARNING': 'yellow',
                    'ERROR': 'red',
                    'CRITICAL': 'red,bg_white',
                }
            }
        },
        'handlers': handlers,
        'loggers': {
            '': {  # Root logger
                'handlers': app_handlers,
                'level': config.LOG_LEVEL,
            },
            'hostel_laundry': {
                'handlers': app_handlers,
                'level': config.LOG_LEVEL,
                'propagate': False
            },
            'sqlalchemy.engine': {
                'handlers': ['console'],
                'level': 'INFO' if config.DATABASE_ECHO else 'WARNING',
                'propagate': False
            },
            'uvicorn.access': {
                'handlers': ['console'],
                'level': 'INFO',
                'propagate': False
            }
        }
    }


class RequestContextProcessor:
    """Add the current request and user ids to structlog events"""

    def __call__(self, logger, method_name, event_dict):
        req_id = request_id.get()
        if req_id:
            event_dict.setdefault('request_id', req_id)
        uid = user_id.get()
        if uid:
            event_dict.setdefault('user_id', uid)
        return event_dict


def configure_structured_logging(config: Settings) -> None:
    """Route structlog through the stdlib handlers configured above"""
    processors = [
        RequestContextProcessor(),
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if config.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.processors.KeyValueRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def setup_logging(config: Settings = settings) -> logging.Logger:
    """Configure application logging"""
    logging.config.dictConfig(build_logging_config(config))
    if config.ENABLE_STRUCTURED_LOGGING:
        configure_structured_logging(config)
    logger = logging.getLogger("hostel_laundry")
    logger.info(f"Logging initialized with level: {config.LOG_LEVEL}")
    return logger
