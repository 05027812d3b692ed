"""
Logging utilities

Structured logging for notification delivery: human-readable console output
plus JSON lines on disk, with per-notification context carried in a
contextvar.
"""
import contextvars
import json
import logging
import os
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional, Union

from config import NotifierConfig, get_config

# Context variable for notification tracking across async calls
log_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar('log_context', default={})

JSONValue = Union[
    str,
    int,
    float,
    bool,
    None,
    dict[str, Any],   # nested object
    list[Any]         # arrays
]

# Attributes every LogRecord has; anything else came in through `extra`
_RECORD_ATTRS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'getMessage', 'exc_info',
    'exc_text', 'stack_info', 'taskName', 'message', 'asctime'
}


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured file logging."""

    def format(self, record) -> str:
        """Format log record as JSON with context information."""
        log_obj: dict[str, JSONValue] = {
            'timestamp': datetime.now().isoformat() + 'Z',
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage()
        }

        if record.funcName:
            log_obj['function'] = record.funcName
        if record.lineno:
            log_obj['line'] = record.lineno

        if record.exc_info:
            log_obj['exception'] = {
                'type': record.exc_info[0].__name__ if record.exc_info[0] else 'Unknown',
                'message': str(record.exc_info[1]) if record.exc_info[1] else 'No message',
                'traceback': self.formatException(record.exc_info)
            }

        context = log_context.get({})
        if context:
            log_obj['context'] = context.copy()

        extra_data = {}
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                # Ensure JSON serializable
                try:
                    json.dumps(value)
                    extra_data[key] = value
                except (TypeError, ValueError):
                    extra_data[key] = str(value)

        if extra_data:
            log_obj['extra'] = extra_data

        return json.dumps(log_obj, ensure_ascii=False)


def set_notification_context(
    channel_id: Optional[Union[str, int]] = None,
    user_id: Optional[Union[str, int]] = None,
    guild_id: Optional[Union[str, int]] = None,
    notification: Optional[str] = None,
    **additional_context
) -> contextvars.Token:
    """
    Set notification context for logging.

    Args:
        channel_id: Discord channel the notification goes to
        user_id: Discord user ID
        guild_id: Discord guild ID
        notification: Notification class name
        **additional_context: Any additional context to include

    Returns:
        Token for restoring the previous context with log_context.reset()
    """
    context = log_context.get({}).copy()

    if channel_id:
        context['channel_id'] = str(channel_id)
    if user_id:
        context['user_id'] = str(user_id)
    if guild_id:
        context['guild_id'] = str(guild_id)
    if notification:
        context['notification'] = notification

    context.update(additional_context)

    return log_context.set(context)


def clear_context():
    """Clear the current logging context."""
    log_context.set({})


def setup_logging(config: Optional[NotifierConfig] = None) -> logging.Logger:
    """Configure hybrid logging: human-readable console + structured JSON files."""
    config = config or get_config()
    level = getattr(logging, config.log_level.upper())

    logger = logging.getLogger('discord_notifications')
    logger.setLevel(level)

    # Console handler - detailed format for development debugging
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
    ))
    logger.addHandler(console_handler)

    # JSON file handler - structured logging for monitoring and analysis
    log_dir = os.path.dirname(config.log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    json_handler = RotatingFileHandler(
        config.log_file,
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=5
    )
    json_handler.setFormatter(JSONFormatter())
    logger.addHandler(json_handler)

    # Client and channel loggers are named after their modules, attach there too
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if not root_logger.handlers:  # Avoid duplicate handlers
        root_logger.addHandler(console_handler)
        root_logger.addHandler(json_handler)

    logger.propagate = False

    return logger
