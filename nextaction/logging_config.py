"""
Structured logging configuration.

Called once from create_app(). LOG_FORMAT picks text (default) or JSON lines,
LOG_LEVEL defaults to INFO. Context ids passed via `extra=` (user_id,
lead_id, task_id, action_id) become top-level JSON keys.
"""
import json
import logging
import sys
from datetime import datetime, timezone

CONTEXT_FIELDS = ('user_id', 'lead_id', 'task_id', 'action_id')


class JSONFormatter(logging.Formatter):
    """One JSON object per line for log aggregators."""

    def format(self, record):
        entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        for key in CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                entry[key] = value
        if record.exc_info and record.exc_info[0] is not None:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


# Loggers that are chatty at INFO (request lines, SQL echo, migrations)
_NOISY_LOGGERS = [
    'werkzeug',
    'sqlalchemy.engine',
    'alembic',
    'urllib3',
]


def configure_logging(app=None):
    """
    Set up the root logger from nextaction.config; also aligns app.logger when given.

    config.LOG_LEVEL  — Python log level name (env LOG_LEVEL, default: INFO)
    config.LOG_FORMAT — "text" (default) or "json" (env LOG_FORMAT)
    """
    from nextaction import config

    level = getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    log_format = str(config.LOG_FORMAT).lower()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if log_format == 'json':
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            '[%(asctime)s] %(levelname)s %(name)s — %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        ))

    root = logging.getLogger()
    root.setLevel(level)
    # Re-init (tests, repeated create_app) must not stack handlers
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if app is not None:
        app.logger.setLevel(level)
