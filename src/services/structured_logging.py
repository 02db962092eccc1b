"""
Structured JSON logging for Lambda handlers.

Every record is emitted as a single JSON line with ``level``, ``message``,
``timestamp`` and any structured fields attached to the record, so that
CloudWatch Logs Insights can filter on them (e.g. ``requestId``).

Usage:
    from services.structured_logging import configure_logger, RequestLogger

    logger = configure_logger('contact')
    log = RequestLogger(logger, request_id='abc-123')
    log.warning("Validation failed", fields={'validationErrors': errors})
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, MutableMapping, Optional, Tuple

__all__ = ['JsonFormatter', 'RequestLogger', 'configure_logger']

# Level names as they appear in the log stream
LEVEL_NAMES = {
    'WARNING': 'WARN',
    'CRITICAL': 'ERROR',
}


class JsonFormatter(logging.Formatter):
    """Format log records as JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            'level': LEVEL_NAMES.get(record.levelname, record.levelname),
            'message': record.getMessage(),
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'logger': record.name,
        }

        fields = getattr(record, 'fields', None)
        if fields:
            payload.update(fields)

        if record.exc_info:
            payload['exception'] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class RequestLogger(logging.LoggerAdapter):
    """
    Logger adapter that stamps every record with the request id.

    Structured data is passed with the ``fields`` keyword and ends up on
    ``record.fields``; the request id is always included.
    """

    def __init__(self, logger: logging.Logger, request_id: str):
        super().__init__(logger, {'requestId': request_id})

    @property
    def request_id(self) -> str:
        return self.extra['requestId']

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        fields = {'requestId': self.request_id}
        fields.update(kwargs.pop('fields', None) or {})

        extra = dict(kwargs.get('extra') or {})
        extra['fields'] = fields
        kwargs['extra'] = extra
        return msg, kwargs


def configure_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Return a logger that writes JSON lines to stdout.

    The level defaults to ``LOG_LEVEL`` from the environment, then INFO.
    The logger does not propagate to the root logger so the Lambda runtime's
    own handler does not print every record a second time.

    Args:
        name: Logger name
        level: Explicit level name, overrides LOG_LEVEL

    Returns:
        logging.Logger: Configured logger
    """
    logger = logging.getLogger(name)

    log_level = level or os.getenv('LOG_LEVEL') or 'INFO'
    logger.setLevel(getattr(logging, str(log_level).upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
    logger.propagate = False

    return logger
