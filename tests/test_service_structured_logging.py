"""
Tests for structured JSON logging.
"""

import io
import json
import logging
import pytest
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

from services.structured_logging import JsonFormatter, RequestLogger, configure_logger


def _emit(logger, level, message, **kwargs):
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())
    base = logger.logger if isinstance(logger, RequestLogger) else logger
    base.addHandler(handler)
    try:
        logger.log(level, message, **kwargs)
    finally:
        base.removeHandler(handler)
    return json.loads(stream.getvalue().strip())


@pytest.fixture
def base_logger():
    logger = logging.getLogger('tests.structured')
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger


class TestJsonFormatter:
    """Test JSON line formatting."""

    def test_basic_fields(self, base_logger):
        out = _emit(base_logger, logging.INFO, 'hello')

        assert out['level'] == 'INFO'
        assert out['message'] == 'hello'
        assert out['logger'] == 'tests.structured'
        assert out['timestamp'].endswith('+00:00')

    def test_warning_rendered_as_warn(self, base_logger):
        out = _emit(base_logger, logging.WARNING, 'careful')

        assert out['level'] == 'WARN'

    def test_exception_included(self, base_logger):
        try:
            raise ValueError('bad value')
        except ValueError:
            out = _emit(base_logger, logging.ERROR, 'failed', exc_info=True)

        assert out['level'] == 'ERROR'
        assert 'ValueError: bad value' in out['exception']

    def test_non_serializable_fields(self, base_logger):
        log = RequestLogger(base_logger, 'req-1')

        out = _emit(log, logging.INFO, 'object', fields={'value': object()})

        assert out['value'].startswith('<object object')


class TestRequestLogger:
    """Test request id stamping."""

    def test_request_id_on_every_record(self, base_logger):
        log = RequestLogger(base_logger, 'req-1')

        out = _emit(log, logging.INFO, 'Received request')

        assert out['requestId'] == 'req-1'

    def test_structured_fields(self, base_logger):
        log = RequestLogger(base_logger, 'req-1')

        out = _emit(log, logging.WARNING, 'Validation failed', fields={'validationErrors': ['a', 'b']})

        assert out['requestId'] == 'req-1'
        assert out['validationErrors'] == ['a', 'b']
        assert out['level'] == 'WARN'

    def test_request_id_property(self, base_logger):
        assert RequestLogger(base_logger, 'req-9').request_id == 'req-9'

    def test_records_carry_fields(self, test_logger, caplog):
        log = RequestLogger(test_logger, 'req-1')

        log.info('hello', fields={'a': 1})

        assert caplog.records[-1].fields == {'requestId': 'req-1', 'a': 1}


class TestConfigureLogger:
    """Test logger setup."""

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv('LOG_LEVEL', 'debug')

        logger = configure_logger('tests.env-level')

        assert logger.level == logging.DEBUG

    def test_explicit_level(self, monkeypatch):
        monkeypatch.setenv('LOG_LEVEL', 'debug')

        logger = configure_logger('tests.explicit-level', level='ERROR')

        assert logger.level == logging.ERROR

    def test_unknown_level_defaults_to_info(self, monkeypatch):
        monkeypatch.setenv('LOG_LEVEL', 'verbose')

        logger = configure_logger('tests.unknown-level')

        assert logger.level == logging.INFO

    def test_json_handler_added_once(self):
        logger = configure_logger('tests.handlers')
        configure_logger('tests.handlers')

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JsonFormatter)
        assert logger.propagate is False


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
