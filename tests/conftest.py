"""
Pytest configuration and fixtures for all tests.
"""

import json
import logging
import os
import sys
from unittest.mock import Mock

import pytest

# Add src and hooks to Python path before any imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../hooks'))

# Set up test environment variables before importing any modules
os.environ.setdefault('SOURCE_EMAIL', 'sender@example.com')
os.environ.setdefault('DESTINATION_EMAIL', 'recipient@example.com')
os.environ.setdefault('AWS_REGION', 'us-west-2')
os.environ.setdefault('AWS_DEFAULT_REGION', 'us-west-2')
os.environ.setdefault('ENVIRONMENT', 'test')
os.environ.setdefault('LOG_LEVEL', 'INFO')

EVENTS_DIR = os.path.join(os.path.dirname(__file__), 'events')


@pytest.fixture
def lambda_context():
    """Mock Lambda context."""
    context = Mock()
    context.aws_request_id = "test-request-id"
    context.invoked_function_arn = "arn:aws:lambda:us-west-2:123456789012:function:contact-form-handler"
    context.function_name = "contact-form-handler"
    return context


@pytest.fixture
def api_event():
    """Load sample API Gateway POST /contact event from test data."""
    with open(os.path.join(EVENTS_DIR, 'api-gateway-post.json')) as f:
        return json.load(f)


@pytest.fixture
def valid_body():
    """Valid contact form body."""
    return {
        'name': 'John Doe',
        'email': 'john@example.com',
        'message': 'Hello world',
        '_honeypot': ''
    }


@pytest.fixture
def mock_sender():
    """Email sender that always succeeds."""
    sender = Mock()
    sender.send.return_value = 'test-message-id'
    return sender


@pytest.fixture
def test_logger():
    """Propagating logger so caplog sees processor records."""
    logger = logging.getLogger('tests.contact')
    logger.setLevel(logging.INFO)
    return logger
