"""
Tests for SES delivery service.
"""

import pytest
from unittest.mock import Mock, patch
from botocore.exceptions import ClientError, EndpointConnectionError, ReadTimeoutError
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

from services.ses import DeliveryError, SesEmailSender, create_ses_client


@pytest.fixture
def mock_ses_client():
    client = Mock()
    client.send_email.return_value = {'MessageId': 'test-message-id'}
    return client


def send(sender):
    return sender.send(
        source='sender@example.com',
        destination=['recipient@example.com'],
        reply_to=['john@example.com'],
        subject='New Contact Form Submission from John Doe',
        body_text='Name: John Doe\nEmail: john@example.com\n\nMessage:\nHello world'
    )


class TestSesEmailSender:
    """Test sending email through SES."""

    def test_send_success(self, mock_ses_client):
        """Test SendEmail request shape and returned message id."""
        sender = SesEmailSender(mock_ses_client)

        message_id = send(sender)

        assert message_id == 'test-message-id'
        mock_ses_client.send_email.assert_called_once_with(
            Source='sender@example.com',
            Destination={'ToAddresses': ['recipient@example.com']},
            Message={
                'Subject': {'Data': 'New Contact Form Submission from John Doe'},
                'Body': {
                    'Text': {'Data': 'Name: John Doe\nEmail: john@example.com\n\nMessage:\nHello world'}
                }
            },
            ReplyToAddresses=['john@example.com']
        )

    def test_client_error(self, mock_ses_client):
        """Test SES rejections become DeliveryError with the error code."""
        mock_ses_client.send_email.side_effect = ClientError(
            {'Error': {'Code': 'MessageRejected', 'Message': 'Email address is not verified.'}},
            'SendEmail'
        )
        sender = SesEmailSender(mock_ses_client)

        with pytest.raises(DeliveryError, match='Email address is not verified') as exc_info:
            send(sender)

        assert exc_info.value.error_code == 'MessageRejected'
        assert isinstance(exc_info.value.__cause__, ClientError)

    def test_throttling(self, mock_ses_client):
        mock_ses_client.send_email.side_effect = ClientError(
            {'Error': {'Code': 'Throttling', 'Message': 'Maximum sending rate exceeded.'}},
            'SendEmail'
        )

        with pytest.raises(DeliveryError) as exc_info:
            send(SesEmailSender(mock_ses_client))

        assert exc_info.value.error_code == 'Throttling'

    def test_connection_error(self, mock_ses_client):
        mock_ses_client.send_email.side_effect = EndpointConnectionError(
            endpoint_url='https://email.us-west-2.amazonaws.com'
        )

        with pytest.raises(DeliveryError, match='SES unreachable'):
            send(SesEmailSender(mock_ses_client))

    def test_read_timeout(self, mock_ses_client):
        """Test timeouts surface as DeliveryError."""
        mock_ses_client.send_email.side_effect = ReadTimeoutError(
            endpoint_url='https://email.us-west-2.amazonaws.com'
        )

        with pytest.raises(DeliveryError) as exc_info:
            send(SesEmailSender(mock_ses_client))

        assert exc_info.value.error_code is None

    def test_missing_message_id(self, mock_ses_client):
        mock_ses_client.send_email.return_value = {}

        with pytest.raises(DeliveryError, match='MessageId'):
            send(SesEmailSender(mock_ses_client))


class TestCreateSesClient:
    """Test client construction."""

    @patch('services.ses.boto3')
    def test_timeouts_and_retries(self, mock_boto3):
        create_ses_client('eu-west-1', connect_timeout=3, read_timeout=7, max_attempts=2)

        args, kwargs = mock_boto3.client.call_args
        assert args == ('ses',)
        assert kwargs['region_name'] == 'eu-west-1'
        client_config = kwargs['config']
        assert client_config.connect_timeout == 3
        assert client_config.read_timeout == 7
        assert client_config.retries == {'max_attempts': 2, 'mode': 'standard'}


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
