"""
Amazon SES delivery for Lambda handlers.

This module wraps the SES ``SendEmail`` API behind a small sender class.
Every failure (service error, throttling, timeout, connection error) is
raised as ``DeliveryError`` so callers only need to handle one type.
"""

import logging
from typing import List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class DeliveryError(Exception):
    """Raised when SES fails to accept an email for delivery."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.error_code = error_code


def create_ses_client(
    region: str,
    connect_timeout: int = 5,
    read_timeout: int = 10,
    max_attempts: int = 1
):
    """
    Create a boto3 SES client with strict timeouts.

    Args:
        region: AWS region of the SES endpoint
        connect_timeout: Seconds to establish the connection
        read_timeout: Seconds to wait for the response
        max_attempts: Total attempts including the first (1 = no retries)

    Returns:
        boto3.client: Configured SES client
    """
    client_config = Config(
        retries={
            'max_attempts': max_attempts,
            'mode': 'standard'
        },
        connect_timeout=connect_timeout,
        read_timeout=read_timeout
    )

    client = boto3.client('ses', region_name=region, config=client_config)
    logger.info(
        f"SES client initialized: region={region}, connect_timeout={connect_timeout}s, "
        f"read_timeout={read_timeout}s, max_attempts={max_attempts}"
    )
    return client


class SesEmailSender:
    """
    Sends plain-text emails through Amazon SES.

    The client is injected so that one client can be reused across warm
    invocations and replaced with a mock in tests.
    """

    def __init__(self, client):
        self.client = client

    def send(
        self,
        source: str,
        destination: List[str],
        reply_to: List[str],
        subject: str,
        body_text: str
    ) -> str:
        """
        Send one email.

        Args:
            source: From address (verified SES identity)
            destination: To addresses
            reply_to: Reply-To addresses
            subject: Subject line
            body_text: Plain text body

        Returns:
            str: SES message id

        Raises:
            DeliveryError: If SES rejects the request or cannot be reached
        """
        try:
            response = self.client.send_email(
                Source=source,
                Destination={'ToAddresses': destination},
                Message={
                    'Subject': {'Data': subject},
                    'Body': {
                        'Text': {'Data': body_text}
                    }
                },
                ReplyToAddresses=reply_to
            )
        except ClientError as e:
            error_code = e.response.get('Error', {}).get('Code', 'Unknown')
            error_message = e.response.get('Error', {}).get('Message', str(e))
            raise DeliveryError(
                f"SES rejected email: error_code={error_code}, error_message={error_message}",
                error_code=error_code
            ) from e
        except BotoCoreError as e:
            # Connection failures and read timeouts
            raise DeliveryError(f"SES unreachable: {e}") from e

        message_id = response.get('MessageId')
        if not message_id:
            raise DeliveryError("SES response did not include a MessageId")

        return message_id
