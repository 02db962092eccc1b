"""
Runtime configuration for the contact form Lambda.

Values are read once from environment variables when the container starts
and passed explicitly into the processor. Missing addresses do not stop the
container from starting; they are reported per request by the processor.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when required configuration is invalid or missing."""
    pass


def _int_setting(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}, using default {default}")
        return default


@dataclass(frozen=True)
class ContactConfig:
    """
    Contact form configuration.

    Attributes:
        source_email: Verified SES identity used as the From address
        destination_email: Mailbox that receives form submissions
        aws_region: Region of the SES endpoint
        environment: Deployment stage name (dev, prod, ...)
        ses_connect_timeout: Seconds to establish the SES connection
        ses_read_timeout: Seconds to wait for the SES response
        ses_max_attempts: Total SES attempts (1 = no retries)
    """
    source_email: Optional[str]
    destination_email: Optional[str]
    aws_region: str = 'us-west-2'
    environment: str = 'dev'
    ses_connect_timeout: int = 5
    ses_read_timeout: int = 10
    ses_max_attempts: int = 1

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ContactConfig':
        """
        Build configuration from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            ContactConfig: Configuration snapshot
        """
        if environ is None:
            environ = os.environ

        return cls(
            source_email=environ.get('SOURCE_EMAIL') or None,
            destination_email=environ.get('DESTINATION_EMAIL') or None,
            aws_region=environ.get('AWS_REGION') or environ.get('AWS_DEFAULT_REGION') or 'us-west-2',
            environment=environ.get('ENVIRONMENT') or 'dev',
            ses_connect_timeout=_int_setting(environ, 'SES_CONNECT_TIMEOUT', 5),
            ses_read_timeout=_int_setting(environ, 'SES_READ_TIMEOUT', 10),
            ses_max_attempts=_int_setting(environ, 'SES_MAX_ATTEMPTS', 1),
        )

    @property
    def is_email_configured(self) -> bool:
        """Check that both source and destination addresses are present."""
        return bool(self.source_email and self.destination_email)

    def require(self) -> 'ContactConfig':
        """
        Return self if email addresses are configured.

        Raises:
            ConfigurationError: If SOURCE_EMAIL or DESTINATION_EMAIL is missing
        """
        missing = [
            name for name, value in (
                ('SOURCE_EMAIL', self.source_email),
                ('DESTINATION_EMAIL', self.destination_email),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Required environment variable(s) not set: {', '.join(missing)}"
            )
        return self
