"""
Contact form pipeline - core business logic.

This module handles one contact form submission end to end:
1. Reject anything but POST
2. Decode the JSON body (malformed bodies decode to an empty payload)
3. Silently drop bot submissions (honeypot filled)
4. Validate fields and guard against header injection
5. Check that source/destination addresses are configured
6. Send the notification email through the injected sender
7. Return a PipelineOutcome describing which exit was taken

All errors are caught and returned as a PipelineOutcome.
No exceptions propagate out of the public methods.
"""

import logging
from typing import Any, Dict

from config import ContactConfig
from services.structured_logging import RequestLogger
from .models import EmailDirective, PipelineOutcome, SubmissionRequest
from .payload import HONEYPOT_FIELD, decode_payload
from .validation import validate_payload

logger = logging.getLogger(__name__)

ACCEPTED_METHOD = 'POST'


class ContactProcessor:
    """
    Runs the contact form pipeline for one request at a time.

    The processor holds only read-only collaborators (configuration, email
    sender, logger) so one instance is shared by all invocations of a
    warm container.
    """

    def __init__(self, config: ContactConfig, sender, log: logging.Logger = logger):
        """
        Initialize contact processor.

        Args:
            config: Source and destination addresses
            sender: Object with send(source, destination, reply_to, subject, body_text) -> message id
            log: Base logger; records are stamped with the request id
        """
        self.config = config
        self.sender = sender
        self.logger = log

    def process(self, request: SubmissionRequest) -> PipelineOutcome:
        """
        Run the pipeline for a single request.

        Args:
            request: Normalized HTTP request

        Returns:
            PipelineOutcome: Exactly one outcome, never raises
        """
        log = RequestLogger(self.logger, request.request_id)
        log.info("Received request", fields={
            'httpMethod': request.method,
            'path': request.path,
            'sourceIp': request.source_ip,
            'userAgent': request.user_agent,
        })

        if request.method != ACCEPTED_METHOD:
            log.warning("Method not allowed", fields={'method': request.method})
            return PipelineOutcome.method_rejected(request.request_id)

        try:
            payload = decode_payload(request.raw_body, log)

            if payload.is_bot:
                log.warning("Honeypot triggered", fields={HONEYPOT_FIELD: payload.honeypot})
                return PipelineOutcome.bot_suppressed(request.request_id)

            validation_errors = validate_payload(payload)
            if validation_errors:
                log.warning("Validation failed", fields={'validationErrors': validation_errors})
                return PipelineOutcome.validation_failed(request.request_id, validation_errors)

            if not self.config.is_email_configured:
                log.error("Missing environment variables", fields={
                    'sourceEmail': self.config.source_email,
                    'destinationEmail': self.config.destination_email,
                })
                return PipelineOutcome.config_missing(request.request_id)

            directive = EmailDirective.for_submission(
                payload,
                source_address=self.config.source_email,
                destination_address=self.config.destination_email
            )
            message_id = self._deliver(directive)

        except Exception as e:
            # DeliveryError and anything unexpected share one log line; errorType tells them apart
            log.error("Error processing request", fields=self._error_fields(e), exc_info=True)
            return PipelineOutcome.delivery_failed(request.request_id)

        log.info("Email sent successfully", fields={'messageId': message_id})
        return PipelineOutcome.delivered(request.request_id, message_id)

    def _deliver(self, directive: EmailDirective) -> str:
        """
        Send the notification email exactly once.

        Raises:
            DeliveryError: If the sender fails (caught by process)
        """
        return self.sender.send(
            source=directive.source_address,
            destination=directive.destination_addresses,
            reply_to=directive.reply_to_addresses,
            subject=directive.subject_line,
            body_text=directive.body_text
        )

    @staticmethod
    def _error_fields(error: Exception) -> Dict[str, Any]:
        fields = {
            'error': str(error),
            'errorType': type(error).__name__,
        }
        error_code = getattr(error, 'error_code', None)
        if error_code:
            fields['errorCode'] = error_code
        return fields
