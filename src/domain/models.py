"""
Data models for the contact form domain.

These type-safe data structures define clear contracts between the pipeline
steps: the incoming request, the decoded payload, the outbound email and
the single outcome each invocation produces.
"""

import base64
import binascii
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

SUBJECT_TEMPLATE = "New Contact Form Submission from {name}"
BODY_TEMPLATE = "Name: {name}\nEmail: {email}\n\nMessage:\n{message}"


@dataclass
class SubmissionRequest:
    """
    Incoming HTTP request, one per invocation.

    Attributes:
        method: HTTP method (e.g., "POST")
        request_id: Correlation id used in every log line and response body
        raw_body: Request body as text (None if absent)
        source_ip: Caller IP reported by API Gateway
        user_agent: Caller User-Agent reported by API Gateway
        path: Request path
    """
    method: str
    request_id: str
    raw_body: Optional[str] = None
    source_ip: Optional[str] = None
    user_agent: Optional[str] = None
    path: Optional[str] = None

    @classmethod
    def from_api_gateway_event(cls, event: Dict[str, Any], context: Any) -> 'SubmissionRequest':
        """
        Build a request from an API Gateway proxy event.

        Handles both REST API (v1) and HTTP API (v2) payload formats.

        Args:
            event: API Gateway proxy event
            context: Lambda context

        Returns:
            SubmissionRequest: The normalized request
        """
        request_context = event.get('requestContext') or {}
        identity = request_context.get('identity') or {}
        http = request_context.get('http') or {}

        method = event.get('httpMethod') or http.get('method') or ''
        path = event.get('path') or http.get('path') or event.get('rawPath')

        request_id = (
            getattr(context, 'aws_request_id', None)
            or request_context.get('requestId')
            or str(uuid.uuid4())
        )

        raw_body = event.get('body')
        if raw_body and event.get('isBase64Encoded'):
            try:
                raw_body = base64.b64decode(raw_body).decode('utf-8')
            except (binascii.Error, UnicodeDecodeError):
                # Treated like any other unreadable body
                raw_body = None

        return cls(
            method=method,
            request_id=str(request_id),
            raw_body=raw_body,
            source_ip=identity.get('sourceIp') or http.get('sourceIp'),
            user_agent=identity.get('userAgent') or http.get('userAgent'),
            path=path,
        )


@dataclass
class ContactPayload:
    """
    Decoded form fields. Missing or non-string text fields are None.

    Attributes:
        name: Submitter name
        email: Submitter email address (used as Reply-To)
        message: Message text
        honeypot: Hidden trap field as sent (any JSON value), must stay empty for humans
    """
    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None
    honeypot: Any = None

    @property
    def is_bot(self) -> bool:
        """
        Check if the honeypot field was filled in.

        Only null, "" and an empty array or object count as empty; any other
        value (including numbers and booleans) marks the submission as a bot.
        """
        if self.honeypot is None:
            return False
        if isinstance(self.honeypot, (str, list, dict)):
            return len(self.honeypot) > 0
        return True


@dataclass(frozen=True)
class EmailDirective:
    """
    Outbound notification email, built only from validated input.

    Attributes:
        source_address: From address
        destination_address: Single recipient
        reply_to_address: Submitter's email address
        subject_line: Subject
        body_text: Plain text body
    """
    source_address: str
    destination_address: str
    reply_to_address: str
    subject_line: str
    body_text: str

    @classmethod
    def for_submission(
        cls,
        payload: ContactPayload,
        source_address: str,
        destination_address: str
    ) -> 'EmailDirective':
        """Render the notification email for a validated payload."""
        return cls(
            source_address=source_address,
            destination_address=destination_address,
            reply_to_address=payload.email,
            subject_line=SUBJECT_TEMPLATE.format(name=payload.name),
            body_text=BODY_TEMPLATE.format(
                name=payload.name,
                email=payload.email,
                message=payload.message
            ),
        )

    @property
    def destination_addresses(self) -> List[str]:
        return [self.destination_address]

    @property
    def reply_to_addresses(self) -> List[str]:
        return [self.reply_to_address]


class OutcomeKind(Enum):
    """The six ways a contact form invocation can end."""
    METHOD_REJECTED = 'method_rejected'
    BOT_SUPPRESSED = 'bot_suppressed'
    VALIDATION_FAILED = 'validation_failed'
    CONFIG_MISSING = 'config_missing'
    DELIVERY_FAILED = 'delivery_failed'
    DELIVERED = 'delivered'


@dataclass(frozen=True)
class PipelineOutcome:
    """
    Result of one pipeline run.

    This explicit result type makes every exit path visible to the response
    builder and keeps exceptions out of control flow.

    Attributes:
        kind: Which exit the pipeline took
        request_id: Correlation id of the request
        violations: Validation messages (VALIDATION_FAILED only)
        delivery_id: SES message id (DELIVERED only)
    """
    kind: OutcomeKind
    request_id: str
    violations: List[str] = field(default_factory=list)
    delivery_id: Optional[str] = None

    @classmethod
    def method_rejected(cls, request_id: str) -> 'PipelineOutcome':
        return cls(OutcomeKind.METHOD_REJECTED, request_id)

    @classmethod
    def bot_suppressed(cls, request_id: str) -> 'PipelineOutcome':
        return cls(OutcomeKind.BOT_SUPPRESSED, request_id)

    @classmethod
    def validation_failed(cls, request_id: str, violations: List[str]) -> 'PipelineOutcome':
        return cls(OutcomeKind.VALIDATION_FAILED, request_id, violations=list(violations))

    @classmethod
    def config_missing(cls, request_id: str) -> 'PipelineOutcome':
        return cls(OutcomeKind.CONFIG_MISSING, request_id)

    @classmethod
    def delivery_failed(cls, request_id: str) -> 'PipelineOutcome':
        return cls(OutcomeKind.DELIVERY_FAILED, request_id)

    @classmethod
    def delivered(cls, request_id: str, delivery_id: str) -> 'PipelineOutcome':
        return cls(OutcomeKind.DELIVERED, request_id, delivery_id=delivery_id)

    def __repr__(self) -> str:
        """Human-readable representation for logging."""
        if self.kind is OutcomeKind.VALIDATION_FAILED:
            return f"PipelineOutcome({self.kind.name}, request_id={self.request_id}, violations={self.violations})"
        if self.kind is OutcomeKind.DELIVERED:
            return f"PipelineOutcome({self.kind.name}, request_id={self.request_id}, delivery_id={self.delivery_id})"
        return f"PipelineOutcome({self.kind.name}, request_id={self.request_id})"
