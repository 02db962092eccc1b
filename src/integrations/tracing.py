"""
Tracing for outbound email delivery.

Instead of patching boto3 globally, the sender is wrapped explicitly so the
trace covers exactly one SES call per request:

    sender = TracedEmailSender(SesEmailSender(client))
    message_id = sender.send(source, destination, reply_to, subject, body_text)

Spans go through the OpenTelemetry API. Without a configured tracer
provider (e.g. the ADOT Lambda layer exporting to X-Ray) they are no-ops.
"""

import logging
import time
from typing import List, Optional

from opentelemetry import trace

logger = logging.getLogger(__name__)

SPAN_NAME = 'ses.send_email'


class TracedEmailSender:
    """Records each send as a span around the wrapped sender."""

    def __init__(self, sender, tracer: Optional[trace.Tracer] = None, name: str = SPAN_NAME):
        self.sender = sender
        self.tracer = tracer or trace.get_tracer(__name__)
        self.name = name

    def send(
        self,
        source: str,
        destination: List[str],
        reply_to: List[str],
        subject: str,
        body_text: str
    ) -> str:
        start_time = time.time()

        # The span records the exception and marks itself as failed before re-raising
        with self.tracer.start_as_current_span(
            self.name,
            kind=trace.SpanKind.CLIENT,
            attributes={
                'rpc.system': 'aws-api',
                'rpc.service': 'SES',
                'rpc.method': 'SendEmail',
                'email.destination_count': len(destination),
                'email.body_length': len(body_text),
            }
        ) as span:
            message_id = self.sender.send(
                source=source,
                destination=destination,
                reply_to=reply_to,
                subject=subject,
                body_text=body_text
            )
            span.set_attribute('email.message_id', message_id)

        logger.debug(f"SES send completed: {time.time() - start_time:.3f}s")
        return message_id
