"""
AWS Lambda handler for the public contact form endpoint (POST /contact).

Thin orchestration layer that delegates to ContactProcessor.
API Gateway in front of this function handles routing, CORS and throttling.
"""

import json
from typing import Any, Dict

from config import ConfigurationError, ContactConfig
from domain.contact_processor import ContactProcessor
from domain.models import PipelineOutcome, SubmissionRequest
from domain.responses import build_response
from integrations.tracing import TracedEmailSender
from services.ses import SesEmailSender, create_ses_client
from services.structured_logging import RequestLogger, configure_logger

logger = configure_logger('contact')

# Initialize once at module level (reused across invocations)
config = ContactConfig.from_env()
try:
    config.require()
except ConfigurationError as e:
    # Still start; every request will answer 500 until this is fixed
    logger.warning(f"Contact form not fully configured: {e}")

ses_client = create_ses_client(
    config.aws_region,
    connect_timeout=config.ses_connect_timeout,
    read_timeout=config.ses_read_timeout,
    max_attempts=config.ses_max_attempts
)
email_sender = TracedEmailSender(SesEmailSender(ses_client))
contact_processor = ContactProcessor(config, email_sender, logger)


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Handle a contact form submission from API Gateway.

    Expected body:
    {
        "name": "John Doe",
        "email": "john@example.com",
        "message": "Hello world",
        "_honeypot": ""
    }

    Args:
        event: API Gateway proxy event
        context: Lambda context

    Returns:
        Dict with statusCode, headers and JSON body (always includes requestId)
    """
    try:
        request = SubmissionRequest.from_api_gateway_event(event, context)
    except Exception as e:
        request_id = str(getattr(context, 'aws_request_id', 'unknown'))
        RequestLogger(logger, request_id).error(
            "Unreadable request event", fields={'error': str(e)}, exc_info=True
        )
        return build_response(PipelineOutcome.delivery_failed(request_id))

    outcome = contact_processor.process(request)
    return build_response(outcome)


def health_check(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Simple health check endpoint for monitoring. Never sends email.
    """
    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps({
            'status': 'healthy',
            'environment': config.environment,
            'emailConfigured': config.is_email_configured
        })
    }
