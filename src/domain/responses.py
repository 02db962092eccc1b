"""
Mapping of pipeline outcomes to API Gateway proxy responses.

Pure functions, no I/O. Every exit of the handler goes through
``build_response`` so callers only ever see these fixed body shapes.
"""

import json
from typing import Any, Dict

from .models import OutcomeKind, PipelineOutcome

SUCCESS_MESSAGE = 'Email sent successfully'

# (status code, message) per outcome
RESPONSE_TABLE = {
    OutcomeKind.METHOD_REJECTED: (405, 'Method Not Allowed'),
    OutcomeKind.BOT_SUPPRESSED: (200, SUCCESS_MESSAGE),
    OutcomeKind.VALIDATION_FAILED: (400, 'Validation failed'),
    OutcomeKind.CONFIG_MISSING: (500, 'Internal Server Error'),
    OutcomeKind.DELIVERY_FAILED: (500, 'Failed to send email'),
    OutcomeKind.DELIVERED: (200, SUCCESS_MESSAGE),
}

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Credentials': 'true',
}


def build_response(outcome: PipelineOutcome) -> Dict[str, Any]:
    """
    Build the HTTP response for a pipeline outcome.

    Args:
        outcome: Result of the pipeline run

    Returns:
        Dict with statusCode, headers and JSON body
    """
    status_code, message = RESPONSE_TABLE[outcome.kind]

    body: Dict[str, Any] = {'message': message}
    if outcome.kind is OutcomeKind.VALIDATION_FAILED:
        body['errors'] = list(outcome.violations)
    body['requestId'] = outcome.request_id

    headers = {'Content-Type': 'application/json'}
    # CORS normally comes from API Gateway; only the direct success path adds it
    if outcome.kind is OutcomeKind.DELIVERED:
        headers.update(CORS_HEADERS)

    return {
        'statusCode': status_code,
        'headers': headers,
        'body': json.dumps(body)
    }
