"""
Decoding of the contact form request body.

A missing, empty or malformed body is not an error at this stage: it decodes
to an empty payload and the validator reports the missing fields.
"""

import json
from typing import Any, Dict, Optional

from .models import ContactPayload

HONEYPOT_FIELD = '_honeypot'


def parse_body(raw_body: Optional[str], log) -> Dict[str, Any]:
    """
    Parse the request body as a JSON object.

    Args:
        raw_body: Body text (may be None or empty)
        log: Logger for parse failures

    Returns:
        Dict: Parsed object, or {} if the body is absent, invalid JSON
        or not a JSON object
    """
    if not raw_body:
        return {}

    try:
        data = json.loads(raw_body)
    except (json.JSONDecodeError, TypeError) as e:
        log.warning("Request body is not valid JSON", fields={'error': str(e)})
        return {}

    if not isinstance(data, dict):
        log.warning("Request body is not a JSON object", fields={'bodyType': type(data).__name__})
        return {}

    return data


def _string_field(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return value if isinstance(value, str) else None


def decode_payload(raw_body: Optional[str], log) -> ContactPayload:
    """
    Decode the request body into a ContactPayload.

    Args:
        raw_body: Body text from the request
        log: Logger for parse failures

    Returns:
        ContactPayload: Decoded fields (missing/non-string text fields are
        None; the honeypot keeps whatever JSON value was sent)
    """
    data = parse_body(raw_body, log=log)

    return ContactPayload(
        name=_string_field(data, 'name'),
        email=_string_field(data, 'email'),
        message=_string_field(data, 'message'),
        honeypot=data.get(HONEYPOT_FIELD),
    )
