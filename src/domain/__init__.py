"""
Domain layer for contact form processing.

This layer contains:
- Data models (request, payload, email, outcome)
- Business logic (decode, validate, deliver pipeline)
- Response mapping (outcome to HTTP response)
"""
