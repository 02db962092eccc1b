"""
Service modules for the contact form Lambda.

This package contains the SES delivery client and the structured logger.
"""

__all__ = ['ses', 'structured_logging']
