"""
Integrations with tracing backends.
"""

__all__ = ['tracing']
