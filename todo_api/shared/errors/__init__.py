"""
Shared error handling package.

Centralizes error-to-HTTP mapping so that every failure, from any layer,
is translated into the same JSON error envelope.
"""
