"""
Shared module package.

Contains cross-cutting concerns used across bounded contexts:
- Error normalization into the response envelope
- Security headers middleware
- Request logging and correlation ids
- Logging configuration
"""
