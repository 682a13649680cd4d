"""
Shared module package.

Contains cross-cutting concerns used across bounded contexts:
- Error classification and mapping
- Security middleware
- Rate limiting
- Logging configuration
"""
