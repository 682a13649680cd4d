"""
Application layer for the events bounded context.

Use cases coordinate domain services and ports to fulfill
one API operation each. No framework or infrastructure imports allowed.
"""
