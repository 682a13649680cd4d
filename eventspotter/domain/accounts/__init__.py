"""
Accounts bounded context: domain layer.

Users, principals, and the ports for credential handling.
"""
