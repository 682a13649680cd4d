"""
Shared error handling package.

Centralizes failure classification so that validation errors,
persistence errors, domain outcomes and unexpected faults are
consistently translated into API responses.
"""
