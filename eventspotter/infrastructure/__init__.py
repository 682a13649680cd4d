"""
Infrastructure layer package.

Contains concrete implementations (adapters) of the ports
defined in the domain layer: the async SQLAlchemy data store,
session-token identity provider, and bcrypt password hashing.
"""
