"""
Domain layer package.

Contains pure business logic: entities, value objects, domain services,
and port interfaces. No framework imports, no IO of its own.
All IO goes through ports implemented in the infrastructure layer.
"""
