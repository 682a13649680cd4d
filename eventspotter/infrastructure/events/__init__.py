"""
Infrastructure adapters for the events bounded context.
"""
