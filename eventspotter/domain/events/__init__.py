"""
Events bounded context: domain layer.

- Event and saved-event entities
- Query compilation (filters, sorting, pagination)
- Ownership authorization
- Idempotent, capacity-limited save/unsave
"""
