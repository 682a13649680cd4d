"""
Translation of SQLAlchemy driver errors into domain persistence errors.

PostgreSQL reports constraint failures through SQLSTATE codes:
    23505  unique_violation       -> UniqueViolationError
    23503  foreign_key_violation  -> ForeignKeyViolationError
Anything else is returned unchanged so it classifies as unknown.
"""

import re
from typing import Optional

from sqlalchemy.exc import IntegrityError

from eventspotter.domain.errors import ForeignKeyViolationError, UniqueViolationError

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"

_FK_COLUMN = re.compile(r"([a-z]+_id)_fkey$")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _constraint_name(exc: IntegrityError) -> Optional[str]:
    diag = getattr(exc.orig, "diag", None)
    return getattr(diag, "constraint_name", None)


def foreign_key_field(constraint_name: Optional[str]) -> Optional[str]:
    """Return the camelCase column a foreign key constraint guards.

    ``eventspotter_user_saved_events_event_id_fkey`` -> ``eventId``.
    """
    if not constraint_name:
        return None
    match = _FK_COLUMN.search(constraint_name)
    return _camel(match.group(1)) if match else None


def translate_integrity_error(exc: IntegrityError) -> Exception:
    """Map an IntegrityError to the matching PersistenceError, if any."""
    sqlstate = getattr(exc.orig, "sqlstate", None)
    constraint = _constraint_name(exc)
    if sqlstate == UNIQUE_VIOLATION:
        return UniqueViolationError(target=constraint)
    if sqlstate == FOREIGN_KEY_VIOLATION:
        return ForeignKeyViolationError(field_name=foreign_key_field(constraint))
    return exc
