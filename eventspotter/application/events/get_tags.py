"""
Use case: List the distinct event tags.

Tags are trimmed and lower-cased before deduplication, so "  Tech "
and "tech" collapse into one entry. Empty results are dropped.
"""

from typing import Iterable

from eventspotter.domain.events.ports import EventRepository


def normalize_tags(tag_lists: Iterable[Iterable[str]]) -> list[str]:
    """Flatten, trim, lower-case, deduplicate and sort tags."""
    unique = {tag.strip().lower() for tags in tag_lists for tag in tags}
    unique.discard("")
    return sorted(unique)


class GetTagsUseCase:
    """Returns every tag in use, normalized."""

    def __init__(self, event_repo: EventRepository) -> None:
        self._event_repo = event_repo

    async def execute(self) -> list[str]:
        return normalize_tags(await self._event_repo.tag_lists())
