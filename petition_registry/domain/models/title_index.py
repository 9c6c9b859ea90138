"""Title -> petition id index.

The index enforces global title uniqueness. It is a derived structure:
it always equals {petition.title: petition.petition_id} over every
petition ever created (open or closed), so it is rebuilt from petitions
on restart instead of being persisted.

A closed petition keeps its title reserved. A title is only released
when its own petition is updated to a different title.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from petition_registry.domain.errors.registry import TitleAlreadyIndexedError
from petition_registry.domain.models.petition import Petition


class TitleIndex:
    """Injective mapping from petition title to petition id."""

    def __init__(self, entries: dict[str, int] | None = None) -> None:
        self._ids_by_title: dict[str, int] = dict(entries or {})

    @classmethod
    def from_petitions(cls, petitions: Iterable[Petition]) -> TitleIndex:
        """Rebuild the index from stored petitions.

        Raises:
            TitleAlreadyIndexedError: If two stored petitions share a title.
        """
        index = cls()
        for petition in petitions:
            index.insert(petition.title, petition.petition_id)
        return index

    def lookup(self, title: str) -> int | None:
        return self._ids_by_title.get(title)

    def contains(self, title: str) -> bool:
        return title in self._ids_by_title

    def insert(self, title: str, petition_id: int) -> None:
        """Map ``title`` to ``petition_id``.

        Raises:
            TitleAlreadyIndexedError: If the title is already mapped.
        """
        existing = self._ids_by_title.get(title)
        if existing is not None:
            raise TitleAlreadyIndexedError(title=title, existing_id=existing)
        self._ids_by_title[title] = petition_id

    def remove(self, title: str) -> None:
        self._ids_by_title.pop(title, None)

    def check_rename(self, petition_id: int, old_title: str, new_title: str) -> None:
        """Check that ``petition_id`` may move from ``old_title`` to ``new_title``.

        Nothing is mutated, so a collision leaves the index untouched.

        Raises:
            TitleAlreadyIndexedError: If another petition holds ``new_title``.
        """
        if old_title == new_title:
            return
        existing = self._ids_by_title.get(new_title)
        if existing is not None and existing != petition_id:
            raise TitleAlreadyIndexedError(title=new_title, existing_id=existing)

    def rename(self, petition_id: int, old_title: str, new_title: str) -> None:
        """Move ``petition_id`` from ``old_title`` to ``new_title`` as one step.

        The collision check runs before either mapping changes; on failure
        both the old and the new mapping are left as they were.

        Raises:
            TitleAlreadyIndexedError: If another petition holds ``new_title``.
        """
        self.check_rename(petition_id, old_title, new_title)
        if old_title == new_title:
            return
        self.remove(old_title)
        self._ids_by_title[new_title] = petition_id

    def copy(self) -> TitleIndex:
        return TitleIndex(self._ids_by_title)

    def __len__(self) -> int:
        return len(self._ids_by_title)

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids_by_title)
