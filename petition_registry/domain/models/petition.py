"""Petition domain models.

This module defines the registry record for a petition, the single
"last edit" slot kept per petition, the raw creation request that the
validator checks, and the fee transfer intent emitted on creation.

Lifecycle:
    OPEN --close--> CLOSED (terminal)
    OPEN --update--> OPEN
    OPEN --increment--> OPEN

Petitions are never deleted. Every model here is a frozen dataclass; state
changes produce new instances through the with_* helpers.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

# Field limits
MAX_TITLE_LENGTH: int = 100
MAX_DESCRIPTION_LENGTH: int = 500
MAX_LOCATION_LENGTH: int = 100
MAX_TAGS: int = 10
MAX_PRIORITY: int = 10
MAX_EXTENSION_LIMIT: int = 30


class PetitionCategory(Enum):
    """Subject area of a petition."""

    POLICY = "policy"
    ENVIRONMENT = "environment"
    SOCIAL = "social"

    @classmethod
    def parse(cls, value: str) -> PetitionCategory | None:
        """Return the category for a raw value, or None if unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


class PetitionStatus(Enum):
    """Lifecycle status of a petition.

    CLOSED is terminal: no transition originates from it.
    """

    OPEN = "open"
    CLOSED = "closed"

    def is_terminal(self) -> bool:
        return self is PetitionStatus.CLOSED


@dataclass(frozen=True)
class PetitionDraft:
    """Proposed fields for a new petition, as supplied by the caller.

    Values are kept raw (category as a string, tags as given) so the
    validator can report exactly which rule they break.
    """

    title: str
    description: str
    target_signatures: int
    deadline: int
    category: str
    priority: int
    location: str
    tags: tuple[str, ...]
    min_signatures: int
    max_extension: int


@dataclass(frozen=True, eq=True)
class Petition:
    """A registry record collecting signatures toward a target.

    Attributes:
        petition_id: Dense id assigned at creation, never reused.
        creator: Principal that created the petition (immutable).
        title: Globally unique title (1-100 chars).
        description: Body text (1-500 chars).
        target_signatures: Signatures sought (> 0).
        current_signatures: Signatures recorded (0..target, never decreases).
        deadline: Block height after which the petition lapses.
        is_active: False exactly when status is CLOSED.
        category: Subject area.
        priority: 0-10.
        location: Free-form location (<= 100 chars).
        tags: Up to 10 tags.
        timestamp: Block height of creation or last update.
        status: OPEN or CLOSED.
        min_signatures: Informational threshold, not enforced here.
        max_extension: Informational cap on deadline extensions, not enforced here.
    """

    petition_id: int
    creator: str
    title: str
    description: str
    target_signatures: int
    deadline: int
    category: PetitionCategory
    priority: int
    location: str
    timestamp: int
    min_signatures: int
    max_extension: int
    tags: tuple[str, ...] = field(default_factory=tuple)
    current_signatures: int = 0
    is_active: bool = True
    status: PetitionStatus = PetitionStatus.OPEN

    def __post_init__(self) -> None:
        """Check the record-level invariants."""
        if self.petition_id < 0:
            raise ValueError(f"petition_id must be non-negative, got {self.petition_id}")
        if not 0 <= self.current_signatures <= self.target_signatures:
            raise ValueError(
                f"current_signatures ({self.current_signatures}) must be between "
                f"0 and target_signatures ({self.target_signatures})"
            )
        if self.is_active == self.status.is_terminal():
            raise ValueError(
                f"is_active={self.is_active} is inconsistent with status={self.status.value}"
            )

    @property
    def is_closed(self) -> bool:
        return self.status.is_terminal()

    def with_content(
        self,
        title: str,
        description: str,
        target_signatures: int,
        timestamp: int,
    ) -> Petition:
        """Return a copy with edited title, description and target."""
        return replace(
            self,
            title=title,
            description=description,
            target_signatures=target_signatures,
            timestamp=timestamp,
        )

    def with_signatures_added(self, amount: int) -> Petition:
        """Return a copy with ``amount`` more signatures recorded."""
        return replace(self, current_signatures=self.current_signatures + amount)

    def closed(self) -> Petition:
        """Return the terminal (closed) copy of this petition."""
        return replace(self, is_active=False, status=PetitionStatus.CLOSED)

    def to_dict(self) -> dict[str, object]:
        return {
            "petition_id": self.petition_id,
            "creator": self.creator,
            "title": self.title,
            "description": self.description,
            "target_signatures": self.target_signatures,
            "current_signatures": self.current_signatures,
            "deadline": self.deadline,
            "is_active": self.is_active,
            "category": self.category.value,
            "priority": self.priority,
            "location": self.location,
            "tags": list(self.tags),
            "timestamp": self.timestamp,
            "status": self.status.value,
            "min_signatures": self.min_signatures,
            "max_extension": self.max_extension,
        }


@dataclass(frozen=True)
class PetitionUpdate:
    """The most recent edit of a petition.

    One slot per petition id, overwritten on every update. It is not a
    history: only the latest edit is kept.
    """

    petition_id: int
    update_title: str
    update_description: str
    update_target: int
    update_timestamp: int
    updater: str


@dataclass(frozen=True)
class FeeTransfer:
    """A creation-fee transfer intent handed to the settlement collaborator.

    Attributes:
        amount: Fee charged.
        payer: Petition creator.
        payee: Registry authority.
        height: Block height at which the intent was emitted.
    """

    amount: int
    payer: str
    payee: str
    height: int
