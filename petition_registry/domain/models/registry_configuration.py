"""Registry-wide configuration record.

The registry carries exactly one configuration: the id counter, the
capacity ceiling, the flat creation fee and the authority principal.
The record is frozen; the store swaps in new instances produced by the
with_* helpers.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class RegistryConfiguration:
    """Singleton registry configuration.

    Attributes:
        petition_counter: Next id to assign; equals petitions ever created.
        max_petitions: Capacity ceiling for petition_counter.
        creation_fee: Flat amount charged per creation.
        authority: Principal allowed to change fee/limits. Set at most once.
    """

    petition_counter: int = 0
    max_petitions: int = 10_000
    creation_fee: int = 500
    authority: str | None = None

    def __post_init__(self) -> None:
        if self.petition_counter < 0:
            raise ValueError(
                f"petition_counter must be non-negative, got {self.petition_counter}"
            )

    @property
    def has_authority(self) -> bool:
        return self.authority is not None

    @property
    def at_capacity(self) -> bool:
        return self.petition_counter >= self.max_petitions

    def with_next_id(self) -> RegistryConfiguration:
        return replace(self, petition_counter=self.petition_counter + 1)

    def with_authority(self, authority: str) -> RegistryConfiguration:
        return replace(self, authority=authority)

    def with_creation_fee(self, creation_fee: int) -> RegistryConfiguration:
        return replace(self, creation_fee=creation_fee)

    def with_max_petitions(self, max_petitions: int) -> RegistryConfiguration:
        return replace(self, max_petitions=max_petitions)

    def to_dict(self) -> dict[str, object]:
        return {
            "petition_counter": self.petition_counter,
            "max_petitions": self.max_petitions,
            "creation_fee": self.creation_fee,
            "authority": self.authority,
        }
