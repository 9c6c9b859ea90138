"""Result type for petition registry operations.

Every public registry operation returns a RegistryResult instead of
raising: either success with a value, or failure with a classified
RegistryErrorCode. Callers branch on ``success`` / ``error_code``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from petition_registry.domain.errors.registry import (
    PetitionRegistryError,
    RegistryErrorCode,
)

T = TypeVar("T")


@dataclass(frozen=True)
class RegistryResult(Generic[T]):
    """Outcome of a registry operation.

    Attributes:
        success: True when the operation took effect.
        value: Operation value on success (id, bool, petition...).
        error_code: Classified failure reason on failure.
        error_message: Human-readable failure detail.
    """

    success: bool
    value: T | None = None
    error_code: RegistryErrorCode | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls, value: T) -> RegistryResult[T]:
        return cls(success=True, value=value)

    @classmethod
    def fail(
        cls, error_code: RegistryErrorCode, error_message: str | None = None
    ) -> RegistryResult[T]:
        return cls(
            success=False,
            error_code=error_code,
            error_message=error_message or error_code.label,
        )

    @classmethod
    def from_error(cls, error: PetitionRegistryError) -> RegistryResult[T]:
        return cls.fail(error.code, str(error))

    def unwrap(self) -> T:
        """Return the value of a successful result.

        Raises:
            ValueError: If the result is a failure.
        """
        if not self.success:
            raise ValueError(f"Cannot unwrap failed result: {self.error_message}")
        return self.value  # type: ignore[return-value]

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "value": self.value,
            "error_code": int(self.error_code) if self.error_code is not None else None,
            "error_message": self.error_message,
        }
