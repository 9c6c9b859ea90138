"""Data transfer objects returned across the application boundary."""

from petition_registry.application.dtos.registry_result import RegistryResult

__all__: list[str] = ["RegistryResult"]
