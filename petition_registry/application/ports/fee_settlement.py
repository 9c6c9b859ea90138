"""Fee settlement port (creation fee transfers).

The registry does not move value itself. On every successful creation it
hands the settlement collaborator the exact (amount, payer, payee)
triple; the collaborator executes or records the transfer.

Settlement is synchronous from the registry's point of view: if the
collaborator rejects the transfer, the creation fails and no id is
consumed, no title is indexed and nothing is stored.
"""

from __future__ import annotations

from typing import Protocol

from petition_registry.domain.models.petition import FeeTransfer


class FeeSettlementProtocol(Protocol):
    """Protocol for executing creation-fee transfers."""

    async def transfer(self, transfer: FeeTransfer) -> None:
        """Execute or record a fee transfer.

        Args:
            transfer: Amount, payer (creator), payee (authority) and height.

        Raises:
            FeeSettlementError: If the transfer is rejected.
        """
        ...
