"""Fee settlement stub implementation.

In-memory FeeSettlementProtocol for development and testing. It records
every transfer intent in the order received, and can be switched to
reject transfers to exercise the creation-abort path.

WARNING: This stub is for development/testing only. It moves no value.
"""

from __future__ import annotations

from structlog import get_logger

from petition_registry.application.ports.fee_settlement import FeeSettlementProtocol
from petition_registry.domain.errors.registry import FeeSettlementError
from petition_registry.domain.models.petition import FeeTransfer

logger = get_logger()


class FeeSettlementStub(FeeSettlementProtocol):
    """Records fee transfers instead of executing them.

    Attributes:
        _transfers: Accepted transfer intents, oldest first.
        _reject_reason: When set, every transfer is rejected with it.
    """

    def __init__(self, reject_reason: str | None = None) -> None:
        self._transfers: list[FeeTransfer] = []
        self._reject_reason = reject_reason

    async def transfer(self, transfer: FeeTransfer) -> None:
        if self._reject_reason is not None:
            raise FeeSettlementError(
                amount=transfer.amount,
                payer=transfer.payer,
                payee=transfer.payee,
                reason=self._reject_reason,
            )
        self._transfers.append(transfer)
        logger.debug(
            "fee_transfer_recorded",
            amount=transfer.amount,
            payer=transfer.payer,
            payee=transfer.payee,
        )

    @property
    def transfers(self) -> list[FeeTransfer]:
        """Accepted transfers, oldest first."""
        return list(self._transfers)

    def reject_with(self, reason: str | None) -> None:
        """Reject all further transfers with ``reason`` (None to accept again)."""
        self._reject_reason = reason

    def clear(self) -> None:
        """Forget recorded transfers (for testing)."""
        self._transfers.clear()
