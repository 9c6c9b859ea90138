"""Block height stub implementation.

Settable BlockHeightProtocol for development and local runs. Heights
only move forward: set_height() refuses to go backwards.
"""

from __future__ import annotations

from petition_registry.application.ports.block_height import BlockHeightProtocol


class BlockHeightStub(BlockHeightProtocol):
    """Manually driven block height.

    Attributes:
        _height: Current height.
    """

    def __init__(self, height: int = 0) -> None:
        if height < 0:
            raise ValueError(f"height must be non-negative, got {height}")
        self._height = height

    def current_height(self) -> int:
        return self._height

    def advance(self, blocks: int = 1) -> int:
        """Move the height forward by ``blocks`` and return it."""
        if blocks < 0:
            raise ValueError(f"blocks must be non-negative, got {blocks}")
        self._height += blocks
        return self._height

    def set_height(self, height: int) -> None:
        """Jump to ``height``.

        Raises:
            ValueError: If ``height`` is below the current height.
        """
        if height < self._height:
            raise ValueError(
                f"block height cannot go backwards ({self._height} -> {height})"
            )
        self._height = height
