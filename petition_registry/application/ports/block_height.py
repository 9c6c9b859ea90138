"""Block height port - interface for the registry's clock.

The registry measures time as an integer block height. Deadlines are
compared against it and every creation/update is stamped with it. All
services that need the current height MUST inject a BlockHeightProtocol
implementation instead of reading a clock directly.

Contract:
- Heights are non-negative integers
- Heights are monotonic non-decreasing across calls
"""

from abc import ABC, abstractmethod


class BlockHeightProtocol(ABC):
    """Abstract interface for the current block height.

    For production:
        Use WallClockBlockHeightService from application/services/

    For testing:
        Use FakeBlockHeight from tests/helpers/fake_block_height.py
    """

    @abstractmethod
    def current_height(self) -> int:
        """Return the current block height.

        Returns:
            Non-negative height, never lower than a previously returned one.
        """
        ...
