"""Wall-clock block height service.

Production BlockHeightProtocol implementation for deployments that are
not attached to a chain: the height is the current Unix time in whole
seconds. Deadlines supplied by callers are therefore Unix timestamps.

The returned height never goes backwards, even if the system clock is
stepped back; it holds at the highest height seen until the clock
catches up.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from structlog import get_logger

from petition_registry.application.ports.block_height import BlockHeightProtocol

logger = get_logger()


class WallClockBlockHeightService(BlockHeightProtocol):
    """Block height derived from the system clock.

    Attributes:
        _clock: Source of seconds since the epoch.
        _last_height: Highest height returned so far.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last_height = 0
        self._lock = threading.Lock()

    def current_height(self) -> int:
        height = int(self._clock())
        with self._lock:
            if height < self._last_height:
                logger.warning(
                    "clock_stepped_back",
                    clock_height=height,
                    held_height=self._last_height,
                )
                return self._last_height
            self._last_height = height
            return height
