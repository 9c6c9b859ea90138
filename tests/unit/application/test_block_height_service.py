"""Unit tests for the wall-clock block height service."""

from petition_registry.application.services.block_height_service import (
    WallClockBlockHeightService,
)


class FakeClock:
    def __init__(self, *readings: float) -> None:
        self._readings = list(readings)

    def __call__(self) -> float:
        return self._readings.pop(0)


class TestWallClockBlockHeightService:
    def test_height_is_whole_seconds(self) -> None:
        service = WallClockBlockHeightService(clock=FakeClock(1700000000.9))

        assert service.current_height() == 1700000000

    def test_follows_clock_forward(self) -> None:
        service = WallClockBlockHeightService(clock=FakeClock(10.0, 11.0, 15.5))

        assert [service.current_height() for _ in range(3)] == [10, 11, 15]

    def test_never_goes_backwards(self) -> None:
        service = WallClockBlockHeightService(clock=FakeClock(100.0, 90.0, 95.0, 101.0))

        assert [service.current_height() for _ in range(4)] == [100, 100, 100, 101]
