"""Shared fixtures for the OTP test-suite."""

import pytest


class FakeClock:
    """Manually advanced clock, injected wherever ``time.time`` is used."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
