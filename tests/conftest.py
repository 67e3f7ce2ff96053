"""Shared fixtures for sampler tests."""

from __future__ import annotations

from typing import List, Optional

import pytest

from reservoir_sampling.modules.sampling.random_source import RandomSource


class ScriptedRandomSource(RandomSource):
    """RandomSource that replays fixed floats and ints, for exercising edge cases."""

    def __init__(self, floats: List[float], ints: Optional[List[int]] = None) -> None:
        self._floats = list(floats)
        self._ints = list(ints or [])
        self.draws = 0

    def uniform_float(self) -> float:
        self.draws += 1
        return self._floats.pop(0)

    def uniform_int(self, bound: int) -> int:
        self.draws += 1
        return self._ints.pop(0) if self._ints else 0

    def uniform_range(self, lo: float, hi: float) -> float:
        return lo + (hi - lo) * self.uniform_float()


@pytest.fixture
def scripted():
    """Factory for ScriptedRandomSource."""
    return ScriptedRandomSource
