"""
随机源（RandomSource）
- uniform_float(): [0, 1)
- uniform_int(bound): [0, bound)
- uniform_range(lo, hi): [lo, hi)
- open_unit() / open_range(lo, hi): 严格开区间，供 ln(u) 与 u^(1/w) 使用

端点策略：落在被排除端点上的值会被重抽；连续 MAX_REDRAWS 次仍退化则抛 DegenerateDraw。
每次调用底层生成器都会计入 draws，便于验证“抽样次数 ~ O(k log(n/k))”。
"""

import random
from typing import Optional

from reservoir_sampling.modules.sampling.errors import DegenerateDraw

MAX_REDRAWS = 64


class RandomSource:
    def uniform_float(self) -> float:
        raise NotImplementedError

    def uniform_int(self, bound: int) -> int:
        raise NotImplementedError

    def uniform_range(self, lo: float, hi: float) -> float:
        raise NotImplementedError

    def open_unit(self) -> float:
        """Draw u strictly inside (0, 1)."""
        for _ in range(MAX_REDRAWS):
            u = self.uniform_float()
            if 0.0 < u < 1.0:
                return u
        raise DegenerateDraw(f"no draw inside (0, 1) after {MAX_REDRAWS} attempts")

    def open_range(self, lo: float, hi: float) -> float:
        """
        Draw r inside [lo, hi) that is also strictly inside (0, 1).
        Rounding can push lo + (hi - lo) * u onto 1.0 when lo is close to 1.
        """
        for _ in range(MAX_REDRAWS):
            r = self.uniform_range(lo, hi)
            if 0.0 < r < 1.0:
                return r
        raise DegenerateDraw(f"no draw inside [{lo}, {hi}) ∩ (0, 1) after {MAX_REDRAWS} attempts")


class PyRandomSource(RandomSource):
    """
    random.Random 包装：seed 为 None 时使用系统熵（非确定），
    给定 seed 时同一 seed + 同一输入流 → 逐位一致的结果。
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)
        self.draws = 0

    def uniform_float(self) -> float:
        self.draws += 1
        return self._rng.random()

    def uniform_int(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError(f"bound must be > 0, got {bound}")
        self.draws += 1
        return self._rng.randrange(bound)

    def uniform_range(self, lo: float, hi: float) -> float:
        if not lo < hi:
            raise ValueError(f"empty range [{lo}, {hi})")
        self.draws += 1
        # random.uniform 可能返回 hi，这里保持半开区间
        return lo + (hi - lo) * self._rng.random()
