"""
等概率蓄水池采样（Algorithm L，Li 1994）
- 目标：单遍流式处理，每个元素进入样本的概率均为 k/n，且随机数消耗为 O(k·log(n/k))
- 关键点：
  - 先用前 k 个元素填满蓄水池；不足 k 个时原样返回（到达顺序），并记录告警
  - w = exp(ln(u)/k)；跳跃距离 steps = floor(ln(u) / ln(1-w))，一次算出，不逐元素抽样
  - 命中的元素随机覆盖一个槽位，然后 w *= exp(ln(u)/k)
- 数值保护：u 取自开区间 (0,1)；w 被夹在 (0,1) 内；ln(1-w) 用 log1p(-w) 计算
"""

import logging
import math
import sys
from typing import Any, List

from reservoir_sampling.modules.sampling.cursor import END, StreamCursor
from reservoir_sampling.modules.sampling.random_source import RandomSource
from reservoir_sampling.pipeline.types import SampleResult

logger = logging.getLogger(__name__)

_W_MIN = sys.float_info.min
_W_MAX = math.nextafter(1.0, 0.0)
_MAX_SKIP = sys.maxsize


def _clamp(w: float) -> float:
    return min(max(w, _W_MIN), _W_MAX)


def _skip_distance(u: float, w: float) -> int:
    s = math.log(u) / math.log1p(-w)
    # 跳跃距离过大（或溢出为 inf）时直接跳到流末尾
    if not s < _MAX_SKIP:
        return _MAX_SKIP
    return int(math.floor(s))


class UniformReservoirSampler:
    mode = "uniform"

    def sample(self, cursor: StreamCursor, size: int, rng: RandomSource) -> SampleResult:
        if size < 0:
            raise ValueError(f"sample size must be >= 0, got {size}")
        draws0 = getattr(rng, "draws", 0)
        pos0 = cursor.position

        if size == 0:
            return SampleResult(items=[], requested=0, mode=self.mode, seed=getattr(rng, "seed", None))

        samples: List[Any] = cursor.take(size)
        if len(samples) < size:
            logger.warning("Population smaller than sample size: requested %d, got %d", size, len(samples))
        else:
            w = _clamp(math.exp(math.log(rng.open_unit()) / size))
            while True:
                x = cursor.advance(_skip_distance(rng.open_unit(), w))
                if x is END:
                    break
                samples[rng.uniform_int(size)] = x
                w = _clamp(w * math.exp(math.log(rng.open_unit()) / size))

        return SampleResult(
            items=samples,
            requested=size,
            mode=self.mode,
            seed=getattr(rng, "seed", None),
            draws=getattr(rng, "draws", 0) - draws0,
            consumed=cursor.position - pos0,
        )
