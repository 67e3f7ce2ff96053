"""
加权蓄水池采样（Efraimidis–Spirakis，A-ExpJ 指数跳跃版）
- 目标：单遍流式处理，包含概率 ∝ weight，且不为每个元素都计算随机键
- 关键点：
  - 随机键：key = u^(1/weight)，u ~ Uniform(0,1)；保留 key 最大的 k 个（最小堆堆顶 = 当前门槛 T）
  - 跳跃预算：X = ln(u) / ln(T)；之后每个元素 X -= weight，X <= 0 时该元素成为替换者
  - 替换：弹出堆顶 T，T' = T^weight，r ~ Uniform[T', 1)，新键 r^(1/weight) 入堆，再用新门槛重算 X
  - 插入/替换复杂度：O(log k)
- 键以对数形式 ln(u)/weight 保存：单调变换，排序与门槛不变，且极小权重不会下溢为 0
- 权重校验：非有限或 <= 0 直接抛 InvalidWeight（快速失败，整个调用中止）
"""

import logging
import math
import sys
from typing import Any

from reservoir_sampling.modules.sampling.cursor import END, StreamCursor
from reservoir_sampling.modules.sampling.errors import InvalidWeight
from reservoir_sampling.modules.sampling.heap import BoundedMinHeap
from reservoir_sampling.modules.sampling.random_source import RandomSource
from reservoir_sampling.pipeline.types import SampleResult

logger = logging.getLogger(__name__)

# ln(key) 的上界：key 严格小于 1
_LOG_KEY_MAX = -sys.float_info.min
_UNIT_MAX = math.nextafter(1.0, 0.0)


def _checked_weight(weight: Any, position: int) -> float:
    try:
        w = float(weight)
    except (TypeError, ValueError) as e:
        raise InvalidWeight(weight, position) from e
    if not math.isfinite(w) or w <= 0.0:
        raise InvalidWeight(weight, position)
    return w


def _log_key(u: float, weight: float) -> float:
    return min(math.log(u) / weight, _LOG_KEY_MAX)


class WeightedReservoirSampler:
    mode = "weighted"

    def sample(self, cursor: StreamCursor, size: int, rng: RandomSource) -> SampleResult:
        """
        cursor 产出 (weight, item)；返回至多 size 个元素（无序）。
        """
        if size < 0:
            raise ValueError(f"sample size must be >= 0, got {size}")
        draws0 = getattr(rng, "draws", 0)
        pos0 = cursor.position

        if size == 0:
            return SampleResult(items=[], requested=0, mode=self.mode, seed=getattr(rng, "seed", None))

        heap = BoundedMinHeap(size)
        while not heap.full:
            pair = cursor.next()
            if pair is END:
                break
            weight, item = pair
            w = _checked_weight(weight, cursor.position - 1)
            heap.push(_log_key(rng.open_unit(), w), item)

        if not heap.full:
            logger.warning("Population smaller than sample size: requested %d, got %d", size, len(heap))
        else:
            pair = cursor.next()
            # 流在填满后已耗尽时不抽预算
            if pair is not END:
                t = heap.min_key
                x = math.log(rng.open_unit()) / t
            while pair is not END:
                weight, item = pair
                w = _checked_weight(weight, cursor.position - 1)
                x -= w
                if x <= 0.0:
                    heap.pop_min()
                    # T' = T^w；新键 r^(1/w) >= T，必然留在堆中
                    t_w = min(math.exp(t * w), _UNIT_MAX)
                    r = rng.open_range(t_w, 1.0)
                    heap.push(_log_key(r, w), item)
                    t = heap.min_key
                    x = math.log(rng.open_unit()) / t
                pair = cursor.next()

        return SampleResult(
            items=heap.items(),
            requested=size,
            mode=self.mode,
            seed=getattr(rng, "seed", None),
            draws=getattr(rng, "draws", 0) - draws0,
            consumed=cursor.position - pos0,
        )
