"""
有界最小堆（BoundedMinHeap）
- 元素为 WeightedEntry(key, seq, item)，只按 (key, seq) 排序，item 从不参与比较
- 堆顶即当前最小 key，peek 为 O(1)，push/pop 为 O(log k)
- 容量固定：满时 push 抛 HeapFullError；调用方（加权采样器）先 pop 再 push
- seq 为单调递增的插入序号，key 相等时按插入顺序决胜，保证固定随机序列下结果确定
"""

import heapq
from itertools import count
from typing import Any, List, Tuple

from reservoir_sampling.modules.sampling.errors import HeapFullError
from reservoir_sampling.pipeline.types import WeightedEntry


class BoundedMinHeap:
    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self.capacity = int(capacity)
        self._heap: List[WeightedEntry] = []
        self._seq = count()

    def __len__(self) -> int:
        return len(self._heap)

    @property
    def full(self) -> bool:
        return len(self._heap) >= self.capacity

    def push(self, key: float, item: Any) -> None:
        if self.full:
            raise HeapFullError(f"heap at capacity {self.capacity}; pop the minimum first")
        heapq.heappush(self._heap, WeightedEntry(float(key), next(self._seq), item))

    def peek_min(self) -> Tuple[float, Any]:
        if not self._heap:
            raise IndexError("peek on an empty heap")
        top = self._heap[0]
        return top.key, top.item

    @property
    def min_key(self) -> float:
        return self.peek_min()[0]

    def pop_min(self) -> Tuple[float, Any]:
        if not self._heap:
            raise IndexError("pop from an empty heap")
        top = heapq.heappop(self._heap)
        return top.key, top.item

    def items(self) -> List[Any]:
        return [e.item for e in self._heap]
