"""
采样核心的错误类型
- InvalidWeight: 权重非有限或 <= 0（在任何键运算之前检测，快速失败）
- DegenerateDraw: 随机源连续给出开区间端点（0 或 1），视为随机源违约
- HeapFullError: 有界堆已满仍然 push
"""

from typing import Any, Optional


class InvalidWeight(ValueError):
    def __init__(self, weight: Any, position: Optional[int] = None):
        self.weight = weight
        self.position = position
        where = f" at stream position {position}" if position is not None else ""
        super().__init__(f"weight must be finite and > 0, got {weight!r}{where}")


class DegenerateDraw(ArithmeticError):
    pass


class HeapFullError(IndexError):
    pass
