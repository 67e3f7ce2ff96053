"""
数据类型定义
- WeightedEntry: 加权采样堆中的条目（优先键 + 插入序号 + 原始元素）
- SampleResult: 一次采样调用的结果（样本 + 诊断信息）
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass(order=True)
class WeightedEntry:
    key: float                          # 优先键 U^(1/w)，以对数形式 ln(U)/w 存储
    seq: int                            # 插入序号，key 相同时保证稳定顺序
    item: Any = field(compare=False)    # 原始元素，不参与比较


@dataclass
class SampleResult:
    items: List[Any]
    requested: int
    mode: str = "uniform"
    seed: Optional[int] = None
    draws: int = 0            # 本次调用消耗的随机数个数
    consumed: int = 0         # 游标消费（返回或跳过）的元素个数

    @property
    def underfilled(self) -> bool:
        # 总体小于样本量：退化但成功
        return len(self.items) < self.requested

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)
