"""
输入适配（文件 / 标准输入 → 流）
- read_lines: 逐行读取，去掉行尾换行；path 为 None 或 "-" 时读 stdin
- read_weights: 每行一个浮点权重；空行或格式错误抛 ValueError（带文件名与行号）
- zip_weighted: 按位置把权重与元素配对，较短的一方结束即结束
注意：这里只做解析，权重是否合法（有限且 > 0）由加权采样器判定。
"""

import sys
from typing import Iterable, Iterator, Optional, Tuple, TypeVar

T = TypeVar("T")


def read_lines(path: Optional[str] = None, encoding: str = "utf-8", strip_newline: bool = True) -> Iterator[str]:
    if path is None or path == "-":
        for line in sys.stdin:
            yield line.rstrip("\r\n") if strip_newline else line
        return
    with open(path, "r", encoding=encoding) as f:
        for line in f:
            yield line.rstrip("\r\n") if strip_newline else line


def read_weights(path: str, encoding: str = "utf-8") -> Iterator[float]:
    with open(path, "r", encoding=encoding) as f:
        for lineno, line in enumerate(f, start=1):
            text = line.strip()
            # 空行同样占一个位置，跳过会让后续权重与元素错位
            if not text:
                raise ValueError(f"{path}:{lineno}: blank weight line")
            try:
                yield float(text)
            except ValueError:
                raise ValueError(f"{path}:{lineno}: not a number: {text!r}") from None


def zip_weighted(weights: Iterable[float], items: Iterable[T]) -> Iterator[Tuple[float, T]]:
    return zip(weights, items)
