"""
Stream cursors

A cursor is a forward-only, single-consumption view of a stream:
- next()      -> the next element, or END when the stream is exhausted
- advance(n)  -> discard n elements, then return the following one (or END)

END is a sentinel rather than None so that None stays a legal stream element.
`position` counts every element consumed so far, whether returned or skipped.
"""

from itertools import islice
from typing import Any, Iterable, List, Sequence


class _End:
    def __repr__(self) -> str:
        return "END"

    def __bool__(self) -> bool:
        return False


END = _End()


class StreamCursor:
    position: int = 0

    def next(self) -> Any:
        raise NotImplementedError

    def advance(self, n: int) -> Any:
        raise NotImplementedError

    def take(self, n: int) -> List[Any]:
        """Fetch up to n elements; fewer means the stream ran dry."""
        out: List[Any] = []
        while len(out) < n:
            x = self.next()
            if x is END:
                break
            out.append(x)
        return out


class IterableCursor(StreamCursor):
    """Cursor over any iterable: generators, file line readers, zip() of weights and lines."""

    def __init__(self, iterable: Iterable[Any]):
        self._it = iter(iterable)
        self.position = 0
        self._exhausted = False

    def next(self) -> Any:
        return self.advance(0)

    def advance(self, n: int) -> Any:
        if n < 0:
            raise ValueError(f"cannot advance by a negative count: {n}")
        if self._exhausted:
            return END
        if n:
            # consume n elements without materializing them
            skipped = sum(1 for _ in islice(self._it, n))
            self.position += skipped
            if skipped < n:
                self._exhausted = True
                return END
        x = next(self._it, END)
        if x is END:
            self._exhausted = True
            return END
        self.position += 1
        return x


class SequenceCursor(StreamCursor):
    """Cursor over an indexable sequence (list, range, array); skipping is O(1)."""

    def __init__(self, seq: Sequence[Any]):
        self._seq = seq
        self.position = 0

    def next(self) -> Any:
        return self.advance(0)

    def advance(self, n: int) -> Any:
        if n < 0:
            raise ValueError(f"cannot advance by a negative count: {n}")
        size = len(self._seq)
        target = self.position + n
        if target >= size:
            self.position = size
            return END
        self.position = target + 1
        return self._seq[target]
