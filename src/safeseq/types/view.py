from __future__ import annotations
from typing import TypeVar, Sequence, Iterator, Any

__all__ = ['SequenceSnapshot']

T = TypeVar('T')


class SequenceSnapshot(Sequence[T]):
    """
    A read-only view over the backing list of a SafeSequence.

    The visible index range is captured when the snapshot is created, so elements appended
    to the backing list later are never seen. Removals and swaps are never done in place on
    a list that a snapshot refers to, so the visible elements do not change either.
    """

    __slots__ = ('sequence', 'range')

    def __init__(self, sequence: list[T], range_object: range | None = None) -> None:
        """
        :param sequence: The backing list, it is aliased, not copied
        :param range_object: The visible indices, defaults to the current length of the list
        """
        if range_object is None:
            range_object = range(len(sequence))
        self.range = range_object
        self.sequence = sequence

    def __getitem__(self, key: int | slice) -> T | SequenceSnapshot[T]:
        if isinstance(key, slice):
            return SequenceSnapshot(self.sequence, self.range[key])
        try:
            return self.sequence[self.range[key]]
        except IndexError:
            raise IndexError("SequenceSnapshot index out of range") from None

    def __len__(self) -> int:
        return len(self.range)

    def __iter__(self) -> Iterator[T]:
        sequence = self.sequence
        for i in self.range:
            yield sequence[i]

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, (SequenceSnapshot, list, tuple)):
            return NotImplemented
        if len(self) != len(other):
            return False
        return all(a == b for a, b in zip(self, other))

    __hash__ = None  # type: ignore

    def __repr__(self) -> str:
        return f"SequenceSnapshot({list(self)!r})"
