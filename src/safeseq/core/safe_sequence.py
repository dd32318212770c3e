from __future__ import annotations
from typing import TypeVar, Generic, Iterator

from .errors import IndexOutOfRange
from ..types.view import SequenceSnapshot
from ..utils.log import logger

__all__ = ['SafeSequence']

T = TypeVar('T')


class SafeSequence(Generic[T]):
    """
    An ordered container which can be modified while a snapshot of it is being iterated.

    The lists referenced by snapshots returned from `view()` are never changed destructively.
    Only new calls to `view()` observe elements that were appended, removed or swapped before
    that call. Iterating the container itself iterates a single snapshot, so these are safe::

        seq = SafeSequence()
        for x in seq.view():
            seq.append(x)  # SAFE

        for x in seq:
            seq.remove(0)  # SAFE

    This one is correct but slow, because every `view()` / `remove()` pair forces a copy::

        while len(seq.view()) > 0:
            seq.remove(0)  # INEFFICIENT

    And this one is wrong, because every `view()` observes the previous removals::

        i = 0
        while i < len(seq.view()):
            seq.remove(i)  # WRONG
            i += 1

    Not safe for concurrent use. It is safe for non-concurrent modification during traversal.
    It performs the worst when calls to `view()` and `remove()` are interleaved.
    """

    __slots__ = ('_storage', '_shared', '_copies')

    def __init__(self) -> None:
        self._storage: list[T] = []
        # True if the current storage may be aliased by a snapshot returned earlier
        self._shared = False
        # Number of defensive copies made so far
        self._copies = 0

    @property
    def shared(self) -> bool:
        """
        True if the backing list may be referenced by a previously returned snapshot
        """
        return self._shared

    @property
    def copies(self) -> int:
        """
        The number of defensive copies made during the lifetime of the container
        """
        return self._copies

    def view(self) -> SequenceSnapshot[T]:
        """
        Returns a snapshot of the current elements.
        The snapshot can be iterated while this container is modified.

        :return: A read-only snapshot with its length fixed at call time
        """
        self._shared = True
        return SequenceSnapshot(self._storage)

    def append(self, value: T) -> None:
        """
        Adds a new element to the end. It is safe to call this during traversal.

        :param value: The element to add
        """
        # Snapshots have their own length, growing the list in place is invisible to them
        self._storage.append(value)

    def remove(self, index: int) -> None:
        """
        Removes the element at the given index. It is safe to call this during traversal.

        :param index: Position of the element, in range [0, len)
        :raises IndexOutOfRange: If the index is negative or too large
        """
        storage = self._storage
        self._check_index(index, len(storage))

        if self._shared:
            logger.debug("Copying %d elements before remove(%d)", len(storage) - 1, index)
            self._storage = storage[:index] + storage[index + 1:]
            self._shared = False
            self._copies += 1
            return

        del storage[index]

    def swap(self, i: int, j: int) -> None:
        """
        Swaps the elements at the given indices. It is safe to call this during traversal.
        Swapping an element with itself does nothing, not even a copy.

        :param i: Position of the first element, in range [0, len)
        :param j: Position of the second element, in range [0, len)
        :raises IndexOutOfRange: If any of the indices is negative or too large
        """
        size = len(self._storage)
        self._check_index(i, size)
        self._check_index(j, size)

        if i == j:
            return

        if self._shared:
            logger.debug("Copying %d elements before swap(%d, %d)", size, i, j)
            self._storage = self._storage.copy()
            self._shared = False
            self._copies += 1

        storage = self._storage
        storage[i], storage[j] = storage[j], storage[i]

    @staticmethod
    def _check_index(index: int, size: int) -> None:
        if index < 0 or index >= size:
            raise IndexOutOfRange(index, size)

    def __len__(self) -> int:
        """
        The current number of elements, it does not create a snapshot
        """
        return len(self._storage)

    def __iter__(self) -> Iterator[T]:
        """
        Iterates a single snapshot taken when the iteration starts
        """
        return iter(self.view())

    def __repr__(self) -> str:
        state = "shared" if self._shared else "exclusive"
        return f"SafeSequence({self._storage!r}, {state})"
