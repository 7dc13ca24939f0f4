"""
Traversable protocol for data structures that can be walked element by element.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Callable, Iterator
from typing import Generic, TypeVar

E = TypeVar("E")


class Traversable(ABC, Generic[E]):
    """
    Protocol for data structures whose elements can be visited in order.

    Implementations must support:
    - Ascending iteration via __iter__ (a fresh iterator on every call)
    - Async ascending iteration via __aiter__
    - In-order visitor traversal via traverse(func)
    - Breadth-first visitor traversal via level_traverse(func)
    """

    @abstractmethod
    def __iter__(self) -> Iterator[E]:
        """Return an iterator over all elements in ascending order."""
        pass

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[E]:
        """Return an async iterator over all elements in ascending order."""
        pass

    @abstractmethod
    def traverse(self, func: Callable[[E], object]) -> None:
        """
        Apply func to every element in ascending order.

        Args:
            func: Any callable taking one element. Return values are ignored.
        """
        pass

    @abstractmethod
    def level_traverse(self, func: Callable[[E], object]) -> None:
        """
        Apply func to every element in breadth-first order, root first.

        Args:
            func: Any callable taking one element. Return values are ignored.
        """
        pass
