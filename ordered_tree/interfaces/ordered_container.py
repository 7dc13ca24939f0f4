"""
OrderedContainer abstract base class for keyed, ordered element storage.
"""

from abc import abstractmethod

from ordered_tree.interfaces.traversable import E, Traversable


class OrderedContainer(Traversable[E]):
    """
    Abstract base class for ordered containers of self-keyed elements.

    An element is its own search key: two elements comparing equal occupy
    the same slot. Inherits traversal capabilities from Traversable.

    Implementations:
    - OrderedTree: AVL tree with O(log N) worst-case operations
    """

    @abstractmethod
    def insert(self, item: E) -> None:
        """
        Insert an element, or replace the stored element that compares equal.

        Args:
            item: The element to insert.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def remove(self, item: E) -> bool:
        """
        Remove the element that compares equal to item.

        Args:
            item: Element carrying the search key.

        Returns:
            True if an element was found and removed, False otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def retrieve(self, key: E) -> E:
        """
        Return the stored element that compares equal to key.

        Args:
            key: Element carrying the search key.

        Returns:
            The stored element.

        Raises:
            KeyNotFoundError: If no element matches.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def in_tree(self, item: E) -> bool:
        """
        Check if an element with the same key is stored.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """
        Return the number of stored elements.

        Time complexity: O(1)
        """
        pass

    @abstractmethod
    def is_empty(self) -> bool:
        pass

    @abstractmethod
    def height(self) -> int:
        """Return the height of the structure, -1 when empty."""
        pass

    @abstractmethod
    def depth(self, item: E) -> int:
        """
        Return the depth of item, or -1 - d if absent.

        Args:
            item: Element carrying the search key.

        Returns:
            The 0-based depth if present. Otherwise -1 - d, where d is the
            depth at which item would be inserted.
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Release every stored element."""
        pass
