"""
AVL Tree implementation for ordered element storage.

Guarantees O(log N) worst-case insert, lookup and delete by keeping the
heights of every node's subtrees within one of each other.
"""

import logging
from collections import deque
from collections.abc import AsyncIterator, Callable, Iterator
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, NamedTuple

from ordered_tree.interfaces.ordered_container import OrderedContainer
from ordered_tree.interfaces.traversable import E
from ordered_tree.models.exceptions import KeyNotFoundError

logger = logging.getLogger(__name__)


class BalanceFactor(IntEnum):
    """Which subtree of a node is taller, and by one level."""

    LEFT_HIGH = -1
    EVEN = 0
    RIGHT_HIGH = 1


@dataclass
class Node:
    """Node in the AVL Tree."""

    data: Any
    left: "Node | None" = None
    right: "Node | None" = None
    balance: BalanceFactor = BalanceFactor.EVEN


class _InsertResult(NamedTuple):
    node: Node
    taller: bool


class _RemoveResult(NamedTuple):
    node: Node | None
    shorter: bool
    success: bool


class OrderedTree(OrderedContainer[E]):
    """
    AVL Tree implementation of OrderedContainer.

    Properties maintained:
    1. Left subtree elements < node element < right subtree elements
    2. Subtree heights of every node differ by at most one
    3. Each node's balance tag records which subtree is taller
    4. Equal elements are never stored twice
    """

    def __init__(self) -> None:
        self._root: Node | None = None
        self._count: int = 0

    def __enter__(self) -> "OrderedTree[E]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.clear()

    # Lookup

    def retrieve(self, key: E) -> E:
        """Return the stored element equal to key. O(log N)"""
        node = self._find_node(key)
        if node is None:
            raise KeyNotFoundError(key)
        return node.data

    def in_tree(self, item: E) -> bool:
        return self._find_node(item) is not None

    def _find_node(self, key: E) -> Node | None:
        """Find node by key."""
        current = self._root
        while current is not None:
            if key < current.data:
                current = current.left
            elif key > current.data:
                current = current.right
            else:
                return current
        return None

    # Insertion

    def insert(self, item: E) -> None:
        """Insert or replace an element. O(log N)"""
        self._root = self._insert(self._root, item).node

    def _insert(self, node: Node | None, item: E) -> _InsertResult:
        """
        Insert item into the subtree rooted at node.

        Returns:
            The new subtree root and whether the subtree grew taller.
        """
        if node is None:
            self._count += 1
            return _InsertResult(Node(data=item), True)

        if item < node.data:
            result = self._insert(node.left, item)
            node.left = result.node
            if not result.taller:
                return _InsertResult(node, False)
            if node.balance == BalanceFactor.EVEN:
                node.balance = BalanceFactor.LEFT_HIGH
                return _InsertResult(node, True)
            if node.balance == BalanceFactor.RIGHT_HIGH:
                node.balance = BalanceFactor.EVEN
                return _InsertResult(node, False)
            return _InsertResult(self._left_balance(node), False)

        if item > node.data:
            result = self._insert(node.right, item)
            node.right = result.node
            if not result.taller:
                return _InsertResult(node, False)
            if node.balance == BalanceFactor.EVEN:
                node.balance = BalanceFactor.RIGHT_HIGH
                return _InsertResult(node, True)
            if node.balance == BalanceFactor.LEFT_HIGH:
                node.balance = BalanceFactor.EVEN
                return _InsertResult(node, False)
            return _InsertResult(self._right_balance(node), False)

        # Key exists, update payload; shape is unchanged
        node.data = item
        return _InsertResult(node, False)

    # Rebalancing

    def _left_balance(self, node: Node) -> Node:
        """
        Rebalance a node whose left subtree is two levels taller.

        The left child must be LEFT_HIGH or RIGHT_HIGH. The returned
        subtree is one level shorter than the unbalanced one.
        """
        left = node.left
        assert left is not None

        if left.balance == BalanceFactor.LEFT_HIGH:
            # Left-left: single right rotation
            node.balance = BalanceFactor.EVEN
            left.balance = BalanceFactor.EVEN
            return self._rotate_right(node)

        # Left-right: double rotation around the grandchild
        grandchild = left.right
        assert grandchild is not None
        if grandchild.balance == BalanceFactor.LEFT_HIGH:
            node.balance = BalanceFactor.RIGHT_HIGH
            left.balance = BalanceFactor.EVEN
        elif grandchild.balance == BalanceFactor.RIGHT_HIGH:
            node.balance = BalanceFactor.EVEN
            left.balance = BalanceFactor.LEFT_HIGH
        else:
            node.balance = BalanceFactor.EVEN
            left.balance = BalanceFactor.EVEN
        grandchild.balance = BalanceFactor.EVEN

        node.left = self._rotate_left(left)
        return self._rotate_right(node)

    def _right_balance(self, node: Node) -> Node:
        """Mirror of _left_balance for a right subtree two levels taller."""
        right = node.right
        assert right is not None

        if right.balance == BalanceFactor.RIGHT_HIGH:
            # Right-right: single left rotation
            node.balance = BalanceFactor.EVEN
            right.balance = BalanceFactor.EVEN
            return self._rotate_left(node)

        # Right-left: double rotation around the grandchild
        grandchild = right.left
        assert grandchild is not None
        if grandchild.balance == BalanceFactor.RIGHT_HIGH:
            node.balance = BalanceFactor.LEFT_HIGH
            right.balance = BalanceFactor.EVEN
        elif grandchild.balance == BalanceFactor.LEFT_HIGH:
            node.balance = BalanceFactor.EVEN
            right.balance = BalanceFactor.RIGHT_HIGH
        else:
            node.balance = BalanceFactor.EVEN
            right.balance = BalanceFactor.EVEN
        grandchild.balance = BalanceFactor.EVEN

        node.right = self._rotate_right(right)
        return self._rotate_left(node)

    def _delete_left_balance(self, node: Node) -> tuple[Node, bool]:
        """
        Rebalance after a removal left the left subtree two levels taller.

        Returns:
            The new subtree root and whether the subtree became shorter.
            An EVEN left child absorbs the rotation without losing height.
        """
        left = node.left
        assert left is not None

        if left.balance == BalanceFactor.EVEN:
            node.balance = BalanceFactor.LEFT_HIGH
            left.balance = BalanceFactor.RIGHT_HIGH
            return self._rotate_right(node), False

        return self._left_balance(node), True

    def _delete_right_balance(self, node: Node) -> tuple[Node, bool]:
        """Mirror of _delete_left_balance for a right subtree two levels taller."""
        right = node.right
        assert right is not None

        if right.balance == BalanceFactor.EVEN:
            node.balance = BalanceFactor.RIGHT_HIGH
            right.balance = BalanceFactor.LEFT_HIGH
            return self._rotate_left(node), False

        return self._right_balance(node), True

    def _rotate_left(self, node: Node) -> Node:
        """Left rotation. Balance tags are left to the caller."""
        right_child = node.right
        assert right_child is not None

        node.right = right_child.left
        right_child.left = node
        return right_child

    def _rotate_right(self, node: Node) -> Node:
        """Right rotation. Balance tags are left to the caller."""
        left_child = node.left
        assert left_child is not None

        node.left = left_child.right
        left_child.right = node
        return left_child

    # Deletion

    def remove(self, item: E) -> bool:
        """Remove the element equal to item. O(log N)"""
        result = self._remove(self._root, item)
        self._root = result.node
        return result.success

    def _remove(self, node: Node | None, item: E) -> _RemoveResult:
        """
        Remove item from the subtree rooted at node.

        Returns:
            The new subtree root, whether the subtree became shorter and
            whether an element was removed.
        """
        if node is None:
            return _RemoveResult(None, False, False)

        if item < node.data:
            return self._remove_left(node, item)

        if item > node.data:
            return self._remove_right(node, item)

        if node.left is None or node.right is None:
            self._count -= 1
            child = node.left if node.left is not None else node.right
            node.left = node.right = None
            return _RemoveResult(child, True, True)

        # Two children: pull up the in-order predecessor, then delete it below
        predecessor = node.left
        while predecessor.right is not None:
            predecessor = predecessor.right
        node.data = predecessor.data
        return self._remove_left(node, predecessor.data)

    def _remove_left(self, node: Node, item: E) -> _RemoveResult:
        result = self._remove(node.left, item)
        node.left = result.node
        if not result.shorter:
            return _RemoveResult(node, False, result.success)
        root, shorter = self._left_shrunk(node)
        return _RemoveResult(root, shorter, result.success)

    def _remove_right(self, node: Node, item: E) -> _RemoveResult:
        result = self._remove(node.right, item)
        node.right = result.node
        if not result.shorter:
            return _RemoveResult(node, False, result.success)
        root, shorter = self._right_shrunk(node)
        return _RemoveResult(root, shorter, result.success)

    def _left_shrunk(self, node: Node) -> tuple[Node, bool]:
        """Update node after its left subtree lost one level."""
        if node.balance == BalanceFactor.LEFT_HIGH:
            node.balance = BalanceFactor.EVEN
            return node, True
        if node.balance == BalanceFactor.EVEN:
            node.balance = BalanceFactor.RIGHT_HIGH
            return node, False
        return self._delete_right_balance(node)

    def _right_shrunk(self, node: Node) -> tuple[Node, bool]:
        """Update node after its right subtree lost one level."""
        if node.balance == BalanceFactor.RIGHT_HIGH:
            node.balance = BalanceFactor.EVEN
            return node, True
        if node.balance == BalanceFactor.EVEN:
            node.balance = BalanceFactor.LEFT_HIGH
            return node, False
        return self._delete_left_balance(node)

    # Structure queries

    def size(self) -> int:
        return self._count

    def is_empty(self) -> bool:
        return self._root is None

    def height(self) -> int:
        """Return the tree height; a single node has height 0, empty is -1."""
        return self._height(self._root)

    def _height(self, node: Node | None) -> int:
        if node is None:
            return -1
        return 1 + max(self._height(node.left), self._height(node.right))

    def depth(self, item: E) -> int:
        """
        Return the depth of item, counting edges from the root.

        If item is absent, returns -1 - d where d is the depth at which it
        would be inserted.
        """
        depth = 0
        current = self._root
        while current is not None:
            if item < current.data:
                current = current.left
            elif item > current.data:
                current = current.right
            else:
                return depth
            depth += 1
        return -1 - depth

    # Traversal

    def traverse(self, func: Callable[[E], object]) -> None:
        """Apply func to each element in ascending order."""
        for item in self:
            func(item)

    def level_traverse(self, func: Callable[[E], object]) -> None:
        """Apply func to each element level by level, root first."""
        if self._root is None:
            return
        queue: deque[Node] = deque([self._root])
        while queue:
            node = queue.popleft()
            func(node.data)
            if node.left is not None:
                queue.append(node.left)
            if node.right is not None:
                queue.append(node.right)

    def __iter__(self) -> Iterator[E]:
        return _InOrderIterator(self._root)

    def __aiter__(self) -> AsyncIterator[E]:
        return _AsyncInOrderIterator(self._root)

    # Teardown

    def clear(self) -> None:
        """Release all nodes in post-order."""
        if self._root is None:
            return

        released = 0
        stack: list[Node] = [self._root]
        last: Node | None = None
        while stack:
            node = stack[-1]
            if node.left is not None and node.left is not last and node.right is not last:
                stack.append(node.left)
            elif node.right is not None and node.right is not last:
                stack.append(node.right)
            else:
                stack.pop()
                node.left = node.right = None
                released += 1
                last = node

        logger.debug(f"Released {released} nodes")
        self._root = None
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def __contains__(self, item: object) -> bool:
        return self.in_tree(item)

    def __repr__(self) -> str:
        return f"OrderedTree({list(self)})"


class _InOrderIterator(Iterator[Any]):
    """Iterator for ascending traversal of an AVL Tree."""

    def __init__(self, root: Node | None) -> None:
        self._stack: list[Node] = []
        self._push_left_path(root)

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        if not self._stack:
            raise StopIteration

        node = self._stack.pop()
        self._push_left_path(node.right)
        return node.data

    def _push_left_path(self, node: Node | None) -> None:
        while node:
            self._stack.append(node)
            node = node.left


class _AsyncInOrderIterator(AsyncIterator[Any]):
    """Async iterator for ascending traversal of an AVL Tree (in-memory, no I/O)."""

    def __init__(self, root: Node | None) -> None:
        self._stack: list[Node] = []
        self._push_left_path(root)

    def __aiter__(self) -> "_AsyncInOrderIterator":
        return self

    async def __anext__(self) -> Any:
        if not self._stack:
            raise StopAsyncIteration

        node = self._stack.pop()
        self._push_left_path(node.right)
        return node.data

    def _push_left_path(self, node: Node | None) -> None:
        while node:
            self._stack.append(node)
            node = node.left
