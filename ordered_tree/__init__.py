"""
AVL-tree based ordered container.

This package provides a self-balancing binary search tree with:
- insert(item) - O(log N), replaces an equal element in place
- retrieve(key) - O(log N), raises KeyNotFoundError when absent
- remove(item) - O(log N), returns whether an element was removed
- depth(item) / height() - structural queries
- traverse(func) / level_traverse(func) - in-order and breadth-first visits
"""

from ordered_tree.models.entry import Entry
from ordered_tree.models.exceptions import KeyNotFoundError, OrderedTreeError
from ordered_tree.models.sortedcontainers import BalanceFactor, OrderedTree

__all__ = ["BalanceFactor", "Entry", "KeyNotFoundError", "OrderedTree", "OrderedTreeError"]
