"""
Sorted container implementations.
"""

from ordered_tree.models.sortedcontainers.avl_tree import BalanceFactor, OrderedTree

__all__ = ["BalanceFactor", "OrderedTree"]
