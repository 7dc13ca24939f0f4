"""
Data models: tree elements, errors and sorted containers.
"""

from ordered_tree.models.entry import Entry
from ordered_tree.models.exceptions import KeyNotFoundError, OrderedTreeError

__all__ = ["Entry", "KeyNotFoundError", "OrderedTreeError"]
