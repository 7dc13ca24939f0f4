"""
Abstract base classes for ordered containers.
"""

from ordered_tree.interfaces.ordered_container import OrderedContainer
from ordered_tree.interfaces.traversable import Traversable

__all__ = ["OrderedContainer", "Traversable"]
