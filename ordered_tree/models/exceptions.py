"""
Custom exceptions for the ordered tree package.
"""

from typing import Any


class OrderedTreeError(Exception):
    """Base class for errors raised by ordered containers."""


class KeyNotFoundError(OrderedTreeError, KeyError):
    """
    Raised when a keyed lookup finds no matching element.

    The container is left unchanged.
    """

    def __init__(self, key: Any):
        """
        Initialize lookup error.

        Args:
            key: The search key that was not found.
        """
        self.key = key
        super().__init__(f"Key not found in tree: {key!r}")

    def __str__(self) -> str:
        return self.args[0]
