"""
Entry for storing key-value pairs in an ordered container.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(order=True)
class Entry:
    """
    A keyed payload ordered and compared by its key alone.

    Storing entries in an OrderedTree turns it into an ordered map:
    inserting an entry whose key is present replaces the stored entry,
    and a probe built from the key alone retrieves it.

    Attributes:
        key: The search key. Must be totally ordered.
        value: The payload associated with the key (ignored by comparisons).
    """

    key: Any
    value: Any = field(default=None, compare=False)

    @classmethod
    def probe(cls, key: Any) -> "Entry":
        """Build a value-less entry usable as a search key."""
        return cls(key=key)
