"""
Shared pytest fixtures for ordered tree tests.
"""

import pytest

from ordered_tree import BalanceFactor, Entry, OrderedTree


@pytest.fixture
def tree():
    """Provide a fresh, empty OrderedTree instance."""
    return OrderedTree()


@pytest.fixture
def sample_tree():
    """Provide the tree built from [5, 3, 8, 1, 4, 7, 9]."""
    tree = OrderedTree()
    for value in [5, 3, 8, 1, 4, 7, 9]:
        tree.insert(value)
    return tree


@pytest.fixture
def sample_entries():
    """Provide sample key-value entries for testing."""
    return [
        Entry("key1", "value1"),
        Entry("key2", "value2"),
        Entry("key3", "value3"),
    ]


@pytest.fixture
def large_sample_entries():
    """Provide larger sample for stress testing."""
    return [Entry(f"key{i:04d}", f"value{i}") for i in range(1000)]


@pytest.fixture
def check_avl():
    """
    Provide a checker asserting every structural invariant of a tree.

    Walks the nodes directly: heights of sibling subtrees differ by at most
    one, balance tags match the real height difference, the node count
    matches size() and in-order traversal is strictly ascending.
    """

    def walk(node):
        if node is None:
            return -1, 0
        left_height, left_count = walk(node.left)
        right_height, right_count = walk(node.right)
        assert abs(right_height - left_height) <= 1, f"unbalanced at {node.data!r}"
        assert node.balance == BalanceFactor(right_height - left_height), (
            f"stale balance tag at {node.data!r}"
        )
        return 1 + max(left_height, right_height), left_count + right_count + 1

    def check(tree):
        height, count = walk(tree._root)
        assert count == tree.size()
        assert height == tree.height()
        items = list(tree)
        assert all(a < b for a, b in zip(items, items[1:]))

    return check
