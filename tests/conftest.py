"""
Shared fixtures for the ordered tree tests.

The sample tree used throughout:

    A
    . B
    . . E
    . . F
    . C
    . . X
    . D
    . . G
    . . Q
"""

from typing import Dict

import pytest

from ordtree.tree import OrderedTree, Position


@pytest.fixture
def tree() -> OrderedTree:
    return OrderedTree(root_policy='noop')


@pytest.fixture
def sample(tree) -> Dict[str, Position]:
    """Populate ``tree`` with the sample scenario and return positions by element."""
    positions = {'A': tree.add_root('A')}
    for parent, element in [
        ('A', 'B'),
        ('A', 'C'),
        ('A', 'D'),
        ('C', 'X'),
        ('B', 'E'),
        ('B', 'F'),
        ('D', 'G'),
        ('D', 'Q'),
    ]:
        positions[element] = tree.add_child(positions[parent], element)
    return positions
