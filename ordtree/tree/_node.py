from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

E = TypeVar('E')


class Slot(Generic[E]):
    """
    Arena record for one node. Relations are indices into the owning tree's
    slot table rather than references to other records.

    A slot whose ``parent`` is its own index is defunct: the node it held has
    been removed. ``generation`` is bumped on every removal so positions issued
    for an earlier occupant of a recycled slot can still be told apart.
    """

    __slots__ = ('element', 'parent', 'first_child', 'next_sibling', 'generation')

    def __init__(
        self,
        element: Optional[E],
        parent: Optional[int] = None,
        first_child: Optional[int] = None,
        next_sibling: Optional[int] = None,
        generation: int = 0,
    ) -> None:
        self.element = element
        self.parent = parent
        self.first_child = first_child
        self.next_sibling = next_sibling
        self.generation = generation

    def is_defunct(self, index: int) -> bool:
        return self.parent == index

    def tombstone(self, index: int) -> None:
        """Clear the record and mark it dead with a self-referencing parent."""
        self.element = None
        self.first_child = None
        self.next_sibling = None
        self.parent = index
        self.generation += 1

    def __repr__(self) -> str:
        return (
            f'Slot(element={self.element!r}, parent={self.parent}, '
            f'first_child={self.first_child}, next_sibling={self.next_sibling}, '
            f'generation={self.generation})'
        )


@dataclass(frozen=True)
class Position:
    """
    Opaque handle to a node of an OrderedTree.

    Positions are issued by the tree and only mean something to the tree that
    issued them. They stay hashable and comparable after the node is removed,
    but every tree operation rejects them from then on.
    """

    _owner: Any = field(repr=False)
    _index: int
    _generation: int
