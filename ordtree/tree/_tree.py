from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Tuple

from ordtree._core.environment import settings
from ordtree._core.logging import get_logger
from ordtree.tree._node import Position

logger = get_logger(__name__)


class TreeRow(NamedTuple):
    """One line of a pre-order display: the node's depth and its element."""

    depth: int
    element: Any


class TreeMixin:
    """
    Read-only views over a positional tree.

    Everything here goes through the public navigation methods (``root``,
    ``parent``, ``first_child``, ``next_sibling``, ``element``, ``size``), so
    each position is revalidated on use.
    """

    name = 'Ordered Tree'

    def _preorder(self, p: Optional[Position] = None) -> Iterator[Tuple[Position, int]]:
        """
        Yield ``(position, depth)`` pairs depth-first, left to right, for the
        subtree rooted at ``p`` (default: the whole tree). ``p`` has depth 0.
        """
        start = p if p is not None else self.root()
        if start is None:
            return

        stack: List[Tuple[Position, int]] = [(start, 0)]
        while stack:
            position, depth = stack.pop()
            yield position, depth
            # The sibling is pushed first so the child subtree is visited first.
            if position != start:
                sibling = self.next_sibling(position)
                if sibling is not None:
                    stack.append((sibling, depth))
            child = self.first_child(position)
            if child is not None:
                stack.append((child, depth + 1))

    def display_tree(self, p: Optional[Position] = None) -> List[TreeRow]:
        """
        Return the tree as ``(depth, element)`` rows in pre-order.

        Each node is listed before its first child's subtree, which is listed
        before the node's next sibling. An empty tree gives an empty list.
        """
        return [TreeRow(depth, self.element(pos)) for pos, depth in self._preorder(p)]

    def positions(self) -> List[Position]:
        """All live positions in pre-order."""
        return [pos for pos, _ in self._preorder()]

    def __iter__(self) -> Iterator[Any]:
        for position in self.positions():
            yield self.element(position)

    def is_root(self, p: Position) -> bool:
        return self.parent(p) is None

    def is_internal(self, p: Position) -> bool:
        return self.first_child(p) is not None

    def is_external(self, p: Position) -> bool:
        return self.first_child(p) is None

    def num_children(self, p: Position) -> int:
        return len(self.children(p))

    def depth(self, p: Position) -> int:
        """Number of ancestors of ``p``."""
        count = 0
        walk = self.parent(p)
        while walk is not None:
            count += 1
            walk = self.parent(walk)
        return count

    def height(self, p: Optional[Position] = None) -> int:
        """Height of the subtree at ``p`` (default root). Leaves and empty trees are 0."""
        return max((depth for _, depth in self._preorder(p)), default=0)

    def render(self, marker: Optional[str] = None) -> str:
        """
        Text view of the tree, one line per node, indented by ``marker``
        repeated once per depth level.
        """
        marker = settings.tree_display_marker if marker is None else marker
        return '\n'.join(
            f'{marker * row.depth}{row.element}' for row in self.display_tree()
        )

    def to_dict(self, p: Optional[Position] = None) -> Optional[Dict[str, Any]]:
        """Nested ``{'element': ..., 'children': [...]}`` data for the subtree at ``p``."""
        node = p if p is not None else self.root()
        if node is None:
            return None

        return {
            'element': self.element(node),
            'children': [self.to_dict(child) for child in self.children(node)],
        }

    def log_tree(self, title: Optional[str] = None) -> None:
        logger.info(f'{title or self.name} | Size: {self.size()}')
        if self.size():
            logger.info(f'\n{self.render()}')
