from typing import Generic, List, Optional, TypeVar, Union

from ordtree._core.environment import settings
from ordtree._core.error import (
    InvalidPositionError,
    StalePositionError,
    TreeError,
    TreeIntegrityError,
    TreeNotEmptyError,
)
from ordtree._core.logging import get_logger
from ordtree._core.schema import RootPolicy
from ordtree.tree._node import Position, Slot
from ordtree.tree._tree import TreeMixin

logger = get_logger(__name__)

E = TypeVar('E')


class OrderedTree(TreeMixin, Generic[E]):
    """
    Ordered general tree stored as first-child / next-sibling links.

    Nodes live in an arena owned by the tree; callers only ever hold
    ``Position`` handles. Children keep the order in which they were added.
    Removing an internal node splices its children into the slot it occupied
    among its siblings instead of deleting the subtree.

    Example:
        >>> tree = OrderedTree()
        >>> a = tree.add_root('A')
        >>> b = tree.add_child(a, 'B')
        >>> e = tree.add_child(b, 'E')
        >>> tree.remove(b)
        'B'
        >>> [tree.element(c) for c in tree.children(a)]
        ['E']
    """

    def __init__(self, root_policy: Optional[Union[RootPolicy, str]] = None) -> None:
        self._slots: List[Slot[E]] = []
        self._free: List[int] = []
        self._root: Optional[int] = None
        self._size = 0
        self._token = object()
        self.root_policy = RootPolicy.from_str(
            root_policy if root_policy is not None else settings.tree_root_policy
        )

    ###################################
    # Position handling
    ###################################
    def _position(self, index: Optional[int]) -> Optional[Position]:
        if index is None:
            return None
        return Position(self._token, index, self._slots[index].generation)

    def _validate(self, p: Position) -> int:
        """
        Check that ``p`` is a live position issued by this tree and return the
        index of its slot.

        Raises:
            InvalidPositionError: ``p`` is not a Position or belongs to another tree.
            StalePositionError: the node behind ``p`` has been removed.
        """
        if not isinstance(p, Position):
            raise InvalidPositionError(
                f'Not valid position type: {type(p).__name__}'
            )
        if p._owner is not self._token:
            raise InvalidPositionError('Position was not issued by this tree')

        index = p._index
        slot = self._slots[index]
        if slot.is_defunct(index) or slot.generation != p._generation:
            raise StalePositionError('p is no longer in the tree')
        return index

    def _new_slot(self, e: E, parent: Optional[int]) -> int:
        if self._free:
            index = self._free.pop()
            slot = self._slots[index]
            slot.element = e
            slot.parent = parent
            return index
        self._slots.append(Slot(e, parent))
        return len(self._slots) - 1

    def _last_child_index(self, index: int) -> Optional[int]:
        walk = self._slots[index].first_child
        if walk is None:
            return None
        while self._slots[walk].next_sibling is not None:
            walk = self._slots[walk].next_sibling
        return walk

    def __contains__(self, p: object) -> bool:
        try:
            self._validate(p)
        except TreeError:
            return False
        return True

    ###################################
    # Accessors
    ###################################
    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def root(self) -> Optional[Position]:
        return self._position(self._root)

    def element(self, p: Position) -> E:
        return self._slots[self._validate(p)].element

    def parent(self, p: Position) -> Optional[Position]:
        """Position of ``p``'s parent, or None if ``p`` is the root."""
        return self._position(self._slots[self._validate(p)].parent)

    def first_child(self, p: Position) -> Optional[Position]:
        return self._position(self._slots[self._validate(p)].first_child)

    def next_sibling(self, p: Position) -> Optional[Position]:
        return self._position(self._slots[self._validate(p)].next_sibling)

    def last_child(self, p: Position) -> Optional[Position]:
        """Position of ``p``'s last child, found by walking its sibling chain."""
        return self._position(self._last_child_index(self._validate(p)))

    def children(self, p: Position) -> List[Position]:
        """
        Direct children of ``p`` in order.

        The list is built when called; mutating the tree afterwards does not
        change it, but its positions are revalidated when used.
        """
        walk = self._slots[self._validate(p)].first_child
        children = []
        while walk is not None:
            children.append(self._position(walk))
            walk = self._slots[walk].next_sibling
        return children

    ###################################
    # Update methods
    ###################################
    def add_root(self, e: E) -> Optional[Position]:
        """
        Place ``e`` at the root of an empty tree and return its position.

        On a non-empty tree nothing changes: under ``RootPolicy.NOOP`` the
        call returns None, under ``RootPolicy.RAISE`` it raises
        TreeNotEmptyError.
        """
        if not self.is_empty():
            if self.root_policy is RootPolicy.RAISE:
                raise TreeNotEmptyError()
            logger.warning_highlight(
                f'add_root({e!r}) ignored: tree already has a root'
            )
            return None

        self._root = self._new_slot(e, None)
        self._size = 1
        logger.debug(f'Added root {e!r}')
        return self._position(self._root)

    def add_child(self, p: Position, e: E) -> Position:
        """Append a new child holding ``e`` after the current last child of ``p``."""
        parent_index = self._validate(p)
        index = self._new_slot(e, parent_index)

        parent = self._slots[parent_index]
        if parent.first_child is None:
            parent.first_child = index
        else:
            self._slots[self._last_child_index(parent_index)].next_sibling = index

        self._size += 1
        logger.debug(f'Added child {e!r} under {parent.element!r}')
        return self._position(index)

    def replace(self, p: Position, e: E) -> E:
        """Store ``e`` at ``p`` and return the element it replaces."""
        slot = self._slots[self._validate(p)]
        old, slot.element = slot.element, e
        return old

    def remove(self, p: Position) -> Optional[E]:
        """
        Remove the node at ``p`` and return its element.

        The children of the removed node take its place among its siblings,
        in their original order, and are re-parented to its parent. The root
        cannot be removed: ``remove(root())`` changes nothing and returns None.
        """
        index = self._validate(p)
        if index == self._root:
            logger.info('Root position cannot be removed; tree left unchanged')
            return None

        node = self._slots[index]
        parent = self._slots[node.parent]

        if node.first_child is None:
            replacement = node.next_sibling
        else:
            replacement = node.first_child
            walk = node.first_child
            while True:
                child = self._slots[walk]
                child.parent = node.parent
                if child.next_sibling is None:
                    break
                walk = child.next_sibling
            child.next_sibling = node.next_sibling

        if parent.first_child == index:
            parent.first_child = replacement
        else:
            walk = parent.first_child
            while self._slots[walk].next_sibling != index:
                walk = self._slots[walk].next_sibling
            self._slots[walk].next_sibling = replacement

        element = node.element
        node.tombstone(index)
        self._free.append(index)
        self._size -= 1

        logger.debug(f'Removed {element!r}, size is now {self._size}')
        return element

    ###################################
    # Integrity
    ###################################
    def check_invariants(self) -> None:
        """
        Walk the whole structure and raise TreeIntegrityError on the first
        broken link, unreachable node or size mismatch.
        """
        if self._root is None:
            if self._size != 0:
                raise TreeIntegrityError(f'Empty tree reports size {self._size}')
            return

        if self._slots[self._root].parent is not None:
            raise TreeIntegrityError('Root has a parent')

        seen = {self._root}
        stack = [self._root]
        while stack:
            index = stack.pop()
            walk = self._slots[index].first_child
            while walk is not None:
                if walk in seen:
                    raise TreeIntegrityError(f'Slot {walk} is reachable twice')
                child = self._slots[walk]
                if child.is_defunct(walk):
                    raise TreeIntegrityError(f'Slot {walk} is linked but removed')
                if child.parent != index:
                    raise TreeIntegrityError(
                        f'Slot {walk} has parent {child.parent}, expected {index}'
                    )
                seen.add(walk)
                stack.append(walk)
                walk = child.next_sibling

        if len(seen) != self._size:
            raise TreeIntegrityError(
                f'Size is {self._size} but {len(seen)} nodes are reachable'
            )
        if len(self._slots) - len(self._free) != self._size:
            raise TreeIntegrityError('Live slot count does not match size')
