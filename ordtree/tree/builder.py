from collections import deque
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ordtree._core.config import Config
from ordtree._core.error import InvalidConfig
from ordtree._core.logging import get_logger
from ordtree._core.schema import RootPolicy
from ordtree.tree.tree import OrderedTree

logger = get_logger(__name__)

_TREE_KEY = 'tree'
_ELEMENT_KEY = 'element'
_CHILDREN_KEY = 'children'


def _parse_node(node: Any) -> Tuple[Any, List[Any]]:
    """Split a node entry into its element and its list of child entries."""
    if isinstance(node, dict):
        if _ELEMENT_KEY not in node:
            raise InvalidConfig(
                f"Tree node is missing the '{_ELEMENT_KEY}' key: {node!r}"
            )
        children = node.get(_CHILDREN_KEY) or []
        if not isinstance(children, list):
            raise InvalidConfig(
                f"'{_CHILDREN_KEY}' of {node[_ELEMENT_KEY]!r} must be a list, "
                f'got {type(children).__name__}'
            )
        return node[_ELEMENT_KEY], children

    if node is None or isinstance(node, list):
        raise InvalidConfig(f'Invalid tree node entry: {node!r}')

    # A bare scalar is shorthand for a leaf.
    return node, []


def build_tree(
    source: Union[Config, Dict[str, Any], str, Path],
    root_policy: Optional[Union[RootPolicy, str]] = None,
) -> OrderedTree:
    """
    Build an OrderedTree from nested configuration data.

    The configuration must hold a ``tree`` key whose value is the root node.
    Each node is either a mapping with ``element`` and an optional
    ``children`` list, or a bare scalar for a leaf::

        tree:
          element: A
          children:
            - element: B
              children: [E, F]
            - C

    Args:
        source: A Config, a dictionary, or a path to a YAML file
        root_policy: Passed through to the OrderedTree

    Returns:
        The populated tree
    """
    config = source if isinstance(source, Config) else Config(source)
    root_spec = config.get(_TREE_KEY)
    if root_spec is None:
        raise InvalidConfig(
            f"No tree configuration found. Must have a key named '{_TREE_KEY}' "
            'holding the root node.'
        )

    tree: OrderedTree = OrderedTree(root_policy=root_policy)
    element, children = _parse_node(root_spec)
    pending = deque([(tree.add_root(element), children)])

    while pending:
        position, child_specs = pending.popleft()
        for child_spec in child_specs:
            child_element, grandchildren = _parse_node(child_spec)
            pending.append((tree.add_child(position, child_element), grandchildren))

    logger.debug(f'Built tree with {tree.size()} nodes from configuration')
    return tree
