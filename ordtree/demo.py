"""
Demonstration driver: builds the sample tree, prints it, then removes nodes
one at a time and prints the result after each step.

Run with ``python -m ordtree``.
"""

from typing import Optional

from rich.console import Console

from ordtree._core.logging import get_logger
from ordtree.tree import OrderedTree

logger = get_logger(__name__)

REMOVAL_ORDER = ['X', 'C', 'B', 'G', 'D', 'A']


def _banner(title: str) -> str:
    return f"{'-' * 20} {title} {'-' * 20}"


def _show(console: Console, tree: OrderedTree, title: str) -> None:
    console.print(_banner(title), markup=False, highlight=False)
    console.print(f'Size: {tree.size()}', markup=False, highlight=False)
    if tree.size():
        console.print(tree.render(), markup=False, highlight=False)


def run_demo(console: Optional[Console] = None) -> OrderedTree:
    """Run the sample scenario and return the final tree."""
    console = console or Console()
    tree: OrderedTree = OrderedTree()

    a = tree.add_root('A')
    positions = {'A': a}
    positions['B'] = tree.add_child(a, 'B')
    positions['C'] = tree.add_child(a, 'C')
    positions['D'] = tree.add_child(a, 'D')
    positions['X'] = tree.add_child(positions['C'], 'X')
    tree.add_child(positions['B'], 'E')
    tree.add_child(positions['B'], 'F')
    positions['G'] = tree.add_child(positions['D'], 'G')
    tree.add_child(positions['D'], 'Q')

    _show(console, tree, 'DISPLAY TREE')

    for name in REMOVAL_ORDER:
        with logger.log_operation(f'remove {name}'):
            tree.remove(positions[name])
        _show(console, tree, f'REMOVE {name}')

    return tree


def main() -> None:
    run_demo()


if __name__ == '__main__':
    main()
