from ordtree.tree._node import Position
from ordtree.tree._tree import TreeMixin, TreeRow
from ordtree.tree.builder import build_tree
from ordtree.tree.tree import OrderedTree

__all__ = ['OrderedTree', 'Position', 'TreeMixin', 'TreeRow', 'build_tree']
