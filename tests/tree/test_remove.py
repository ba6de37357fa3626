import random

import pytest

from ordtree._core.error import StalePositionError, TreeError
from ordtree.tree import OrderedTree


def elements(tree, positions):
    return [tree.element(p) for p in positions]


def reachable(tree):
    """Count nodes by walking children() from the root."""
    root = tree.root()
    if root is None:
        return 0
    count, stack = 0, [root]
    while stack:
        position = stack.pop()
        count += 1
        stack.extend(tree.children(position))
    return count


class TestSampleScenario:
    """Removal sequence from the demonstration driver."""

    def test_initial_size(self, tree, sample):
        assert tree.size() == 9

    def test_remove_leaf_x(self, tree, sample):
        assert tree.remove(sample['X']) == 'X'
        assert tree.size() == 8
        assert tree.children(sample['C']) == []
        assert tree.is_external(sample['C'])
        tree.check_invariants()

    def test_remove_childless_c(self, tree, sample):
        tree.remove(sample['X'])
        assert tree.remove(sample['C']) == 'C'
        assert tree.size() == 7
        assert elements(tree, tree.children(sample['A'])) == ['B', 'D']
        tree.check_invariants()

    def test_remove_b_reattaches_children_in_place(self, tree, sample):
        tree.remove(sample['X'])
        tree.remove(sample['C'])
        assert tree.remove(sample['B']) == 'B'

        # B's children are not cascade-deleted; they take B's slot under A.
        assert tree.size() == 6
        assert elements(tree, tree.children(sample['A'])) == ['E', 'F', 'D']
        assert tree.parent(sample['E']) == sample['A']
        assert tree.parent(sample['F']) == sample['A']
        tree.check_invariants()

    def test_full_sequence(self, tree, sample):
        for name, size in [('X', 8), ('C', 7), ('B', 6), ('G', 5), ('D', 4)]:
            assert tree.remove(sample[name]) == name
            assert tree.size() == size
            tree.check_invariants()

        assert elements(tree, tree.children(sample['A'])) == ['E', 'F', 'Q']
        assert tree.display_tree() == [(0, 'A'), (1, 'E'), (1, 'F'), (1, 'Q')]

        # The root is protected.
        assert tree.remove(sample['A']) is None
        assert tree.size() == 4
        assert tree.display_tree() == [(0, 'A'), (1, 'E'), (1, 'F'), (1, 'Q')]


class TestSplice:
    def test_first_child_with_children(self, tree):
        root = tree.add_root('R')
        p = tree.add_child(root, 'P')
        tree.add_child(root, 'S')
        for name in ('c1', 'c2', 'c3'):
            tree.add_child(p, name)

        tree.remove(p)

        assert elements(tree, tree.children(root)) == ['c1', 'c2', 'c3', 'S']
        assert elements(tree, [tree.first_child(root)]) == ['c1']
        tree.check_invariants()

    def test_middle_child_with_children(self, tree):
        root = tree.add_root('R')
        tree.add_child(root, 'L')
        p = tree.add_child(root, 'P')
        tree.add_child(root, 'S')
        c1 = tree.add_child(p, 'c1')
        c2 = tree.add_child(p, 'c2')

        tree.remove(p)

        assert elements(tree, tree.children(root)) == ['L', 'c1', 'c2', 'S']
        assert tree.parent(c1) == root
        assert tree.parent(c2) == root
        tree.check_invariants()

    def test_last_child_with_children(self, tree):
        root = tree.add_root('R')
        tree.add_child(root, 'L')
        p = tree.add_child(root, 'P')
        tree.add_child(p, 'c1')
        c2 = tree.add_child(p, 'c2')

        tree.remove(p)

        assert elements(tree, tree.children(root)) == ['L', 'c1', 'c2']
        assert tree.next_sibling(c2) is None
        assert tree.last_child(root) == c2
        tree.check_invariants()

    def test_only_child_with_children(self, tree):
        root = tree.add_root('R')
        p = tree.add_child(root, 'P')
        tree.add_child(p, 'c1')

        tree.remove(p)

        assert elements(tree, tree.children(root)) == ['c1']
        tree.check_invariants()

    def test_grandchildren_keep_their_parent(self, tree):
        root = tree.add_root('R')
        p = tree.add_child(root, 'P')
        c = tree.add_child(p, 'c')
        g = tree.add_child(c, 'g')

        tree.remove(p)

        assert tree.parent(c) == root
        assert tree.parent(g) == c
        assert tree.display_tree() == [(0, 'R'), (1, 'c'), (2, 'g')]

    def test_new_children_append_after_reattached_forest(self, tree):
        root = tree.add_root('R')
        p = tree.add_child(root, 'P')
        tree.add_child(p, 'c1')
        tree.remove(p)
        tree.add_child(root, 'N')
        assert elements(tree, tree.children(root)) == ['c1', 'N']


class TestLeafRemoval:
    @pytest.mark.parametrize('victim', ['B', 'C', 'D'])
    def test_leaf_excised_from_chain(self, tree, victim):
        root = tree.add_root('A')
        positions = {name: tree.add_child(root, name) for name in ('B', 'C', 'D')}

        tree.remove(positions[victim])

        expected = [name for name in ('B', 'C', 'D') if name != victim]
        assert elements(tree, tree.children(root)) == expected
        assert tree.num_children(root) == 2
        tree.check_invariants()

    def test_unrelated_removal_keeps_sibling_order(self, tree, sample):
        tree.remove(sample['X'])
        assert elements(tree, tree.children(sample['B'])) == ['E', 'F']
        assert elements(tree, tree.children(sample['D'])) == ['G', 'Q']


class TestRootProtection:
    def test_remove_root_is_noop(self, tree, sample):
        before = tree.display_tree()
        assert tree.remove(tree.root()) is None
        assert tree.size() == 9
        assert tree.display_tree() == before
        assert tree.element(sample['A']) == 'A'

    def test_remove_lone_root(self, tree):
        root = tree.add_root('A')
        assert tree.remove(root) is None
        assert tree.size() == 1
        assert root in tree


class TestStalePositions:
    @pytest.mark.parametrize(
        'operation',
        [
            lambda t, p: t.element(p),
            lambda t, p: t.parent(p),
            lambda t, p: t.first_child(p),
            lambda t, p: t.next_sibling(p),
            lambda t, p: t.children(p),
            lambda t, p: t.add_child(p, 'Z'),
            lambda t, p: t.remove(p),
            lambda t, p: t.replace(p, 'Z'),
            lambda t, p: t.display_tree(p),
        ],
    )
    def test_removed_position_rejected(self, tree, sample, operation):
        tree.remove(sample['B'])
        size = tree.size()
        with pytest.raises(StalePositionError):
            operation(tree, sample['B'])
        assert tree.size() == size

    def test_stale_error_is_a_value_error(self, tree, sample):
        tree.remove(sample['E'])
        with pytest.raises(ValueError, match='no longer in the tree'):
            tree.element(sample['E'])

    def test_recycled_slot_does_not_revive_old_position(self, tree, sample):
        tree.remove(sample['X'])
        fresh = tree.add_child(sample['C'], 'Y')

        assert fresh != sample['X']
        assert tree.element(fresh) == 'Y'
        with pytest.raises(StalePositionError):
            tree.element(sample['X'])
        tree.check_invariants()

    def test_second_remove_fails_without_mutation(self, tree, sample):
        tree.remove(sample['G'])
        before = tree.display_tree()
        with pytest.raises(StalePositionError):
            tree.remove(sample['G'])
        assert tree.display_tree() == before


class TestRandomSequences:
    @pytest.mark.parametrize('seed', range(10))
    def test_size_matches_reachable_nodes(self, seed):
        rng = random.Random(seed)
        tree = OrderedTree()
        live = [tree.add_root(0)]
        removed = []

        for step in range(1, 200):
            if rng.random() < 0.6 or len(live) == 1:
                live.append(tree.add_child(rng.choice(live), step))
            else:
                victim = rng.choice(live[1:])
                live.remove(victim)
                removed.append(victim)
                tree.remove(victim)

            assert tree.size() == len(live) == reachable(tree)

        tree.check_invariants()
        assert set(tree.positions()) == set(live)
        for position in removed:
            with pytest.raises(TreeError):
                tree.element(position)

    @pytest.mark.parametrize('seed', range(5))
    def test_removal_preserves_relative_order(self, seed):
        rng = random.Random(seed)
        tree = OrderedTree()
        live = [tree.add_root(0)]
        for step in range(1, 60):
            live.append(tree.add_child(rng.choice(live), step))

        for _ in range(20):
            victim = rng.choice(live[1:])
            parent = tree.parent(victim)
            siblings = tree.children(parent)
            slot = siblings.index(victim)
            expected = siblings[:slot] + tree.children(victim) + siblings[slot + 1 :]

            tree.remove(victim)
            live.remove(victim)

            assert tree.children(parent) == expected
