import pytest

from ax_inspector.accessibility_parser import filter_ignored
from ax_inspector.tree_builder import (
    assemble_tree, build_tree, build_tree_index, count_nodes, count_snapshot_nodes,
    find_all_nodes, find_node, find_root, prune_snapshot_to_depth, prune_to_depth
)
from ax_inspector.types import AXNodeSummary, RawAXNode

from conftest import raw


def _depth(summary: AXNodeSummary) -> int:
    if not summary.children:
        return 1
    return 1 + max(_depth(child) for child in summary.children)


def _chain(length: int):
    """Linear chain 0 -> 1 -> ... -> length-1"""
    nodes = []
    for i in range(length):
        nodes.append(raw(
            str(i), role='group', name=f'n{i}',
            parent=str(i - 1) if i else None,
            children=[str(i + 1)] if i + 1 < length else None,
        ))
    return nodes


@pytest.fixture
def parsed_page(page_nodes):
    return [RawAXNode.model_validate(n) for n in page_nodes]


class TestIndexAndRoot:

    def test_index_maps_ids(self, parsed_page):
        index = build_tree_index(parsed_page)
        assert set(index) == {'1', '2', '3', '4', '5', '6'}

    def test_duplicate_id_last_wins(self):
        first = raw('1', role='button', name='first')
        second = raw('1', role='button', name='second')
        index = build_tree_index([first, second])
        assert index['1'] is second

    def test_root_without_parent(self, parsed_page):
        assert find_root(parsed_page).node_id == '1'

    def test_root_with_parent_outside_set(self):
        nodes = [raw('5', parent='99', children=['6']), raw('6', parent='5')]
        assert find_root(nodes).node_id == '5'

    def test_first_root_candidate_wins(self):
        nodes = [raw('b', parent='x'), raw('a')]
        assert find_root(nodes).node_id == 'b'

    def test_no_root(self):
        nodes = [raw('1', parent='2'), raw('2', parent='1')]
        assert find_root(nodes) is None
        assert find_root([]) is None


class TestAssembleTree:

    def test_single_node_scenario(self):
        node = raw('1', role='button', name='Submit', backend=10)
        tree = assemble_tree(node, build_tree_index([node]), 0, 5)
        data = tree.to_dict()
        assert 'children' not in data
        assert data['role'] == 'button'
        assert data['name'] == 'Submit'
        assert data['backendDOMNodeId'] == 10

    def test_children_in_child_id_order(self):
        nodes = [
            raw('r', children=['c', 'a', 'b']),
            raw('a', parent='r'), raw('b', parent='r'), raw('c', parent='r'),
        ]
        tree = assemble_tree(nodes[0], build_tree_index(nodes), 0, 5)
        assert [child.node_id for child in tree.children] == ['c', 'a', 'b']

    def test_ignored_nodes_and_their_subtrees_are_excluded(self, parsed_page):
        filtered = filter_ignored(parsed_page)
        tree = assemble_tree(find_root(filtered), build_tree_index(filtered), 0, 10)
        ids = {n.node_id for n in find_all_nodes(tree, lambda n: True)}
        assert ids == {'1', '2', '3', '4'}

    def test_ignored_child_skipped_even_in_unfiltered_index(self, parsed_page):
        tree = assemble_tree(parsed_page[0], build_tree_index(parsed_page), 0, 10)
        ids = {n.node_id for n in find_all_nodes(tree, lambda n: True)}
        assert '5' not in ids and '6' not in ids

    def test_dangling_child_is_skipped(self):
        nodes = [raw('r', children=['missing', 'a']), raw('a', parent='r')]
        tree = assemble_tree(nodes[0], build_tree_index(nodes), 0, 5)
        assert [child.node_id for child in tree.children] == ['a']

    def test_only_dangling_children_omits_field(self):
        node = raw('r', children=['missing'])
        tree = assemble_tree(node, build_tree_index([node]), 0, 5)
        assert tree.children is None
        assert 'children' not in tree.to_dict()

    def test_depth_limit(self):
        nodes = _chain(6)
        tree = assemble_tree(nodes[0], build_tree_index(nodes), 0, 2)
        # depth 0, 1 and 2 are expanded up to the limit
        assert _depth(tree) == 3

    def test_cycle_terminates(self):
        nodes = [
            raw('a', children=['b']),
            raw('b', parent='a', children=['c']),
            raw('c', parent='b', children=['a', 'd']),
            raw('d', parent='c'),
        ]
        tree = assemble_tree(nodes[0], build_tree_index(nodes), 0, 1000)
        ids = [n.node_id for n in find_all_nodes(tree, lambda n: True)]
        assert ids == ['a', 'b', 'c', 'd']

    def test_self_reference_terminates(self):
        node = raw('a', children=['a'])
        tree = assemble_tree(node, build_tree_index([node]), 0, 1000)
        assert tree.children is None


class TestPruneToDepth:

    def test_depth_one_is_root_only(self):
        nodes = _chain(5)
        tree = assemble_tree(nodes[0], build_tree_index(nodes), 0, 10)
        pruned = prune_to_depth(tree, 1)
        assert pruned.children is None
        assert 'children' not in pruned.to_dict()

    def test_depth_zero_and_negative(self):
        nodes = _chain(3)
        tree = assemble_tree(nodes[0], build_tree_index(nodes), 0, 10)
        assert prune_to_depth(tree, 0).children is None
        assert prune_to_depth(tree, -3).children is None

    def test_large_depth_keeps_shape(self, parsed_page):
        filtered = filter_ignored(parsed_page)
        tree = assemble_tree(find_root(filtered), build_tree_index(filtered), 0, 10)
        pruned = prune_to_depth(tree, 50)
        assert pruned.to_dict() == tree.to_dict()

    def test_prune_levels(self):
        nodes = _chain(6)
        tree = assemble_tree(nodes[0], build_tree_index(nodes), 0, 10)
        assert _depth(prune_to_depth(tree, 3)) == 3

    def test_input_not_mutated(self):
        nodes = _chain(4)
        tree = assemble_tree(nodes[0], build_tree_index(nodes), 0, 10)
        prune_to_depth(tree, 1)
        assert _depth(tree) == 4

    def test_snapshot_pruning(self):
        snapshot = {
            'role': 'RootWebArea', 'name': 'Page',
            'children': [
                {'role': 'button', 'name': 'A'},
                {'role': 'list', 'children': [{'role': 'listitem', 'name': 'x'}]},
            ],
        }
        assert 'children' not in prune_snapshot_to_depth(snapshot, 1)
        pruned = prune_snapshot_to_depth(snapshot, 2)
        assert count_snapshot_nodes(pruned) == 3
        assert 'children' not in pruned['children'][1]
        assert prune_snapshot_to_depth(snapshot, 10) == snapshot
        assert count_snapshot_nodes(snapshot) == 4


class TestSearchAndCount:

    def test_count_nodes(self, parsed_page):
        tree = build_tree(parsed_page, max_depth=10)
        assert count_nodes(tree) == 4

    def test_find_node(self, parsed_page):
        tree = build_tree(parsed_page, max_depth=10)
        assert find_node(tree, lambda n: n.focused is True).node_id == '4'
        assert find_node(tree, lambda n: n.role == 'checkbox') is None

    def test_find_all_nodes_preorder(self, parsed_page):
        tree = build_tree(parsed_page, max_depth=10)
        found = find_all_nodes(tree, lambda n: n.name != '')
        assert [n.node_id for n in found] == ['1', '3', '4']


class TestBuildTree:

    def test_no_root_returns_none(self):
        assert build_tree([raw('1', parent='2'), raw('2', parent='1')]) is None

    def test_all_ignored_returns_none(self):
        assert build_tree([raw('1', ignored=True)]) is None

    def test_assemble_then_prune(self):
        tree = build_tree(_chain(8), max_depth=3)
        assert _depth(tree) == 3
