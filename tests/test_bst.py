import random

import pytest

from conftest import SCENARIO_VALUES, RecordingSink, run
from treeviz.bst import BinarySearchTree
from treeviz.errors import InvariantViolation
from treeviz.validate import validate_bst, validate_links


def test_insert_builds_ordered_tree(scenario_bst):
    assert scenario_bst.values() == [12, 25, 37, 50, 62, 75, 87]
    assert scenario_bst.root.value == 50
    assert validate_bst(scenario_bst.root) == (True, [])
    assert validate_links(scenario_bst.root) == (True, [])


def test_insert_visits_path_then_relayouts(scenario_bst, sink):
    node = scenario_bst.insert(40)
    assert node.value == 40
    assert node.parent.value == 37
    assert sink.methods() == ["visit", "visit", "visit", "update_layout"]
    assert [args[1] for name, args in sink.calls if name == "visit"] == [50, 25, 37]


def test_insert_into_empty_tree_has_no_visits(sink):
    tree = BinarySearchTree(sink)
    tree.insert(7)
    assert sink.methods() == ["update_layout"]
    nodes, edges, _ = sink.calls[0][1]
    assert [n.value for n in nodes] == [7]
    assert edges == ()


def test_delete_root_with_two_children_promotes_successor(scenario_bst):
    successor_id = scenario_bst.tree.find(62).id
    assert scenario_bst.delete(50) is True
    assert scenario_bst.root.value == 62
    assert scenario_bst.root.id == successor_id == "node-5"
    assert scenario_bst.values() == [12, 25, 37, 62, 75, 87]
    assert validate_links(scenario_bst.root) == (True, [])


def test_delete_narration_order(scenario_bst, sink):
    scenario_bst.delete(50)
    methods = sink.methods()
    assert methods.index("highlight_node") < methods.index("hide_edge")
    assert methods.index("hide_edge") < methods.index("hide_node")
    assert methods[-2:] == ["update_layout", "toast"]
    highlights = [args for name, args in sink.calls if name == "highlight_node"]
    assert highlights == [("node-0", "deletion"), ("node-5", "successor")]
    assert sink.toasts()[-1].title == "Deleted"


def test_delete_successor_is_direct_right_child(sink):
    tree = BinarySearchTree(sink)
    tree.load([20, 10, 30, 40])
    tree.delete(20)
    assert tree.root.value == 30
    assert tree.root.left.value == 10
    assert tree.root.right.value == 40
    assert validate_links(tree.root) == (True, [])


def test_delete_successor_with_right_child(sink):
    tree = BinarySearchTree(sink)
    tree.load([20, 10, 40, 30, 35, 50])
    tree.delete(20)
    assert tree.root.value == 30
    assert tree.tree.find(40).left.value == 35
    assert tree.values() == [10, 30, 35, 40, 50]
    assert validate_bst(tree.root)[0]
    assert validate_links(tree.root) == (True, [])


def test_delete_leaf_and_single_child(scenario_bst):
    scenario_bst.delete(12)
    assert scenario_bst.tree.find(25).left is None
    scenario_bst.delete(25)
    assert scenario_bst.root.left.value == 37
    assert scenario_bst.values() == [37, 50, 62, 75, 87]
    assert validate_links(scenario_bst.root) == (True, [])


def test_delete_sole_node_empties_tree(sink):
    tree = BinarySearchTree(sink)
    tree.insert(5)
    sink.reset()
    assert tree.delete(5) is True
    assert tree.root is None
    # no edges existed, so none are hidden
    assert "hide_edge" not in sink.methods()
    nodes, edges, _ = [args for name, args in sink.calls if name == "update_layout"][0]
    assert nodes == () and edges == ()


def test_delete_missing_value(scenario_bst, sink):
    assert scenario_bst.delete(99) is False
    assert sink.methods()[-2:] == ["unvisit", "toast"]
    assert sink.toasts()[0].destructive
    assert scenario_bst.values() == [12, 25, 37, 50, 62, 75, 87]


def test_search_found_highlights(scenario_bst, sink):
    node = scenario_bst.search(37)
    assert node.value == 37
    assert sink.calls[-2] == ("highlight_node", (node.id, "found"))
    assert sink.toasts()[0].title == "Found"


def test_search_missing_ends_with_not_found_toast(producer):
    tree = BinarySearchTree(producer)
    tree.load([50, 25, 75, 12, 37, 62, 87])
    before = tree.layout()
    scenes = run(tree, producer, "search", 99)
    toast_scenes = [s for s in scenes if s.toast is not None]
    assert toast_scenes[-1].toast.title == "Not Found"
    assert toast_scenes[-1].toast.variant == "destructive"
    assert scenes[-1].action_type == "end"
    assert tree.layout() == before


def test_duplicate_insert_is_idempotent(scenario_bst, sink):
    before = scenario_bst.layout()
    existing = scenario_bst.insert(37)
    assert existing is scenario_bst.tree.find(37)
    assert scenario_bst.layout() == before
    assert sink.toasts()[0].title == "Duplicate"
    assert sink.methods()[-1] == "update_layout"


def test_ids_are_per_instance():
    a = BinarySearchTree(RecordingSink())
    b = BinarySearchTree(RecordingSink())
    assert a.insert(1).id == "node-0"
    assert b.insert(1).id == "node-0"


def test_load_is_silent(sink):
    tree = BinarySearchTree(sink)
    tree.load(SCENARIO_VALUES)
    assert sink.calls == []
    assert tree.sink is sink


def test_clear_relayouts_empty(scenario_bst, sink):
    scenario_bst.clear()
    assert scenario_bst.root is None
    assert sink.methods() == ["update_layout"]


def test_link_into_occupied_slot_raises(scenario_bst):
    tree = scenario_bst.tree
    stray = tree.new_node(1)
    with pytest.raises(InvariantViolation):
        tree.link(stray, tree.find(25), "left")


def test_unlink_unrelated_nodes_raises(scenario_bst):
    tree = scenario_bst.tree
    with pytest.raises(InvariantViolation):
        tree.unlink(tree.find(12), tree.find(75))


def test_linking_root_below_node_raises(scenario_bst):
    tree = scenario_bst.tree
    with pytest.raises(InvariantViolation):
        tree.link(tree.root, tree.find(12), "left")


@pytest.mark.parametrize("seed", range(25))
def test_random_operation_sequences_keep_order(seed):
    rng = random.Random(seed)
    tree = BinarySearchTree(RecordingSink())
    present = set()
    for _ in range(60):
        op, v = rng.choice(("insert", "insert", "delete", "search")), rng.randrange(50)
        if op == "insert":
            tree.insert(v)
            present.add(v)
        elif op == "delete":
            assert tree.delete(v) is (v in present)
            present.discard(v)
        else:
            assert (tree.search(v) is not None) is (v in present)
        assert tree.values() == sorted(present)
        assert validate_bst(tree.root) == (True, [])
        assert validate_links(tree.root) == (True, [])
