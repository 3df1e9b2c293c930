import pytest

from treeviz.linked_tree import LEFT, RIGHT, LinkedBinaryTree
from treeviz.validate import collect_values, validate_bst, validate_heap, validate_links


@pytest.fixture
def tree():
    t = LinkedBinaryTree()
    root = t.new_node(10)
    t.set_root(root)
    t.link(t.new_node(5), root, LEFT)
    t.link(t.new_node(15), root, RIGHT)
    return t


def test_valid_tree(tree):
    assert collect_values(tree.root) == [5, 10, 15]
    assert validate_bst(tree.root) == (True, [])
    assert validate_links(tree.root) == (True, [])


def test_ordering_violation(tree):
    tree.root.left.value = 12
    ok, errors = validate_bst(tree.root)
    assert not ok
    assert errors == ["BST violation: node 12 >= 10"]


def test_broken_back_reference(tree):
    tree.root.right.parent = None
    ok, errors = validate_links(tree.root)
    assert not ok
    assert "node-2.parent is not node-0" in errors


def test_heap_validation():
    assert validate_heap([1, 2, 3, 4]) == (True, [])
    ok, errors = validate_heap([1, 0])
    assert not ok and len(errors) == 1
    assert validate_heap([]) == (True, [])
