from treeviz.heap import HeapNode
from treeviz.layout import LayoutConfig, layout_heap, layout_tree, tree_height
from treeviz.linked_tree import LEFT, RIGHT, LinkedBinaryTree


def three_node_tree():
    tree = LinkedBinaryTree()
    root = tree.new_node(2)
    tree.set_root(root)
    tree.link(tree.new_node(1), root, LEFT)
    tree.link(tree.new_node(3), root, RIGHT)
    return tree


def test_empty_tree():
    assert layout_tree(None) == ([], [])
    assert layout_heap([]) == ([], [])


def test_midpoint_positions():
    nodes, edges = layout_tree(three_node_tree().root)
    assert [(n.value, n.x, n.y) for n in nodes] == [
        (2, 400.0, 40.0), (1, 215.0, 110.0), (3, 585.0, 110.0)]
    assert [e.id for e in edges] == ["node-0-node-1", "node-0-node-2"]


def test_custom_config():
    config = LayoutConfig(width=200, level_height=50, top=10, padding=0)
    nodes, _ = layout_tree(three_node_tree().root, config)
    assert [(n.x, n.y) for n in nodes] == [(100.0, 10.0), (50.0, 60.0), (150.0, 60.0)]


def test_positions_depend_on_shape_only():
    a = three_node_tree()
    b = LinkedBinaryTree()
    root = b.new_node(20)
    b.set_root(root)
    b.link(b.new_node(10), root, LEFT)
    b.link(b.new_node(30), root, RIGHT)
    coords = lambda t: [(n.x, n.y) for n in layout_tree(t.root)[0]]
    assert coords(a) == coords(b)


def test_preorder_left_first():
    tree = three_node_tree()
    left = tree.find(1)
    tree.link(tree.new_node(0), left, LEFT)
    nodes, _ = layout_tree(tree.root)
    assert [n.value for n in nodes] == [2, 1, 0, 3]
    assert tree_height(tree.root) == 3


def test_heap_layout_matches_tree_shape():
    items = [HeapNode(f"h{i}", v) for i, v in enumerate((1, 2, 3))]
    nodes, edges = layout_heap(items)
    tree_nodes, _ = layout_tree(three_node_tree().root)
    assert [(n.x, n.y) for n in nodes] == [(n.x, n.y) for n in tree_nodes]
    assert [n.tag for n in nodes] == [0, 1, 2]
    assert [e.id for e in edges] == ["h0-h1", "h0-h2"]
