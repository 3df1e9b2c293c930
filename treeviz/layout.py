"""
Tree layout — topology in, positioned nodes/edges out.

Uses in-order midpoint splitting: every node sits at the midpoint of
the horizontal range it was given, its left child gets the left half
and its right child the right half.  Depth decides the row.

The result depends on topology alone, which the SceneProducer relies
on when it diffs one layout against the next.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from treeviz.scene import VisualEdge, VisualNode


@dataclass(frozen=True)
class LayoutConfig:
    width: float = 800.0          # Canvas width in pixels
    level_height: float = 70.0    # Vertical distance between depths
    top: float = 40.0             # y of the root row
    padding: float = 30.0         # Horizontal margin on both sides


DEFAULT_LAYOUT = LayoutConfig()


def edge_id(source_id: str, target_id: str) -> str:
    return f"{source_id}-{target_id}"


def tree_height(node) -> int:
    """
    Height of a linked subtree.

    Args:
        node (TreeNode|None): Subtree root.

    Returns:
        int: Height (0 for None / empty).
    """
    if node is None:
        return 0
    return 1 + max(tree_height(node.left), tree_height(node.right))


def _split(key, depth, lo, hi, children, emit):
    """
    Walk the topology in pre-order, handing each key its [lo, hi) range.

    Args:
        key      : Current node key (object, or heap index).
        depth    (int)      : Current depth (0 = root).
        lo, hi   (float)    : Horizontal range in [0, 1].
        children (callable) : key → (left_key|None, right_key|None).
        emit     (callable) : Called as emit(key, depth, mid, parent_key).
    """
    stack = [(key, depth, lo, hi, None)]
    while stack:
        k, d, a, b, parent = stack.pop()
        mid = (a + b) / 2.0
        emit(k, d, mid, parent)
        left, right = children(k)
        # right pushed first so the left subtree is emitted first
        if right is not None:
            stack.append((right, d + 1, mid, b, k))
        if left is not None:
            stack.append((left, d + 1, a, mid, k))


def _to_pixels(mid: float, depth: int, config: LayoutConfig) -> Tuple[float, float]:
    x = config.padding + mid * (config.width - 2 * config.padding)
    y = config.top + depth * config.level_height
    return x, y


def layout_tree(root, config: LayoutConfig = DEFAULT_LAYOUT
                ) -> Tuple[List[VisualNode], List[VisualEdge]]:
    """
    Lay out a pointer-linked binary tree.

    Args:
        root   (TreeNode|None): Tree root.
        config (LayoutConfig) : Geometry.

    Returns:
        tuple[list[VisualNode], list[VisualEdge]]: Nodes and edges in
        pre-order (left before right).  Empty lists for an empty tree.
    """
    nodes: List[VisualNode] = []
    edges: List[VisualEdge] = []
    if root is None:
        return nodes, edges

    def emit(node, depth, mid, parent):
        x, y = _to_pixels(mid, depth, config)
        nodes.append(VisualNode(node.id, node.value, x, y))
        if parent is not None:
            edges.append(VisualEdge(edge_id(parent.id, node.id), parent.id, node.id))

    _split(root, 0, 0.0, 1.0, lambda n: (n.left, n.right), emit)
    return nodes, edges


def layout_heap(items: Sequence, config: LayoutConfig = DEFAULT_LAYOUT
                ) -> Tuple[List[VisualNode], List[VisualEdge]]:
    """
    Lay out an array-backed complete binary tree.

    Args:
        items  (Sequence[HeapNode]): Heap storage, index 0 is the root.
        config (LayoutConfig)      : Geometry.

    Returns:
        tuple[list[VisualNode], list[VisualEdge]]: Each node's ``tag`` is
        its array index.
    """
    nodes: List[VisualNode] = []
    edges: List[VisualEdge] = []
    size = len(items)
    if size == 0:
        return nodes, edges

    def children(i):
        left, right = 2 * i + 1, 2 * i + 2
        return (left if left < size else None,
                right if right < size else None)

    def emit(i, depth, mid, parent):
        x, y = _to_pixels(mid, depth, config)
        item = items[i]
        nodes.append(VisualNode(item.id, item.value, x, y, tag=i))
        if parent is not None:
            p = items[parent]
            edges.append(VisualEdge(edge_id(p.id, item.id), p.id, item.id))

    _split(0, 0, 0.0, 1.0, children, emit)
    return nodes, edges
