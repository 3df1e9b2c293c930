"""
╔══════════════════════════════════════════════════════════════════╗
║             treeviz — Linked binary tree primitives              ║
║                                                                  ║
║  Shared by the BST and the splay tree (composition, not          ║
║  inheritance).  Owns the root reference and the per-instance     ║
║  id counter, and is the only code that touches child/parent      ║
║  pointers:                                                       ║
║                                                                  ║
║    link(node, parent, side)   attach a detached node             ║
║    unlink(node, parent)       detach, returns the edge id        ║
║    rotate_left / rotate_right built from link + unlink           ║
║                                                                  ║
║  Every link/unlink checks the parent/child invariant and         ║
║  raises InvariantViolation on the spot.                          ║
╚══════════════════════════════════════════════════════════════════╝
"""

import itertools
from typing import Iterator, Optional, Tuple

from treeviz.errors import InvariantViolation
from treeviz.layout import DEFAULT_LAYOUT, LayoutConfig, edge_id, layout_tree

LEFT  = "left"
RIGHT = "right"


# ═════════════════════════════════════════════════════════════════
#  TREE NODE
#
#  Five fields, __slots__ keeps them that way:
#    id     : str        – "node-<n>", stable for the node's lifetime
#    value  : number     – the key
#    left   : TreeNode?  – left child
#    right  : TreeNode?  – right child
#    parent : TreeNode?  – back-reference, never ownership
# ═════════════════════════════════════════════════════════════════
class TreeNode:
    __slots__ = ("id", "value", "left", "right", "parent")

    def __init__(self, node_id: str, value):
        self.id     = node_id
        self.value  = value
        self.left   = None
        self.right  = None
        self.parent = None

    def child(self, side: str):
        return self.left if side == LEFT else self.right

    def __repr__(self):
        return f"TreeNode({self.id!r}, {self.value!r})"


class LinkedBinaryTree:
    """
    Root holder plus invariant-checked pointer surgery.

    Attributes:
        root   (TreeNode|None): Current root.
        layout_config (LayoutConfig): Geometry used by ``layout()``.
    """

    def __init__(self, layout_config: LayoutConfig = DEFAULT_LAYOUT):
        self.root: Optional[TreeNode] = None
        self.layout_config = layout_config
        self._ids = itertools.count()

    # ─────────────────────────────────────────────────────────────
    #  NODES & ROOT
    # ─────────────────────────────────────────────────────────────

    def new_node(self, value) -> TreeNode:
        return TreeNode(f"node-{next(self._ids)}", value)

    def set_root(self, node: Optional[TreeNode]) -> None:
        """Install ``node`` (must be detached) as the root."""
        if node is not None and node.parent is not None:
            raise InvariantViolation(
                f"{node.id} is still linked to {node.parent.id}; cannot become root")
        self.root = node

    def clear(self) -> None:
        self.root = None

    # ─────────────────────────────────────────────────────────────
    #  LINK / UNLINK
    # ─────────────────────────────────────────────────────────────

    @staticmethod
    def side_of(node: TreeNode) -> str:
        """Which child slot of its parent ``node`` occupies."""
        parent = node.parent
        if parent is None:
            raise InvariantViolation(f"{node.id} has no parent")
        if parent.left is node:
            return LEFT
        if parent.right is node:
            return RIGHT
        raise InvariantViolation(
            f"{node.id} points at parent {parent.id}, which does not point back")

    def link(self, node: TreeNode, parent: TreeNode, side: str) -> str:
        """
        Attach detached ``node`` into ``parent``'s empty ``side`` slot.

        Returns:
            str: The id of the new edge.

        Raises:
            InvariantViolation: ``node`` already has a parent, the slot
                is occupied, ``node`` is the root, or ``side`` is bogus.
        """
        if node.parent is not None:
            raise InvariantViolation(f"{node.id} already linked to {node.parent.id}")
        if node is self.root:
            raise InvariantViolation(f"{node.id} is the root; cannot link it below {parent.id}")
        if side == LEFT:
            if parent.left is not None:
                raise InvariantViolation(f"{parent.id}.left is occupied by {parent.left.id}")
            parent.left = node
        elif side == RIGHT:
            if parent.right is not None:
                raise InvariantViolation(f"{parent.id}.right is occupied by {parent.right.id}")
            parent.right = node
        else:
            raise InvariantViolation(f"unknown side {side!r}")
        node.parent = parent
        return edge_id(parent.id, node.id)

    def unlink(self, node: TreeNode, parent: TreeNode) -> str:
        """
        Detach ``node`` from ``parent``.

        Returns:
            str: The id of the removed edge.

        Raises:
            InvariantViolation: the two are not linked to each other.
        """
        if node.parent is not parent:
            raise InvariantViolation(f"{node.id} is not a child of {parent.id}")
        if parent.left is node:
            parent.left = None
        elif parent.right is node:
            parent.right = None
        else:
            raise InvariantViolation(
                f"try to unlink {node.id} from {parent.id}, which aren't linked")
        node.parent = None
        return edge_id(parent.id, node.id)

    # ─────────────────────────────────────────────────────────────
    #  ROTATIONS
    #
    #        x              y
    #       / \            / \
    #      y   γ   ──►    α   x        rotate_right(x)
    #     / \                / \
    #    α   β              β   γ
    #
    #  rotate_left is the mirror.  Both keep the in-order sequence
    #  and rewire x's old parent (or the root) to y.
    # ─────────────────────────────────────────────────────────────

    def rotate_right(self, x: TreeNode) -> TreeNode:
        y = x.left
        if y is None:
            raise InvariantViolation(f"rotate_right({x.id}) needs a left child")
        return self._rotate(x, y, LEFT, RIGHT)

    def rotate_left(self, x: TreeNode) -> TreeNode:
        y = x.right
        if y is None:
            raise InvariantViolation(f"rotate_left({x.id}) needs a right child")
        return self._rotate(x, y, RIGHT, LEFT)

    def _rotate(self, x, y, down, up):
        # down: side of x holding y; up: the opposite side
        inner = y.child(up)
        self.unlink(y, x)
        if inner is not None:
            self.unlink(inner, y)
            self.link(inner, x, down)
        parent = x.parent
        if parent is None:
            self.root = None
            self.set_root(y)
        else:
            side = self.side_of(x)
            self.unlink(x, parent)
            self.link(y, parent, side)
        self.link(x, y, up)
        return y

    # ─────────────────────────────────────────────────────────────
    #  NARRATED WALKS
    # ─────────────────────────────────────────────────────────────

    def descend(self, value, sink) -> Tuple[Optional[TreeNode], Optional[TreeNode]]:
        """
        Walk from the root towards ``value``, visiting every node.

        Returns:
            tuple: (match, last) — the node holding ``value`` (or None)
            and the last node visited (None for an empty tree).
        """
        current, last = self.root, None
        while current is not None:
            sink.visit(current.id, current.value)
            last = current
            if value == current.value:
                return current, last
            current = current.left if value < current.value else current.right
        return None, last

    @staticmethod
    def leftmost(node: TreeNode, sink=None) -> TreeNode:
        """Minimum of the subtree at ``node``; visits each step when given a sink."""
        if sink is not None:
            sink.visit(node.id, node.value)
        while node.left is not None:
            node = node.left
            if sink is not None:
                sink.visit(node.id, node.value)
        return node

    @staticmethod
    def rightmost(node: TreeNode, sink=None) -> TreeNode:
        """Maximum of the subtree at ``node``; visits each step when given a sink."""
        if sink is not None:
            sink.visit(node.id, node.value)
        while node.right is not None:
            node = node.right
            if sink is not None:
                sink.visit(node.id, node.value)
        return node

    # ─────────────────────────────────────────────────────────────
    #  INSPECTION & LAYOUT
    # ─────────────────────────────────────────────────────────────

    def inorder(self) -> Iterator[TreeNode]:
        stack, node = [], self.root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node
            node = node.right

    def values(self) -> list:
        return [n.value for n in self.inorder()]

    def find(self, value) -> Optional[TreeNode]:
        """Silent lookup (no narration)."""
        node = self.root
        while node is not None and node.value != value:
            node = node.left if value < node.value else node.right
        return node

    def __len__(self):
        return sum(1 for _ in self.inorder())

    def layout(self):
        return layout_tree(self.root, self.layout_config)

    def update_layout(self, sink, unvisit: bool = True) -> None:
        nodes, edges = self.layout()
        sink.update_layout(nodes, edges, unvisit)
