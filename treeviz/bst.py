"""
╔══════════════════════════════════════════════════════════════════╗
║                  treeviz — Binary Search Tree                    ║
║                                                                  ║
║  Unbalanced BST narrated through a GraphEventSink.               ║
║                                                                  ║
║    search(v)  visit path → found highlight / unvisit + toast     ║
║    insert(v)  visit path → link leaf → relayout                  ║
║    delete(v)  visit path → highlight → splice → hide → relayout  ║
║                                                                  ║
║  Two-children delete moves the in-order successor NODE into      ║
║  the deleted slot, so the slot keeps the successor's id and no   ║
║  extra node flickers in or out of the animation.                 ║
╚══════════════════════════════════════════════════════════════════╝
"""

from typing import List, Optional

from treeviz import notices
from treeviz.layout import DEFAULT_LAYOUT
from treeviz.linked_tree import LEFT, RIGHT, LinkedBinaryTree, TreeNode
from treeviz.scene import NullSink


class BinarySearchTree:
    """
    Binary search tree with narration.

    Attributes:
        sink (GraphEventSink)  : Where narration goes.
        tree (LinkedBinaryTree): Pointer structure + id counter.
    """

    name = "binary search tree"

    def __init__(self, sink, layout_config=DEFAULT_LAYOUT):
        self.sink = sink
        self.tree = LinkedBinaryTree(layout_config)

    @property
    def root(self) -> Optional[TreeNode]:
        return self.tree.root

    def values(self) -> list:
        return self.tree.values()

    def layout(self):
        return self.tree.layout()

    def clear(self) -> None:
        self.tree.clear()
        self.tree.update_layout(self.sink)

    def load(self, values) -> None:
        """Insert ``values`` without narrating anything."""
        sink, self.sink = self.sink, NullSink()
        try:
            for v in values:
                self.insert(v)
        finally:
            self.sink = sink

    # ─────────────────────────────────────────────────────────────
    #  SEARCH
    # ─────────────────────────────────────────────────────────────

    def search(self, value) -> Optional[TreeNode]:
        node, _ = self.tree.descend(value, self.sink)
        if node is not None:
            self.sink.highlight_node(node.id, "found")
            self.sink.toast(notices.found(value))
        else:
            self.sink.unvisit()
            self.sink.toast(notices.not_found(value))
        return node

    # ─────────────────────────────────────────────────────────────
    #  INSERT
    # ─────────────────────────────────────────────────────────────

    def insert(self, value) -> TreeNode:
        """
        Insert ``value`` as a new leaf.

        Returns:
            TreeNode: The new node, or the existing one on a duplicate
            (in which case the tree is untouched).
        """
        tree, sink = self.tree, self.sink
        if tree.root is None:
            node = tree.new_node(value)
            tree.set_root(node)
            tree.update_layout(sink)
            return node

        current = tree.root
        while True:
            sink.visit(current.id, current.value)
            if value == current.value:
                sink.toast(notices.duplicate(value))
                tree.update_layout(sink)
                return current
            side = LEFT if value < current.value else RIGHT
            nxt = current.child(side)
            if nxt is None:
                node = tree.new_node(value)
                tree.link(node, current, side)
                tree.update_layout(sink)
                return node
            current = nxt

    # ─────────────────────────────────────────────────────────────
    #  DELETE
    #
    #  a) no children   → just detach
    #  b) one child     → child takes the node's slot
    #  c) two children  → in-order successor takes the node's slot
    # ─────────────────────────────────────────────────────────────

    def delete(self, value) -> bool:
        """
        Remove ``value`` from the tree.

        Returns:
            bool: False (and a destructive toast) if it was not present.
        """
        sink = self.sink
        target, _ = self.tree.descend(value, sink)
        if target is None:
            sink.unvisit()
            sink.toast(notices.not_found(value))
            return False

        sink.highlight_node(target.id, "deletion")
        removed = self._splice_out(target)
        if removed:
            sink.hide_edge(removed)
        sink.hide_node(target.id)
        self.tree.update_layout(sink)
        sink.toast(notices.deleted(value))
        return True

    def _splice_out(self, target: TreeNode) -> List[str]:
        """Detach ``target`` completely; returns the ids of every removed edge."""
        tree, sink = self.tree, self.sink
        parent = target.parent
        side = tree.side_of(target) if parent is not None else None
        removed = []
        if parent is not None:
            removed.append(tree.unlink(target, parent))

        left, right = target.left, target.right

        # ── cases a) and b) ──
        if left is None or right is None:
            child = left if left is not None else right
            if child is not None:
                removed.append(tree.unlink(child, target))
            if parent is None:
                tree.set_root(child)
            elif child is not None:
                tree.link(child, parent, side)
            return removed

        # ── case c): successor = leftmost of the right subtree ──
        successor = tree.leftmost(right, sink)
        s_parent = successor.parent
        sink.highlight_node(successor.id, "successor")

        removed.append(tree.unlink(left, target))
        removed.append(tree.unlink(right, target))
        if s_parent is not target:
            removed.append(tree.unlink(successor, s_parent))
            s_right = successor.right
            if s_right is not None:
                removed.append(tree.unlink(s_right, successor))
                tree.link(s_right, s_parent, LEFT)
            tree.link(right, successor, RIGHT)
        # successor == right: it keeps its own right subtree
        tree.link(left, successor, LEFT)

        if parent is None:
            tree.set_root(successor)
        else:
            tree.link(successor, parent, side)
        return removed
