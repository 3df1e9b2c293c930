"""
╔══════════════════════════════════════════════════════════════════╗
║                      treeviz — Splay Tree                        ║
║                                                                  ║
║  Self-adjusting BST.  Every operation that touches a node        ║
║  splays it to the root:                                          ║
║                                                                  ║
║    Zig        parent is the top       → one rotation             ║
║    Zig-Zig    same-side chain         → rotate grandparent,      ║
║                                         then parent              ║
║    Zig-Zag    opposite-side chain     → rotate parent, then      ║
║                                         grandparent              ║
║                                                                  ║
║  Each single rotation is followed by its own relayout, so the    ║
║  viewer sees every rotation as a separate step.                  ║
║                                                                  ║
║  Built on the same LinkedBinaryTree primitives as the BST;       ║
║  the two share no class hierarchy.                               ║
╚══════════════════════════════════════════════════════════════════╝
"""

from typing import Optional

from treeviz import notices
from treeviz.layout import DEFAULT_LAYOUT
from treeviz.linked_tree import LEFT, RIGHT, LinkedBinaryTree, TreeNode
from treeviz.scene import NullSink


class SplayTree:
    """
    Splay tree with narration.

    Attributes:
        sink (GraphEventSink)  : Where narration goes.
        tree (LinkedBinaryTree): Pointer structure + id counter.
    """

    name = "splay tree"

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
    #  SPLAY
    # ─────────────────────────────────────────────────────────────

    def splay(self, node: TreeNode, stop: Optional[TreeNode] = None,
              unvisit: bool = True) -> int:
        """
        Rotate ``node`` upwards until its parent is ``stop``.

        Args:
            node    (TreeNode)     : Node to bring up.
            stop    (TreeNode|None): Ancestor to stop under; None splays
                                     all the way to the root.
            unvisit (bool)         : Passed to every relayout.  False
                                     keeps highlights across rotations.

        Returns:
            int: Number of rotations performed.
        """
        tree = self.tree
        rotations = 0
        while node.parent is not stop:
            parent = node.parent
            grand = parent.parent
            node_left = parent.left is node
            if grand is stop:
                steps = [(tree.rotate_right if node_left else tree.rotate_left, parent)]
            elif node_left and grand.left is parent:            # zig-zig
                steps = [(tree.rotate_right, grand), (tree.rotate_right, parent)]
            elif not node_left and grand.right is parent:       # zag-zag
                steps = [(tree.rotate_left, grand), (tree.rotate_left, parent)]
            elif node_left:                                     # zig-zag
                steps = [(tree.rotate_right, parent), (tree.rotate_left, grand)]
            else:                                               # zag-zig
                steps = [(tree.rotate_left, parent), (tree.rotate_right, grand)]
            for rotate, pivot in steps:
                rotate(pivot)
                tree.update_layout(self.sink, unvisit)
                rotations += 1
        return rotations

    # ─────────────────────────────────────────────────────────────
    #  OPERATIONS
    # ─────────────────────────────────────────────────────────────

    def search(self, value) -> Optional[TreeNode]:
        node, _ = self.tree.descend(value, self.sink)
        if node is None:
            self.sink.unvisit()
            self.sink.toast(notices.not_found(value))
            return None
        self.splay(node)
        self.sink.highlight_node(node.id, "found")
        self.sink.toast(notices.found(value))
        return node

    def insert(self, value) -> TreeNode:
        """
        Insert ``value`` and splay it to the root.

        The new leaf is laid out before splaying so the viewer first
        sees it appear in its BST position, then watches it rise.
        A duplicate splays the existing node instead.
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
                if not self.splay(current):
                    tree.update_layout(sink)
                return current
            side = LEFT if value < current.value else RIGHT
            nxt = current.child(side)
            if nxt is None:
                node = tree.new_node(value)
                tree.link(node, current, side)
                tree.update_layout(sink)
                self.splay(node)
                return node
            current = nxt

    def delete(self, value) -> bool:
        """
        Splay ``value`` to the root, then join its two subtrees.

        The maximum of the left subtree is splayed to the top of that
        subtree (it then has no right child), the old right subtree is
        hung off it, and it becomes the new root.
        """
        tree, sink = self.tree, self.sink
        target, _ = tree.descend(value, sink)
        if target is None:
            sink.unvisit()
            sink.toast(notices.not_found(value))
            return False

        self.splay(target)
        if tree.root is not target or target.value != value:
            sink.toast(notices.not_found(value))
            return False

        sink.highlight_node(target.id, "deletion")
        left, right = target.left, target.right
        removed = []
        if left is None:
            if right is not None:
                removed.append(tree.unlink(right, target))
            tree.set_root(right)
        else:
            max_left = tree.rightmost(left, sink)
            self.splay(max_left, stop=target, unvisit=False)
            removed.append(tree.unlink(max_left, target))
            if right is not None:
                removed.append(tree.unlink(right, target))
                tree.link(right, max_left, RIGHT)
            tree.set_root(max_left)

        if removed:
            sink.hide_edge(removed)
        sink.hide_node(target.id)
        tree.update_layout(sink)
        sink.toast(notices.deleted(value))
        return True
