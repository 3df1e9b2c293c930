"""
╔══════════════════════════════════════════════════════════════════╗
║                      treeviz — Binary Min-Heap                   ║
║                                                                  ║
║  Dense list representing a complete binary tree:                 ║
║                                                                  ║
║      parent(i) = (i - 1) // 2                                    ║
║      left(i)   = 2i + 1                                          ║
║      right(i)  = 2i + 2                                          ║
║                                                                  ║
║  add          append → relayout → sift-up                        ║
║  extract_min  highlight root → move last to root → sift-down     ║
║                                                                  ║
║  Swaps relayout with unvisit=False so the pair being compared    ║
║  stays highlighted while it moves; the closing relayout clears   ║
║  them.                                                           ║
║                                                                  ║
║  Search and arbitrary delete are not heap operations and only    ║
║  answer with a "Not Applicable" toast.                           ║
╚══════════════════════════════════════════════════════════════════╝
"""

import itertools
from typing import List, Optional

from treeviz import notices
from treeviz.layout import DEFAULT_LAYOUT, layout_heap
from treeviz.scene import NullSink


class HeapNode:
    __slots__ = ("id", "value")

    def __init__(self, node_id: str, value):
        self.id    = node_id
        self.value = value

    def __repr__(self):
        return f"HeapNode({self.id!r}, {self.value!r})"


def parent_index(i: int) -> int:
    return (i - 1) // 2


def left_index(i: int) -> int:
    return 2 * i + 1


def right_index(i: int) -> int:
    return 2 * i + 2


class MinHeap:
    """
    Binary min-heap with narration.

    Attributes:
        sink  (GraphEventSink)  : Where narration goes.
        items (list[HeapNode])  : Heap storage, index 0 is the minimum.
    """

    name = "heap"

    def __init__(self, sink, layout_config=DEFAULT_LAYOUT):
        self.sink = sink
        self.items: List[HeapNode] = []
        self.layout_config = layout_config
        self._ids = itertools.count()

    def __len__(self):
        return len(self.items)

    def values(self) -> list:
        return [n.value for n in self.items]

    def peek(self):
        return self.items[0].value if self.items else None

    def layout(self):
        return layout_heap(self.items, self.layout_config)

    def update_layout(self, unvisit: bool = True) -> None:
        nodes, edges = self.layout()
        self.sink.update_layout(nodes, edges, unvisit)

    def clear(self) -> None:
        self.items = []
        self.update_layout()

    def load(self, values) -> None:
        """Add ``values`` without narrating anything."""
        sink, self.sink = self.sink, NullSink()
        try:
            for v in values:
                self.add(v)
        finally:
            self.sink = sink

    def _swap(self, i: int, j: int) -> None:
        self.items[i], self.items[j] = self.items[j], self.items[i]

    # ─────────────────────────────────────────────────────────────
    #  ADD  (sift-up)
    # ─────────────────────────────────────────────────────────────

    def add(self, value) -> HeapNode:
        node = HeapNode(f"node-{next(self._ids)}", value)
        self.items.append(node)
        self.update_layout(False)       # new leaf has no visitor to clear

        i = len(self.items) - 1
        while i > 0:
            p = parent_index(i)
            self.sink.highlight_node(self.items[i].id, "found")
            if self.items[p].value > self.items[i].value:
                self.sink.highlight_node(self.items[p].id, "found")
                self._swap(i, p)
                self.update_layout(False)
                i = p
            else:
                break
        self.update_layout()
        return node

    # ─────────────────────────────────────────────────────────────
    #  EXTRACT-MIN  (sift-down)
    # ─────────────────────────────────────────────────────────────

    def extract_min(self):
        """
        Remove and return the minimum.

        Returns:
            The extracted value, or None (with a destructive toast) when
            the heap is empty.
        """
        if not self.items:
            self.sink.toast(notices.heap_empty())
            return None

        self.sink.highlight_node(self.items[0].id, "deletion")
        minimum = self.items[0].value
        last = self.items.pop()

        if self.items:
            self.items[0] = last
            self.update_layout(False)
            self._sift_down(0)

        self.update_layout()
        self.sink.toast(notices.extracted(minimum))
        return minimum

    def _sift_down(self, i: int) -> None:
        size = len(self.items)
        while True:
            self.sink.highlight_node(self.items[i].id, "found")
            smallest = i
            left, right = left_index(i), right_index(i)
            # strict '<' so the left child wins ties
            if left < size and self.items[left].value < self.items[smallest].value:
                smallest = left
            if right < size and self.items[right].value < self.items[smallest].value:
                smallest = right
            if smallest == i:
                return
            self.sink.highlight_node(self.items[smallest].id, "found")
            self._swap(i, smallest)
            self.update_layout(False)
            i = smallest

    # ─────────────────────────────────────────────────────────────
    #  UNSUPPORTED
    # ─────────────────────────────────────────────────────────────

    def search(self, value) -> None:
        self.sink.toast(notices.not_applicable("Search", self.name))

    def delete(self, value) -> bool:
        self.sink.toast(notices.not_applicable("Deleting an arbitrary element", self.name))
        return False
