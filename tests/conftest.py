import pytest

from treeviz.bst import BinarySearchTree
from treeviz.heap import MinHeap
from treeviz.producer import SceneProducer
from treeviz.scene import GraphEventSink, Scene
from treeviz.settings import Settings
from treeviz.splay import SplayTree

SCENARIO_VALUES = (50, 25, 75, 12, 37, 62, 87)
HEAP_VALUES = (10, 20, 15, 30, 40, 50, 5)


class RecordingSink(GraphEventSink):
    """Sink double that records every call as ``(method, args)``."""

    def __init__(self):
        self.calls = []

    def visit(self, node_id, value):
        self.calls.append(("visit", (node_id, value)))

    def unvisit(self):
        self.calls.append(("unvisit", ()))

    def highlight_node(self, node_id, reason):
        self.calls.append(("highlight_node", (node_id, reason)))

    def hide_node(self, node_id):
        self.calls.append(("hide_node", (node_id,)))

    def hide_edge(self, edge_ids):
        self.calls.append(("hide_edge", (tuple(edge_ids),)))

    def update_layout(self, nodes, edges, unvisit=True):
        self.calls.append(("update_layout", (tuple(nodes), tuple(edges), unvisit)))

    def toast(self, toast):
        self.calls.append(("toast", (toast,)))

    def methods(self):
        return [name for name, _ in self.calls]

    def toasts(self):
        return [args[0] for name, args in self.calls if name == "toast"]

    def reset(self):
        self.calls = []


def run(structure, producer, operation, *args):
    """Run one operation inside a storyboard and return its scenes."""
    nodes, edges = structure.layout()
    producer.start(Scene(nodes=nodes, edges=edges))
    getattr(structure, operation)(*args)
    return producer.finish()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def producer():
    return SceneProducer()


@pytest.fixture
def scenario_bst(sink):
    tree = BinarySearchTree(sink)
    for v in SCENARIO_VALUES:
        tree.insert(v)
    sink.reset()
    return tree


@pytest.fixture
def splay(sink):
    return SplayTree(sink)


@pytest.fixture
def heap(sink):
    return MinHeap(sink)


@pytest.fixture
def settings(tmp_path):
    return Settings(str(tmp_path / "settings.json"))
