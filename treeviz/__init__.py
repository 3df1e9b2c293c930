"""
treeviz: animated BST / splay tree / min-heap visualizer.

The algorithms narrate through a GraphEventSink; a SceneProducer turns
the narration into immutable Scenes, and an AnimationController plays
them back.
"""

from treeviz.bst import BinarySearchTree
from treeviz.controller import AnimationController
from treeviz.errors import ExportError, InvariantViolation, TreeVizError
from treeviz.heap import MinHeap
from treeviz.layout import LayoutConfig, layout_heap, layout_tree
from treeviz.producer import SceneProducer
from treeviz.scene import (
    EdgeStyle, GraphEventSink, NodeStyle, NullSink, Scene, Toast,
    VisualEdge, VisualNode,
)
from treeviz.session import VisualizerSession
from treeviz.splay import SplayTree

__version__ = "1.0.0"

__all__ = [
    "AnimationController", "BinarySearchTree", "EdgeStyle", "ExportError",
    "GraphEventSink", "InvariantViolation", "LayoutConfig", "MinHeap",
    "NodeStyle", "NullSink", "Scene", "SceneProducer", "SplayTree", "Toast",
    "TreeVizError", "VisualEdge", "VisualNode", "VisualizerSession",
    "layout_heap", "layout_tree",
]
