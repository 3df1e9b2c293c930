"""
Visualizer session: one structure, one producer, one controller.

    session.insert(7)
      │  gate: controller still animating? → busy notice, nothing runs
      ├─ producer.start(current layout)
      ├─ structure.insert(7)        (narrates into the producer)
      ├─ producer.finish()          → [Scene, …]
      └─ controller.start(scenes)   → playback
"""

import logging
import random
from typing import Callable, List, Optional

from treeviz import notices
from treeviz.bst import BinarySearchTree
from treeviz.controller import AnimationController
from treeviz.heap import MinHeap
from treeviz.layout import DEFAULT_LAYOUT
from treeviz.producer import SceneProducer
from treeviz.scene import Scene
from treeviz.splay import SplayTree

logger = logging.getLogger(__name__)

STRUCTURES = {
    "bst":   BinarySearchTree,
    "splay": SplayTree,
    "heap":  MinHeap,
}

HEAP_SEED_VALUES = (10, 20, 15, 30, 40, 50, 5)
RANDOM_MAX_VALUE = 100
RANDOM_MAX_COUNT = 20


class VisualizerSession:
    """
    Runs operations on a structure and feeds the storyboards to a controller.

    Args:
        kind          (str)                 : "bst", "splay" or "heap".
        controller    (AnimationController) : Playback; a fresh one if None.
        layout_config (LayoutConfig)        : Geometry for every layout.
        initial_values (iterable)           : Loaded silently at start.
        seed          (int|None)            : Seed for ``add_random``.
    """

    def __init__(self, kind: str = "bst", controller: Optional[AnimationController] = None,
                 layout_config=DEFAULT_LAYOUT, initial_values=(), seed=None):
        if kind not in STRUCTURES:
            raise ValueError(f"unknown structure {kind!r}; expected one of {sorted(STRUCTURES)}")
        self.kind = kind
        self.producer = SceneProducer()
        self.structure = STRUCTURES[kind](self.producer, layout_config)
        self.controller = controller if controller is not None else AnimationController()
        self.random = random.Random(seed)
        if initial_values:
            self.structure.load(initial_values)
        self.controller.reset_to_scene(self.layout_scene())

    @property
    def is_heap(self) -> bool:
        return self.kind == "heap"

    @property
    def is_animating(self) -> bool:
        return self.controller.is_animating

    def values(self) -> list:
        return self.structure.values()

    def layout_scene(self) -> Scene:
        nodes, edges = self.structure.layout()
        return Scene(nodes=nodes, edges=edges)

    # ─────────────────────────────────────────────────────────────
    #  RUNNING
    # ─────────────────────────────────────────────────────────────

    def _reject_if_busy(self, label: str) -> bool:
        if self.controller.is_animating:
            logger.warning("rejected %s: animation in progress", label)
            self.controller.notify(notices.busy())
            return True
        return False

    def _run(self, label: str, algorithm: Callable[[], object]) -> Optional[List[Scene]]:
        """
        Run ``algorithm`` inside one storyboard and start playing it.

        Returns:
            list[Scene]|None: The storyboard, or None if rejected.
        """
        if self._reject_if_busy(label):
            return None
        logger.info("%s: %s", self.kind, label)
        self.producer.start(self.layout_scene())
        algorithm()
        scenes = self.producer.finish()
        self.controller.start(scenes)
        return scenes

    def insert(self, value):
        add = self.structure.add if self.is_heap else self.structure.insert
        return self._run(f"insert {value}", lambda: add(value))

    def delete(self, value):
        return self._run(f"delete {value}", lambda: self.structure.delete(value))

    def search(self, value):
        return self._run(f"search {value}", lambda: self.structure.search(value))

    def extract_min(self):
        if self.is_heap:
            return self._run("extract-min", self.structure.extract_min)
        toast = notices.not_applicable("Extract-min", self.structure.name)
        return self._run("extract-min", lambda: self.producer.toast(toast))

    # ─────────────────────────────────────────────────────────────
    #  BULK
    # ─────────────────────────────────────────────────────────────

    def clear(self) -> bool:
        if self._reject_if_busy("clear"):
            return False
        self.producer.start(self.layout_scene())
        self.structure.clear()
        self.producer.finish()
        self.controller.reset_to_scene(self.layout_scene())
        logger.info("%s: cleared", self.kind)
        return True

    def add_random(self, count: Optional[int] = None) -> Optional[list]:
        """
        Load random values in [0, 100) without animating them.

        Args:
            count (int|None): How many; defaults to 10, capped at 20.

        Returns:
            list|None: The values drawn, or None if rejected.
        """
        if self._reject_if_busy("add random"):
            return None
        n = count if count and count > 0 else 10
        n = min(n, RANDOM_MAX_COUNT)
        values = [self.random.randrange(RANDOM_MAX_VALUE) for _ in range(n)]
        self.structure.load(values)
        self.controller.reset_to_scene(self.layout_scene())
        logger.info("%s: loaded %d random values", self.kind, n)
        return values
