"""
╔══════════════════════════════════════════════════════════════════╗
║               treeviz — Scene Producer (storyboard)              ║
║                                                                  ║
║  Implements GraphEventSink.  Keeps one mutable working state     ║
║  and, for every narrated event, freezes it into a Scene that     ║
║  is appended to the storyboard.                                  ║
║                                                                  ║
║    start(base) ──► visit / highlight / hide / relayout / toast   ║
║                          │           (one Scene each)            ║
║                          ▼                                       ║
║                    finish() ──► [Scene, Scene, …]                ║
║                                                                  ║
║  Relayout is recorded in up to three scenes:                     ║
║    1. drop edges that vanished   (only if any did)               ║
║    2. move / introduce nodes                                     ║
║    3. introduce the new edge set                                 ║
║  so a node never travels with a stale edge still attached.       ║
╚══════════════════════════════════════════════════════════════════╝
"""

import logging
from typing import Dict, List, Optional

from treeviz.scene import (
    EdgeStyle, GraphEventSink, NodeStyle, Scene, Toast, highlight_for,
)

logger = logging.getLogger(__name__)


class SceneProducer(GraphEventSink):
    """
    Turns narration into an ordered list of immutable Scenes.

    Attributes:
        scenes (list[Scene]): Scenes recorded since the last start().
    """

    def __init__(self):
        self.scenes: List[Scene] = []
        self._nodes = ()
        self._edges = ()
        self._visitor: Optional[str] = None
        self._node_styles: Dict[str, NodeStyle] = {}
        self._edge_styles: Dict[str, EdgeStyle] = {}

    # ─────────────────────────────────────────────────────────────
    #  SESSION
    # ─────────────────────────────────────────────────────────────

    def start(self, initial: Scene) -> None:
        """Load ``initial`` as the working state and record the opening scene."""
        self._nodes       = tuple(initial.nodes)
        self._edges       = tuple(initial.edges)
        self._visitor     = initial.visitor_node_id
        self._node_styles = dict(initial.node_styles)
        self._edge_styles = dict(initial.edge_styles)
        self.scenes       = []
        self._push({"type": "start"})

    def finish(self) -> List[Scene]:
        """
        Record the closing scene (styles cleared) and hand over the list.

        Returns:
            list[Scene]: The storyboard.  The producer keeps no
            reference to it, so the caller owns it outright.
        """
        self._node_styles.clear()
        self._edge_styles.clear()
        self._push({"type": "end"})
        scenes, self.scenes = self.scenes, []
        logger.debug("storyboard finished with %d scenes", len(scenes))
        return scenes

    @property
    def current(self) -> Scene:
        """Snapshot of the working state (not recorded)."""
        return self._snapshot({"type": "current"})

    def _snapshot(self, action, toast=None) -> Scene:
        # Scene copies the style dicts, later edits here cannot leak in
        return Scene(
            nodes=self._nodes,
            edges=self._edges,
            visitor_node_id=self._visitor,
            node_styles=self._node_styles,
            edge_styles=self._edge_styles,
            toast=toast,
            action=action,
        )

    def _push(self, action, toast=None) -> None:
        self.scenes.append(self._snapshot(action, toast))

    # ─────────────────────────────────────────────────────────────
    #  NARRATION
    # ─────────────────────────────────────────────────────────────

    def visit(self, node_id, value):
        self._visitor = node_id
        self._push({"type": "VISIT", "nodeId": node_id, "value": value})

    def unvisit(self):
        self._visitor = None
        self._push({"type": "UNVISIT"})

    def highlight_node(self, node_id, reason):
        # a fresh highlight replaces the previous style wholesale
        self._node_styles[node_id] = NodeStyle(highlight=highlight_for(reason))
        self._push({"type": "HIGHLIGHT_NODE", "nodeId": node_id, "reason": reason})

    def hide_node(self, node_id):
        old = self._node_styles.get(node_id, NodeStyle())
        self._node_styles[node_id] = NodeStyle(highlight=old.highlight, invisible=True)
        self._push({"type": "HIDE_NODE", "nodeId": node_id})

    def hide_edge(self, edge_ids):
        edge_ids = tuple(edge_ids)
        for eid in edge_ids:
            self._edge_styles[eid] = EdgeStyle(invisible=True)
        self._push({"type": "HIDE_EDGE", "edgeIds": edge_ids})

    def update_layout(self, nodes, edges, unvisit=True):
        nodes = tuple(nodes)
        edges = tuple(edges)
        if unvisit:
            self._visitor = None

        # ── phase 1: drop edges that no longer exist ──
        new_edge_ids = {e.id for e in edges}
        remaining = tuple(e for e in self._edges if e.id in new_edge_ids)
        if len(remaining) != len(self._edges):
            self._edges = remaining
            self._prune(self._edge_styles, new_edge_ids)
            self._push({"type": "UPDATE_LAYOUT_HIDE_EDGES"})

        # ── phase 2: nodes move / appear / disappear ──
        self._nodes = nodes
        node_ids = {n.id for n in nodes}
        if unvisit:
            self._node_styles.clear()
        else:
            self._prune(self._node_styles, node_ids)
        if self._visitor not in node_ids:
            self._visitor = None
        self._push({"type": "UPDATE_LAYOUT_NODES"})

        # ── phase 3: the new edge set ──
        self._edges = edges
        if unvisit:
            self._edge_styles.clear()
        else:
            self._prune(self._edge_styles, new_edge_ids)
        self._push({"type": "UPDATE_LAYOUT_EDGES"})

    def toast(self, toast: Toast):
        self._push({"type": "TOAST"}, toast)

    @staticmethod
    def _prune(styles: dict, keep) -> None:
        for key in [k for k in styles if k not in keep]:
            del styles[key]
