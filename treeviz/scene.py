"""
╔══════════════════════════════════════════════════════════════════╗
║                 treeviz — Scene model & Event Sink               ║
║                                                                  ║
║  A Scene is one frozen, rendering-ready snapshot:                ║
║                                                                  ║
║    { nodes           : (VisualNode, …)                           ║
║      edges           : (VisualEdge, …)                           ║
║      visitor_node_id : str | None                                ║
║      node_styles     : {id: NodeStyle}   (read-only mapping)     ║
║      edge_styles     : {id: EdgeStyle}   (read-only mapping)     ║
║      toast           : Toast | None                              ║
║      action          : {"type": …, …}    (read-only mapping) }   ║
║                                                                  ║
║  Algorithms never build scenes.  They narrate through the        ║
║  GraphEventSink interface and a sink implementation (normally    ║
║  the SceneProducer) turns narration into scenes.                 ║
╚══════════════════════════════════════════════════════════════════╝
"""

import abc
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple


HIGHLIGHT_REASONS = ("found", "successor", "deletion")

_EMPTY = MappingProxyType({})


def _frozen_mapping(value) -> Mapping:
    """Copy ``value`` into a read-only mapping (shared empty proxy for {})."""
    if not value:
        return _EMPTY
    return MappingProxyType(dict(value))


# ═════════════════════════════════════════════════════════════════
#  PRESENTATION DATA
# ═════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class VisualNode:
    """A positioned node.  ``tag`` holds the array index for heap nodes."""
    id: str
    value: float
    x: float
    y: float
    tag: Optional[int] = None


@dataclass(frozen=True)
class VisualEdge:
    """A parent → child edge.  ``id`` is ``"<source>-<target>"``."""
    id: str
    source: str
    target: str


@dataclass(frozen=True)
class NodeStyle:
    highlight: Optional[str] = None      # None | "default" | "deletion"
    invisible: bool = False


@dataclass(frozen=True)
class EdgeStyle:
    invisible: bool = False


@dataclass(frozen=True)
class Toast:
    """
    User-facing notice attached to a scene.

    Attributes:
        title       (str): Short headline, e.g. "Not Found".
        description (str): One sentence of detail.
        variant     (str): "default" or "destructive".
    """
    title: str
    description: str
    variant: str = "default"

    @property
    def destructive(self) -> bool:
        return self.variant == "destructive"


@dataclass(frozen=True)
class Scene:
    """
    One immutable snapshot of structure + visual annotations.

    Sequences are stored as tuples and mappings as read-only proxies
    over private copies, so a Scene can be shared freely: nothing the
    producer does afterwards can reach into it.
    """
    nodes: Tuple[VisualNode, ...] = ()
    edges: Tuple[VisualEdge, ...] = ()
    visitor_node_id: Optional[str] = None
    node_styles: Mapping[str, NodeStyle] = field(default_factory=lambda: _EMPTY)
    edge_styles: Mapping[str, EdgeStyle] = field(default_factory=lambda: _EMPTY)
    toast: Optional[Toast] = None
    action: Mapping[str, object] = field(default_factory=lambda: _EMPTY)

    def __post_init__(self):
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "edges", tuple(self.edges))
        object.__setattr__(self, "node_styles", _frozen_mapping(self.node_styles))
        object.__setattr__(self, "edge_styles", _frozen_mapping(self.edge_styles))
        object.__setattr__(self, "action", _frozen_mapping(self.action))

    # ── lookups ─────────────────────────────────────────────────
    @property
    def action_type(self) -> Optional[str]:
        return self.action.get("type")

    def node(self, node_id: str) -> Optional[VisualNode]:
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None

    def node_ids(self) -> Tuple[str, ...]:
        return tuple(n.id for n in self.nodes)

    def edge_ids(self) -> Tuple[str, ...]:
        return tuple(e.id for e in self.edges)

    def node_style(self, node_id: str) -> NodeStyle:
        return self.node_styles.get(node_id, NodeStyle())

    def edge_style(self, edge_id: str) -> EdgeStyle:
        return self.edge_styles.get(edge_id, EdgeStyle())

    def visible_nodes(self) -> Tuple[VisualNode, ...]:
        return tuple(n for n in self.nodes if not self.node_style(n.id).invisible)

    def visible_edges(self) -> Tuple[VisualEdge, ...]:
        return tuple(e for e in self.edges if not self.edge_style(e.id).invisible)

    def to_dict(self) -> dict:
        """Plain-data form (sorted style keys) used for exports and comparisons."""
        return {
            "nodes": [[n.id, n.value, n.x, n.y, n.tag] for n in self.nodes],
            "edges": [[e.id, e.source, e.target] for e in self.edges],
            "visitor": self.visitor_node_id,
            "node_styles": {k: [s.highlight, s.invisible]
                            for k, s in sorted(self.node_styles.items())},
            "edge_styles": {k: s.invisible
                            for k, s in sorted(self.edge_styles.items())},
            "toast": None if self.toast is None else
                     [self.toast.title, self.toast.description, self.toast.variant],
            "action": {k: list(v) if isinstance(v, tuple) else v
                       for k, v in sorted(self.action.items())},
        }


# ═════════════════════════════════════════════════════════════════
#  EVENT SINK
#
#  The narration contract between algorithms and whoever listens.
#  Calls are synchronous and return nothing; an algorithm never
#  reads anything back from its sink.
# ═════════════════════════════════════════════════════════════════

class GraphEventSink(abc.ABC):

    @abc.abstractmethod
    def visit(self, node_id: str, value) -> None:
        """The algorithm is looking at ``node_id``."""

    @abc.abstractmethod
    def unvisit(self) -> None:
        """Clear the visitor marker (e.g. after a failed search)."""

    @abc.abstractmethod
    def highlight_node(self, node_id: str, reason: str) -> None:
        """Mark a node; ``reason`` is one of ``HIGHLIGHT_REASONS``."""

    @abc.abstractmethod
    def hide_node(self, node_id: str) -> None:
        """Mark a node invisible before a relayout removes it."""

    @abc.abstractmethod
    def hide_edge(self, edge_ids: Iterable[str]) -> None:
        """Mark edges invisible before a relayout removes them."""

    @abc.abstractmethod
    def update_layout(self, nodes, edges, unvisit: bool = True) -> None:
        """Replace the node/edge universe with a fresh layout."""

    @abc.abstractmethod
    def toast(self, toast: Toast) -> None:
        """Attach a user-facing notice."""


class NullSink(GraphEventSink):
    """Sink that ignores everything.  For headless bulk loading."""

    def visit(self, node_id, value):
        pass

    def unvisit(self):
        pass

    def highlight_node(self, node_id, reason):
        pass

    def hide_node(self, node_id):
        pass

    def hide_edge(self, edge_ids):
        pass

    def update_layout(self, nodes, edges, unvisit=True):
        pass

    def toast(self, toast):
        pass


def highlight_for(reason: str) -> str:
    """
    Map a narration reason onto the visual highlight kind.

    Raises:
        ValueError: ``reason`` is not one of ``HIGHLIGHT_REASONS``.
    """
    if reason not in HIGHLIGHT_REASONS:
        raise ValueError(f"unknown highlight reason: {reason!r}")
    return "deletion" if reason == "deletion" else "default"
