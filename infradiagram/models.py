"""Data models for infradiagram specs and the graphs built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class NodeKind(Enum):
    """Visual node kinds understood by the rendering surface."""

    SERVICE = "service"
    SECURITY = "security"
    ZONE = "zone"
    DECISION = "decision"
    RESULT = "result"

    @property
    def default_color(self) -> str:
        """Color used when a node of this kind declares none."""
        return KIND_COLORS[self]


# Outcome colors for result nodes
RESULT_COLORS = {
    "success": "#10B981",
    "error": "#EF4444",
    "warning": "#F59E0B",
}

KIND_COLORS = {
    NodeKind.SERVICE: "#3B82F6",
    NodeKind.SECURITY: "#EF4444",
    NodeKind.ZONE: "#64748B",
    NodeKind.DECISION: "#F59E0B",
    NodeKind.RESULT: RESULT_COLORS["success"],
}


class Provider(Enum):
    """Cloud provider of a cloudArch diagram, only used as a fallback color."""

    AWS = "aws"
    GCP = "gcp"
    AZURE = "azure"
    GENERIC = "generic"

    @property
    def color(self) -> str:
        return PROVIDER_COLORS[self]


PROVIDER_COLORS = {
    Provider.AWS: "#FF9900",
    Provider.GCP: "#4285F4",
    Provider.AZURE: "#0078D4",
    Provider.GENERIC: "#64748B",
}


class ConnectionStyle(Enum):
    """Line styles for declared connections."""

    SOLID = "solid"
    DASHED = "dashed"


class Handle(Enum):
    """Side of a node an edge attaches to."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


# -- Input spec ---------------------------------------------------------------


@dataclass(frozen=True)
class Item:
    """A leaf entity inside a network zone."""

    label: str
    sublabel: str | None = None


@dataclass(frozen=True)
class Zone:
    """A network zone holding a row of items."""

    label: str
    color: str = ""
    items: tuple[Item, ...] = ()


@dataclass(frozen=True)
class Connection:
    """A declared link between two zones, joined on zone labels."""

    source: str
    target: str
    label: str | None = None
    style: ConnectionStyle = ConnectionStyle.SOLID

    @property
    def dashed(self) -> bool:
        return self.style == ConnectionStyle.DASHED


@dataclass(frozen=True)
class Stage:
    """A dataflow column; items are bare labels."""

    label: str
    color: str = ""
    items: tuple[str, ...] = ()


@dataclass(frozen=True)
class Service:
    """A service inside a cloud architecture layer."""

    name: str
    description: str | None = None


@dataclass(frozen=True)
class Layer:
    """A cloud architecture layer holding a row of services."""

    label: str
    color: str = ""
    services: tuple[Service, ...] = ()


@dataclass(frozen=True)
class NetworkDiagram:
    """Vertical stack of zones with optional cross-zone connections."""

    zones: tuple[Zone, ...] = ()
    connections: tuple[Connection, ...] = ()
    title: str | None = None
    caption: str | None = None

    variant = "network"


@dataclass(frozen=True)
class DataflowDiagram:
    """Left-to-right pipeline of stages."""

    stages: tuple[Stage, ...] = ()
    title: str | None = None
    caption: str | None = None

    variant = "dataflow"


@dataclass(frozen=True)
class CloudArchDiagram:
    """Vertical stack of provider-style service layers."""

    layers: tuple[Layer, ...] = ()
    provider: Provider = Provider.GENERIC
    title: str | None = None
    caption: str | None = None

    variant = "cloudArch"


DiagramSpec = Union[NetworkDiagram, DataflowDiagram, CloudArchDiagram]


# -- Output graph -------------------------------------------------------------


@dataclass
class FlowNode:
    """A positioned node of a converted diagram.

    Parented nodes carry a position relative to their parent's origin;
    top-level nodes are positioned in diagram space.
    """

    id: str
    kind: NodeKind
    x: float
    y: float
    label: str = ""
    color: str = ""
    sublabel: str | None = None
    width: float | None = None
    height: float | None = None
    parent_id: str | None = None

    @property
    def is_container(self) -> bool:
        return self.kind == NodeKind.ZONE

    @property
    def extent(self) -> str | None:
        return "parent" if self.parent_id else None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"label": self.label, "color": self.color}
        if self.sublabel is not None:
            data["sublabel"] = self.sublabel

        result: dict[str, Any] = {
            "id": self.id,
            "type": self.kind.value,
            "position": {"x": self.x, "y": self.y},
            "data": data,
        }
        if self.width is not None and self.height is not None:
            result["style"] = {"width": self.width, "height": self.height}
        if self.parent_id:
            result["parentId"] = self.parent_id
            result["extent"] = self.extent
        return result


@dataclass
class FlowEdge:
    """An edge between two container nodes."""

    id: str
    source: str
    target: str
    label: str | None = None
    dashed: bool = False
    source_handle: Handle = Handle.BOTTOM
    target_handle: Handle = Handle.TOP
    marker_color: str = "#475569"

    @property
    def animated(self) -> bool:
        return self.dashed

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "sourceHandle": self.source_handle.value,
            "targetHandle": self.target_handle.value,
            "markerEnd": {"type": "arrowclosed", "color": self.marker_color},
        }
        if self.label is not None:
            result["label"] = self.label
        if self.dashed:
            result["animated"] = True
            result["style"] = {"strokeDasharray": "5 5"}
        return result


@dataclass
class FlowGraph:
    """Nodes and edges produced by one conversion."""

    nodes: list[FlowNode] = field(default_factory=list)
    edges: list[FlowEdge] = field(default_factory=list)

    def node(self, node_id: str) -> FlowNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def children(self, parent_id: str) -> list[FlowNode]:
        return [n for n in self.nodes if n.parent_id == parent_id]

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        """Serialize to the camelCase shape consumed by the rendering surface."""
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }
