"""infradiagram - Deterministic layout of infrastructure diagrams.

Example usage:
    from infradiagram import NetworkDiagram, Zone, Item, Connection, convert_diagram

    spec = NetworkDiagram(
        zones=(
            Zone(label="Public", color="#F59E0B", items=(Item("WAF"), Item("ALB"))),
            Zone(label="Private", color="#3B82F6", items=(Item("API", "REST"),)),
        ),
        connections=(Connection(source="Public", target="Private", label="HTTPS"),),
    )
    graph = convert_diagram(spec)
    graph.to_dict()  # {"nodes": [...], "edges": [...]}
"""

from .layout import (
    ZoneIndex,
    convert_cloud_arch,
    convert_dataflow,
    convert_diagram,
    convert_document,
    convert_network,
)
from .loader import (
    DiagramFormatError,
    load_diagram_json,
    parse_diagram,
)
from .models import (
    CloudArchDiagram,
    Connection,
    ConnectionStyle,
    DataflowDiagram,
    DiagramSpec,
    FlowEdge,
    FlowGraph,
    FlowNode,
    Handle,
    Item,
    Layer,
    NetworkDiagram,
    NodeKind,
    Provider,
    Service,
    Stage,
    Zone,
)
from .renderer import (
    DEFAULT_THEME,
    GraphRenderer,
    Theme,
    render_to_svg,
)
from .sizing import (
    LayoutConfig,
    estimate_canvas_height,
)
from .validation import (
    DiagramIssue,
    check_graph,
    validate_diagram,
)

__version__ = "0.1.0"

__all__ = [
    # Conversion
    "convert_diagram",
    "convert_document",
    "convert_network",
    "convert_dataflow",
    "convert_cloud_arch",
    "ZoneIndex",
    # Loading
    "parse_diagram",
    "load_diagram_json",
    "DiagramFormatError",
    # Spec models
    "DiagramSpec",
    "NetworkDiagram",
    "DataflowDiagram",
    "CloudArchDiagram",
    "Zone",
    "Item",
    "Connection",
    "ConnectionStyle",
    "Stage",
    "Layer",
    "Service",
    "Provider",
    # Graph models
    "FlowGraph",
    "FlowNode",
    "FlowEdge",
    "NodeKind",
    "Handle",
    # Sizing
    "LayoutConfig",
    "estimate_canvas_height",
    # Validation
    "validate_diagram",
    "check_graph",
    "DiagramIssue",
    # Rendering
    "render_to_svg",
    "GraphRenderer",
    "Theme",
    "DEFAULT_THEME",
    # Version
    "__version__",
]
