"""Layout algorithms turning diagram specs into positioned graphs.

Each variant uses a fixed grid:

- network: zones stacked top to bottom, items in a row inside each zone
- dataflow: stages as columns left to right, items stacked inside
- cloudArch: layers stacked top to bottom, services in a row inside

Children are positioned relative to their container. Edges only ever join
containers.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from . import sizing
from .loader import parse_diagram
from .models import (
    CloudArchDiagram,
    DataflowDiagram,
    FlowEdge,
    FlowGraph,
    FlowNode,
    Handle,
    NetworkDiagram,
    NodeKind,
)
from .sizing import DEFAULT_CONFIG, LayoutConfig

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from .models import Connection, DiagramSpec, Zone

logger = logging.getLogger(__name__)


class ZoneIndex:
    """Resolves connection endpoints to zones.

    Connections name zones by label (exact, case sensitive). When several
    zones share a label the first one wins.
    """

    def __init__(self, zones: Sequence[Zone], connections: Sequence[Connection] = ()):
        self._by_label: dict[str, int] = {}
        for i, zone in enumerate(zones):
            self._by_label.setdefault(zone.label, i)

        self._outgoing: dict[str, Connection] = {}
        for conn in connections:
            self._outgoing.setdefault(conn.source, conn)

    def resolve(self, label: str) -> int | None:
        """Index of the zone with this label, or None."""
        return self._by_label.get(label)

    def outgoing(self, label: str) -> Connection | None:
        """First connection leaving the zone with this label."""
        return self._outgoing.get(label)


def convert_network(diagram: NetworkDiagram, config: LayoutConfig | None = None) -> FlowGraph:
    """Lay out a network diagram as a vertical stack of zones."""
    if config is None:
        config = DEFAULT_CONFIG

    graph = FlowGraph()
    zones = diagram.zones
    connections = diagram.connections
    index = ZoneIndex(zones, connections)

    height = sizing.zone_height(zones, config)
    y_offset = 0.0

    for zi, zone in enumerate(zones):
        zone_id = f"zone-{zi}"
        graph.nodes.append(FlowNode(
            id=zone_id,
            kind=NodeKind.ZONE,
            x=0,
            y=y_offset,
            width=sizing.container_width(len(zone.items), config.zone_min_width, config),
            height=height,
            label=zone.label,
            color=zone.color,
        ))

        for ii, item in enumerate(zone.items):
            graph.nodes.append(FlowNode(
                id=f"{zone_id}-item-{ii}",
                kind=NodeKind.SERVICE,
                x=config.padding + ii * config.grid_x,
                y=config.header_height,
                label=item.label,
                sublabel=item.sublabel,
                color=zone.color,
                parent_id=zone_id,
            ))

        # Chain to the next zone
        if zi < len(zones) - 1:
            conn = index.outgoing(zone.label)
            graph.edges.append(FlowEdge(
                id=f"e-zone-{zi}-{zi + 1}",
                source=zone_id,
                target=f"zone-{zi + 1}",
                label=conn.label if conn else None,
                dashed=conn.dashed if conn else False,
            ))

        y_offset += height + config.zone_gap

    # Connections that skip over zones (or point upwards) get their own edge
    for ci, conn in enumerate(connections):
        fi = index.resolve(conn.source)
        ti = index.resolve(conn.target)
        if fi is None or ti is None or ti == fi + 1:
            continue
        graph.edges.append(FlowEdge(
            id=f"e-side-{ci}",
            source=f"zone-{fi}",
            target=f"zone-{ti}",
            label=conn.label,
            dashed=conn.dashed,
        ))

    return graph


def convert_dataflow(diagram: DataflowDiagram, config: LayoutConfig | None = None) -> FlowGraph:
    """Lay out a dataflow diagram as a row of stage columns."""
    if config is None:
        config = DEFAULT_CONFIG

    graph = FlowGraph()
    stages = diagram.stages

    spacing = sizing.item_spacing(stages, config)
    height = sizing.stage_height(stages, spacing, config)
    width = config.stage_width

    for si, stage in enumerate(stages):
        stage_id = f"stage-{si}"
        graph.nodes.append(FlowNode(
            id=stage_id,
            kind=NodeKind.ZONE,
            x=si * (width + config.stage_gap),
            y=0,
            width=width,
            height=height,
            label=stage.label,
            color=stage.color,
        ))

        for ii, item in enumerate(stage.items):
            graph.nodes.append(FlowNode(
                id=f"{stage_id}-item-{ii}",
                kind=NodeKind.SERVICE,
                x=config.stage_item_inset,
                y=config.header_height + ii * spacing,
                label=item,
                color=stage.color,
                parent_id=stage_id,
            ))

        if si < len(stages) - 1:
            graph.edges.append(FlowEdge(
                id=f"e-stage-{si}",
                source=stage_id,
                target=f"stage-{si + 1}",
                source_handle=Handle.RIGHT,
                target_handle=Handle.LEFT,
            ))

    return graph


def convert_cloud_arch(diagram: CloudArchDiagram, config: LayoutConfig | None = None) -> FlowGraph:
    """Lay out a cloud architecture diagram as a vertical stack of layers."""
    if config is None:
        config = DEFAULT_CONFIG

    graph = FlowGraph()
    layers = diagram.layers
    fallback_color = diagram.provider.color

    height = sizing.layer_height(layers, config)
    y_offset = 0.0

    for li, layer in enumerate(layers):
        layer_id = f"layer-{li}"
        color = layer.color or fallback_color
        graph.nodes.append(FlowNode(
            id=layer_id,
            kind=NodeKind.ZONE,
            x=0,
            y=y_offset,
            width=sizing.container_width(len(layer.services), config.layer_min_width, config),
            height=height,
            label=layer.label,
            color=color,
        ))

        for si, svc in enumerate(layer.services):
            graph.nodes.append(FlowNode(
                id=f"{layer_id}-svc-{si}",
                kind=NodeKind.SERVICE,
                x=config.padding + si * config.grid_x,
                y=config.header_height,
                label=svc.name,
                sublabel=svc.description,
                color=color,
                parent_id=layer_id,
            ))

        if li < len(layers) - 1:
            graph.edges.append(FlowEdge(
                id=f"e-layer-{li}",
                source=layer_id,
                target=f"layer-{li + 1}",
            ))

        y_offset += height + config.layer_gap

    return graph


def convert_diagram(spec: DiagramSpec | None, config: LayoutConfig | None = None) -> FlowGraph:
    """Convert any diagram spec into a graph.

    Anything that is not a known diagram variant converts to an empty
    graph instead of raising, so one malformed diagram cannot break the
    page embedding it.
    """
    if isinstance(spec, NetworkDiagram):
        return convert_network(spec, config)
    if isinstance(spec, DataflowDiagram):
        return convert_dataflow(spec, config)
    if isinstance(spec, CloudArchDiagram):
        return convert_cloud_arch(spec, config)

    logger.debug("No converter for %r, returning an empty graph", type(spec).__name__)
    return FlowGraph()


def convert_document(data: Mapping[str, Any], config: LayoutConfig | None = None) -> FlowGraph:
    """Parse a diagram from content JSON and convert it."""
    return convert_diagram(parse_diagram(data), config)
