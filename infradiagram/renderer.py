"""Static SVG preview of converted graphs using drawsvg."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import drawsvg as draw

from .models import Handle, NodeKind

if TYPE_CHECKING:
    from .models import FlowEdge, FlowGraph, FlowNode

logger = logging.getLogger(__name__)


class Theme:
    """Color theme and leaf node metrics for previews."""

    def __init__(
        self,
        background: str = "#0F172A",
        text_color: str = "#E2E8F0",
        text_secondary: str = "#94A3B8",
        edge_color: str = "#475569",
        node_width: float = 140,
        node_height: float = 44,
        sublabel_height: float = 14,
        decision_size: float = 100,
        result_width: float = 120,
        result_height: float = 30,
        padding: float = 40,
        max_label_chars: int = 20,
    ):
        self.background = background
        self.text_color = text_color
        self.text_secondary = text_secondary
        self.edge_color = edge_color
        self.node_width = node_width
        self.node_height = node_height
        self.sublabel_height = sublabel_height
        self.decision_size = decision_size
        self.result_width = result_width
        self.result_height = result_height
        self.padding = padding
        self.max_label_chars = max_label_chars


DEFAULT_THEME = Theme()


def truncate_text(text: str, max_chars: int) -> str:
    """Truncate text to max characters with ellipsis."""
    if len(text) <= max_chars:
        return text
    return text[: max_chars - 1] + "…"


class GraphRenderer:
    """Renders converted graphs to SVG."""

    def __init__(self, theme: Theme | None = None):
        self.theme = theme or DEFAULT_THEME

    def node_size(self, node: FlowNode) -> tuple[float, float]:
        """Drawn size of a node; leaf nodes have no size of their own."""
        if node.width is not None and node.height is not None:
            return node.width, node.height
        if node.kind == NodeKind.DECISION:
            return self.theme.decision_size, self.theme.decision_size
        if node.kind == NodeKind.RESULT:
            return self.theme.result_width, self.theme.result_height
        height = self.theme.node_height
        if node.sublabel:
            height += self.theme.sublabel_height
        return self.theme.node_width, height

    def absolute_positions(self, graph: FlowGraph) -> dict[str, tuple[float, float]]:
        """Resolve container-relative positions into diagram space."""
        by_id = {node.id: node for node in graph.nodes}
        resolved: dict[str, tuple[float, float]] = {}

        def resolve(node: FlowNode, seen: frozenset[str]) -> tuple[float, float]:
            if node.id in resolved:
                return resolved[node.id]
            x, y = node.x, node.y
            parent = by_id.get(node.parent_id) if node.parent_id else None
            if parent is not None and parent.id not in seen:
                px, py = resolve(parent, seen | {node.id})
                x, y = x + px, y + py
            resolved[node.id] = (x, y)
            return x, y

        for node in graph.nodes:
            resolve(node, frozenset())
        return resolved

    def render(self, graph: FlowGraph) -> draw.Drawing:
        """Render a graph to an SVG Drawing object."""
        positions = self.absolute_positions(graph)
        pad = self.theme.padding

        min_x = min_y = 0.0
        max_x = max_y = 0.0
        for node in graph.nodes:
            x, y = positions[node.id]
            w, h = self.node_size(node)
            min_x, min_y = min(min_x, x), min(min_y, y)
            max_x, max_y = max(max_x, x + w), max(max_y, y + h)

        width = max_x - min_x + pad * 2
        height = max_y - min_y + pad * 2
        offset = (pad - min_x, pad - min_y)

        d = draw.Drawing(width, height)
        d.append(draw.Rectangle(0, 0, width, height, fill=self.theme.background))

        # Containers first so their children paint on top
        ordered = sorted(graph.nodes, key=lambda n: 0 if n.is_container else 1)
        for node in ordered:
            x, y = positions[node.id]
            self._render_node(d, node, x + offset[0], y + offset[1])

        by_id = {node.id: node for node in graph.nodes}
        for edge in graph.edges:
            source = by_id.get(edge.source)
            target = by_id.get(edge.target)
            if source is None or target is None:
                continue
            sx, sy = positions[source.id]
            tx, ty = positions[target.id]
            start = self._handle_point(source, sx + offset[0], sy + offset[1], edge.source_handle)
            end = self._handle_point(target, tx + offset[0], ty + offset[1], edge.target_handle)
            self._render_edge(d, edge, start, end)

        return d

    def _handle_point(self, node: FlowNode, x: float, y: float, handle: Handle) -> tuple[float, float]:
        w, h = self.node_size(node)
        if handle == Handle.RIGHT:
            return x + w, y + h / 2
        if handle == Handle.LEFT:
            return x, y + h / 2
        if handle == Handle.TOP:
            return x + w / 2, y
        return x + w / 2, y + h

    def _render_node(self, d: draw.Drawing, node: FlowNode, x: float, y: float) -> None:
        w, h = self.node_size(node)
        color = node.color or node.kind.default_color
        label = truncate_text(node.label, self.theme.max_label_chars)

        if node.kind == NodeKind.ZONE:
            d.append(draw.Rectangle(
                x, y, w, h,
                fill=color, fill_opacity=0.05,
                stroke=color, stroke_opacity=0.5, stroke_width=2,
                stroke_dasharray="6 4",
                rx=12, ry=12,
            ))
            d.append(draw.Text(
                node.label.upper(), 11, x + 12, y + 20,
                fill=color, font_weight="bold",
                font_family="Inter, system-ui, sans-serif",
            ))
            return

        if node.kind == NodeKind.DECISION:
            cx, cy = x + w / 2, y + h / 2
            half = w * 0.4 * math.sqrt(2)
            d.append(draw.Lines(
                cx, cy - half,
                cx + half, cy,
                cx, cy + half,
                cx - half, cy,
                close=True,
                fill=color, fill_opacity=0.12,
                stroke=color, stroke_width=2,
            ))
            d.append(draw.Text(
                label, 10, cx, cy,
                fill=self.theme.text_color, text_anchor="middle",
                dominant_baseline="middle", font_family="Inter, system-ui, sans-serif",
            ))
            return

        radius = h / 2 if node.kind == NodeKind.RESULT else 8
        stroke_width = 3 if node.kind == NodeKind.SECURITY else 2
        d.append(draw.Rectangle(
            x, y, w, h,
            fill=color, fill_opacity=0.12,
            stroke=color, stroke_width=stroke_width,
            rx=radius, ry=radius,
        ))

        text_y = y + (h / 2 if not node.sublabel else self.theme.node_height / 2)
        d.append(draw.Text(
            label, 12, x + w / 2, text_y,
            fill=color if node.kind == NodeKind.RESULT else self.theme.text_color,
            font_weight="bold", text_anchor="middle", dominant_baseline="middle",
            font_family="Inter, system-ui, sans-serif",
        ))
        if node.sublabel:
            d.append(draw.Text(
                truncate_text(node.sublabel, self.theme.max_label_chars + 4), 10,
                x + w / 2, text_y + self.theme.sublabel_height + 2,
                fill=self.theme.text_secondary, text_anchor="middle",
                dominant_baseline="middle", font_family="Inter, system-ui, sans-serif",
            ))

    def _render_edge(
        self,
        d: draw.Drawing,
        edge: FlowEdge,
        start: tuple[float, float],
        end: tuple[float, float],
    ) -> None:
        x1, y1 = start
        x2, y2 = end
        extra = {"stroke_dasharray": "5 5"} if edge.dashed else {}
        d.append(draw.Line(
            x1, y1, x2, y2,
            stroke=edge.marker_color, stroke_width=1.5,
            **extra,
        ))

        angle = math.atan2(y2 - y1, x2 - x1)
        self._draw_arrowhead(d, x2, y2, angle, 8, edge.marker_color)

        if edge.label:
            d.append(draw.Text(
                edge.label, 10, (x1 + x2) / 2 + 6, (y1 + y2) / 2,
                fill=self.theme.text_secondary, dominant_baseline="middle",
                font_family="JetBrains Mono, Consolas, monospace",
            ))

    def _draw_arrowhead(
        self,
        d: draw.Drawing,
        x: float,
        y: float,
        angle: float,
        size: float,
        color: str,
    ) -> None:
        """Draw an arrowhead at the given position and angle."""
        p1_x = x - size * math.cos(angle - math.pi / 6)
        p1_y = y - size * math.sin(angle - math.pi / 6)
        p2_x = x - size * math.cos(angle + math.pi / 6)
        p2_y = y - size * math.sin(angle + math.pi / 6)

        d.append(draw.Lines(
            x, y,
            p1_x, p1_y,
            p2_x, p2_y,
            x, y,
            fill=color,
            stroke="none",
        ))


def render_to_svg(graph: FlowGraph, filename: str | None = None, theme: Theme | None = None) -> str:
    """Render a graph to SVG.

    Args:
        graph: The converted graph to render
        filename: Optional filename to save to (without extension)
        theme: Optional theme, defaults to DEFAULT_THEME

    Returns:
        SVG content as string
    """
    drawing = GraphRenderer(theme).render(graph)

    if filename:
        drawing.save_svg(f"{filename}.svg")
        logger.debug("Saved diagram preview to %s.svg", filename)

    return drawing.as_svg()
