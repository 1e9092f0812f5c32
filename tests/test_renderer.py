from __future__ import annotations

import tempfile
import unittest
import xml.etree.ElementTree as ET
from pathlib import Path

from infradiagram.layout import convert_diagram
from infradiagram.models import (
    CloudArchDiagram,
    Connection,
    ConnectionStyle,
    DataflowDiagram,
    FlowGraph,
    FlowNode,
    Item,
    Layer,
    NetworkDiagram,
    NodeKind,
    Service,
    Stage,
    Zone,
)
from infradiagram.renderer import GraphRenderer, Theme, render_to_svg, truncate_text

SVG_NS = "{http://www.w3.org/2000/svg}"


def _network() -> NetworkDiagram:
    return NetworkDiagram(
        zones=(
            Zone("Public", "#F59E0B", (Item("WAF", "Payload inspection"), Item("ALB"))),
            Zone("Private", "#3B82F6", (Item("Gateway"),)),
            Zone("Data", "#10B981", (Item("S3"),)),
        ),
        connections=(Connection("Public", "Data", "logs", ConnectionStyle.DASHED),),
    )


class RenderToSvgTests(unittest.TestCase):
    def _parse(self, svg: str) -> ET.Element:
        return ET.fromstring(svg)

    def test_network_preview(self) -> None:
        svg = render_to_svg(convert_diagram(_network()))
        root = self._parse(svg)
        texts = [t.text for t in root.iter(f"{SVG_NS}text")]
        self.assertIn("PUBLIC", texts)
        self.assertIn("WAF", texts)
        self.assertIn("Payload inspection", texts)
        self.assertIn("logs", texts)
        self.assertIn('stroke-dasharray="5 5"', svg)

    def test_every_variant_renders(self) -> None:
        specs = [
            DataflowDiagram(stages=(Stage("Ingest", "#64748B", ("Kafka",)), Stage("Serve", "#10B981"))),
            CloudArchDiagram(layers=(Layer("Edge", services=(Service("CDN", "Caching"),)), Layer("Data"))),
        ]
        for spec in specs:
            root = self._parse(render_to_svg(convert_diagram(spec)))
            self.assertEqual(root.tag, f"{SVG_NS}svg")

    def test_empty_graph(self) -> None:
        root = self._parse(render_to_svg(FlowGraph()))
        self.assertEqual(float(root.get("width")), 80)
        self.assertEqual(float(root.get("height")), 80)

    def test_canvas_covers_layout(self) -> None:
        graph = convert_diagram(_network())
        root = self._parse(render_to_svg(graph))
        # three zones of height 120 with two gaps of 60, plus padding
        self.assertEqual(float(root.get("height")), 120 * 3 + 60 * 2 + 80)
        self.assertEqual(float(root.get("width")), 440 + 80)

    def test_saves_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            target = Path(td) / "preview"
            svg = render_to_svg(convert_diagram(_network()), str(target))
            saved = (Path(td) / "preview.svg").read_text(encoding="utf-8")
        self.assertEqual(saved, svg)


class GraphRendererTests(unittest.TestCase):
    def test_absolute_positions_add_parent_origin(self) -> None:
        graph = convert_diagram(_network())
        positions = GraphRenderer().absolute_positions(graph)
        self.assertEqual(positions["zone-1"], (0, 180))
        self.assertEqual(positions["zone-1-item-0"], (40, 216))

    def test_leaf_sizes_by_kind(self) -> None:
        renderer = GraphRenderer(Theme(node_width=100))
        plain = FlowNode("a", NodeKind.SERVICE, 0, 0)
        described = FlowNode("b", NodeKind.SECURITY, 0, 0, sublabel="JWT")
        decision = FlowNode("c", NodeKind.DECISION, 0, 0)
        result = FlowNode("d", NodeKind.RESULT, 0, 0)
        self.assertEqual(renderer.node_size(plain), (100, 44))
        self.assertEqual(renderer.node_size(described), (100, 58))
        self.assertEqual(renderer.node_size(decision), (100, 100))
        self.assertEqual(renderer.node_size(result), (120, 30))

    def test_decision_and_result_nodes(self) -> None:
        graph = FlowGraph(nodes=[
            FlowNode("q", NodeKind.DECISION, 0, 0, label="PII?"),
            FlowNode("ok", NodeKind.RESULT, 0, 150, label="Allow"),
        ])
        texts = [t.text for t in ET.fromstring(render_to_svg(graph)).iter(f"{SVG_NS}text")]
        self.assertEqual(texts, ["PII?", "Allow"])

    def test_truncate_text(self) -> None:
        self.assertEqual(truncate_text("short", 10), "short")
        self.assertEqual(truncate_text("a" * 12, 10), "a" * 9 + "…")


if __name__ == "__main__":
    unittest.main()
