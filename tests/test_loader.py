from __future__ import annotations

import json
import unittest
from types import MappingProxyType

from infradiagram.loader import DiagramFormatError, load_diagram_json, parse_diagram
from infradiagram.models import (
    CloudArchDiagram,
    Connection,
    ConnectionStyle,
    DataflowDiagram,
    Item,
    NetworkDiagram,
    Provider,
    Service,
    Zone,
)

NETWORK_DOC = {
    "variant": "network",
    "title": "Gateway topology",
    "zones": [
        {
            "label": "Public",
            "color": "#F59E0B",
            "items": [{"label": "WAF", "sublabel": "Payload inspection"}, {"label": "ALB"}],
        },
        {"label": "Private", "color": "#3B82F6", "items": []},
    ],
    "connections": [
        {"from": "Public", "to": "Private", "label": "HTTPS", "style": "dashed"},
        {"from": "Private", "to": "Vault"},
    ],
}


class ParseDiagramTests(unittest.TestCase):
    def test_network(self) -> None:
        spec = parse_diagram(NETWORK_DOC)
        self.assertIsInstance(spec, NetworkDiagram)
        self.assertEqual(spec.title, "Gateway topology")
        self.assertIsNone(spec.caption)
        self.assertEqual(spec.zones[0], Zone(
            "Public", "#F59E0B", (Item("WAF", "Payload inspection"), Item("ALB")),
        ))
        self.assertEqual(spec.zones[1].items, ())
        self.assertEqual(spec.connections, (
            Connection("Public", "Private", "HTTPS", ConnectionStyle.DASHED),
            Connection("Private", "Vault", None, ConnectionStyle.SOLID),
        ))

    def test_dataflow(self) -> None:
        spec = parse_diagram({
            "variant": "dataflow",
            "stages": [{"label": "Ingest", "color": "#64748B", "items": ["Kafka", "S3"]}],
        })
        self.assertIsInstance(spec, DataflowDiagram)
        self.assertEqual(spec.stages[0].items, ("Kafka", "S3"))

    def test_cloud_arch(self) -> None:
        spec = parse_diagram({
            "variant": "cloudArch",
            "provider": "azure",
            "layers": [{"label": "Compute", "services": [{"name": "AKS", "description": "Kubernetes"}, {"name": "Functions"}]}],
        })
        self.assertIsInstance(spec, CloudArchDiagram)
        self.assertEqual(spec.provider, Provider.AZURE)
        self.assertEqual(spec.layers[0].color, "")
        self.assertEqual(spec.layers[0].services, (Service("AKS", "Kubernetes"), Service("Functions")))

    def test_missing_fields_default(self) -> None:
        spec = parse_diagram({"variant": "network", "zones": [{"items": [{}]}]})
        self.assertEqual(spec.zones, (Zone("", "", (Item(""),)),))
        self.assertEqual(spec.connections, ())

        cloud = parse_diagram({"variant": "cloudArch"})
        self.assertEqual(cloud.layers, ())
        self.assertEqual(cloud.provider, Provider.GENERIC)

    def test_unknown_values_fall_back(self) -> None:
        cloud = parse_diagram({"variant": "cloudArch", "provider": "oracle"})
        self.assertEqual(cloud.provider, Provider.GENERIC)

        network = parse_diagram({
            "variant": "network",
            "connections": [{"from": "a", "to": "b", "style": "dotted"}],
        })
        self.assertEqual(network.connections[0].style, ConnectionStyle.SOLID)

    def test_wrongly_typed_entries_are_skipped(self) -> None:
        spec = parse_diagram({
            "variant": "dataflow",
            "stages": [{"label": "a", "items": ["ok", 3, None]}, "not a stage"],
        })
        self.assertEqual(len(spec.stages), 1)
        self.assertEqual(spec.stages[0].items, ("ok",))

        network = parse_diagram({"variant": "network", "zones": {"label": "not a list"}})
        self.assertEqual(network.zones, ())

    def test_accepts_any_mapping(self) -> None:
        doc = MappingProxyType({
            "variant": "network",
            "zones": [MappingProxyType({"label": "Public", "items": [MappingProxyType({"label": "WAF"})]})],
            "connections": [MappingProxyType({"from": "Public", "to": "Private"})],
        })
        spec = parse_diagram(doc)
        self.assertIsInstance(spec, NetworkDiagram)
        self.assertEqual(spec.zones, (Zone("Public", "", (Item("WAF"),)),))
        self.assertEqual(spec.connections, (Connection("Public", "Private"),))

    def test_unknown_variant(self) -> None:
        self.assertIsNone(parse_diagram({"variant": "sequence"}))
        self.assertIsNone(parse_diagram({"variant": "Network"}))
        self.assertIsNone(parse_diagram({}))
        self.assertIsNone(parse_diagram([]))  # type: ignore[arg-type]


class LoadDiagramJsonTests(unittest.TestCase):
    def test_round_trip_from_text(self) -> None:
        self.assertEqual(load_diagram_json(json.dumps(NETWORK_DOC)), parse_diagram(NETWORK_DOC))

    def test_invalid_json_raises(self) -> None:
        with self.assertRaises(DiagramFormatError):
            load_diagram_json("{variant: network")

    def test_non_object_raises(self) -> None:
        with self.assertRaisesRegex(DiagramFormatError, "JSON object"):
            load_diagram_json("[1, 2]")

    def test_format_error_is_value_error(self) -> None:
        self.assertTrue(issubclass(DiagramFormatError, ValueError))


if __name__ == "__main__":
    unittest.main()
