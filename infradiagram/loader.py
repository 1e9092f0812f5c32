"""Load diagram specs from content JSON."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .models import (
    CloudArchDiagram,
    Connection,
    ConnectionStyle,
    DataflowDiagram,
    Item,
    Layer,
    NetworkDiagram,
    Provider,
    Service,
    Stage,
    Zone,
)

if TYPE_CHECKING:
    from .models import DiagramSpec

logger = logging.getLogger(__name__)


class DiagramFormatError(ValueError):
    """Raised when diagram content cannot be decoded at all."""


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _optional_text(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _entries(data: Mapping[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    return value if isinstance(value, list) else []


def _mappings(data: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    return [entry for entry in _entries(data, key) if isinstance(entry, Mapping)]


def _parse_style(value: Any) -> ConnectionStyle:
    try:
        return ConnectionStyle(value)
    except ValueError:
        if value is not None:
            logger.debug("Unknown connection style %r, using solid", value)
        return ConnectionStyle.SOLID


def _parse_provider(value: Any) -> Provider:
    try:
        return Provider(value)
    except ValueError:
        if value is not None:
            logger.debug("Unknown provider %r, using generic", value)
        return Provider.GENERIC


def parse_zone(data: Mapping[str, Any]) -> Zone:
    return Zone(
        label=_text(data, "label"),
        color=_text(data, "color"),
        items=tuple(
            Item(label=_text(item, "label"), sublabel=_optional_text(item, "sublabel"))
            for item in _mappings(data, "items")
        ),
    )


def parse_connection(data: Mapping[str, Any]) -> Connection:
    return Connection(
        source=_text(data, "from"),
        target=_text(data, "to"),
        label=_optional_text(data, "label"),
        style=_parse_style(data.get("style")),
    )


def parse_stage(data: Mapping[str, Any]) -> Stage:
    return Stage(
        label=_text(data, "label"),
        color=_text(data, "color"),
        items=tuple(item for item in _entries(data, "items") if isinstance(item, str)),
    )


def parse_layer(data: Mapping[str, Any]) -> Layer:
    return Layer(
        label=_text(data, "label"),
        color=_text(data, "color"),
        services=tuple(
            Service(name=_text(svc, "name"), description=_optional_text(svc, "description"))
            for svc in _mappings(data, "services")
        ),
    )


def parse_diagram(data: Mapping[str, Any]) -> DiagramSpec | None:
    """Build a diagram spec from its JSON shape.

    Missing arrays are treated as empty and missing optional text as
    absent. Returns None when the variant is missing or unknown.

    Args:
        data: Decoded JSON object with a ``variant`` discriminant

    Returns:
        The typed diagram, or None
    """
    if not isinstance(data, Mapping):
        logger.debug("Diagram content is %s, not an object", type(data).__name__)
        return None

    variant = data.get("variant")
    title = _optional_text(data, "title")
    caption = _optional_text(data, "caption")

    if variant == NetworkDiagram.variant:
        return NetworkDiagram(
            zones=tuple(parse_zone(z) for z in _mappings(data, "zones")),
            connections=tuple(parse_connection(c) for c in _mappings(data, "connections")),
            title=title,
            caption=caption,
        )
    if variant == DataflowDiagram.variant:
        return DataflowDiagram(
            stages=tuple(parse_stage(s) for s in _mappings(data, "stages")),
            title=title,
            caption=caption,
        )
    if variant == CloudArchDiagram.variant:
        return CloudArchDiagram(
            layers=tuple(parse_layer(layer) for layer in _mappings(data, "layers")),
            provider=_parse_provider(data.get("provider")),
            title=title,
            caption=caption,
        )

    logger.debug("Unknown diagram variant %r", variant)
    return None


def load_diagram_json(text: str) -> DiagramSpec | None:
    """Decode JSON text and parse it as a diagram.

    Raises:
        DiagramFormatError: If the text is not a JSON object
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DiagramFormatError(f"Diagram content is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise DiagramFormatError(
            f"Diagram content must be a JSON object, got {type(data).__name__}"
        )
    return parse_diagram(data)
