"""Size estimation for diagram containers.

The rendering surface does no text measurement, so containers are sized
from the length of the text they hold. The rules are binary: they only
decide whether a label is likely to wrap onto a second line. Every rule is
evaluated over the whole diagram rather than per container so that sibling
containers end up the same size.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .models import CloudArchDiagram, DataflowDiagram, NetworkDiagram

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .models import DiagramSpec, Layer, Stage, Zone


@dataclass
class LayoutConfig:
    """Configuration for layout calculations."""

    # Horizontal step between items in a row
    grid_x: float = 180
    # Inner padding on each side of a row of items
    padding: float = 40
    # Room left above the first item for the container label
    header_height: float = 36

    # Network zones
    zone_min_width: float = 300
    zone_height: float = 120
    zone_height_tall: float = 140
    zone_gap: float = 60

    # Cloud architecture layers
    layer_min_width: float = 350
    layer_height: float = 110
    layer_height_tall: float = 130
    layer_gap: float = 50

    # Dataflow stages
    stage_width: float = 200
    stage_min_height: float = 120
    stage_gap: float = 60
    stage_item_inset: float = 20
    stage_footer: float = 60
    item_spacing: float = 50
    item_spacing_tall: float = 65

    # Text length past which a label is assumed to wrap
    max_item_label_chars: int = 15
    max_sublabel_chars: int = 20

    # Canvas height hints for the embedding page
    canvas_min_height: float = 250
    dataflow_canvas_min_height: float = 200
    dataflow_canvas_footer: float = 100
    zone_canvas_height: float = 160
    zone_canvas_height_tall: float = 200
    layer_canvas_height: float = 150
    layer_canvas_height_tall: float = 180


DEFAULT_CONFIG = LayoutConfig()


def text_length(text: str | None) -> int:
    """Length of optional text; absent text counts as empty."""
    return len(text) if text else 0


def longest(texts: Iterable[str | None]) -> int:
    """Length of the longest text, 0 when there is none."""
    return max((text_length(t) for t in texts), default=0)


def container_width(item_count: int, minimum: float, config: LayoutConfig | None = None) -> float:
    """Width of a horizontal row container.

    Grows linearly with the number of children and never shrinks below
    ``minimum``.
    """
    if config is None:
        config = DEFAULT_CONFIG
    return max(minimum, item_count * config.grid_x + config.padding * 2)


def has_long_sublabel(zones: Sequence[Zone], config: LayoutConfig | None = None) -> bool:
    if config is None:
        config = DEFAULT_CONFIG
    sublabels = (item.sublabel for zone in zones for item in zone.items)
    return longest(sublabels) > config.max_sublabel_chars


def has_long_description(layers: Sequence[Layer], config: LayoutConfig | None = None) -> bool:
    if config is None:
        config = DEFAULT_CONFIG
    descriptions = (svc.description for layer in layers for svc in layer.services)
    return longest(descriptions) > config.max_sublabel_chars


def zone_height(zones: Sequence[Zone], config: LayoutConfig | None = None) -> float:
    """Height shared by every zone of a network diagram."""
    if config is None:
        config = DEFAULT_CONFIG
    if has_long_sublabel(zones, config):
        return config.zone_height_tall
    return config.zone_height


def layer_height(layers: Sequence[Layer], config: LayoutConfig | None = None) -> float:
    """Height shared by every layer of a cloud architecture diagram."""
    if config is None:
        config = DEFAULT_CONFIG
    if has_long_description(layers, config):
        return config.layer_height_tall
    return config.layer_height


def item_spacing(stages: Sequence[Stage], config: LayoutConfig | None = None) -> float:
    """Vertical step between dataflow items, the same for every stage."""
    if config is None:
        config = DEFAULT_CONFIG
    labels = (item for stage in stages for item in stage.items)
    if longest(labels) > config.max_item_label_chars:
        return config.item_spacing_tall
    return config.item_spacing


def max_stage_items(stages: Sequence[Stage]) -> int:
    return max((len(stage.items) for stage in stages), default=0)


def stage_height(stages: Sequence[Stage], spacing: float, config: LayoutConfig | None = None) -> float:
    """Height shared by every stage, sized for the fullest one."""
    if config is None:
        config = DEFAULT_CONFIG
    content = max_stage_items(stages) * spacing + config.stage_footer
    return max(config.stage_min_height, content)


def estimate_canvas_height(spec: DiagramSpec | None, config: LayoutConfig | None = None) -> float:
    """Rough height the embedding page should reserve for a diagram."""
    if config is None:
        config = DEFAULT_CONFIG

    if isinstance(spec, DataflowDiagram):
        spacing = item_spacing(spec.stages, config)
        rows = max(max_stage_items(spec.stages), 1)
        return max(config.dataflow_canvas_min_height, rows * spacing + config.dataflow_canvas_footer)

    if isinstance(spec, NetworkDiagram):
        per_zone = (
            config.zone_canvas_height_tall
            if has_long_sublabel(spec.zones, config)
            else config.zone_canvas_height
        )
        return max(config.canvas_min_height, max(len(spec.zones), 1) * per_zone)

    if isinstance(spec, CloudArchDiagram):
        per_layer = (
            config.layer_canvas_height_tall
            if has_long_description(spec.layers, config)
            else config.layer_canvas_height
        )
        return max(config.canvas_min_height, max(len(spec.layers), 1) * per_layer)

    return config.canvas_min_height
