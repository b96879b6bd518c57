from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Generic, Mapping

from luvatrix_chart.geometry import LabelAreas, LabelAreaSpec, Position, R, Region
from luvatrix_chart.splitter import CanvasSplit

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutResult(Generic[R]):
    interior: R
    label_areas: LabelAreas[R]


def inset_offsets(position: Position, size: int, width: int, height: int) -> tuple[int, int, int, int]:
    """Relative ``(x, y, width, height)`` of an inset band flush with one interior edge."""
    extent = height if position.is_horizontal else width
    thickness = min(size, max(0, extent))
    if thickness < size:
        LOGGER.warning(
            "inset label area %s clamped to interior extent; requested=%d available=%d",
            position.name.lower(),
            size,
            extent,
        )
    if position is Position.TOP:
        return (0, 0, width, thickness)
    if position is Position.BOTTOM:
        return (0, height - thickness, width, thickness)
    if position is Position.LEFT:
        return (0, 0, thickness, height)
    return (width - thickness, 0, thickness, height)


def overlay_inset(interior: Region, position: Position, size: int) -> Region:
    width, height = interior.dim_in_pixel()
    return interior.shrink(*inset_offsets(position, size, width, height))


def resolve_label_areas(
    split: CanvasSplit[R],
    specs: Mapping[Position, LabelAreaSpec],
    *,
    on_inset: Callable[[R], R] | None = None,
) -> LayoutResult[R]:
    """Assemble the final label areas from the split bands and inset overlays.

    Inset areas overlap the interior and may overlap each other at corners;
    the interior itself is never reduced by them.
    """
    resolved: dict[Position, R | None] = {}
    for position in Position:
        spec = specs.get(position, LabelAreaSpec())
        if spec.size == 0:
            resolved[position] = None
        elif spec.inset:
            if spec.size < 0:
                LOGGER.warning("ignoring inset label area %s with negative size %d", position.name.lower(), spec.size)
                resolved[position] = None
                continue
            area = overlay_inset(split.interior, position, spec.size)
            resolved[position] = on_inset(area) if on_inset is not None else area
        else:
            if spec.size < 0:
                LOGGER.warning(
                    "label area %s has negative size %d; its band falls outside the %s edge",
                    position.name.lower(),
                    spec.size,
                    position.name.lower(),
                )
            resolved[position] = split.bands[position]

    LOGGER.debug(
        "resolved chart layout interior=%s label_areas=%s",
        split.interior.dim_in_pixel(),
        [p.name.lower() for p, area in resolved.items() if area is not None],
    )
    return LayoutResult(
        interior=split.interior,
        label_areas=LabelAreas(
            top=resolved[Position.TOP],
            bottom=resolved[Position.BOTTOM],
            left=resolved[Position.LEFT],
            right=resolved[Position.RIGHT],
        ),
    )
