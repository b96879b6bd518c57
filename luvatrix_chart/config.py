from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
import tomllib
from typing import Any, Mapping

from luvatrix_chart.geometry import LabelAreaSpec, Margin, Position
from luvatrix_chart.text import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE_PX, TextStyle


@dataclass(frozen=True)
class LayoutConfig:
    margin: Margin = field(default_factory=Margin)
    label_areas: dict[Position, LabelAreaSpec] = field(default_factory=dict)
    caption: tuple[str, TextStyle] | None = None


def load_layout_config(path: str | Path) -> LayoutConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"layout config not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    return layout_config_from_dict(raw)


def layout_config_from_dict(raw: Mapping[str, Any]) -> LayoutConfig:
    uniform = _coerce_margin_value(raw.get("margin", 0), "margin")
    margin = Margin.uniform(uniform)
    overrides = _coerce_table(raw.get("margins", {}), "margins")
    for side, value in overrides.items():
        if side not in ("top", "bottom", "left", "right"):
            raise ValueError(f"unknown margin side: margins.{side}")
        margin = replace(margin, **{side: _coerce_margin_value(value, f"margins.{side}")})

    label_areas: dict[Position, LabelAreaSpec] = {}
    for side, table in _coerce_table(raw.get("label_areas", {}), "label_areas").items():
        try:
            position = Position[side.upper()]
        except KeyError as exc:
            raise ValueError(f"unknown label area side: label_areas.{side}") from exc
        entry = _coerce_table(table, f"label_areas.{side}")
        label_areas[position] = LabelAreaSpec(
            size=_coerce_int(entry.get("size", 0), f"label_areas.{side}.size"),
            inset=_coerce_bool(entry.get("inset", False), f"label_areas.{side}.inset"),
        )

    caption = None
    if "caption" in raw:
        entry = _coerce_table(raw["caption"], "caption")
        try:
            text = entry["text"]
        except KeyError as exc:
            raise ValueError(f"caption missing required field: {exc.args[0]}") from exc
        if not isinstance(text, str):
            raise ValueError("caption.text must be a string")
        family = entry.get("font_family", DEFAULT_FONT_FAMILY)
        if not isinstance(family, str):
            raise ValueError("caption.font_family must be a string")
        size = entry.get("font_size_px", DEFAULT_FONT_SIZE_PX)
        if isinstance(size, bool) or not isinstance(size, (int, float)) or size <= 0:
            raise ValueError("caption.font_size_px must be a number > 0")
        caption = (text, TextStyle(font_family=family, font_size_px=float(size)))

    return LayoutConfig(margin=margin, label_areas=label_areas, caption=caption)


def _coerce_table(value: Any, field_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{field_name} must be a table")
    return value


def _coerce_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer")
    return value


def _coerce_margin_value(value: Any, field_name: str) -> int:
    out = _coerce_int(value, field_name)
    if out < 0:
        raise ValueError(f"{field_name} must be >= 0")
    return out


def _coerce_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{field_name} must be a boolean")
    return value
