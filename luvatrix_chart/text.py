from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from luvatrix_chart.errors import BackendError


RGBA = tuple[int, int, int, int]

DEFAULT_FONT_FAMILY = "Comic Mono"
DEFAULT_FONT_SIZE_PX = 14.0
DEFAULT_TEXT_COLOR: RGBA = (208, 218, 232, 255)
FONT_FALLBACK_PATTERNS = (
    "comicmono",
    "comic mono",
    "dejavusans",
    "dejavu sans",
    "helvetica",
    "arial",
    "menlo",
    "courier",
)
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)


@dataclass(frozen=True)
class TextStyle:
    font_family: str = DEFAULT_FONT_FAMILY
    font_size_px: float = DEFAULT_FONT_SIZE_PX
    color: RGBA = DEFAULT_TEXT_COLOR

    @classmethod
    def coerce(cls, style: "TextStyleLike") -> "TextStyle":
        """Accept a ``TextStyle``, a ``(family, size)`` pair or a bare size."""
        if isinstance(style, TextStyle):
            return style
        if isinstance(style, (int, float)) and not isinstance(style, bool):
            return cls(font_size_px=float(style))
        if isinstance(style, tuple) and len(style) == 2:
            family, size = style
            return cls(font_family=str(family), font_size_px=float(size))
        raise TypeError(f"unsupported text style: {style!r}")


TextStyleLike = Union[TextStyle, tuple[str, float], float, int]


def text_size(text: str, style: TextStyle) -> tuple[int, int]:
    font = _load_font(style.font_family, style.font_size_px)
    if not text:
        ascent, descent = font.getmetrics()
        return (0, max(1, int(ascent + descent)))
    left, top, right, bottom = font.getbbox(text)
    return (max(0, int(right - left)), max(1, int(bottom - top)))


def draw_text(dst: np.ndarray, x: int, y: int, text: str, style: TextStyle) -> None:
    if not text:
        return
    font = _load_font(style.font_family, style.font_size_px)
    try:
        mask = _render_mask(text, font)
    except OSError as exc:
        raise BackendError(f"failed to render text {text!r}: {exc}") from exc
    _blend_mask(dst, x, y, mask, style.color)


def _blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    h, w = mask.shape
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    cov = mask[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32) / 255.0
    src_alpha = (color[3] / 255.0) * cov
    if not np.any(src_alpha > 0):
        return

    patch = dst[y0:y1, x0:x1]
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0
    src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb_num = src_rgb * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)

    patch[:, :, :3] = np.clip(out_rgb_num / safe_alpha[:, :, None], 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(out_alpha * 255.0, 0, 255).astype(np.uint8)


@lru_cache(maxsize=128)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    image = Image.new("L", (max(1, int(right - left)), max(1, int(bottom - top))), 0)
    ImageDraw.Draw(image).text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    if font_size_px <= 0:
        raise BackendError(f"font size must be > 0, got {font_size_px}")
    font_path = _resolve_font_path(font_family)
    if font_path is None:
        return ImageFont.load_default()
    try:
        return ImageFont.truetype(str(font_path), size=max(1, int(round(font_size_px))))
    except OSError as exc:
        raise BackendError(f"cannot load font {font_path}: {exc}") from exc


@lru_cache(maxsize=16)
def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() or DEFAULT_FONT_FAMILY.lower()
    candidates: list[Path] = []
    for base in FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))

    for pattern in (wanted,) + FONT_FALLBACK_PATTERNS:
        needle = pattern.replace(" ", "")
        for path in candidates:
            if needle in path.name.lower().replace(" ", ""):
                return path
    return None
