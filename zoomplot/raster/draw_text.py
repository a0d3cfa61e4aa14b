from __future__ import annotations

from functools import lru_cache
import logging
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from zoomplot.raster.canvas import ClipBox, intersect_clip
from zoomplot.surface import RGBA, Anchor, FontFamily


LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_SIZE_PX = 10.0
FONT_FAMILY_PATTERNS: dict[str, tuple[str, ...]] = {
    "proportional": (
        "dejavusans",
        "dejavu sans",
        "liberationsans",
        "helvetica",
        "arial",
    ),
    "monospace": (
        "dejavusansmono",
        "dejavu sans mono",
        "liberationmono",
        "menlo",
        "monaco",
        "courier new",
        "courier",
    ),
}
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)


def draw_text(
    dst: np.ndarray,
    x: float,
    y: float,
    text: str,
    color: RGBA,
    *,
    anchor: Anchor = "left_top",
    font_family: FontFamily = "proportional",
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    clip: ClipBox | None = None,
) -> None:
    if not text:
        return
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    mask = _render_mask(text=text, font=font)
    h, w = mask.shape
    ox, oy = anchor_offset(anchor, w, h)
    _blend_mask(dst, int(round(x + ox)), int(round(y + oy)), mask, color, clip=clip)


def text_size(
    text: str,
    *,
    font_family: FontFamily = "proportional",
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> tuple[int, int]:
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    if not text:
        ascent, descent = font.getmetrics()
        return (0, max(1, int(ascent + descent)))
    left, top, right, bottom = font.getbbox(text)
    return (max(0, int(right - left)), max(1, int(bottom - top)))


def anchor_offset(anchor: Anchor, width: int, height: int) -> tuple[float, float]:
    horizontal, vertical = anchor.split("_")
    if horizontal == "left":
        ox = 0.0
    elif horizontal == "center":
        ox = -width / 2.0
    elif horizontal == "right":
        ox = -float(width)
    else:
        raise ValueError(f"unknown text anchor: {anchor}")
    if vertical == "top":
        oy = 0.0
    elif vertical == "center":
        oy = -height / 2.0
    elif vertical == "bottom":
        oy = -float(height)
    else:
        raise ValueError(f"unknown text anchor: {anchor}")
    return (ox, oy)


def _blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA, *, clip: ClipBox | None) -> None:
    box = intersect_clip(dst, clip)
    h, w = mask.shape
    if box is None or h <= 0 or w <= 0:
        return

    x0 = max(box[0], x)
    y0 = max(box[1], y)
    x1 = min(box[2] + 1, x + w)
    y1 = min(box[3] + 1, y + h)
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
    out_rgb = out_rgb_num / safe_alpha[:, :, None]

    patch[:, :, :3] = np.clip(out_rgb, 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(out_alpha * 255.0, 0, 255).astype(np.uint8)


@lru_cache(maxsize=128)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family)
    if font_path is not None:
        try:
            return ImageFont.truetype(str(font_path), size=size)
        except OSError as exc:
            LOGGER.warning("could not load font %s (%s); using Pillow default", font_path, exc)
    else:
        LOGGER.warning("no %s font found; using Pillow default", font_family)
    return ImageFont.load_default(size=size)


def _resolve_font_path(font_family: str) -> Path | None:
    patterns = FONT_FAMILY_PATTERNS.get(font_family, FONT_FAMILY_PATTERNS["proportional"])

    candidates: list[Path] = []
    for base in FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            if stem == p or (font_family == "monospace" and p in stem):
                return path
    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            if path.stem.lower().replace(" ", "").startswith(p):
                return path
    return None
