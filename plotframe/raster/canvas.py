from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from PIL import Image

from plotframe.errors import BackendError
from plotframe.font import Font
from plotframe.geometry import POINTS_PER_INCH, Length
from plotframe.raster.draw_paths import fill_mask, stroke_mask
from plotframe.raster.draw_text import render_text_mask, rotate_mask
from plotframe.style import BLACK, WHITE
from plotframe.surface import Color, Path, dash_polyline


DEFAULT_DPI = 96.0


def new_canvas(width: int, height: int, color: Color = (0, 0, 0, 255)) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :, 0] = color[0]
    canvas[:, :, 1] = color[1]
    canvas[:, :, 2] = color[2]
    canvas[:, :, 3] = color[3]
    return canvas


def blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: Color) -> None:
    """Composite ``color`` over ``dst`` with per-pixel coverage ``mask`` placed at (x, y)."""
    h, w = mask.shape
    if h <= 0 or w <= 0:
        return

    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    sx0 = x0 - x
    sy0 = y0 - y
    cov = mask[sy0 : sy0 + (y1 - y0), sx0 : sx0 + (x1 - x0)].astype(np.float32) / 255.0
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

    patch[:, :, :3] = np.clip(np.rint(out_rgb), 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(np.rint(out_alpha * 255.0), 0, 255).astype(np.uint8)


class RasterCanvas:
    """RGBA pixel surface. Device lengths are points; pixels follow ``dpi``."""

    def __init__(
        self,
        width: Length,
        height: Length,
        *,
        dpi: float = DEFAULT_DPI,
        background: Color = (255, 255, 255, 0),
    ) -> None:
        if not (math.isfinite(width) and math.isfinite(height)) or width <= 0 or height <= 0:
            raise BackendError(f"invalid raster canvas size: {width!r}x{height!r}")
        if not dpi > 0:
            raise ValueError("dpi must be > 0")
        self._width = float(width)
        self._height = float(height)
        self.dpi = float(dpi)
        self._scale = self.dpi / POINTS_PER_INCH
        w_px = max(1, int(math.ceil(self._width * self._scale - 1e-9)))
        h_px = max(1, int(math.ceil(self._height * self._scale - 1e-9)))
        try:
            self.pixels = new_canvas(w_px, h_px, color=background)
        except (MemoryError, ValueError) as exc:
            raise BackendError(f"cannot allocate {w_px}x{h_px} raster canvas") from exc
        self._color: Color = BLACK
        self._line_width: Length = 1.0
        self._dashes: tuple[Length, ...] = ()
        self._dash_offset: Length = 0.0

    @property
    def pixel_size(self) -> tuple[int, int]:
        return (self.pixels.shape[1], self.pixels.shape[0])

    def size(self) -> tuple[Length, Length]:
        return (self._width, self._height)

    def set_color(self, color: Color) -> None:
        self._color = color

    def set_line_width(self, width: Length) -> None:
        self._line_width = float(width)

    def set_line_dash(self, dashes: Sequence[Length], offset: Length) -> None:
        self._dashes = tuple(float(d) for d in dashes)
        self._dash_offset = float(offset)

    def _to_px(self, x: float, y: float) -> tuple[float, float]:
        return (x * self._scale, self.pixels.shape[0] - y * self._scale)

    def stroke(self, path: Path) -> None:
        if self._line_width <= 0:
            return
        lines: list[list[tuple[float, float]]] = []
        for pts, closed in path.subpaths(tolerance=0.5 / self._scale):
            if closed and len(pts) > 1:
                pts = pts + [pts[0]]
            if self._dashes:
                lines.extend(dash_polyline(pts, self._dashes, self._dash_offset))
            else:
                lines.append(pts)
        px_lines = [[self._to_px(x, y) for x, y in pts] for pts in lines if pts]
        width, height = self.pixel_size
        res = stroke_mask(
            px_lines,
            width_px=int(round(self._line_width * self._scale)),
            canvas_width=width,
            canvas_height=height,
        )
        if res is None:
            return
        mask, x0, y0 = res
        blend_mask(self.pixels, x0, y0, mask, self._color)

    def fill(self, path: Path) -> None:
        polygons = [[self._to_px(x, y) for x, y in pts] for pts, _ in path.subpaths(tolerance=0.5 / self._scale)]
        width, height = self.pixel_size
        res = fill_mask(polygons, canvas_width=width, canvas_height=height)
        if res is None:
            return
        mask, x0, y0 = res
        blend_mask(self.pixels, x0, y0, mask, self._color)

    def fill_string(self, font: Font, x: Length, y: Length, text: str, *, rotate_deg: int = 0) -> None:
        if not text:
            return
        mask, left, top = render_text_mask(text, font.pil_font(self._scale))
        mask, left, top = rotate_mask(mask, left, top, rotate_deg=rotate_deg)
        px, py = self._to_px(x, y)
        blend_mask(self.pixels, int(round(px)) + left, int(round(py)) + top, mask, self._color)

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels)

    def to_rgb_image(self, background: Color = WHITE) -> Image.Image:
        base = Image.new("RGBA", self.pixel_size, background)
        return Image.alpha_composite(base, self.to_image()).convert("RGB")
