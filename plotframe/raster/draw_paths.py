from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from PIL import Image, ImageDraw


PixelPolyline = Sequence[tuple[float, float]]


def _clip_box(
    polylines: Sequence[PixelPolyline],
    margin: float,
    width: int,
    height: int,
) -> tuple[int, int, int, int] | None:
    xs = [p[0] for line in polylines for p in line]
    ys = [p[1] for line in polylines for p in line]
    if not xs:
        return None
    x0 = max(0, int(math.floor(min(xs) - margin)))
    y0 = max(0, int(math.floor(min(ys) - margin)))
    x1 = min(width, int(math.ceil(max(xs) + margin)) + 1)
    y1 = min(height, int(math.ceil(max(ys) + margin)) + 1)
    if x1 <= x0 or y1 <= y0:
        return None
    return x0, y0, x1, y1


def stroke_mask(
    polylines: Sequence[PixelPolyline],
    *,
    width_px: int,
    canvas_width: int,
    canvas_height: int,
) -> tuple[np.ndarray, int, int] | None:
    """Coverage mask of stroked polylines, cropped to their bounds on the canvas."""
    box = _clip_box(polylines, width_px, canvas_width, canvas_height)
    if box is None:
        return None
    x0, y0, x1, y1 = box
    image = Image.new("L", (x1 - x0, y1 - y0), 0)
    draw = ImageDraw.Draw(image)
    for line in polylines:
        pts = [(x - x0, y - y0) for x, y in line]
        if len(pts) == 1:
            pts = pts * 2
        draw.line(pts, fill=255, width=max(1, width_px), joint="curve")
    return np.asarray(image, dtype=np.uint8), x0, y0


def fill_mask(
    polygons: Sequence[PixelPolyline],
    *,
    canvas_width: int,
    canvas_height: int,
) -> tuple[np.ndarray, int, int] | None:
    polygons = [poly for poly in polygons if len(poly) >= 3]
    box = _clip_box(polygons, 1.0, canvas_width, canvas_height)
    if box is None:
        return None
    x0, y0, x1, y1 = box
    image = Image.new("L", (x1 - x0, y1 - y0), 0)
    draw = ImageDraw.Draw(image)
    for poly in polygons:
        draw.polygon([(x - x0, y - y0) for x, y in poly], fill=255)
    return np.asarray(image, dtype=np.uint8), x0, y0
