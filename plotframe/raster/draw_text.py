from __future__ import annotations

from functools import lru_cache

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from plotframe.surface import normalize_quarter_turns


@lru_cache(maxsize=256)
def render_text_mask(text: str, font: ImageFont.FreeTypeFont) -> tuple[np.ndarray, int, int]:
    """Coverage mask for ``text`` and the offset of its top-left from the baseline origin."""
    if not text:
        return np.zeros((1, 1), dtype=np.uint8), 0, 0
    left, top, right, bottom = (int(v) for v in font.getbbox(text, anchor="ls"))
    width = max(1, right - left)
    height = max(1, bottom - top)
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font, anchor="ls")
    return np.asarray(image, dtype=np.uint8), left, top


def rotate_mask(mask: np.ndarray, left: int, top: int, *, rotate_deg: int) -> tuple[np.ndarray, int, int]:
    """Rotate a mask counter-clockwise about the baseline origin."""
    turns = normalize_quarter_turns(rotate_deg)
    if turns == 0:
        return mask, left, top
    h, w = mask.shape
    right = left + w
    bottom = top + h
    if turns == 1:
        return np.rot90(mask, k=1), top, -right
    if turns == 2:
        return np.rot90(mask, k=2), -right, -bottom
    return np.rot90(mask, k=3), -bottom, left
