from .canvas import DEFAULT_DPI, RasterCanvas, blend_mask, new_canvas
from .draw_text import render_text_mask, rotate_mask

__all__ = [
    "DEFAULT_DPI",
    "RasterCanvas",
    "blend_mask",
    "new_canvas",
    "render_text_mask",
    "rotate_mask",
]
