from __future__ import annotations

from dataclasses import dataclass

from plotframe.font import DEFAULT_FONT
from plotframe.geometry import Length
from plotframe.style import WHITE
from plotframe.surface import Color


@dataclass(frozen=True)
class PlotConfig:
    """Default styling used when a Plot is constructed.

    ``font`` names the typeface for the title, axis labels, tick labels and
    legend. The default is Pillow's bundled font, which is available
    everywhere; any other name must resolve to an installed font file.
    """

    font: str = DEFAULT_FONT
    title_font_size: Length = 12.0
    label_font_size: Length = 12.0
    tick_font_size: Length = 10.0
    legend_font_size: Length = 12.0
    background: Color | None = WHITE
