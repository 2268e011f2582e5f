from __future__ import annotations

from dataclasses import dataclass, field

from plotframe.drawarea import DrawArea
from plotframe.font import Font
from plotframe.geometry import Length, Point, Rect, points
from plotframe.plotter import Thumbnailer
from plotframe.style import TextStyle


@dataclass(frozen=True)
class LegendEntry:
    text: str
    thumbnails: tuple[Thumbnailer, ...] = ()


@dataclass
class Legend:
    """Entries of a thumbnail and a name, stacked in a corner of the data area.

    By default the legend sits in the bottom-right corner with the text to
    the left of the thumbnails; ``top`` and ``left`` move it.
    """

    text_style: TextStyle
    # Vertical gap between entries.
    padding: Length = 0.0
    top: bool = False
    left: bool = False
    x_offset: Length = 0.0
    y_offset: Length = 0.0
    thumbnail_width: Length = points(20)
    _entries: list[LegendEntry] = field(default_factory=list)

    def add(self, name: str, *thumbnails: Thumbnailer) -> None:
        self._entries.append(LegendEntry(text=name, thumbnails=tuple(thumbnails)))

    def entries(self) -> list[LegendEntry]:
        return list(self._entries)

    def entry_height(self) -> Length:
        return max((self.text_style.height(e.text) for e in self._entries), default=0.0)

    def draw(self, area: DrawArea) -> None:
        if not self._entries:
            return
        space = self.text_style.width(" ")
        icon_x = area.min.x
        text_x = icon_x + self.thumbnail_width + space
        xalign = 0.0
        if not self.left:
            icon_x = area.max().x - self.thumbnail_width
            text_x = icon_x - space
            xalign = -1.0
        icon_x += self.x_offset
        text_x += self.x_offset

        entry_h = self.entry_height()
        y = area.max().y - entry_h
        if not self.top:
            y = area.min.y + (entry_h + self.padding) * (len(self._entries) - 1)
        y += self.y_offset

        for entry in self._entries:
            icon = area.with_rect(Rect(min=Point(icon_x, y), size=Point(self.thumbnail_width, entry_h)))
            for thumb in entry.thumbnails:
                thumb.thumbnail(icon)
            yoffs = (entry_h - self.text_style.height(entry.text)) / 2.0
            area.fill_text(self.text_style, text_x, y + yoffs, xalign, 0, entry.text)
            y -= entry_h + self.padding


def make_legend(font: Font) -> Legend:
    return Legend(text_style=TextStyle(font=font))
