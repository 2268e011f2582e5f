from __future__ import annotations

import math
from pathlib import Path as FsPath
from typing import Sequence
import xml.etree.ElementTree as ET

from plotframe.errors import BackendError
from plotframe.font import DEFAULT_FONT, Font
from plotframe.geometry import Length
from plotframe.style import BLACK
from plotframe.surface import Color, Path, normalize_quarter_turns


SVG_NS = "http://www.w3.org/2000/svg"


def _fmt(value: float) -> str:
    out = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if out in ("-0", "") else out


def _rgb(color: Color) -> str:
    return f"rgb({color[0]},{color[1]},{color[2]})"


class SvgCanvas:
    """Vector surface serialised as an SVG document, one user unit per point."""

    def __init__(self, width: Length, height: Length) -> None:
        if not (math.isfinite(width) and math.isfinite(height)) or width <= 0 or height <= 0:
            raise BackendError(f"invalid svg canvas size: {width!r}x{height!r}")
        self._width = float(width)
        self._height = float(height)
        self._root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "version": "1.1",
                "width": f"{_fmt(self._width)}pt",
                "height": f"{_fmt(self._height)}pt",
                "viewBox": f"0 0 {_fmt(self._width)} {_fmt(self._height)}",
            },
        )
        self._color: Color = BLACK
        self._line_width: Length = 1.0
        self._dashes: tuple[Length, ...] = ()
        self._dash_offset: Length = 0.0

    def size(self) -> tuple[Length, Length]:
        return (self._width, self._height)

    def set_color(self, color: Color) -> None:
        self._color = color

    def set_line_width(self, width: Length) -> None:
        self._line_width = float(width)

    def set_line_dash(self, dashes: Sequence[Length], offset: Length) -> None:
        self._dashes = tuple(float(d) for d in dashes)
        self._dash_offset = float(offset)

    def _path_data(self, path: Path) -> str:
        parts: list[str] = []
        for pts, closed in path.subpaths(tolerance=0.05):
            head, *rest = pts
            parts.append(f"M{_fmt(head[0])} {_fmt(self._height - head[1])}")
            parts.extend(f"L{_fmt(x)} {_fmt(self._height - y)}" for x, y in rest)
            if closed:
                parts.append("Z")
        return " ".join(parts)

    def stroke(self, path: Path) -> None:
        if self._line_width <= 0:
            return
        d = self._path_data(path)
        if not d:
            return
        attrs = {
            "d": d,
            "fill": "none",
            "stroke": _rgb(self._color),
            "stroke-width": _fmt(self._line_width),
            "stroke-linejoin": "round",
        }
        if self._color[3] != 255:
            attrs["stroke-opacity"] = _fmt(self._color[3] / 255.0)
        if self._dashes:
            attrs["stroke-dasharray"] = ",".join(_fmt(d) for d in self._dashes)
            attrs["stroke-dashoffset"] = _fmt(self._dash_offset)
        ET.SubElement(self._root, "path", attrs)

    def fill(self, path: Path) -> None:
        d = self._path_data(path)
        if not d:
            return
        attrs = {"d": d, "fill": _rgb(self._color), "stroke": "none"}
        if self._color[3] != 255:
            attrs["fill-opacity"] = _fmt(self._color[3] / 255.0)
        ET.SubElement(self._root, "path", attrs)

    def fill_string(self, font: Font, x: Length, y: Length, text: str, *, rotate_deg: int = 0) -> None:
        if not text:
            return
        turns = normalize_quarter_turns(rotate_deg)
        sx = _fmt(x)
        sy = _fmt(self._height - y)
        attrs = {
            "x": sx,
            "y": sy,
            "font-family": "sans-serif" if font.name == DEFAULT_FONT else font.name,
            "font-size": _fmt(font.size),
            "fill": _rgb(self._color),
        }
        if self._color[3] != 255:
            attrs["fill-opacity"] = _fmt(self._color[3] / 255.0)
        if turns:
            attrs["transform"] = f"rotate({-90 * turns} {sx} {sy})"
        el = ET.SubElement(self._root, "text", attrs)
        el.text = text

    def to_element(self) -> ET.Element:
        return self._root

    def to_markup(self) -> str:
        return ET.tostring(self._root, encoding="unicode")

    def save(self, path: str | FsPath) -> None:
        ET.ElementTree(self._root).write(str(path), encoding="utf-8", xml_declaration=True)
