from __future__ import annotations

import math
from typing import Protocol, Sequence, runtime_checkable

from plotframe.font import Font
from plotframe.geometry import Length, Point, Rect


Color = tuple[int, int, int, int]
Polyline = list[tuple[float, float]]


class Path:
    """Sequence of move/line/arc/close commands in device lengths."""

    def __init__(self) -> None:
        self._commands: list[tuple] = []

    def __len__(self) -> int:
        return len(self._commands)

    @property
    def commands(self) -> tuple[tuple, ...]:
        return tuple(self._commands)

    def move(self, p: Point) -> "Path":
        self._commands.append(("M", float(p.x), float(p.y)))
        return self

    def line(self, p: Point) -> "Path":
        self._commands.append(("L", float(p.x), float(p.y)))
        return self

    def arc(self, center: Point, radius: Length, start: float, angle: float) -> "Path":
        """Counter-clockwise arc from ``start`` sweeping ``angle`` radians."""
        self._commands.append(("A", float(center.x), float(center.y), float(radius), float(start), float(angle)))
        return self

    def close(self) -> "Path":
        self._commands.append(("Z",))
        return self

    def subpaths(self, tolerance: float = 0.25) -> list[tuple[Polyline, bool]]:
        """Flatten into ``(points, closed)`` polylines, arcs approximated within ``tolerance``."""
        out: list[tuple[Polyline, bool]] = []
        current: Polyline = []
        for cmd in self._commands:
            op = cmd[0]
            if op == "M":
                if current:
                    out.append((current, False))
                current = [(cmd[1], cmd[2])]
            elif op == "L":
                current.append((cmd[1], cmd[2]))
            elif op == "A":
                _, cx, cy, r, start, angle = cmd
                pts = _flatten_arc(cx, cy, r, start, angle, tolerance)
                # Joins the current subpath; after a close it starts a new one.
                current.extend(pts)
            elif op == "Z":
                if current:
                    out.append((current, True))
                current = []
        if current:
            out.append((current, False))
        return out


def rect_path(rect: Rect) -> Path:
    mx = rect.max()
    return (
        Path()
        .move(rect.min)
        .line(Point(mx.x, rect.min.y))
        .line(mx)
        .line(Point(rect.min.x, mx.y))
        .close()
    )


def _flatten_arc(cx: float, cy: float, r: float, start: float, angle: float, tolerance: float) -> Polyline:
    if r <= 0 or angle == 0:
        return [(cx + r * math.cos(start), cy + r * math.sin(start))]
    tol = min(max(1e-6, tolerance), r)
    step = 2.0 * math.acos(1.0 - tol / r)
    n = max(4, int(math.ceil(abs(angle) / step)))
    return [
        (cx + r * math.cos(start + angle * i / n), cy + r * math.sin(start + angle * i / n))
        for i in range(n + 1)
    ]


def dash_polyline(points: Polyline, dashes: Sequence[float], offset: float = 0.0) -> list[Polyline]:
    """Split a polyline into the "on" segments of a dash pattern."""
    if len(points) < 2 or not dashes or sum(dashes) <= 0:
        return [list(points)]
    pattern = [float(d) for d in dashes]
    if len(pattern) % 2 == 1:
        pattern = pattern * 2
    idx = 0
    remaining = pattern[0]
    phase = float(offset) % sum(pattern)
    while phase > 0:
        if phase >= remaining:
            phase -= remaining
            idx = (idx + 1) % len(pattern)
            remaining = pattern[idx]
        else:
            remaining -= phase
            phase = 0.0
    out: list[Polyline] = []
    seg: Polyline = [points[0]] if idx % 2 == 0 else []
    for (x0, y0), (x1, y1) in zip(points[:-1], points[1:]):
        seg_len = math.hypot(x1 - x0, y1 - y0)
        pos = 0.0
        while seg_len - pos > remaining:
            pos += remaining
            t = pos / seg_len
            p = (x0 + (x1 - x0) * t, y0 + (y1 - y0) * t)
            if idx % 2 == 0:
                seg.append(p)
                out.append(seg)
                seg = []
            else:
                seg = [p]
            idx = (idx + 1) % len(pattern)
            remaining = pattern[idx]
        remaining -= seg_len - pos
        if idx % 2 == 0:
            seg.append((x1, y1))
    if len(seg) >= 2:
        out.append(seg)
    return out


def normalize_quarter_turns(rotate_deg: int) -> int:
    if rotate_deg % 90 != 0:
        raise ValueError("rotate_deg must be a multiple of 90")
    return (rotate_deg // 90) % 4


@runtime_checkable
class Surface(Protocol):
    """A drawing target with y-up device coordinates in points."""

    def size(self) -> tuple[Length, Length]: ...

    def set_color(self, color: Color) -> None: ...

    def set_line_width(self, width: Length) -> None: ...

    def set_line_dash(self, dashes: Sequence[Length], offset: Length) -> None: ...

    def stroke(self, path: Path) -> None: ...

    def fill(self, path: Path) -> None: ...

    def fill_string(self, font: Font, x: Length, y: Length, text: str, *, rotate_deg: int = 0) -> None: ...
