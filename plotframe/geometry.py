from __future__ import annotations

from dataclasses import dataclass


Length = float

POINTS_PER_INCH = 72.0


def points(value: float) -> Length:
    return float(value)


def inches(value: float) -> Length:
    return float(value) * POINTS_PER_INCH


def millimeters(value: float) -> Length:
    return float(value) * POINTS_PER_INCH / 25.4


def centimeters(value: float) -> Length:
    return float(value) * POINTS_PER_INCH / 2.54


@dataclass(frozen=True)
class Point:
    x: Length = 0.0
    y: Length = 0.0

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in device lengths.

    Sizes are not validated: the padding solver may produce negative sizes
    for regions too small to hold their glyphs.
    """

    min: Point = Point()
    size: Point = Point()

    def max(self) -> Point:
        return self.min + self.size

    def center(self) -> Point:
        return Point(self.min.x + self.size.x / 2.0, self.min.y + self.size.y / 2.0)

    def translate(self, offset: Point) -> "Rect":
        return Rect(min=self.min + offset, size=self.size)
