"""
Geometry primitives shared by the layout engine, animator and overview index.

Rectangles use (x0, y0, x1, y1) corners. Normalized rectangles live inside the
unit square and describe a region of a page (crop margins).
"""

import math
from dataclasses import dataclass

from enums import Axis


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def distance(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Rect:
    x0: float
    y0: float
    x1: float
    y1: float

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    def contains(self, p: Point) -> bool:
        return self.x0 <= p.x < self.x1 and self.y0 <= p.y < self.y1


UNIT_SQUARE = Rect(0.0, 0.0, 1.0, 1.0)


def lerp(a: float, b: float, x: float) -> float:
    return a + (b - a) * x


def lerp_rect(a: Rect, b: Rect, x: float) -> Rect:
    """Interpolate each corner coordinate of two rectangles."""
    return Rect(
        lerp(a.x0, b.x0, x),
        lerp(a.y0, b.y0, x),
        lerp(a.x1, b.x1, x),
        lerp(a.y1, b.y1, x),
    )


# Axis projections. The major axis is the scroll direction.

def major(axis: Axis, size: Size | Rect) -> float:
    return size.width if axis == Axis.HORIZONTAL else size.height


def minor(axis: Axis, size: Size | Rect) -> float:
    return size.height if axis == Axis.HORIZONTAL else size.width


def major_span(axis: Axis, rect: Rect) -> tuple[float, float]:
    if axis == Axis.HORIZONTAL:
        return rect.x0, rect.x1
    return rect.y0, rect.y1


def minor_span(axis: Axis, rect: Rect) -> tuple[float, float]:
    if axis == Axis.HORIZONTAL:
        return rect.y0, rect.y1
    return rect.x0, rect.x1


def rect_on_axis(axis: Axis, major_min: float, major_max: float,
                 minor_min: float, minor_max: float) -> Rect:
    """Build a screen rectangle from major/minor spans."""
    if axis == Axis.HORIZONTAL:
        return Rect(major_min, minor_min, major_max, minor_max)
    return Rect(minor_min, major_min, minor_max, major_max)
