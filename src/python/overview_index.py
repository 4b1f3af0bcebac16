"""
Overview panel index: maps page numbers to points in a panel and back.

Two layouts are available. The grid is predictable: rows of equally spaced
nodes. The fractal tiles a self-similar space-filling curve along the
panel's long side, packing many pages densely while keeping consecutive
pages next to each other.
"""

import logging
import math

import numpy as np

from custom_types import PathBuilder
from enums import OverviewLayout
from geometry import Point, Size

logger = logging.getLogger(__name__)

# Child squares of the fractal are rotated by these angles (radians) so tiles
# don't line up on axis-aligned seams
SHEAR_A = 0.015
SHEAR_B = 0.075


def _round(x: float) -> int:
    # halves round away from zero
    return int(math.floor(x + 0.5))


class Polyline:
    """Minimal PathBuilder collecting the points of a traversal path."""

    def __init__(self, start: Point | None = None) -> None:
        self.points: list[Point] = [] if start is None else [start]

    def line_to(self, point: Point) -> None:
        self.points.append(point)


class GridIndex:
    """Pages in rows, the row length chosen to suit the panel's aspect ratio."""

    def __init__(self, length: int) -> None:
        self.length = length
        self.container: Size | None = None
        self.columns = 1
        self.gap = 0.0
        self.origin = Point(0.0, 0.0)

    def layout(self, size: Size) -> None:
        if self.container == size:
            return
        self.container = size

        width = max(2.0, size.width)
        height = max(2.0, size.height)

        if self.length == 0:
            self.columns = 1
            self.gap = min(width, height)
            self.origin = Point(width / 2.0, height / 2.0)
            return

        if height >= width:
            ratio = height / width
            self.columns = max(1, _round(math.sqrt(self.length / ratio)))
            self.gap = min(width / self.columns,
                           height / math.ceil(self.length / self.columns))
        else:
            ratio = width / height
            rows = max(1, math.ceil(math.sqrt(self.length / ratio)))
            self.gap = min(height / rows, width / math.ceil(self.length / rows))
            # refill rows along the long side so nothing overflows the panel
            self.columns = max(1, math.floor(width / self.gap + 1e-9))

        figure_height = self.gap * math.ceil(self.length / self.columns)
        self.origin = Point(
            (width - self.columns * self.gap + self.gap) / 2.0,
            (height - figure_height + self.gap) / 2.0,
        )
        logger.debug("Grid overview: %d columns, gap %.2f", self.columns, self.gap)

    def position(self, idx: int) -> Point:
        if self.length == 0:
            return self.origin
        return Point(
            self.origin.x + (idx % self.columns) * self.gap,
            self.origin.y + (idx // self.columns) * self.gap,
        )

    def nearest(self, p: Point) -> int:
        if self.length == 0 or self.gap <= 0.0:
            return 0
        x = math.floor((p.x - self.origin.x + self.gap / 2.0) / self.gap)
        y = math.floor((p.y - self.origin.y + self.gap / 2.0) / self.gap)
        x = min(max(x, 0), self.columns - 1)
        y = max(y, 0)
        return min(max(y * self.columns + x, 0), self.length - 1)

    def connect(self, idx: int, path: PathBuilder) -> None:
        p = self.position(idx)
        if idx > 0 and idx % self.columns == 0:
            # diagonal hop from the end of one row to the start of the next
            p0 = self.position(idx - 1)
            path.line_to(Point(p0.x - self.gap / 2.0, p0.y + self.gap / 2.0))
            path.line_to(Point(p.x + self.gap / 2.0, p.y - self.gap / 2.0))
        path.line_to(p)

    def gap_between_nodes(self) -> float:
        return self.gap


def layout_square(origin: np.ndarray, u: np.ndarray, v: np.ndarray, order: int,
                  acc: list[np.ndarray]) -> None:
    """Append the curve points of one square spanned by `u` and `v` to `acc`."""
    if order == 0:
        acc.append(origin + v * 0.5)
        return
    if order == 1:
        acc.append(origin + u * -0.25 + v * 0.25)
        acc.append(origin + u * -0.25 + v * 0.75)
        acc.append(origin + u * 0.25 + v * 0.75)
        acc.append(origin + u * 0.25 + v * 0.25)
        return

    sa, ca = math.sin(SHEAR_A), math.cos(SHEAR_A)
    sb, cb = math.sin(SHEAR_B), math.cos(SHEAR_B)
    scale = 0.5 / (ca + sb)

    nu = v * cb + u * sb
    nv = u * cb - v * sb
    no = origin + (-u * (ca + sb) + 0.5 * nu) * scale
    layout_square(no, nu * scale, nv * scale, order - 1, acc)

    nu = u * ca + v * sa
    nv = -u * sa + v * ca
    no = origin + (-u * ca + v * cb + 0.5 * nu) * scale
    layout_square(no, nu * scale, nv * scale, order - 1, acc)

    nu = u * ca - v * sa
    nv = v * ca + u * sa
    no = origin + (v * (cb + sa) + 0.5 * nu) * scale
    layout_square(no, nu * scale, nv * scale, order - 1, acc)

    nu = -v * cb + u * sb
    nv = -u * cb - v * sb
    no = origin + (u * ca + v * cb + 0.5 * nu) * scale
    layout_square(no, nu * scale, nv * scale, order - 1, acc)


def generate_tile(order: int) -> np.ndarray:
    """Curve points of one tile, rescaled into the unit square.

    Returns:
        np.ndarray: (4**order, 2) array of (x, y) points; consecutive rows are
        consecutive pages.
    """
    if order == 0:
        return np.array([[0.5, 0.5]])

    acc: list[np.ndarray] = []
    layout_square(np.zeros(2), np.array([1.0, 0.0]), np.array([0.0, 1.0]), order, acc)
    points = np.array(acc)

    # leave half a node's spacing around the curve
    notches = float(2 ** (order + 1))
    enlargen = notches / (notches - 2.0)

    x0 = min(0.0, points[:, 0].min())
    x1 = max(0.0, points[:, 0].max())
    y0 = min(0.5, points[:, 1].min())
    y1 = max(0.5, points[:, 1].max())
    w = x1 - x0
    h = y1 - y0

    u = (1.0 / notches + points[:, 0] - x0) / (w * enlargen)
    v = (1.0 / notches + points[:, 1] - y0 + (1.0 - h * enlargen) / 2.0) / (w * enlargen)
    return np.column_stack((v, u))


class FractalIndex:
    """Pages along repeated tiles of a space-filling curve.

    Lookups from a point first pick the tile by division, then scan that
    tile's points linearly. Tiles hold 4**order points and the order stays
    small for real documents.
    """

    def __init__(self, length: int) -> None:
        self.length = length
        self.container: Size | None = None
        self.order = 0
        self.square: np.ndarray | None = None
        self.per_square = 1
        self.origin = Point(0.0, 0.0)
        self.scale = 1.0
        self._tall = False

    @property
    def tiles(self) -> int:
        return max(1, math.ceil(self.length / self.per_square))

    def layout(self, size: Size) -> None:
        if self.container == size:
            return
        self.container = size

        width = max(2.0, size.width)
        height = max(2.0, size.height)
        longer = max(width, height)
        shorter = min(width, height)
        ratio = longer / shorter
        self._tall = height > width

        order = _round(math.log(max(1.0, self.length / ratio), 4))
        if order != self.order or self.square is None:
            self.order = order
            self.square = generate_tile(order)
            self.per_square = 4 ** order
            logger.debug("Fractal overview: order %d, %d pages per tile", order, self.per_square)

        # number of tiles, rounded up to a half tile
        extent = math.ceil((self.length / self.per_square) * 2.0) / 2.0

        if extent > ratio:
            self.scale = longer / extent
            offset = (shorter - longer / extent) / 2.0
            self.origin = Point(offset, 0.0) if self._tall else Point(0.0, offset)
        else:
            self.scale = shorter
            offset = (longer - extent * shorter) / 2.0
            self.origin = Point(0.0, offset) if self._tall else Point(offset, 0.0)

    def position(self, idx: int) -> Point:
        if self.length == 0 or self.square is None:
            if self.container is None:
                return Point(0.0, 0.0)
            return Point(self.container.width / 2.0, self.container.height / 2.0)

        px, py = self.square[idx % self.per_square]
        tile_offset = (idx // self.per_square) * self.scale
        if self._tall:
            return Point(self.origin.x + px * self.scale,
                         self.origin.y + tile_offset + py * self.scale)
        return Point(self.origin.x + tile_offset + py * self.scale,
                     self.origin.y + px * self.scale)

    def nearest(self, p: Point) -> int:
        if self.length == 0 or self.square is None:
            return 0

        if self._tall:
            along, across = p.y - self.origin.y, p.x - self.origin.x
        else:
            along, across = p.x - self.origin.x, p.y - self.origin.y

        tile = math.floor(along / self.scale)
        tile = min(max(tile, 0), self.tiles - 1)
        u = (along - tile * self.scale) / self.scale
        v = across / self.scale

        distances = np.hypot(self.square[:, 0] - v, self.square[:, 1] - u)
        closest = int(np.argmin(distances))
        return min(self.length - 1, tile * self.per_square + closest)

    def connect(self, idx: int, path: PathBuilder) -> None:
        path.line_to(self.position(idx))

    def gap_between_nodes(self) -> float:
        return self.position(0).distance(self.position(1))


class OverviewIndex:
    """The overview index in use by a panel: a grid or a fractal over `length` pages."""

    def __init__(self, kind: OverviewLayout | str, length: int) -> None:
        self.kind = OverviewLayout(kind)
        self.length = length
        self._index = self._make_index()

    def _make_index(self) -> GridIndex | FractalIndex:
        match self.kind:
            case OverviewLayout.GRID:
                return GridIndex(self.length)
            case OverviewLayout.FRACTAL:
                return FractalIndex(self.length)
            case _:
                raise ValueError(f"Unknown overview layout: {self.kind}")

    def _rebuild(self) -> None:
        size = self._index.container
        self._index = self._make_index()
        if size is not None:
            self._index.layout(size)

    def set_kind(self, kind: OverviewLayout | str) -> None:
        kind = OverviewLayout(kind)
        if kind != self.kind:
            self.kind = kind
            self._rebuild()
            logger.info("Overview layout switched to %s", kind)

    def set_length(self, length: int) -> None:
        if length != self.length:
            self.length = length
            self._rebuild()

    @property
    def container(self) -> Size | None:
        return self._index.container

    def layout(self, size: Size) -> None:
        self._index.layout(size)

    def position(self, idx: int) -> Point:
        return self._index.position(idx)

    def nearest(self, p: Point) -> int:
        return self._index.nearest(p)

    def connect(self, idx: int, path: PathBuilder) -> None:
        self._index.connect(idx, path)

    def gap_between_nodes(self) -> float:
        return self._index.gap_between_nodes()

    def traversal_path(self) -> Polyline:
        """Path through every node in page order."""
        path = Polyline(self.position(0))
        for idx in range(self.length):
            self.connect(idx, path)
        return path
