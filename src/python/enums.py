"""
Enumerations for the page viewer engine using Python 3.11+ StrEnum.

This module defines string-based enumerations for the orientation, overview
panel and crop-editing constants used throughout the engine. String values
match the spellings used in config.json.
"""

from enum import StrEnum


class Axis(StrEnum):
    """Scroll direction of a page view.

    Attributes:
        HORIZONTAL: Pages are laid out left to right, x is the major axis
        VERTICAL: Pages are laid out top to bottom, y is the major axis
    """
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    def cross(self) -> "Axis":
        """Return the perpendicular axis."""
        return Axis.VERTICAL if self == Axis.HORIZONTAL else Axis.HORIZONTAL


class OverviewPosition(StrEnum):
    """Window edge hosting the overview panel.

    Attributes:
        NOWHERE: Overview panel hidden
        NORTH: Above the page view
        SOUTH: Below the page view
        EAST: Right of the page view
        WEST: Left of the page view
    """
    NOWHERE = "nowhere"
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    def next(self) -> "OverviewPosition":
        """Position the overview panel moves to when cycled by the user."""
        match self:
            case OverviewPosition.NOWHERE:
                return OverviewPosition.EAST
            case OverviewPosition.WEST:
                return OverviewPosition.NORTH
            case OverviewPosition.NORTH:
                return OverviewPosition.EAST
            case OverviewPosition.EAST:
                return OverviewPosition.SOUTH
            case _:
                return OverviewPosition.NOWHERE

    @property
    def splits_width(self) -> bool:
        return self in (OverviewPosition.EAST, OverviewPosition.WEST)

    @property
    def splits_height(self) -> bool:
        return self in (OverviewPosition.NORTH, OverviewPosition.SOUTH)


class OverviewLayout(StrEnum):
    """Geometric arrangement of the overview panel nodes.

    Attributes:
        GRID: Rows and columns, one node per page
        FRACTAL: Tiled space-filling curve, denser but irregular
    """
    GRID = "grid"
    FRACTAL = "fractal"


class HorizontalEdge(StrEnum):
    """Horizontal part of a crop handle under the mouse."""
    WEST = "west"
    EAST = "east"
    NEITHER = "neither"


class VerticalEdge(StrEnum):
    """Vertical part of a crop handle under the mouse."""
    NORTH = "north"
    SOUTH = "south"
    NEITHER = "neither"
