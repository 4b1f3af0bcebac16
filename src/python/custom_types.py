"""
Type definitions for the page viewer engine.

This module defines common types, aliases, Protocol interfaces for the
external collaborators the engine consumes, and TypedDict structures for
the configuration sections.
"""

from typing import Any, Callable, Protocol, TypedDict

from geometry import Point, Rect, Size

# Page index within a document, 0-based
PageNum = int

# Screen rectangle of every laid out page, keyed by page number in ascending order
PageLayout = dict[PageNum, Rect]

# Inclusive (first, last) range of page numbers
PageRange = tuple[PageNum, PageNum]

# Produces a rendered image for a page at a given target size
PageRenderer = Callable[[PageNum, Size], Any]


# Configuration TypedDict definitions
class ViewConfig(TypedDict, total=False):
    """Initial per-view session state."""
    scrollDirection: str
    overviewPosition: str
    overviewProportion: float
    cropWeight: float
    pagePosition: float
    zoomStep: float


class AnimationConfig(TypedDict, total=False):
    """Crop transition animation configuration."""
    cropTransitionMs: float


class OverviewConfig(TypedDict, total=False):
    """Overview panel configuration."""
    layout: str
    hoverSuppressMs: float
    edgeMarginPx: float


class CropEditingConfig(TypedDict, total=False):
    """Crop margin editing configuration."""
    handleSize: float
    minimumSize: float


# Protocol definitions
class PageGeometryProvider(Protocol):
    """Supplies page sizes in page-space units (points)."""

    def page_count(self) -> int:
        """Number of pages in the document."""
        ...

    def natural_size(self, page_number: PageNum) -> Size:
        """Uncropped size of a page."""
        ...

    def margins(self, page_number: PageNum) -> Rect:
        """Normalized crop rectangle of a page."""
        ...


class PathBuilder(Protocol):
    """Receives line segments of the overview traversal path."""

    def line_to(self, point: Point) -> None:
        ...
