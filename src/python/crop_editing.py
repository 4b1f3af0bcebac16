"""
Crop margin editing: hit testing crop handles and dragging crop edges.

Crop rectangles are normalized page coordinates. While editing, the mouse is
matched against a band one third of the crop rectangle wide along each edge;
dragging inside a band moves that edge, dragging in the middle moves the
whole rectangle.
"""

import logging

from config_manager import config
from custom_types import PageLayout, PageNum
from enums import HorizontalEdge, VerticalEdge
from geometry import Point, Rect, UNIT_SQUARE, lerp_rect

logger = logging.getLogger(__name__)

CropHandle = tuple[HorizontalEdge, VerticalEdge]

_editing = config.get_crop_editing_config()
HANDLE_SIZE: float = _editing.get("handleSize", 1.0 / 3.0)
MINIMUM_SIZE: float = _editing.get("minimumSize", 0.1)


def page_at(layout: PageLayout, p: Point) -> PageNum | None:
    """Page under a screen point, else the page with the closest edge."""
    closest = None
    distance = float("inf")
    for page_number, rect in layout.items():
        if rect.contains(p):
            return page_number
        edge_distance = min(abs(p.x - rect.x0), abs(p.x - rect.x1),
                            abs(p.y - rect.y0), abs(p.y - rect.y1))
        if edge_distance < distance:
            distance = edge_distance
            closest = page_number
    return closest


def page_coords_of_screen_point(screen_rect: Rect, crop_rect: Rect,
                                crop_weight: float, p: Point) -> Point:
    """Map a screen point to normalized page coordinates.

    Args:
        screen_rect: Where the visible part of the page is drawn
        crop_rect: Full crop rectangle of the page
        crop_weight: Current crop weight
        p: Screen point
    """
    visible = lerp_rect(UNIT_SQUARE, crop_rect, crop_weight)
    return Point(
        visible.x0 + visible.width * (p.x - screen_rect.x0) / screen_rect.width,
        visible.y0 + visible.height * (p.y - screen_rect.y0) / screen_rect.height,
    )


def crop_handle_at(image_rect: Rect, crop_rect: Rect, p: Point,
                   handle_size: float = HANDLE_SIZE) -> CropHandle:
    """Crop handle under a screen point.

    Args:
        image_rect: Screen rectangle of the whole (uncropped) page
        crop_rect: Normalized crop rectangle of the page
        p: Screen point
        handle_size: Handle band width as a fraction of the crop rectangle
    """
    r = Rect(
        image_rect.x0 + crop_rect.x0 * image_rect.width,
        image_rect.y0 + crop_rect.y0 * image_rect.height,
        image_rect.x0 + crop_rect.x1 * image_rect.width,
        image_rect.y0 + crop_rect.y1 * image_rect.height,
    )

    if p.x < r.x0 + r.width * handle_size:
        horizontal = HorizontalEdge.WEST
    elif p.x > r.x1 - r.width * handle_size:
        horizontal = HorizontalEdge.EAST
    else:
        horizontal = HorizontalEdge.NEITHER

    if p.y < r.y0 + r.height * handle_size:
        vertical = VerticalEdge.NORTH
    elif p.y > r.y1 - r.height * handle_size:
        vertical = VerticalEdge.SOUTH
    else:
        vertical = VerticalEdge.NEITHER

    return horizontal, vertical


def drag_crop_rect(start_rect: Rect, handle: CropHandle, delta_x: float, delta_y: float,
                   minimum: float = MINIMUM_SIZE) -> Rect:
    """Crop rectangle after dragging a handle.

    Args:
        start_rect: Crop rectangle when the drag started
        handle: Handle grabbed at the start of the drag
        delta_x: Horizontal mouse movement as a fraction of the page width
        delta_y: Vertical mouse movement as a fraction of the page height
        minimum: Smallest crop width/height allowed

    Returns:
        Rect: New crop rectangle, within the unit square and never thinner
        than `minimum`
    """
    horizontal, vertical = handle
    x0, y0, x1, y1 = start_rect.x0, start_rect.y0, start_rect.x1, start_rect.y1

    match vertical:
        case VerticalEdge.NORTH:
            y0 = max(0.0, min(y1 - minimum, y0 + delta_y))
        case VerticalEdge.SOUTH:
            y1 = min(1.0, max(y0 + minimum, y1 + delta_y))

    match horizontal:
        case HorizontalEdge.WEST:
            x0 = max(0.0, min(x1 - minimum, x0 + delta_x))
        case HorizontalEdge.EAST:
            x1 = min(1.0, max(x0 + minimum, x1 + delta_x))
        case HorizontalEdge.NEITHER if vertical == VerticalEdge.NEITHER:
            # middle of the page: every edge moves
            y0 = max(0.0, min(1.0 - minimum, y0 + delta_y))
            y1 = min(1.0, max(minimum, y1 + delta_y))
            x0 = max(0.0, min(1.0 - minimum, x0 + delta_x))
            x1 = min(1.0, max(minimum, x1 + delta_x))

    return Rect(x0, y0, x1, y1)
