"""
Continuous page layout.

Pages are laid end to end along the scroll (major) axis, each filling the
viewport edge to edge along the minor axis. Layout starts from an anchor
page whose anchor position is pinned to the viewport midline and walks
outwards in both directions until the requested extent is covered.
"""

import logging

from custom_types import PageGeometryProvider, PageLayout, PageNum, PageRange
from enums import Axis
from geometry import (
    Rect, Size, UNIT_SQUARE, lerp_rect, major, major_span, minor, rect_on_axis,
)

logger = logging.getLogger(__name__)


def in_reading_mode(crop_weight: float) -> bool:
    """Fully cropped views are in reading mode; anything less is editing/overview."""
    return crop_weight >= 1.0


def visible_page_size(
    document: PageGeometryProvider,
    page_number: PageNum,
    crop_weight: float,
    minor_extent: float,
    axis: Axis,
) -> Size:
    """Screen size of the visible part of a page scaled to fill the minor extent."""
    crop = lerp_rect(UNIT_SQUARE, document.margins(page_number), crop_weight)
    natural = document.natural_size(page_number)
    width = natural.width * crop.width
    height = natural.height * crop.height

    if axis == Axis.HORIZONTAL:
        return Size((width / height) * minor_extent, minor_extent)
    return Size(minor_extent, (height / width) * minor_extent)


def renormalize_position(
    position: float,
    visible_span: tuple[float, float],
    crop_span: tuple[float, float],
    reading_mode: bool,
) -> float:
    """Bring an anchor position back into the visible crop span.

    Positions inside the span are page coordinates and are returned as is.
    Outside it, a reading-mode view clamps to the crop span; otherwise the
    position is read as a fraction of the visible span, so a view whose
    margins are being edited elsewhere does not snap to a page boundary.
    """
    visible_min, visible_max = visible_span
    if visible_min <= position <= visible_max:
        return position
    if reading_mode:
        crop_min, crop_max = crop_span
        return min(crop_max, max(crop_min, position))
    return visible_min + (visible_max - visible_min) * position


def layout_pages(
    document: PageGeometryProvider,
    viewport_minor: float,
    viewport_midline_offset: float,
    extent_before_midline: float,
    extent_after_midline: float,
    page_number: PageNum,
    page_position: float,
    crop_weight: float,
    axis: Axis,
    required_page_range: PageRange | None = None,
    reading_mode: bool | None = None,
) -> PageLayout:
    """Lay out the run of pages around an anchor.

    Args:
        document: Page sizes and crop margins
        viewport_minor: Viewport size across the scroll direction
        viewport_midline_offset: Major-axis screen coordinate the anchor is pinned to
        extent_before_midline: Major-axis distance that must be covered before the midline
        extent_after_midline: Major-axis distance that must be covered after the midline
        page_number: Anchor page, must be within the document
        page_position: Anchor position in the page's normalized crop coordinates
        crop_weight: 0 shows whole pages, 1 shows only the crop rectangles
        axis: Scroll direction
        required_page_range: Pages to lay out even when off screen
        reading_mode: Overrides the reading-mode test on crop_weight

    Returns:
        PageLayout: Screen rectangle per page, ascending page order, abutting
        along the major axis. Empty for an empty document.
    """
    page_count = document.page_count()
    if page_count == 0:
        return {}
    if reading_mode is None:
        reading_mode = in_reading_mode(crop_weight)

    crop_rect = document.margins(page_number)
    visible_crop = lerp_rect(UNIT_SQUARE, crop_rect, crop_weight)
    visible_min, visible_max = major_span(axis, visible_crop)

    position = renormalize_position(
        page_position,
        (visible_min, visible_max),
        major_span(axis, crop_rect),
        reading_mode,
    )

    def page_size(number: PageNum) -> Size:
        return visible_page_size(document, number, crop_weight, viewport_minor, axis)

    def page_rect(size: Size, major_min: float, major_max: float) -> Rect:
        page_minor = minor(axis, size)
        minor_min = (viewport_minor - page_minor) / 2.0
        return rect_on_axis(axis, major_min, major_max, minor_min, minor_min + page_minor)

    anchor_size = page_size(page_number)
    anchor_major = major(axis, anchor_size)
    anchor_min = (viewport_midline_offset
                  - anchor_major * (position - visible_min) / (visible_max - visible_min))
    anchor_max = anchor_min + anchor_major

    results: PageLayout = {page_number: page_rect(anchor_size, anchor_min, anchor_max)}

    min_page, max_page = page_number, page_number
    if required_page_range is not None:
        min_page, max_page = required_page_range

    # forwards from the anchor
    number = page_number
    major_max = anchor_max
    while number + 1 < page_count and (
        major_max < viewport_midline_offset + extent_after_midline or number < max_page
    ):
        number += 1
        size = page_size(number)
        major_min, major_max = major_max, major_max + major(axis, size)
        results[number] = page_rect(size, major_min, major_max)

    # backwards from the anchor
    number = page_number
    major_min = anchor_min
    while number > 0 and (
        major_min > viewport_midline_offset - extent_before_midline or number > min_page
    ):
        number -= 1
        size = page_size(number)
        major_min, major_max = major_min - major(axis, size), major_min
        results[number] = page_rect(size, major_min, major_max)

    logger.debug("Laid out pages %d-%d around page %d",
                 min(results), max(results), page_number)
    return dict(sorted(results.items()))
