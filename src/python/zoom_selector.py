"""
Orientation and overview split selection for zooming.

Zooming in a continuous page view does not scale pages directly: a page
always fills the page view across the scroll direction. Instead the split
between page view and overview panel moves, and when the page would fit
better the other way round the scroll direction flips.

The `proportion` handled here is the splitter fraction of the window given
to the page view; the overview panel gets the remaining 1 - proportion.
"""

import logging
from dataclasses import dataclass

from enums import Axis, OverviewPosition
from geometry import Size

logger = logging.getLogger(__name__)

# Required proportions at or above this leave no room for an overview panel
NO_ROOM_THRESHOLD = 0.99


@dataclass(frozen=True)
class ZoomDecision:
    axis: Axis
    overview_position: OverviewPosition
    proportion: float


def current_page_extent(
    axis: Axis,
    overview_position: OverviewPosition,
    proportion: float,
    page_size: Size,
    window_size: Size,
) -> Size:
    """On-screen size of the (cropped) page under the current split."""
    if axis == Axis.VERTICAL:
        width = window_size.width
        if overview_position.splits_width:
            width = window_size.width * proportion
        return Size(width, width * page_size.height / page_size.width)

    height = window_size.height
    if overview_position.splits_height:
        height = window_size.height * proportion
    return Size(height * page_size.width / page_size.height, height)


def select_zoom(
    axis: Axis,
    overview_position: OverviewPosition,
    proportion: float,
    page_size: Size,
    window_size: Size,
    desired_scale: float,
) -> ZoomDecision:
    """Choose scroll direction and split to show the page at `desired_scale` times its size.

    Args:
        axis: Current scroll direction
        overview_position: Current overview panel edge
        proportion: Current page-view share of the split dimension
        page_size: Visible (cropped) page size in points
        window_size: Size of the whole view window
        desired_scale: >1 zooms in, <1 zooms out

    Returns:
        ZoomDecision: New axis, overview edge and proportion. Unchanged fields
        are carried over from the inputs.
    """
    current = current_page_extent(axis, overview_position, proportion, page_size, window_size)

    # share of the window each orientation would need for the page view
    vertical_required = (current.width * desired_scale) / window_size.width
    horizontal_required = (current.height * desired_scale) / window_size.height

    logger.debug("Zoom %.3f: vertical needs %.3f, horizontal needs %.3f",
                 desired_scale, vertical_required, horizontal_required)

    if vertical_required < 1.0 and horizontal_required < 1.0:
        # both fit: keep the larger page view, leaving the smaller overview
        if horizontal_required > vertical_required:
            return ZoomDecision(Axis.HORIZONTAL, OverviewPosition.SOUTH, horizontal_required)
        return ZoomDecision(Axis.VERTICAL, OverviewPosition.EAST, vertical_required)

    if vertical_required >= NO_ROOM_THRESHOLD and horizontal_required >= NO_ROOM_THRESHOLD:
        # neither leaves room for the overview: park it on the edge it won't take space from
        zooming_in = desired_scale > NO_ROOM_THRESHOLD
        if axis == Axis.VERTICAL:
            position = OverviewPosition.SOUTH if zooming_in else OverviewPosition.EAST
        else:
            position = OverviewPosition.EAST if zooming_in else OverviewPosition.SOUTH
        return ZoomDecision(axis, position, proportion)

    candidates = []
    if vertical_required < NO_ROOM_THRESHOLD:
        candidates.append(ZoomDecision(Axis.VERTICAL, OverviewPosition.EAST, vertical_required))
    if horizontal_required < NO_ROOM_THRESHOLD:
        candidates.append(ZoomDecision(Axis.HORIZONTAL, OverviewPosition.SOUTH, horizontal_required))
    if not candidates:
        return ZoomDecision(axis, overview_position, proportion)
    return max(candidates, key=lambda decision: decision.proportion)
