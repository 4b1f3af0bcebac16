"""
ViewState: per-view session state of a continuous page view (anchor, crop, orientation).
"""

import logging

from config_manager import config
from custom_types import PageGeometryProvider, PageLayout, PageNum, PageRange
from enums import Axis, OverviewPosition
from geometry import Rect, Size, lerp_rect, UNIT_SQUARE, major, major_span, minor
from layout_engine import in_reading_mode, layout_pages
from zoom_selector import ZoomDecision, select_zoom

logger = logging.getLogger(__name__)


class ViewState:
    """Anchor (page, position), crop weight, scroll direction and overview split of one view."""

    def __init__(
        self,
        document: PageGeometryProvider,
        viewer_size: Size = Size(100.0, 100.0),
        page_number: PageNum = 0,
        page_position: float | None = None,
        crop_weight: float | None = None,
        scroll_direction: Axis | None = None,
        overview_position: OverviewPosition | None = None,
        overview_proportion: float | None = None,
    ) -> None:
        self.document = document
        self.viewer_size = viewer_size
        self.page_number = page_number
        self.page_position = float(page_position if page_position is not None
                                   else config.get_view_setting("pagePosition", 0.5))
        self.crop_weight = float(crop_weight if crop_weight is not None
                                 else config.get_view_setting("cropWeight", 1.0))
        self.scroll_direction = Axis(scroll_direction if scroll_direction is not None
                                     else config.get_view_setting("scrollDirection", "horizontal"))
        self.overview_position = OverviewPosition(
            overview_position if overview_position is not None
            else config.get_view_setting("overviewPosition", "east"))
        self.overview_proportion = float(overview_proportion if overview_proportion is not None
                                         else config.get_view_setting("overviewProportion", 0.8))
        self.overview_selected_page = page_number
        self.history: list[PageNum] = []
        self._clamp()

    def _clamp(self):
        # Clamp crop weight to [0, 1]
        self.crop_weight = min(max(self.crop_weight, 0.0), 1.0)
        # Clamp page numbers to the document
        last_page = max(self.page_count - 1, 0)
        self.page_number = min(max(self.page_number, 0), last_page)
        self.overview_selected_page = min(max(self.overview_selected_page, 0), last_page)

    @property
    def page_count(self) -> int:
        return self.document.page_count()

    def in_reading_mode(self) -> bool:
        return in_reading_mode(self.crop_weight)

    def visible_normalized_crop_margins(self, page_number: PageNum) -> Rect:
        """Part of the page visible at the current crop weight."""
        if self.crop_weight == 0.0:
            return UNIT_SQUARE
        return lerp_rect(UNIT_SQUARE, self.document.margins(page_number), self.crop_weight)

    def visible_page_size_in_points(self, page_number: PageNum) -> Size:
        """Natural page size reduced to the part visible at the current crop weight."""
        crop = self.visible_normalized_crop_margins(page_number)
        natural = self.document.natural_size(page_number)
        return Size(natural.width * crop.width, natural.height * crop.height)

    def set_visible_scroll_position(
        self,
        page_number: PageNum,
        visual_position: float | None = None,
    ) -> None:
        """Move the anchor to a page.

        Args:
            page_number: New anchor page
            visual_position: 0 is the leading edge of what is visible of the
                page, 1 the trailing edge. None keeps the current position.
        """
        if visual_position is not None:
            low, high = major_span(self.scroll_direction,
                                   self.visible_normalized_crop_margins(page_number))
            self.page_position = low + visual_position * (high - low)
        self.page_number = page_number

    def layout_pages(
        self,
        viewport_minor: float,
        viewport_midline_offset: float,
        extent_before_midline: float,
        extent_after_midline: float,
        page_number: PageNum,
        page_position: float,
        crop_weight: float,
        required_page_range: PageRange | None = None,
    ) -> PageLayout:
        """Layout in this view's scroll direction; reading mode follows the view, not `crop_weight`."""
        return layout_pages(
            self.document,
            viewport_minor,
            viewport_midline_offset,
            extent_before_midline,
            extent_after_midline,
            page_number,
            page_position,
            crop_weight,
            self.scroll_direction,
            required_page_range,
            reading_mode=self.in_reading_mode(),
        )

    def layout_pages_within_visible_window(
        self,
        viewport_size: Size,
        crop_weight: float,
        required_page_range: PageRange | None = None,
    ) -> PageLayout:
        """Lay out every page visible in a viewport centred on the anchor.

        `required_page_range` forces pages that are not visible at this crop
        weight to be laid out too, so resize animations have both endpoints.
        """
        half = major(self.scroll_direction, viewport_size) / 2.0
        return self.layout_pages(
            minor(self.scroll_direction, viewport_size),
            half,
            half,
            half,
            self.page_number,
            self.page_position,
            crop_weight,
            required_page_range,
        )

    def scroll_by(
        self,
        distance: float,
        start_page: PageNum,
        start_position: float,
    ) -> tuple[PageNum, float, PageLayout]:
        """Scroll `distance` screen units along the major axis from a starting anchor.

        Returns:
            tuple: (new page, new position, layout used to find them). Running
            off either end of the document parks the anchor at that end.
        """
        if self.page_count == 0:
            return start_page, start_position, {}

        axis = self.scroll_direction
        midline = major(axis, self.viewer_size) / 2.0
        target = distance + midline

        before, after = (0.0, distance) if distance >= 0 else (-distance, 0.0)

        layout = self.layout_pages(
            minor(axis, self.viewer_size),
            midline,
            before,
            after,
            start_page,
            start_position,
            self.crop_weight,
        )

        page_number = start_page
        low, high = major_span(axis, layout[page_number])

        if distance > 0:
            while high < target:
                if page_number + 1 >= self.page_count:
                    logger.debug("Hit end of document")
                    self._follow_selection(page_number)
                    self.set_visible_scroll_position(page_number, 1.0)
                    return self.page_number, self.page_position, layout
                page_number += 1
                low, high = major_span(axis, layout[page_number])
        else:
            while low > target:
                if page_number == 0:
                    logger.debug("Hit start of document")
                    self._follow_selection(page_number)
                    self.set_visible_scroll_position(page_number, 0.0)
                    return self.page_number, self.page_position, layout
                page_number -= 1
                low, high = major_span(axis, layout[page_number])

        self._follow_selection(page_number)
        self.set_visible_scroll_position(page_number, (target - low) / (high - low))
        return self.page_number, self.page_position, layout

    def _follow_selection(self, page_number: PageNum) -> None:
        # the overview selection tracks the anchor unless the user picked a different page
        if self.overview_selected_page == self.page_number:
            self.overview_selected_page = page_number

    def select_page(self, page_number: PageNum) -> None:
        """Mark a page as the one selected in the overview."""
        self.overview_selected_page = page_number

    def show_page(self, page_number: PageNum) -> None:
        """Jump to a page, keeping the current position within it."""
        if self.page_count == 0:
            return
        page_number = min(page_number, self.page_count - 1)
        if self.page_number == self.overview_selected_page:
            self.select_page(page_number)
        self.set_visible_scroll_position(page_number)

    def push_history(self, page_number: PageNum) -> None:
        self.history.append(page_number)

    def go_back(self) -> PageNum | None:
        """Return to the most recent page in the navigation history."""
        if not self.history:
            return None
        page_number = self.history.pop()
        self.set_visible_scroll_position(page_number)
        self.select_page(page_number)
        return page_number

    def toggle_scroll_direction(self) -> None:
        self.scroll_direction = self.scroll_direction.cross()

    def cycle_overview_position(self) -> None:
        self.overview_position = self.overview_position.next()

    def adjust_zoom(self, desired_scale: float, window_size: Size) -> ZoomDecision:
        """Re-split the window so the current page shows at `desired_scale` times its size."""
        decision = select_zoom(
            self.scroll_direction,
            self.overview_position,
            self.overview_proportion,
            self.visible_page_size_in_points(self.page_number),
            window_size,
            desired_scale,
        )
        self.scroll_direction = decision.axis
        self.overview_position = decision.overview_position
        self.overview_proportion = decision.proportion
        logger.debug("Zoom %.2f -> %s, overview %s, proportion %.3f",
                     desired_scale, decision.axis, decision.overview_position, decision.proportion)
        return decision
