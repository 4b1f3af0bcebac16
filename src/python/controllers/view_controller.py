"""View controller for the continuous page view."""

from typing import Any
from PyQt6.QtCore import QObject, pyqtSignal
from config_manager import config
from crop_animator import CropTransitionAnimator, PageFrame
from crop_editing import CropHandle, crop_handle_at, drag_crop_rect, page_at, page_coords_of_screen_point
from custom_types import PageLayout, PageNum, PageRenderer
from error_handler import ErrorHandler, LayoutInvariantError
from geometry import Point, Rect, Size
from page_image_cache import PageImageCache
from view_state import ViewState
from zoom_selector import ZoomDecision
import logging

logger = logging.getLogger(__name__)


class ViewController(QObject):
    """Handles scrolling, zooming, crop transitions and frame production for one view."""

    view_updated = pyqtSignal()
    zoom_changed = pyqtSignal(float)
    page_changed = pyqtSignal(int)

    def __init__(
        self,
        view_state: ViewState,
        renderer: PageRenderer | None = None,
        animator: CropTransitionAnimator | None = None,
        cache: PageImageCache | None = None,
    ) -> None:
        """Initialize ViewController.

        Args:
            view_state: ViewState instance holding anchor, crop and orientation
            renderer: Callable producing a page image at a target size
            animator: Crop transition animator (a fresh one if None)
            cache: Page image cache (a fresh one if None)
        """
        super().__init__()
        self.view_state = view_state
        self.renderer = renderer
        self.animator = animator if animator is not None else CropTransitionAnimator()
        self.cache = cache if cache is not None else PageImageCache()
        self.zoom_step: float = float(config.get_view_setting("zoomStep", 1.1))
        self._updating_ui: bool = False
        self.animator.refresh(self.view_state)

    @property
    def layout(self) -> PageLayout:
        """Resting layout of the pages on screen."""
        return self.animator.layout_before

    def update_view(self) -> None:
        """Recompute the resting layout and notify listeners.

        Skipped while a crop transition runs; the transition's own layouts
        are used until it finishes.
        """
        # Prevent recursive UI updates
        if self._updating_ui:
            return
        self._updating_ui = True

        try:
            if self.animator.is_idle:
                self.animator.refresh(self.view_state)
            self.view_updated.emit()
        finally:
            self._updating_ui = False

    def resize(self, size: Size) -> None:
        self.view_state.viewer_size = size
        self.update_view()

    def _emit_if_page_changed(self, previous: PageNum) -> None:
        if self.view_state.page_number != previous:
            self.page_changed.emit(self.view_state.page_number)

    def scroll_by(self, distance: float) -> None:
        """Scroll the view `distance` screen units along the scroll direction."""
        if not self.animator.is_idle:
            return
        previous = self.view_state.page_number
        self.view_state.scroll_by(distance, self.view_state.page_number, self.view_state.page_position)
        self.update_view()
        self._emit_if_page_changed(previous)

    def show_page(self, page_number: PageNum) -> None:
        previous = self.view_state.page_number
        self.view_state.show_page(page_number)
        self.update_view()
        self._emit_if_page_changed(previous)

    def go_back(self) -> PageNum | None:
        previous = self.view_state.page_number
        page_number = self.view_state.go_back()
        if page_number is not None:
            self.update_view()
            self._emit_if_page_changed(previous)
        return page_number

    def toggle_scroll_direction(self) -> None:
        self.view_state.toggle_scroll_direction()
        self.update_view()

    def zoom(self, desired_scale: float, window_size: Size) -> ZoomDecision:
        """Re-split the window to show the current page `desired_scale` times larger.

        Zooming in makes cached page images too small, so the cache is
        dropped unless running in debug mode (where rendering is slow) or
        disabled by cache.clearOnZoomIn.
        """
        decision = self.view_state.adjust_zoom(desired_scale, window_size)
        if desired_scale > 1.0 and not config.is_debug() \
                and config.get_setting("cache", "clearOnZoomIn", True):
            self.cache.clear()
        self.update_view()
        self.zoom_changed.emit(desired_scale)
        return decision

    def zoom_in(self, window_size: Size) -> ZoomDecision:
        logger.debug("Zooming in by %.2f", self.zoom_step)
        return self.zoom(self.zoom_step, window_size)

    def zoom_out(self, window_size: Size) -> ZoomDecision:
        logger.debug("Zooming out by %.2f", self.zoom_step)
        return self.zoom(1.0 / self.zoom_step, window_size)

    def toggle_crop_mode(self) -> bool:
        """Start animating between reading (cropped) and editing (uncropped) views."""
        started = self.animator.start(self.view_state)
        if started:
            self.view_updated.emit()
        return started

    def current_frame(self, now: float | None = None) -> dict[PageNum, PageFrame]:
        """Placement of every page in the frame being painted."""
        if self.animator.is_idle:
            return self.animator.sample(self.view_state, 0.0)
        return self.animator.frame(self.view_state, now)

    def animation_frame(self, now: float | None = None) -> bool:
        """Animation tick. Returns True while another frame should be requested."""
        if self.animator.advance(self.view_state, now):
            return True
        self.view_updated.emit()
        return False

    def render_frame(self, frame: dict[PageNum, PageFrame]) -> dict[PageNum, Any]:
        """Page images for a frame, rendered through the cache."""
        if self.renderer is None:
            return {}
        images = {}
        for page_number, page_frame in frame.items():
            image_rect = page_frame.image_rect
            size = Size(image_rect.width, image_rect.height)
            images[page_number] = self.cache.ensure(page_number, size, self.renderer)
        return images

    def page_screen_rect(self, page_number: PageNum) -> Rect | None:
        """Screen rectangle of a laid out page.

        Raises:
            LayoutInvariantError: The page is not laid out and debug is enabled
        """
        rect = self.layout.get(page_number)
        if rect is None:
            message = f"Page {page_number} is not in the current layout"
            if config.is_debug():
                raise LayoutInvariantError(message)
            ErrorHandler.show_warning(message, "Layout")
        return rect

    def page_coords(self, page_number: PageNum, point: Point) -> Point | None:
        """Normalized page coordinates of a screen point over a laid out page."""
        rect = self.page_screen_rect(page_number)
        if rect is None:
            return None
        return page_coords_of_screen_point(
            rect, self.view_state.document.margins(page_number), self.view_state.crop_weight, point)

    def crop_handle_at(self, point: Point) -> tuple[PageNum, CropHandle] | None:
        """Page and crop handle under a screen point."""
        page_number = page_at(self.layout, point)
        if page_number is None:
            return None
        frame = self.animator.sample(self.view_state, 0.0).get(page_number)
        if frame is None:
            return None
        margins = self.view_state.document.margins(page_number)
        return page_number, crop_handle_at(frame.image_rect, margins, point)

    def drag_crop_edge(
        self,
        page_number: PageNum,
        handle: CropHandle,
        start_rect: Rect,
        start_point: Point,
        point: Point,
    ) -> Rect | None:
        """Move a crop handle and store the new margins for the page.

        Args:
            page_number: Page whose margins are edited
            handle: Handle grabbed when the drag started
            start_rect: Crop rectangle when the drag started
            start_point: Screen point where the drag started
            point: Current screen point
        """
        screen_rect = self.page_screen_rect(page_number)
        if screen_rect is None:
            return None

        delta_x = (point.x - start_point.x) / screen_rect.width
        delta_y = (point.y - start_point.y) / screen_rect.height
        crop_rect = drag_crop_rect(start_rect, handle, delta_x, delta_y)

        self.view_state.document.info.set_page_margins(page_number, crop_rect)
        self.cache.invalidate(page_number)
        self.update_view()
        return crop_rect

    def set_brightness_inverted(self, inverted: bool) -> None:
        self.cache.set_inverted(inverted)
        self.view_updated.emit()
