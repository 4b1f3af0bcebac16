"""Overview controller: page navigation from the overview panel."""

import time
from dataclasses import dataclass
from typing import Callable
from PyQt6.QtCore import QObject, pyqtSignal
from config_manager import config
from custom_types import PageNum
from enums import OverviewLayout, OverviewPosition
from geometry import Point, Size
from overview_index import OverviewIndex, Polyline
from page_image_cache import PageImageCache
from view_state import ViewState
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverviewNode:
    """Paint data for one page node of the overview panel."""
    page: PageNum
    position: Point
    radius: float
    cached: bool
    current: bool
    selected: bool


class OverviewController(QObject):
    """Handles hover, click and leave events of the overview panel.

    Hovering over a node shows that page without selecting it. Clicking
    selects the page shown and remembers the previous selection in the
    view's history. Leaving the panel returns to the selected page.
    """

    page_shown = pyqtSignal(int)
    page_selected = pyqtSignal(int)
    layout_changed = pyqtSignal(str)

    def __init__(
        self,
        view_state: ViewState,
        cache: PageImageCache | None = None,
        layout: OverviewLayout | str | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize OverviewController.

        Args:
            view_state: ViewState of the page view this panel navigates
            cache: Page image cache, used to mark pages already rendered
            layout: Grid or fractal (defaults to config overview.layout)
            clock: Seconds source used when no timestamp is passed in
        """
        super().__init__()
        overview_cfg = config.get_overview_config()
        self.view_state = view_state
        self.cache = cache
        self.clock = clock
        self.hover_suppress_ms: float = float(overview_cfg.get("hoverSuppressMs", 500))
        self.edge_margin: float = float(overview_cfg.get("edgeMarginPx", 5))
        self.index = OverviewIndex(
            layout if layout is not None else overview_cfg.get("layout", "grid"),
            view_state.page_count,
        )
        self._last_resize = clock()

    def resize(self, size: Size, now: float | None = None) -> None:
        self.index.set_length(self.view_state.page_count)
        self.index.layout(size)
        self._last_resize = self.clock() if now is None else now

    def _hover_suppressed(self, point: Point, now: float) -> bool:
        # the splitter can send stray moves while the panel is resized
        if (now - self._last_resize) * 1000.0 < self.hover_suppress_ms:
            return True
        position = self.view_state.overview_position
        return (point.x < self.edge_margin and position == OverviewPosition.EAST
                or point.y < self.edge_margin and position == OverviewPosition.SOUTH)

    def hover(self, point: Point, now: float | None = None) -> PageNum | None:
        """Show the page nearest to the mouse. Returns the page shown, if any."""
        now = self.clock() if now is None else now
        if self.view_state.page_count == 0 or self._hover_suppressed(point, now):
            return None
        page_number = self.index.nearest(point)
        if page_number != self.view_state.page_number:
            self.view_state.set_visible_scroll_position(page_number)
            self.page_shown.emit(page_number)
        return page_number

    def click(self) -> PageNum:
        """Select the page currently shown."""
        self.view_state.push_history(self.view_state.overview_selected_page)
        self.view_state.select_page(self.view_state.page_number)
        self.page_selected.emit(self.view_state.page_number)
        return self.view_state.page_number

    def leave(self) -> PageNum:
        """Mouse left the panel: go back to the selected page."""
        selected = self.view_state.overview_selected_page
        self.view_state.show_page(selected)
        self.page_shown.emit(self.view_state.page_number)
        return self.view_state.page_number

    def set_layout(self, layout: OverviewLayout | str) -> None:
        layout = OverviewLayout(layout)
        if layout != self.index.kind:
            self.index.set_kind(layout)
            self.layout_changed.emit(str(layout))

    def traversal_path(self) -> Polyline:
        return self.index.traversal_path()

    def nodes(self) -> list[OverviewNode]:
        """Paint data for every page node."""
        gap = self.index.gap_between_nodes() if self.index.length > 1 else 0.0
        current = self.view_state.page_number
        selected = self.view_state.overview_selected_page
        return [
            OverviewNode(
                page=i,
                position=self.index.position(i),
                radius=gap * 0.2,
                cached=self.cache is not None and self.cache.contains(i),
                current=i == current,
                selected=i == selected,
            )
            for i in range(self.index.length)
        ]
