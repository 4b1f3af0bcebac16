"""
Animated transitions between cropped (reading) and uncropped (editing) views.

The animator keeps two layouts: where pages are now ("before") and where they
will be once the crop weight reaches its target ("after"). Each frame blends
the two with an eased progress value. A transition goes
Idle -> Starting -> Running(t0) -> Idle; Starting lasts exactly one frame so
both layouts are ready before the first blended frame is drawn.
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable

from config_manager import config
from custom_types import PageLayout, PageNum, PageRange
from geometry import Rect, UNIT_SQUARE, lerp, lerp_rect, major_span
from view_state import ViewState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Starting:
    pass


@dataclass(frozen=True)
class Running:
    start_time: float


AnimationState = Idle | Starting | Running


@dataclass(frozen=True)
class CropField:
    """Crop weight moving from `start` to `end`."""
    start: float
    end: float


# What is being animated. New animated quantities get their own payload class.
AnimationField = CropField


@dataclass(frozen=True)
class PageFrame:
    """Where and how to draw one page in one frame.

    Attributes:
        rect: Screen rectangle the page is clipped to
        crop: Normalized part of the page shown inside `rect`
        crop_weight: Crop weight this frame was computed for
    """
    rect: Rect
    crop: Rect
    crop_weight: float

    @property
    def image_rect(self) -> Rect:
        """Screen rectangle of the whole (uncropped) page image."""
        scale_x = self.rect.width / self.crop.width
        scale_y = self.rect.height / self.crop.height
        x0 = self.rect.x0 - self.crop.x0 * scale_x
        y0 = self.rect.y0 - self.crop.y0 * scale_y
        return Rect(x0, y0, x0 + scale_x, y0 + scale_y)


def smootherstep(p: float) -> float:
    # https://en.wikipedia.org/wiki/Smoothstep
    return p * p * p * (p * (p * 6.0 - 15.0) + 10.0)


def page_range(layout: PageLayout) -> PageRange | None:
    if not layout:
        return None
    return min(layout), max(layout)


class CropTransitionAnimator:
    """Drives crop weight transitions for one view."""

    def __init__(
        self,
        duration_ms: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Args:
            duration_ms: Transition length (defaults to config animation.cropTransitionMs)
            clock: Seconds source used when no timestamp is passed in
        """
        self.duration_ms = duration_ms if duration_ms is not None else config.get_animation_duration_ms()
        self.clock = clock
        self.state: AnimationState = Idle()
        self.field: AnimationField | None = None
        self.layout_before: PageLayout = {}
        self.layout_after: PageLayout = {}

    @property
    def is_idle(self) -> bool:
        return isinstance(self.state, Idle)

    def refresh(self, view: ViewState) -> PageLayout:
        """Recompute the resting layout after the view's data or size changed."""
        self.layout_before = view.layout_pages_within_visible_window(
            view.viewer_size, view.crop_weight)
        return self.layout_before

    def start(self, view: ViewState) -> bool:
        """Begin toggling between cropped and uncropped.

        Returns:
            bool: False when nothing was started (a transition is already in
            progress, or the document has no pages)
        """
        if not self.is_idle:
            logger.debug("Crop transition already in progress, ignoring toggle")
            return False
        if view.page_count == 0:
            return False

        if not self.layout_before:
            self.refresh(view)

        start = view.crop_weight
        target = float(math.floor(1.0 - start + 0.5))
        self.field = CropField(start, target)
        self.state = Starting()

        # new positions for every page currently on screen
        self.layout_after = view.layout_pages_within_visible_window(
            view.viewer_size, target, page_range(self.layout_before))

        # cropping shows more pages; find where those are right now
        if target > start:
            self.layout_before = view.layout_pages_within_visible_window(
                view.viewer_size, start, page_range(self.layout_after))

        logger.info("Crop transition %.2f -> %.2f over %d pages",
                    start, target, len(self.layout_after))
        return True

    def elapsed_ms(self, now: float | None = None) -> float:
        match self.state:
            case Running(start_time=start_time):
                now = self.clock() if now is None else now
                return (now - start_time) * 1000.0
            case _:
                return 0.0

    def progress(self, now: float | None = None) -> float:
        """Eased progress of the running transition in [0, 1]."""
        if not isinstance(self.state, Running):
            return 0.0
        return smootherstep(min(1.0, self.elapsed_ms(now) / self.duration_ms))

    def frame(self, view: ViewState, now: float | None = None) -> dict[PageNum, PageFrame]:
        """Page placement for the frame being painted at `now`."""
        now = self.clock() if now is None else now
        if isinstance(self.state, Starting):
            self.state = Running(now)
        return self.sample(view, self.progress(now))

    def sample(self, view: ViewState, progress: float) -> dict[PageNum, PageFrame]:
        """Page placement at an explicit eased progress value."""
        if self.field is None:
            start = end = view.crop_weight
        else:
            start, end = self.field.start, self.field.end
        crop_weight = lerp(start, end, progress)

        frames: dict[PageNum, PageFrame] = {}
        for page_number, before in self.layout_before.items():
            after = before
            if self.field is not None:
                after = self.layout_after.get(page_number, before)
            frames[page_number] = PageFrame(
                lerp_rect(before, after, progress),
                lerp_rect(UNIT_SQUARE, view.document.margins(page_number), crop_weight),
                crop_weight,
            )
        return frames

    def advance(self, view: ViewState, now: float | None = None) -> bool:
        """Animation tick. Returns True while further frames are needed."""
        match self.state:
            case Starting():
                return True
            case Running():
                if self.elapsed_ms(now) < self.duration_ms:
                    return True
                self._finish(view)
                return False
            case _:
                return False

    def _finish(self, view: ViewState) -> None:
        match self.field:
            case CropField(end=end):
                view.crop_weight = end
                low, high = major_span(view.scroll_direction,
                                       view.document.margins(view.page_number))
                if view.page_position < low or view.page_position > high:
                    view.page_position = low + (high - low) * view.page_position

        logger.debug("Crop transition finished at weight %.2f", view.crop_weight)
        self.field = None
        self.state = Idle()
        self.layout_before = dict(self.layout_after)
