"""
Tests for crop transition animation.
"""
import pytest

from crop_animator import (
    CropField, CropTransitionAnimator, Idle, PageFrame, Running, Starting, page_range, smootherstep,
)
from document import AllPagesSame, Document, DocumentInfo
from enums import Axis
from geometry import Rect, Size, UNIT_SQUARE
from view_state import ViewState


@pytest.fixture
def animator():
    return CropTransitionAnimator(duration_ms=170.0, clock=lambda: 0.0)


@pytest.fixture
def narrow_crop_view():
    """Crop rectangles with a different aspect ratio than their pages."""
    info = DocumentInfo(AllPagesSame(Rect(0.1, 0.05, 0.9, 0.95)))
    document = Document.uniform(10, Size(600.0, 800.0), info)
    return ViewState(document, viewer_size=Size(800.0, 600.0), page_number=4, page_position=0.5,
                     crop_weight=1.0, scroll_direction=Axis.HORIZONTAL)


def run_to_end(animator, view, t0=10.0):
    animator.frame(view, t0)
    assert animator.advance(view, t0 + 0.1)
    assert not animator.advance(view, t0 + 0.2)


class TestSmootherstep:
    def test_endpoints(self):
        assert smootherstep(0.0) == 0.0
        assert smootherstep(1.0) == pytest.approx(1.0)
        assert smootherstep(0.5) == pytest.approx(0.5)

    def test_monotonic(self):
        values = [smootherstep(i / 50) for i in range(51)]
        assert values == sorted(values)


class TestStateMachine:
    """Idle -> Starting -> Running -> Idle."""

    def test_start_moves_to_starting(self, animator, golden_view):
        assert animator.is_idle
        assert animator.start(golden_view)
        assert animator.state == Starting()
        assert animator.field == CropField(1.0, 0.0)

    def test_first_frame_starts_clock(self, animator, golden_view):
        animator.start(golden_view)
        assert animator.advance(golden_view, 5.0)
        animator.frame(golden_view, 5.0)
        assert animator.state == Running(5.0)
        assert animator.progress(5.0) == 0.0

    def test_finishes_after_duration(self, animator, golden_view):
        animator.start(golden_view)
        animator.frame(golden_view, 1.0)
        assert animator.advance(golden_view, 1.1)
        assert not animator.advance(golden_view, 1.2)
        assert animator.is_idle
        assert golden_view.crop_weight == 0.0
        assert animator.field is None

    def test_retrigger_is_ignored(self, animator, golden_view):
        assert animator.start(golden_view)
        assert not animator.start(golden_view)
        animator.frame(golden_view, 0.0)
        assert not animator.start(golden_view)
        assert animator.field == CropField(1.0, 0.0)

    def test_empty_document(self, animator, empty_document):
        view = ViewState(empty_document, viewer_size=Size(800.0, 600.0))
        assert not animator.start(view)
        assert animator.is_idle

    def test_toggle_back_and_forth(self, animator, golden_view):
        animator.start(golden_view)
        run_to_end(animator, golden_view)
        assert golden_view.crop_weight == 0.0
        assert animator.start(golden_view)
        assert animator.field == CropField(0.0, 1.0)
        run_to_end(animator, golden_view, 20.0)
        assert golden_view.crop_weight == 1.0

    def test_partial_weight_rounds_target(self, animator, uniform_document):
        view = ViewState(uniform_document, viewer_size=Size(800.0, 600.0), page_number=4,
                         crop_weight=0.3)
        animator.start(view)
        assert animator.field == CropField(0.3, 1.0)


class TestFrames:
    """Interpolated page rectangles and crop weights."""

    def test_endpoints_match_layouts(self, animator, golden_view):
        animator.start(golden_view)
        before = dict(animator.layout_before)
        after = dict(animator.layout_after)

        first = animator.sample(golden_view, 0.0)
        last = animator.sample(golden_view, 1.0)
        for page_number, frame in first.items():
            assert frame.rect == before[page_number]
            assert frame.crop_weight == 1.0
        for page_number, frame in last.items():
            expected = after.get(page_number, before[page_number])
            assert (frame.rect.x0, frame.rect.x1) == pytest.approx((expected.x0, expected.x1))
            assert frame.crop_weight == pytest.approx(0.0)
            assert frame.crop == UNIT_SQUARE

    def test_midpoint_strictly_between(self, animator, narrow_crop_view):
        animator.start(narrow_crop_view)
        mid = animator.sample(narrow_crop_view, 0.5)
        assert 0.0 < mid[4].crop_weight < 1.0
        before = animator.layout_before[4]
        after = animator.layout_after[4]
        assert before.x0 != after.x0
        assert min(before.x0, after.x0) < mid[4].rect.x0 < max(before.x0, after.x0)
        assert min(before.x1, after.x1) < mid[4].rect.x1 < max(before.x1, after.x1)

    def test_uncropping_widens_pages(self, animator, narrow_crop_view):
        # the crop is narrower than the page, so whole pages get wider on screen
        animator.start(narrow_crop_view)
        assert animator.layout_before[4].width == pytest.approx(400.0)
        assert animator.layout_after[4].width == pytest.approx(450.0)

    def test_cropping_lays_out_before_for_every_page_after(self, animator, uniform_document):
        view = ViewState(uniform_document, viewer_size=Size(800.0, 600.0), page_number=4,
                         crop_weight=0.0)
        animator.start(view)
        assert set(animator.layout_after) <= set(animator.layout_before)

    def test_position_renormalized_on_finish(self, animator, uniform_document):
        view = ViewState(uniform_document, viewer_size=Size(800.0, 600.0), page_number=4,
                         page_position=0.98, crop_weight=0.0)
        animator.start(view)
        run_to_end(animator, view)
        assert view.crop_weight == 1.0
        assert view.page_position == pytest.approx(0.05 + 0.9 * 0.98)

    def test_layout_before_replaced_on_finish(self, animator, golden_view):
        animator.start(golden_view)
        after = dict(animator.layout_after)
        run_to_end(animator, golden_view)
        assert animator.layout_before == after


class TestHelpers:
    def test_page_range(self):
        assert page_range({}) is None
        assert page_range({3: UNIT_SQUARE, 5: UNIT_SQUARE, 4: UNIT_SQUARE}) == (3, 5)

    def test_image_rect_uncrops(self):
        frame = PageFrame(Rect(100.0, 0.0, 550.0, 600.0), Rect(0.05, 0.05, 0.95, 0.95), 1.0)
        image = frame.image_rect
        assert image.width == pytest.approx(500.0)
        assert image.x0 == pytest.approx(75.0)
        assert image.y0 == pytest.approx(-600.0 / 0.9 * 0.05)
