"""
Unit tests for ViewState: anchor, scrolling and navigation.
"""
import pytest

from enums import Axis, OverviewPosition
from geometry import Size, major_span
from view_state import ViewState


class TestInit:
    def test_defaults_from_config(self, uniform_document):
        vs = ViewState(uniform_document)
        assert vs.page_number == 0
        assert vs.page_position == pytest.approx(0.5)
        assert vs.crop_weight == pytest.approx(1.0)
        assert vs.scroll_direction == Axis.HORIZONTAL
        assert vs.overview_position == OverviewPosition.EAST
        assert vs.overview_proportion == pytest.approx(0.8)
        assert vs.overview_selected_page == 0

    def test_clamps(self, uniform_document):
        vs = ViewState(uniform_document, page_number=42, crop_weight=3.0)
        assert vs.page_number == 9
        assert vs.crop_weight == 1.0
        assert vs.overview_selected_page == 9

    def test_accepts_config_strings(self, uniform_document):
        vs = ViewState(uniform_document, scroll_direction="vertical", overview_position="south")
        assert vs.scroll_direction == Axis.VERTICAL
        assert vs.overview_position == OverviewPosition.SOUTH


class TestScrollBy:
    """Scrolling walks the laid out pages to find the new anchor."""

    def test_golden_scroll(self, golden_view):
        page, position, layout = golden_view.scroll_by(1500.0, 4, 0.5)
        assert page == 7
        assert position == pytest.approx(0.8)
        assert golden_view.page_number == 7
        assert golden_view.page_position == pytest.approx(0.8)
        low, high = major_span(Axis.HORIZONTAL, layout[7])
        assert low <= 1900.0 <= high

    def test_round_trip(self, golden_view):
        page, position, _ = golden_view.scroll_by(300.0, 4, 0.5)
        assert (page, position) == (5, pytest.approx(0.2))
        page, position, _ = golden_view.scroll_by(-300.0, page, position)
        assert page == 4
        assert position == pytest.approx(0.5)

    @pytest.mark.parametrize("distance", [37.0, 450.0, 1234.5, 2000.0])
    def test_round_trip_vertical(self, uniform_document, distance):
        vs = ViewState(uniform_document, viewer_size=Size(600.0, 900.0), page_number=5,
                       page_position=0.3, crop_weight=1.0, scroll_direction=Axis.VERTICAL)
        page, position, _ = vs.scroll_by(distance, 5, 0.3)
        page, position, _ = vs.scroll_by(-distance, page, position)
        assert page == 5
        assert position == pytest.approx(0.3)

    def test_round_trip_partially_cropped(self, uniform_document):
        vs = ViewState(uniform_document, viewer_size=Size(800.0, 600.0), page_number=3,
                       page_position=0.4, crop_weight=0.5)
        page, position, _ = vs.scroll_by(700.0, 3, 0.4)
        page, position, _ = vs.scroll_by(-700.0, page, position)
        assert page == 3
        assert position == pytest.approx(0.4)

    def test_scroll_past_end(self, golden_view):
        page, position, _ = golden_view.scroll_by(1e6, 4, 0.5)
        assert page == 9
        assert position == pytest.approx(0.95)

    def test_scroll_past_start(self, golden_view):
        page, position, _ = golden_view.scroll_by(-1e6, 4, 0.5)
        assert page == 0
        assert position == pytest.approx(0.05)

    def test_zero_distance(self, golden_view):
        page, position, layout = golden_view.scroll_by(0.0, 4, 0.5)
        assert page == 4
        assert position == pytest.approx(0.5)
        assert 4 in layout

    def test_empty_document(self, empty_document):
        vs = ViewState(empty_document, viewer_size=Size(800.0, 600.0))
        assert vs.scroll_by(500.0, 0, 0.5) == (0, 0.5, {})

    def test_selection_follows_anchor(self, golden_view):
        golden_view.scroll_by(1500.0, 4, 0.5)
        assert golden_view.overview_selected_page == 7

    def test_selection_kept_when_different(self, golden_view):
        golden_view.select_page(2)
        golden_view.scroll_by(1500.0, 4, 0.5)
        assert golden_view.overview_selected_page == 2


class TestVisibleWindow:
    def test_window_covers_viewport(self, golden_view):
        layout = golden_view.layout_pages_within_visible_window(Size(800.0, 600.0), 1.0)
        assert list(layout) == [3, 4, 5]
        assert layout[3].x0 <= 0.0
        assert layout[5].x1 >= 800.0

    def test_required_range(self, golden_view):
        layout = golden_view.layout_pages_within_visible_window(Size(800.0, 600.0), 1.0, (1, 8))
        assert list(layout) == list(range(1, 9))

    def test_set_visible_scroll_position(self, golden_view):
        golden_view.set_visible_scroll_position(6, 0.0)
        assert golden_view.page_number == 6
        assert golden_view.page_position == pytest.approx(0.05)
        golden_view.set_visible_scroll_position(2)
        assert golden_view.page_number == 2
        assert golden_view.page_position == pytest.approx(0.05)

    def test_visible_page_size_in_points(self, golden_view):
        size = golden_view.visible_page_size_in_points(0)
        assert (size.width, size.height) == pytest.approx((540.0, 720.0))
        golden_view.crop_weight = 0.0
        size = golden_view.visible_page_size_in_points(0)
        assert (size.width, size.height) == pytest.approx((600.0, 800.0))


class TestNavigation:
    """Jumping to pages, selection and history."""

    def test_show_page_clamps(self, golden_view):
        golden_view.show_page(50)
        assert golden_view.page_number == 9
        assert golden_view.overview_selected_page == 9

    def test_show_page_keeps_other_selection(self, golden_view):
        golden_view.select_page(1)
        golden_view.show_page(6)
        assert golden_view.page_number == 6
        assert golden_view.overview_selected_page == 1

    def test_go_back(self, golden_view):
        assert golden_view.go_back() is None
        golden_view.push_history(2)
        golden_view.push_history(7)
        assert golden_view.go_back() == 7
        assert golden_view.page_number == 7
        assert golden_view.overview_selected_page == 7
        assert golden_view.go_back() == 2
        assert golden_view.go_back() is None

    def test_toggle_scroll_direction(self, golden_view):
        golden_view.toggle_scroll_direction()
        assert golden_view.scroll_direction == Axis.VERTICAL
        golden_view.toggle_scroll_direction()
        assert golden_view.scroll_direction == Axis.HORIZONTAL

    def test_cycle_overview_position(self, golden_view):
        seen = []
        for _ in range(3):
            golden_view.cycle_overview_position()
            seen.append(golden_view.overview_position)
        assert seen == [OverviewPosition.SOUTH, OverviewPosition.NOWHERE, OverviewPosition.EAST]

    def test_adjust_zoom_applies_decision(self, golden_view):
        decision = golden_view.adjust_zoom(0.5, Size(1000.0, 1000.0))
        assert golden_view.scroll_direction == decision.axis
        assert golden_view.overview_position == decision.overview_position
        assert golden_view.overview_proportion == pytest.approx(decision.proportion)
        assert decision.proportion < 1.0
