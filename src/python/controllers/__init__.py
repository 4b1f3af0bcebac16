"""Controllers package for the page viewer engine.

This package wires the engine's state and algorithms to a UI through Qt
signals. Each controller owns one panel of a page viewer window.

Main Components:
    ViewController: Scrolling, zooming, crop transitions and frames of the page view
    OverviewController: Hover/click navigation and paint data of the overview panel

Usage:
    from controllers import ViewController, OverviewController

    view = ViewController(view_state, renderer=render_page)
    overview = OverviewController(view_state, cache=view.cache)
    overview.page_shown.connect(lambda page: view.update_view())
"""

from controllers.view_controller import ViewController
from controllers.overview_controller import OverviewController

__all__ = ['ViewController', 'OverviewController']
