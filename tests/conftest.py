"""
conftest.py - Shared pytest fixtures for page viewer engine tests

This module provides standardized test fixtures for use across all tests.
It includes fixtures for:
- Path setup and Python path configuration
- Configuration management
- Synthetic documents and view states
- Qt object support
"""
import sys
import json
import pathlib
import pytest

# Add the src/python directory to the Python path
sys.path.insert(0, str(pathlib.Path(__file__).parent.parent / "src" / "python"))

# Imports from engine modules (now that path is configured)
from config_manager import ConfigManager
from document import AllPagesSame, Document, DocumentInfo
from enums import Axis, OverviewPosition
from geometry import Rect, Size
from view_state import ViewState


DEFAULT_MARGINS = Rect(0.05, 0.05, 0.95, 0.95)


# Path and Environment Fixtures
# ----------------------------

@pytest.fixture
def pageview_paths():
    """Provide standard paths to key project directories."""
    root_dir = pathlib.Path(__file__).parent.parent
    return {
        'root': root_dir,
        'src': root_dir / 'src',
        'python': root_dir / 'src' / 'python',
        'config': root_dir / 'config',
        'tests': root_dir / 'tests'
    }


# Configuration Fixtures
# ---------------------

@pytest.fixture
def test_config_data():
    """Create minimal test configuration data."""
    return {
        "debug": False,
        "view": {
            "scrollDirection": "vertical",
            "overviewPosition": "south",
            "overviewProportion": 0.75,
            "cropWeight": 0.0,
            "pagePosition": 0.25,
            "zoomStep": 1.25
        },
        "animation": {
            "cropTransitionMs": 200
        },
        "overview": {
            "layout": "fractal",
            "hoverSuppressMs": 250,
            "edgeMarginPx": 8
        },
        "margins": {
            "default": [0.1, 0.2, 0.9, 0.8]
        },
        "logging": {
            "level": "DEBUG",
            "file": "logs/test.log"
        }
    }


@pytest.fixture
def test_config_files(tmp_path, test_config_data):
    """Create a temporary config file."""
    config_file = tmp_path / "test_config.json"

    with open(config_file, 'w') as f:
        json.dump(test_config_data, f)

    return {
        "config_path": config_file,
        "tmp_path": tmp_path
    }


@pytest.fixture
def test_config_manager(test_config_files):
    """Create a ConfigManager instance with test configuration."""
    return ConfigManager(
        cfg_path=test_config_files["config_path"],
        exit_on_error=False
    )


# Document Fixtures
# ----------------

@pytest.fixture
def margins_info():
    """DocumentInfo with the standard 5% margins on every page."""
    return DocumentInfo(AllPagesSame(DEFAULT_MARGINS))


@pytest.fixture
def uniform_document(margins_info):
    """Ten 600x800 point pages with 5% margins."""
    return Document.uniform(10, Size(600.0, 800.0), margins_info)


@pytest.fixture
def mixed_document():
    """Pages of different sizes and margins, including a landscape page."""
    info = DocumentInfo(AllPagesSame(DEFAULT_MARGINS))
    info.custom_margins[2] = Rect(0.2, 0.1, 0.7, 0.9)
    sizes = [
        Size(600.0, 800.0),
        Size(600.0, 800.0),
        Size(1000.0, 700.0),
        Size(500.0, 500.0),
        Size(600.0, 900.0),
        Size(600.0, 800.0),
    ]
    return Document(sizes, info)


@pytest.fixture
def empty_document(margins_info):
    return Document([], margins_info)


@pytest.fixture
def golden_view(uniform_document):
    """Horizontal 800x600 reading view anchored mid-way through page 4."""
    return ViewState(
        uniform_document,
        viewer_size=Size(800.0, 600.0),
        page_number=4,
        page_position=0.5,
        crop_weight=1.0,
        scroll_direction=Axis.HORIZONTAL,
        overview_position=OverviewPosition.EAST,
        overview_proportion=0.8,
    )


# Qt Fixtures
# ----------

@pytest.fixture(scope="session")
def qt_app():
    """Create a QCoreApplication instance that persists for the test session."""
    try:
        from PyQt6.QtCore import QCoreApplication
    except ImportError:
        pytest.skip("PyQt6 not installed, skipping test")

    # Check if an instance already exists
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([''])

    yield app
