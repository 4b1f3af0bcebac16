import json
import pathlib
import sys
import logging
from typing import Any

from custom_types import AnimationConfig, CropEditingConfig, OverviewConfig, ViewConfig
from geometry import Rect

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = ("view", "animation", "overview", "margins")


class ConfigManager:
    """Manages engine configuration: initial view state, animation, overview and margins"""

    view: ViewConfig
    animation: AnimationConfig
    overview: OverviewConfig
    margins: dict[str, Any]
    exit_on_error: bool
    _cfg: dict[str, Any]
    cfg_path: str | pathlib.Path

    def __init__(
        self,
        cfg_path: str | pathlib.Path | None = None,
        exit_on_error: bool = True
    ) -> None:
        """Initialize the ConfigManager with an optional custom path.

        Args:
            cfg_path: Path to the config.json file (defaults to standard location if None)
            exit_on_error: Whether to exit the program on configuration errors
        """
        self.view = {}
        self.animation = {}
        self.overview = {}
        self.margins = {}
        self.exit_on_error = exit_on_error
        self._cfg = {}

        self.cfg_path = cfg_path if cfg_path is not None else self._default_config_path()

        self.load_config()

    def _default_config_path(self) -> pathlib.Path:
        """Get the default path to the config.json file."""
        base = pathlib.Path(__file__).parent.parent.parent
        return base / "config" / "config.json"

    def load_config(self) -> None:
        """Load master configuration from the configured path."""
        try:
            with open(self.cfg_path, 'r') as f:
                self._cfg = json.load(f)
        except Exception as e:
            error_msg = "Critical error loading configuration '%s': %s"
            logger.error(error_msg, self.cfg_path, e)
            if self.exit_on_error:
                sys.exit(1)
            else:
                raise RuntimeError(f"Critical error loading configuration '{self.cfg_path}': {e}")

        # Validate and assign sections
        try:
            self.view = self._cfg["view"]
            self.animation = self._cfg["animation"]
            self.overview = self._cfg["overview"]
            self.margins = self._cfg["margins"]
        except KeyError as e:
            error_msg = "Configuration missing key: %s"
            logger.error(error_msg, e)
            if self.exit_on_error:
                sys.exit(1)
            else:
                raise KeyError(f"Configuration missing key: {e}")

        logger.debug("Loaded configuration from %s", self.cfg_path)

    def is_debug(self) -> bool:
        """Whether invariant violations should be fatal instead of skipped"""
        return bool(self._cfg.get("debug", False))

    def get_setting(self, section: str, key: str, default: Any = None) -> Any:
        """Get a generic setting from the master config"""
        try:
            return self._cfg.get(section, {}).get(key, default)
        except Exception:
            return default

    def set_setting(self, section: str, key: str, value: Any) -> None:
        """Set a setting in memory (does not persist to file).

        Args:
            section: Configuration section (e.g., 'view', 'overview')
            key: Setting key within the section
            value: Value to set
        """
        if section not in self._cfg:
            self._cfg[section] = {}
        self._cfg[section][key] = value

    def get_view_setting(self, key: str, default: Any = None) -> Any:
        """Get an initial view-state setting"""
        return self.view.get(key, default)

    def get_logging_setting(self, key: str, default: Any = None) -> Any:
        """Get a logging configuration setting"""
        try:
            return self._cfg.get("logging", {}).get(key, default)
        except Exception:
            return default

    # ============================================================================
    # Typed accessors
    # ============================================================================

    def get_animation_duration_ms(self, default: float = 170.0) -> float:
        """Get the crop transition duration in milliseconds."""
        return float(self.animation.get("cropTransitionMs", default))

    def get_overview_config(self) -> OverviewConfig:
        """Get overview panel configuration.

        Returns:
            dict: Overview configuration with keys:
                - layout: 'grid' or 'fractal'
                - hoverSuppressMs: Ignore hover navigation this long after a resize
                - edgeMarginPx: Ignore hover this close to the splitter edge
        """
        return self.overview

    def get_default_margins(self) -> Rect:
        """Get the default crop rectangle applied to pages without custom margins.

        Returns:
            Rect: Normalized (x0, y0, x1, y1) crop rectangle
        """
        x0, y0, x1, y1 = self.margins.get("default", [0.05, 0.05, 0.95, 0.95])
        return Rect(x0, y0, x1, y1)

    def get_crop_editing_config(self) -> CropEditingConfig:
        """Get crop editing configuration.

        Returns:
            dict: Crop editing configuration with keys:
                - handleSize: Fraction of the crop rect treated as an edge handle
                - minimumSize: Smallest normalized crop width/height
        """
        if "cropEditing" in self._cfg:
            return self._cfg["cropEditing"]
        return {"handleSize": 1 / 3, "minimumSize": 0.1}


# Create a singleton instance
config = ConfigManager()
