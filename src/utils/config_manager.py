"""
Configuration Manager

This module handles persistent storage and retrieval of user preferences and settings.
Settings are stored in a JSON file in the user's application data directory.

Inputs:
    - User preferences (last opened folder, default window, display size, layout)

Outputs:
    - Loaded configuration values
    - Saved configuration file

Requirements:
    - json module (standard library)
    - pathlib module (standard library)
    - os module (standard library)
"""

import json
import os
from pathlib import Path
from typing import Any, Dict

AXIS_NAMES = ["axial", "coronal", "sagittal"]


class ConfigManager:
    """
    Manages application configuration and user preferences.

    Handles loading and saving of settings including:
    - Last opened folder path
    - Default window level/width
    - Maximum display size of rendered views
    - Main view axis and control panel visibility
    - Window geometry
    """

    def __init__(self, config_filename: str = "mpr_viewer_config.json"):
        """
        Initialize the configuration manager.

        Args:
            config_filename: Name of the configuration file to use
        """
        if os.name == 'nt':  # Windows
            app_data = os.getenv('APPDATA', os.path.expanduser('~'))
            self.config_dir = Path(app_data) / "MPRViewer"
        else:  # Mac/Linux
            self.config_dir = Path.home() / ".config" / "MPRViewer"

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_path = self.config_dir / config_filename

        self.default_config = {
            "last_path": "",
            "window_level_default": 40,
            "window_width_default": 400,
            "max_display_size": 800,  # Cap for each dimension of a rendered view
            "main_view_axis": "axial",  # axial, coronal, sagittal
            "controls_visible": True,
            "recursive_scan": False,  # Include subfolders when opening a folder
            "window_width": 1280,
            "window_height": 900,
        }

        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration from file, or return defaults if file doesn't exist.

        Returns:
            Dictionary containing configuration values
        """
        if self.config_path.exists():
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    loaded_config = json.load(f)
                    # Merge with defaults to ensure all keys exist
                    config = self.default_config.copy()
                    config.update(loaded_config)
                    return config
            except (json.JSONDecodeError, IOError) as e:
                print(f"Warning: Could not load config file: {e}")
                return self.default_config.copy()
        else:
            return self.default_config.copy()

    def save_config(self) -> bool:
        """
        Save current configuration to file.

        Returns:
            True if save was successful, False otherwise
        """
        try:
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self.config, f, indent=4, ensure_ascii=False)
            return True
        except IOError as e:
            print(f"Error saving config file: {e}")
            return False

    def get_last_path(self) -> str:
        """
        Get the last opened folder path.

        Returns:
            Path string, empty if not set
        """
        return self.config.get("last_path", "")

    def set_last_path(self, path: str) -> None:
        """
        Set the last opened folder path.

        Args:
            path: Path to save
        """
        self.config["last_path"] = path
        self.save_config()

    def get_default_window(self) -> tuple:
        """
        Get the default window level and width.

        Returns:
            (window_level, window_width)
        """
        return (
            self.config.get("window_level_default", 40),
            self.config.get("window_width_default", 400),
        )

    def set_default_window(self, window_level: float, window_width: float) -> None:
        """
        Set the default window level and width.

        Args:
            window_level: Window center
            window_width: Window width, must be >= 1
        """
        if window_width >= 1:
            self.config["window_level_default"] = window_level
            self.config["window_width_default"] = window_width
            self.save_config()

    def get_max_display_size(self) -> int:
        """Get the maximum size in pixels of each dimension of a rendered view."""
        return int(self.config.get("max_display_size", 800))

    def get_main_view_axis(self) -> str:
        """
        Get the axis shown in the large view.

        Returns:
            "axial", "coronal" or "sagittal"
        """
        axis = self.config.get("main_view_axis", "axial")
        return axis if axis in AXIS_NAMES else "axial"

    def set_main_view_axis(self, axis: str) -> None:
        """
        Set the axis shown in the large view.

        Args:
            axis: "axial", "coronal" or "sagittal"
        """
        if axis in AXIS_NAMES:
            self.config["main_view_axis"] = axis
            self.save_config()

    def get_controls_visible(self) -> bool:
        """Whether the control panel is shown."""
        return bool(self.config.get("controls_visible", True))

    def set_controls_visible(self, visible: bool) -> None:
        """Set whether the control panel is shown."""
        self.config["controls_visible"] = bool(visible)
        self.save_config()

    def get_recursive_scan(self) -> bool:
        """Whether folder loading includes subfolders."""
        return bool(self.config.get("recursive_scan", False))

    def get_window_size(self) -> tuple:
        """
        Get the main window size.

        Returns:
            (width, height)
        """
        return (
            self.config.get("window_width", 1280),
            self.config.get("window_height", 900),
        )

    def set_window_size(self, width: int, height: int) -> None:
        """
        Set the main window size.

        Args:
            width: Window width in pixels
            height: Window height in pixels
        """
        self.config["window_width"] = width
        self.config["window_height"] = height
        self.save_config()
