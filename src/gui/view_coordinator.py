"""
View Coordinator

This module connects the main window to the MPR engine. It owns the view
parameters (slice indices and window), loads folders through the DICOM loader,
and re-renders all three views whenever a parameter changes.

Inputs:
    - Signals from MainWindow, ControlPanel and ImagePanel widgets
    - Folder paths chosen by the user

Outputs:
    - DisplayImage objects pushed to the image panels
    - Updated control ranges and info text

Requirements:
    - PySide6 for dialogs and progress reporting
    - core.mpr_engine, core.dicom_loader, core.view_parameters
    - utils.config_manager
"""

from typing import Optional

from PySide6.QtWidgets import QApplication, QFileDialog, QProgressDialog
from PySide6.QtCore import QObject, Qt

from core.dicom_loader import DICOMLoader
from core.mpr_engine import MPREngine
from core.view_parameters import ViewParameters
from core.mpr_errors import NoSeriesFoundError, EmptyVolumeError
from utils.config_manager import ConfigManager


class ViewCoordinator(QObject):
    """
    Coordinates loading and rendering for the MPR viewer.

    Responsibilities:
    - Open a folder, decode its slices and build the volume
    - Keep view parameters within the volume extents
    - Render the three views on every slider, wheel or reset action
    """

    def __init__(self, main_window, engine: Optional[MPREngine] = None,
                 loader: Optional[DICOMLoader] = None,
                 config_manager: Optional[ConfigManager] = None):
        """
        Initialize the coordinator and connect widget signals.

        Args:
            main_window: MainWindow instance
            engine: MPR engine (a new one if None)
            loader: DICOM loader (a new one if None)
            config_manager: Configuration (the main window's if None)
        """
        super().__init__()
        self.main_window = main_window
        self.engine = engine or MPREngine()
        self.loader = loader or DICOMLoader()
        self.config_manager = config_manager or main_window.config_manager
        level, width = self.config_manager.get_default_window()
        self.view_parameters = ViewParameters(window_level=level, window_width=width)

        control_panel = main_window.control_panel
        main_window.open_folder_requested.connect(self.open_folder)
        control_panel.reset_requested.connect(self.reset_view)
        control_panel.save_default_window_requested.connect(self.save_default_window)
        control_panel.slice_changed.connect(self.set_slice)
        control_panel.window_changed.connect(self.set_window)
        for panel in main_window.image_panels.values():
            panel.wheel_scrolled.connect(self.step_slice)

    def open_folder(self) -> None:
        """Ask for a folder and load it."""
        folder = QFileDialog.getExistingDirectory(
            self.main_window, "Select DICOM Folder", self.config_manager.get_last_path()
        )
        if folder:
            self.config_manager.set_last_path(folder)
            self.load_folder(folder)

    def load_folder(self, folder: str) -> bool:
        """
        Load the largest series of a folder into the engine.

        The current volume stays loaded if the folder yields nothing usable.

        Args:
            folder: Directory to scan

        Returns:
            True if a new volume was loaded
        """
        progress = QProgressDialog("Loading Pixel Data...", "", 0, 0, self.main_window)
        progress.setCancelButton(None)
        progress.setWindowTitle("Scanning")
        progress.setWindowModality(Qt.WindowModality.ApplicationModal)
        progress.setMinimumDuration(300)

        def on_progress(current: int, total: int, filename: str) -> None:
            progress.setMaximum(total)
            progress.setValue(current)
            QApplication.processEvents()

        try:
            sources = self.loader.load_directory(
                folder,
                recursive=self.config_manager.get_recursive_scan(),
                progress_callback=on_progress,
            )
        finally:
            progress.close()

        try:
            self.engine.build_volume(self.engine.select_series(sources))
        except NoSeriesFoundError:
            self.main_window.show_warning("No Series", f"No readable DICOM series found in:\n{folder}")
            return False
        except EmptyVolumeError:
            self.main_window.show_warning("Empty Volume", "No slices with matching dimensions could be loaded.")
            return False

        self._on_volume_loaded()
        return True

    def _on_volume_loaded(self) -> None:
        """Reset view parameters and controls for a newly built volume."""
        extents = self.engine.volume_extents()
        self.view_parameters.reset(extents)
        self.view_parameters.set_window(*self.config_manager.get_default_window())

        control_panel = self.main_window.control_panel
        control_panel.set_extents(extents)
        control_panel.set_view_parameters(self.view_parameters)
        control_panel.set_info_text(self.engine.summary_text())
        control_panel.set_controls_enabled(True)
        self.update_all_views()

    def set_slice(self, axis: str, index: int) -> None:
        if self.view_parameters.set_index(axis, index, self.engine.volume_extent(axis)):
            self.update_all_views()

    def step_slice(self, axis: str, direction: int) -> None:
        """Move one slice along an axis (mouse wheel over a view)."""
        if not self.engine.is_loaded():
            return
        if self.view_parameters.step(axis, direction, self.engine.volume_extent(axis)):
            self.main_window.control_panel.set_view_parameters(self.view_parameters)
            self.update_all_views()

    def set_window(self, level: int, width: int) -> None:
        self.view_parameters.set_window(level, width)
        self.update_all_views()

    def save_default_window(self) -> None:
        """Store the current window as the default restored on load and reset."""
        self.config_manager.set_default_window(
            self.view_parameters.window_level, self.view_parameters.window_width
        )
        print(f"[MPR] Default window set to L={self.view_parameters.window_level} "
              f"W={self.view_parameters.window_width}")

    def reset_view(self) -> None:
        """Center all slices and restore the default window; ignored when Empty."""
        if not self.engine.is_loaded():
            return
        self.view_parameters.reset(self.engine.volume_extents())
        self.view_parameters.set_window(*self.config_manager.get_default_window())
        self.main_window.control_panel.set_view_parameters(self.view_parameters)
        self.update_all_views()

    def update_all_views(self) -> None:
        """Render the three views and push them to the panels."""
        if not self.engine.is_loaded():
            return
        images = self.engine.render_all_views(
            self.view_parameters, self.config_manager.get_max_display_size()
        )
        for axis, display_image in images.items():
            self.main_window.image_panels[axis].set_image(display_image)
