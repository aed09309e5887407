"""
Main Application Window

This module implements the main window of the MPR viewer: a large main view,
two smaller views below it, and the control panel on the right. Clicking a
small view swaps it into the main position.

Inputs:
    - User interactions (menu selections, clicks on views)
    - Application configuration

Outputs:
    - Main application interface
    - Signals for folder opening

Requirements:
    - PySide6 for GUI components
    - ConfigManager for settings
"""

from typing import Dict, Optional

from PySide6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QMessageBox
from PySide6.QtGui import QAction, QKeySequence, QColor
from PySide6.QtCore import Signal

from utils.config_manager import ConfigManager
from gui.image_panel import ImagePanel
from gui.control_panel import ControlPanel

AXIS_ORDER = ("axial", "coronal", "sagittal")


class MainWindow(QMainWindow):
    """
    Main application window for the MPR viewer.

    Provides:
    - Menu bar with folder opening and control panel toggle
    - One image panel per axis, arranged as main view plus two sub views
    - Control panel with sliders
    """

    # Signals
    open_folder_requested = Signal()

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        """
        Initialize the main window.

        Args:
            config_manager: Optional ConfigManager instance
        """
        super().__init__()
        self.config_manager = config_manager or ConfigManager()
        self.setWindowTitle("MPR Viewer")
        width, height = self.config_manager.get_window_size()
        self.resize(width, height)

        self.image_panels: Dict[str, ImagePanel] = {
            axis: ImagePanel(axis) for axis in AXIS_ORDER
        }
        self.control_panel = ControlPanel()
        self.control_panel.open_folder_requested.connect(self.open_folder_requested.emit)
        for panel in self.image_panels.values():
            panel.clicked.connect(self.switch_layout)

        self.main_view_axis = self.config_manager.get_main_view_axis()
        self._create_menu_bar()
        self._create_central_widget()
        self.switch_layout(self.main_view_axis)
        self.control_panel.setVisible(self.config_manager.get_controls_visible())

    def _create_menu_bar(self) -> None:
        """Create File and View menus."""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&File")
        open_folder_action = QAction("Open &Folder...", self)
        open_folder_action.setShortcut(QKeySequence.Open)
        open_folder_action.triggered.connect(self.open_folder_requested.emit)
        file_menu.addAction(open_folder_action)
        file_menu.addSeparator()
        exit_action = QAction("E&xit", self)
        exit_action.setShortcut(QKeySequence.Quit)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        view_menu = menubar.addMenu("&View")
        toggle_controls_action = QAction("Show/Hide Controls", self)
        toggle_controls_action.setShortcut(QKeySequence("F11"))
        toggle_controls_action.triggered.connect(self.toggle_controls)
        view_menu.addAction(toggle_controls_action)

    def _create_central_widget(self) -> None:
        """Create the image area and control panel layout."""
        central = QWidget()
        palette = central.palette()
        palette.setColor(central.backgroundRole(), QColor(30, 30, 30))
        central.setPalette(palette)
        central.setAutoFillBackground(True)

        root_layout = QHBoxLayout(central)
        root_layout.setContentsMargins(0, 0, 0, 0)

        self.image_area_layout = QVBoxLayout()
        self.bottom_layout = QHBoxLayout()
        root_layout.addLayout(self.image_area_layout, 1)
        root_layout.addWidget(self.control_panel, 0)
        self.setCentralWidget(central)

    def switch_layout(self, main_axis: str) -> None:
        """
        Show the given axis in the main view and the others below it.

        Args:
            main_axis: Axis for the main view
        """
        if main_axis not in self.image_panels:
            return
        for panel in self.image_panels.values():
            self.image_area_layout.removeWidget(panel)
            self.bottom_layout.removeWidget(panel)
        self.image_area_layout.removeItem(self.bottom_layout)

        sub_axes = [axis for axis in AXIS_ORDER if axis != main_axis]
        self.image_area_layout.addWidget(self.image_panels[main_axis], 3)
        for axis in sub_axes:
            self.bottom_layout.addWidget(self.image_panels[axis], 1)
        self.image_area_layout.addLayout(self.bottom_layout, 2)

        if main_axis != self.main_view_axis:
            self.main_view_axis = main_axis
            self.config_manager.set_main_view_axis(main_axis)

    def toggle_controls(self) -> None:
        """Show or hide the control panel."""
        visible = self.control_panel.isHidden()
        self.control_panel.setVisible(visible)
        self.config_manager.set_controls_visible(visible)

    def show_warning(self, title: str, message: str) -> None:
        QMessageBox.warning(self, title, message)

    def closeEvent(self, event) -> None:
        self.config_manager.set_window_size(self.width(), self.height())
        super().closeEvent(event)
