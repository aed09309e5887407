"""
Control Panel

This module provides the side panel of the MPR viewer: folder button, volume
info text, one slice slider per axis, window level/width sliders and a reset
button.

Inputs:
    - Volume extents and summary text
    - View parameters to display

Outputs:
    - Signals for slice, window, open and reset actions

Requirements:
    - PySide6 for GUI controls
    - core.window_transform for slider ranges
"""

from typing import Dict

from PySide6.QtWidgets import (QWidget, QVBoxLayout, QLabel, QSlider,
                                QPushButton, QPlainTextEdit, QSizePolicy)
from PySide6.QtGui import QFont
from PySide6.QtCore import Qt, Signal

from core.window_transform import (WINDOW_LEVEL_RANGE, WINDOW_WIDTH_RANGE,
                                   DEFAULT_WINDOW_LEVEL, DEFAULT_WINDOW_WIDTH)
from gui.image_panel import AXIS_COLORS

SLIDER_LABELS = {
    "axial": "Axial Slice (Z) - Red Frame",
    "coronal": "Coronal Slice (Y) - Green Frame",
    "sagittal": "Sagittal Slice (X) - Blue Frame",
}


class ControlPanel(QWidget):
    """
    Side panel with navigation and window/level controls.

    Sliders are disabled until a volume is loaded; the reset button is always
    enabled and is ignored by the viewer when nothing is loaded.
    """

    # Signals
    open_folder_requested = Signal()
    reset_requested = Signal()
    save_default_window_requested = Signal()
    slice_changed = Signal(str, int)  # (axis, index)
    window_changed = Signal(int, int)  # (level, width)

    def __init__(self, parent=None):
        """
        Initialize the control panel.

        Args:
            parent: Parent widget
        """
        super().__init__(parent)
        self.slice_sliders: Dict[str, QSlider] = {}
        self._updating = False
        self.setMinimumWidth(320)
        self.setAutoFillBackground(True)
        self._create_ui()
        self.set_controls_enabled(False)

    def _create_ui(self) -> None:
        """Create the UI components."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)

        self.open_button = QPushButton("Open Folder")
        self.open_button.clicked.connect(self.open_folder_requested.emit)
        layout.addWidget(self.open_button)

        self.info_text = QPlainTextEdit()
        self.info_text.setReadOnly(True)
        self.info_text.setFixedHeight(120)
        self.info_text.setPlainText("No Data")
        layout.addWidget(self.info_text)

        bold = QFont()
        bold.setPointSize(9)
        bold.setBold(True)

        for axis in ("axial", "coronal", "sagittal"):
            label = QLabel(SLIDER_LABELS[axis])
            label.setFont(bold)
            label.setStyleSheet(f"color: {AXIS_COLORS[axis].name()};")
            layout.addWidget(label)

            slider = QSlider(Qt.Orientation.Horizontal)
            slider.setRange(0, 1)
            slider.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred)
            slider.valueChanged.connect(lambda value, a=axis: self._on_slice_slider_changed(a, value))
            layout.addWidget(slider)
            self.slice_sliders[axis] = slider

        window_label = QLabel("Window Level / Width")
        window_label.setFont(bold)
        layout.addSpacing(10)
        layout.addWidget(window_label)

        self.level_slider = QSlider(Qt.Orientation.Horizontal)
        self.level_slider.setRange(*WINDOW_LEVEL_RANGE)
        self.level_slider.setValue(DEFAULT_WINDOW_LEVEL)
        self.level_slider.valueChanged.connect(self._on_window_slider_changed)
        layout.addWidget(self.level_slider)

        self.width_slider = QSlider(Qt.Orientation.Horizontal)
        self.width_slider.setRange(*WINDOW_WIDTH_RANGE)
        self.width_slider.setValue(DEFAULT_WINDOW_WIDTH)
        self.width_slider.valueChanged.connect(self._on_window_slider_changed)
        layout.addWidget(self.width_slider)

        self.window_value_label = QLabel()
        layout.addWidget(self.window_value_label)
        self._update_window_value_label()

        self.save_default_button = QPushButton("Set as Default Window")
        self.save_default_button.clicked.connect(self.save_default_window_requested.emit)
        layout.addWidget(self.save_default_button)

        self.reset_button = QPushButton("Reset")
        self.reset_button.clicked.connect(self.reset_requested.emit)
        layout.addWidget(self.reset_button)

        hint = QLabel("Hint: Click a bottom image to\nswap it with the main view.")
        hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(hint)
        layout.addStretch()

    def set_controls_enabled(self, enabled: bool) -> None:
        """Enable or disable slice and window sliders."""
        for slider in self.slice_sliders.values():
            slider.setEnabled(enabled)
        self.level_slider.setEnabled(enabled)
        self.width_slider.setEnabled(enabled)
        self.save_default_button.setEnabled(enabled)

    def set_extents(self, extents: Dict[str, int]) -> None:
        """
        Set slider ranges from the volume extents.

        Args:
            extents: Number of slices per axis
        """
        self._updating = True
        try:
            for axis, slider in self.slice_sliders.items():
                slider.setRange(0, max(extents.get(axis, 1) - 1, 0))
        finally:
            self._updating = False

    def set_view_parameters(self, view_parameters) -> None:
        """
        Move the sliders to the given view parameters without emitting signals.

        Args:
            view_parameters: ViewParameters to display
        """
        self._updating = True
        try:
            for axis, slider in self.slice_sliders.items():
                slider.setValue(view_parameters.get_index(axis))
            self.level_slider.setValue(int(view_parameters.window_level))
            self.width_slider.setValue(int(view_parameters.window_width))
        finally:
            self._updating = False
        self._update_window_value_label()

    def set_info_text(self, text: str) -> None:
        self.info_text.setPlainText(text)

    def _on_slice_slider_changed(self, axis: str, value: int) -> None:
        if not self._updating:
            self.slice_changed.emit(axis, value)

    def _on_window_slider_changed(self, _value: int) -> None:
        self._update_window_value_label()
        if not self._updating:
            self.window_changed.emit(self.level_slider.value(), self.width_slider.value())

    def _update_window_value_label(self) -> None:
        self.window_value_label.setText(
            f"Level: {self.level_slider.value()}   Width: {self.width_slider.value()}"
        )
