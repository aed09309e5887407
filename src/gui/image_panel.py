"""
Image Panel

This module implements the widget that shows one MPR view: the rendered image
centered in the panel, a colored frame identifying the axis, and cross-hair
lines in the colors of the two other axes.

Inputs:
    - DisplayImage objects from the MPR engine
    - Mouse click and wheel events

Outputs:
    - Painted view
    - Signals for click (swap into main view) and wheel (step slice)

Requirements:
    - PySide6 for painting and events
    - numpy for the image buffer
"""

from typing import Optional

import numpy as np
from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtGui import QColor, QFont, QImage, QPainter, QPen, QPixmap
from PySide6.QtCore import Qt, Signal

AXIS_COLORS = {
    "axial": QColor(255, 50, 50),
    "coronal": QColor(50, 255, 50),
    "sagittal": QColor(50, 100, 255),
}

AXIS_LABELS = {
    "axial": "Axial (Top)",
    "coronal": "Coronal (Front)",
    "sagittal": "Sagittal (Side)",
}

# (vertical line axis, horizontal line axis) drawn on each view
CROSSHAIR_LINE_AXES = {
    "axial": ("sagittal", "coronal"),
    "coronal": ("sagittal", "axial"),
    "sagittal": ("coronal", "axial"),
}


def display_image_to_qimage(display_image) -> QImage:
    """
    Convert a DisplayImage into a QImage that owns its pixel data.

    Args:
        display_image: DisplayImage with an (h, w, 3) uint8 buffer

    Returns:
        QImage in RGB888 format
    """
    img_array = display_image.pixels
    if not img_array.flags['C_CONTIGUOUS']:
        img_array = np.ascontiguousarray(img_array)
    height, width = img_array.shape[:2]
    qimage = QImage(img_array.data, width, height, width * 3, QImage.Format.Format_RGB888)
    # Detach from the numpy buffer
    return qimage.copy()


class ImagePanel(QWidget):
    """
    Widget displaying one axis of the MPR view.

    Features:
    - Centered image with colored frame and label
    - Cross-hair lines showing the other two slice positions
    - Click to request this view as the main view
    - Mouse wheel to step the slice index of this axis
    """

    # Signals
    clicked = Signal(str)  # axis
    wheel_scrolled = Signal(str, int)  # axis, direction (+1 / -1)

    def __init__(self, axis: str, parent=None):
        """
        Initialize the panel.

        Args:
            axis: "axial", "coronal" or "sagittal"
            parent: Parent widget
        """
        super().__init__(parent)
        self.axis = axis
        self.border_color = AXIS_COLORS[axis]
        vertical_axis, horizontal_axis = CROSSHAIR_LINE_AXES[axis]
        self.vertical_line_color = AXIS_COLORS[vertical_axis]
        self.horizontal_line_color = AXIS_COLORS[horizontal_axis]

        self._pixmap: Optional[QPixmap] = None
        self._display_image = None

        self.setAutoFillBackground(True)
        palette = self.palette()
        palette.setColor(self.backgroundRole(), QColor(20, 20, 20))
        self.setPalette(palette)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(120, 120)
        self.setFocusPolicy(Qt.FocusPolicy.ClickFocus)

    def set_image(self, display_image) -> None:
        """
        Show a rendered view.

        Args:
            display_image: DisplayImage, or None to clear the panel
        """
        if display_image is None:
            self._pixmap = None
            self._display_image = None
        else:
            self._pixmap = QPixmap.fromImage(display_image_to_qimage(display_image))
            self._display_image = display_image
        self.update()

    def has_image(self) -> bool:
        return self._pixmap is not None and not self._pixmap.isNull()

    def crosshair_line_position(self, x: int, y: int, w: int, h: int) -> Optional[tuple]:
        """
        Panel coordinates of the cross-hair lines for an image drawn at (x, y, w, h).

        Returns:
            (line_x, line_y), or None when there is no image, no cross-hair,
            or the lines would fall outside the image
        """
        if not self.has_image() or self._display_image is None:
            return None
        if not self._display_image.has_crosshair():
            return None
        cross_x, cross_y = self._display_image.crosshair
        # Keep the last row/column inside the image
        line_x = min(x + int(w * cross_x), x + w - 1)
        line_y = min(y + int(h * cross_y), y + h - 1)
        if not (x <= line_x < x + w and y <= line_y < y + h):
            return None
        return line_x, line_y

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.setFocus()
            self.clicked.emit(self.axis)
        super().mousePressEvent(event)

    def wheelEvent(self, event) -> None:
        delta = event.angleDelta().y()
        if delta != 0:
            self.wheel_scrolled.emit(self.axis, 1 if delta > 0 else -1)
        event.accept()

    def paintEvent(self, event) -> None:
        """Paint image, frame, cross-hair and label."""
        painter = QPainter(self)
        panel_width, panel_height = self.width(), self.height()

        x = y = w = h = 0
        if self.has_image():
            w, h = self._pixmap.width(), self._pixmap.height()
            x = max((panel_width - w) // 2, 0)
            y = max((panel_height - h) // 2, 0)
            painter.drawPixmap(x, y, self._pixmap)

        painter.setPen(QPen(self.border_color, 3))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRect(1, 1, panel_width - 3, panel_height - 3)

        line_position = self.crosshair_line_position(x, y, w, h)
        if line_position is not None:
            line_x, line_y = line_position
            painter.setPen(QPen(self.vertical_line_color, 1))
            painter.drawLine(line_x, y, line_x, y + h)
            painter.setPen(QPen(self.horizontal_line_color, 1))
            painter.drawLine(x, line_y, x + w, line_y)

        font = QFont()
        font.setPointSize(11)
        font.setBold(True)
        painter.setFont(font)
        label = AXIS_LABELS[self.axis]
        painter.setPen(QColor(0, 0, 0))
        painter.drawText(11, 24, label)
        painter.setPen(self.border_color)
        painter.drawText(10, 23, label)
        painter.end()
