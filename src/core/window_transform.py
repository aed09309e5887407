"""
Window/level transform.

This module maps raw signed samples to 8-bit display intensity using a
window level (center) and window width, and replicates the result to three
channels for display.

Inputs:
    - Raw sample arrays, window level, window width

Outputs:
    - Windowed pixel arrays (0-255 uint8), grayscale or RGB

Requirements:
    - numpy
"""

from typing import Tuple
import numpy as np

# Soft-tissue preset restored by the viewer's Reset button
DEFAULT_WINDOW_LEVEL = 40
DEFAULT_WINDOW_WIDTH = 400

WINDOW_LEVEL_RANGE = (-1000, 3000)
WINDOW_WIDTH_RANGE = (1, 4000)


def window_bounds(window_level: float, window_width: float) -> Tuple[float, float]:
    """
    Lower bound and range of the window.

    Width is clamped to at least 1 before use.

    Returns:
        (lower, range)
    """
    width = max(float(window_width), 1.0)
    return float(window_level) - width / 2.0, width


def apply_window_level(pixel_array: np.ndarray, window_level: float, window_width: float) -> np.ndarray:
    """
    Apply window/level transformation to a pixel array. Returns 0-255 uint8.

    Samples at or below the lower bound map to 0, samples at or above
    lower + width map to 255, and samples in between scale linearly with
    round-half-up.
    """
    lower, window_range = window_bounds(window_level, window_width)
    values = np.asarray(pixel_array, dtype=np.float64)
    scaled = np.floor((values - lower) / window_range * 255.0 + 0.5)
    windowed = np.clip(scaled, 0, 255)
    windowed[values <= lower] = 0
    windowed[values >= lower + window_range] = 255
    return windowed.astype(np.uint8)


def gray_to_rgb(gray: np.ndarray) -> np.ndarray:
    """Replicate a (height, width) uint8 array into (height, width, 3)."""
    return np.repeat(gray[:, :, np.newaxis], 3, axis=2)


def window_plane(plane, window_level: float, window_width: float) -> np.ndarray:
    """Window an ExtractedPlane into an RGB uint8 array of the same size."""
    return gray_to_rgb(apply_window_level(plane.samples, window_level, window_width))

