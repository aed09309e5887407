"""
Display Fitter

Corrects a windowed plane for anisotropic voxel spacing and scales it down to
fit a maximum display footprint.

Inputs:
    - Windowed RGB plane, pixel aspect ratio, maximum footprint

Outputs:
    - Final display size
    - Resampled RGB array of exactly that size

Requirements:
    - numpy
    - utils.image_utils (Pillow resampling)
"""

from typing import Tuple, Union
import numpy as np

from utils.image_utils import resize_array

DEFAULT_MAX_DISPLAY_SIZE = 800

Footprint = Union[int, Tuple[int, int]]


def footprint_limits(max_footprint: Footprint) -> Tuple[int, int]:
    """Normalize a footprint (single cap or (width, height)) to two positive ints."""
    if isinstance(max_footprint, (tuple, list)):
        max_width, max_height = max_footprint
    else:
        max_width = max_height = max_footprint
    return max(int(max_width), 1), max(int(max_height), 1)


def compute_display_size(width: int, height: int, pixel_aspect: float,
                         max_footprint: Footprint = DEFAULT_MAX_DISPLAY_SIZE) -> Tuple[int, int]:
    """
    Compute the on-screen size of a plane.

    The height is stretched by the pixel aspect ratio so the image is not
    visually distorted; if either dimension exceeds the footprint both are
    scaled down uniformly. Each dimension is at least 1.

    Args:
        width: Plane width in samples
        height: Plane height in samples
        pixel_aspect: Vertical over horizontal spacing (> 0)
        max_footprint: Maximum size, one value for both dimensions or (width, height)

    Returns:
        (final_width, final_height)
    """
    max_width, max_height = footprint_limits(max_footprint)
    final_width = float(width)
    final_height = float(int(height * pixel_aspect))
    final_width = max(final_width, 1.0)
    final_height = max(final_height, 1.0)

    if final_width > max_width or final_height > max_height:
        scale = min(max_width / final_width, max_height / final_height)
        final_width = final_width * scale
        final_height = final_height * scale

    final_width = min(max(int(final_width), 1), max_width)
    final_height = min(max(int(final_height), 1), max_height)
    return final_width, final_height


def fit_to_display(rgb: np.ndarray, pixel_aspect: float,
                   max_footprint: Footprint = DEFAULT_MAX_DISPLAY_SIZE) -> np.ndarray:
    """
    Resample a windowed plane to its display size.

    Args:
        rgb: uint8 array of shape (height, width, 3)
        pixel_aspect: Vertical over horizontal spacing
        max_footprint: Maximum display size

    Returns:
        uint8 array of shape (final_height, final_width, 3)
    """
    height, width = rgb.shape[:2]
    final_width, final_height = compute_display_size(width, height, pixel_aspect, max_footprint)
    return resize_array(rgb, final_width, final_height)
