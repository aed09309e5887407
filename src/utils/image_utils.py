"""
Image Utility Functions

This module provides utility functions for image format conversions and
resampling used by the display pipeline.

Inputs:
    - PIL Image objects
    - NumPy arrays
    - Target sizes

Outputs:
    - Converted images
    - Resized images

Requirements:
    - PIL/Pillow for image handling
    - numpy for array operations
"""

from typing import Optional
import numpy as np
from PIL import Image


def array_to_image(array: np.ndarray) -> Optional[Image.Image]:
    """
    Convert NumPy array to PIL Image.

    Args:
        array: uint8 NumPy array (2D for grayscale, 3D for RGB)

    Returns:
        PIL Image or None if conversion fails
    """
    try:
        if array.dtype != np.uint8:
            # Normalize to 0-255
            if array.max() > array.min():
                array = ((array - array.min()) / (array.max() - array.min()) * 255.0).astype(np.uint8)
            else:
                array = np.zeros_like(array, dtype=np.uint8)

        if len(array.shape) in (2, 3):
            # Grayscale (L) or RGB, inferred from shape
            return Image.fromarray(np.ascontiguousarray(array))
        return None
    except Exception as e:
        print(f"Error converting array to image: {e}")
        return None


def image_to_array(image: Image.Image) -> np.ndarray:
    """
    Convert PIL Image to NumPy array.

    Args:
        image: PIL Image

    Returns:
        NumPy array
    """
    return np.array(image)


def resize_array(array: np.ndarray, width: int, height: int,
                 resample: Image.Resampling = Image.Resampling.LANCZOS) -> np.ndarray:
    """
    Resize a uint8 image array to exactly (width, height).

    Args:
        array: uint8 array of shape (h, w) or (h, w, 3)
        width: Target width in pixels
        height: Target height in pixels
        resample: Pillow resampling filter

    Returns:
        Resized array of shape (height, width) or (height, width, 3)
    """
    if array.shape[0] == height and array.shape[1] == width:
        return array
    image = array_to_image(array)
    if image is None:
        raise ValueError(f"Cannot convert array of shape {array.shape} to an image")
    return image_to_array(image.resize((width, height), resample))
