"""Application state management for image registration.

This module provides functionality for registering and retrieving images
by unique identifiers, so that cached recognition results can be keyed by a
short hashable string instead of the pixel array. Images are identified by
CRC32 checksums of their binary data.
"""

import zlib

import cv2
import numpy as np

# In-memory registry of images by ID
_image_registry: dict[str, np.ndarray] = {}


def load_image(path: str) -> np.ndarray | None:
    """Load an image file as an RGB NumPy array.

    Args:
        path: File path to the image.

    Returns:
        RGB image as a NumPy array, or None if the file cannot be read.
    """
    image = cv2.imread(path)
    if image is not None:
        # Convert BGR->RGB for Gradio
        return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
    return None


def register_image(image: np.ndarray, image_id: str | None = None) -> str:
    """Register an image in the global registry with a unique identifier.

    If no ID is provided, a CRC32 hash of the image's shape and binary data
    is used, so registering the same picture twice yields the same ID.

    Args:
        image: NumPy array representing the image data.
        image_id: Optional unique identifier for the image.

    Returns:
        The image identifier (either provided or generated) as a string.
    """
    if image_id is None:
        crc = zlib.crc32(str(image.shape).encode())
        crc = zlib.crc32(image.tobytes(), crc) & 0xFFFFFFFF
        image_id = f"img_{crc:08x}"

    _image_registry[image_id] = image
    return image_id


def get_image_id(image: np.ndarray) -> str:
    """Register an image and return its identifier."""
    return register_image(image)


def get_image_by_id(image_id: str | None) -> np.ndarray | None:
    """Retrieve a registered image by its identifier.

    Args:
        image_id: Unique identifier for the image.

    Returns:
        The registered image as a NumPy array, or None if not found.
    """
    if image_id is None:
        return None
    return _image_registry.get(image_id)


def clear_registry() -> None:
    """Forget every registered image."""
    _image_registry.clear()
