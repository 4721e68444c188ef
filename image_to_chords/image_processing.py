"""Image normalization for the chord recognition pipeline.

This module prepares photographed sheet music for text detection. Images are
resized to a reference width so glyph sizes are comparable between photos,
then contrast is raised and the image is converted to grayscale.
"""

import logging

import cv2
import numpy as np

from image_to_chords.exceptions import ImagePreparationError
from image_to_chords.models.core_models import ImageSize
from image_to_chords.models.pipeline_models import PreparedImage
from image_to_chords.models.settings_models import NormalizerParams

logger = logging.getLogger(__name__)


def resize_to_width(
    image: np.ndarray, target_width: int, tolerance: int
) -> np.ndarray:
    """Resize an image to a target width, keeping its aspect ratio.

    Images whose width is already within ``tolerance`` pixels of the target
    are returned unchanged.

    Args:
        image: Image as a NumPy array (H×W or H×W×C).
        target_width: Width to resize to in pixels.
        tolerance: Maximum width difference that is left alone.

    Returns:
        The resized image, or the input itself if no resize was needed.
    """
    height, width = image.shape[:2]
    if abs(width - target_width) <= tolerance:
        return image

    target_height = max(1, round(target_width * height / width))
    # INTER_AREA when shrinking, INTER_CUBIC when enlarging
    interpolation = cv2.INTER_AREA if target_width < width else cv2.INTER_CUBIC
    resized = cv2.resize(
        image, (target_width, target_height), interpolation=interpolation
    )
    logger.debug(f"Image scaled from {width}x{height} to {target_width}x{target_height}")
    return resized


def adjust_contrast(image: np.ndarray, contrast: float, brightness: float) -> np.ndarray:
    """Apply contrast and brightness on a 0-1 intensity scale.

    Contrast pivots around mid-gray, so ``contrast=1`` and ``brightness=0``
    leave the image unchanged.

    Args:
        image: uint8 image as a NumPy array.
        contrast: Contrast multiplier.
        brightness: Offset added after the contrast change (0-1 scale).

    Returns:
        The adjusted image as a uint8 array of the same shape.
    """
    beta = 255.0 * (0.5 * (1.0 - contrast) + brightness)
    adjusted = image.astype(np.float32) * contrast + beta
    return np.clip(adjusted, 0, 255).astype(np.uint8)


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Convert an RGB, RGBA or grayscale image to a single-channel image."""
    if image.ndim == 2:
        return image
    channels = image.shape[2]
    if channels == 1:
        return image[:, :, 0]
    if channels == 3:
        return cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_RGBA2GRAY)
    raise ImagePreparationError(f"Unsupported channel count: {channels}")


def prepare_image(
    image: np.ndarray | None, params: NormalizerParams | None = None
) -> PreparedImage:
    """Normalize an input image for text detection.

    Args:
        image: RGB, RGBA or grayscale image as a NumPy array.
        params: Normalization parameters, defaults if omitted.

    Returns:
        PreparedImage holding the grayscale pixel buffer together with the
        processed and original image sizes.

    Raises:
        ImagePreparationError: If the image is missing, empty, has an
            unsupported shape, or OpenCV fails to process it.
    """
    params = params or NormalizerParams()

    if image is None:
        raise ImagePreparationError("No image provided")
    if not isinstance(image, np.ndarray) or image.ndim not in (2, 3):
        raise ImagePreparationError("Image must be a 2D or 3D NumPy array")
    if image.size == 0 or image.shape[0] == 0 or image.shape[1] == 0:
        raise ImagePreparationError("Image is empty")

    if image.dtype != np.uint8:
        image = np.clip(image, 0, 255).astype(np.uint8)

    original_height, original_width = image.shape[:2]
    try:
        resized = resize_to_width(image, params.target_width, params.rescale_tolerance)
        adjusted = adjust_contrast(resized, params.contrast, params.brightness)
        gray = to_grayscale(adjusted)
    except cv2.error as e:
        logger.error(f"Error in image preparation: {str(e)}")
        raise ImagePreparationError(f"Failed to process image: {e}") from e

    height, width = gray.shape[:2]
    return PreparedImage(
        pixels=np.ascontiguousarray(gray),
        size=ImageSize(width=width, height=height),
        original_size=ImageSize(width=original_width, height=original_height),
    )
