"""Caching of recognition results for the user interface.

Text detection is by far the slowest step, while transposition only changes
how chords are drawn. Recognition results are therefore cached per image
and display width, and changing the transposition reuses them.
"""

from functools import lru_cache

from image_to_chords.app_state import get_image_by_id
from image_to_chords.hooks import StageCounter
from image_to_chords.models import ImageSize, ProcessingParameters, RecognitionResult
from image_to_chords.pipeline import analyze_image_sync
from image_to_chords.text_detection import TesseractEngine, TextDetectionEngine

RECOGNITION_CACHE_SIZE = 16


@lru_cache(maxsize=1)
def get_engine() -> TextDetectionEngine:
    """Create the text detection engine shared by UI callbacks."""
    return TesseractEngine()


def display_size_for(image_id: str, display_width: int | None) -> ImageSize | None:
    """Compute the display size for an image shown at a given width.

    Args:
        image_id: Unique identifier for the registered image.
        display_width: Width the image is shown at, or None/0 for the
            original size.

    Returns:
        The display size keeping the image's aspect ratio, or None.
    """
    image = get_image_by_id(image_id)
    if image is None or not display_width:
        return None
    height, width = image.shape[:2]
    return ImageSize(width=display_width, height=display_width * height / width)


@lru_cache(maxsize=RECOGNITION_CACHE_SIZE)
def cached_recognition(
    image_id: str, display_width: int | None
) -> tuple[RecognitionResult, str]:
    """Cached version of chord recognition.

    Retrieves the image by ID and runs the complete pipeline on it. Errors
    are not cached, so a failed run is retried on the next call.

    Args:
        image_id: Unique identifier for the registered image.
        display_width: Width the image is shown at, or None for the
            original size.

    Returns:
        Tuple of (recognition_result, stage_summary).

    Raises:
        RecognitionError: If the image cannot be prepared or detection fails.
    """
    image = get_image_by_id(image_id)
    counter = StageCounter()
    result = analyze_image_sync(
        image,
        get_engine(),
        display_size=display_size_for(image_id, display_width),
        params=ProcessingParameters(),
        hooks=counter,
    )
    return result, counter.summary()


def clear_all_caches() -> None:
    """Clear the recognition cache and drop the shared engine."""
    cached_recognition.cache_clear()
    get_engine.cache_clear()
