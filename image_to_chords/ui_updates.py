"""UI update functions for the Gradio interface.

This module provides the callbacks that sit between the Gradio components and
the chord recognition pipeline. Recognition is served from the cache, so
moving the transposition control only redraws the overlay.
"""

import logging

import numpy as np

from image_to_chords.app_state import get_image_by_id, get_image_id, load_image
from image_to_chords.cache import cached_recognition, display_size_for
from image_to_chords.exceptions import RecognitionError
from image_to_chords.transposition import format_steps, transpose_chord, wrap_steps
from image_to_chords.visualization import create_all_visualizations

logger = logging.getLogger(__name__)


def register_upload(image: np.ndarray | None) -> str | None:
    """Register an uploaded image and return its identifier."""
    if image is None:
        return None
    return get_image_id(image)


def load_sample_image(path: str) -> tuple[np.ndarray | None, str | None]:
    """Load and register the image shown when the app starts.

    Args:
        path: File path to the sample image.

    Returns:
        Tuple of (image, image_id), both None if the file cannot be read.
    """
    image = load_image(path)
    if image is None:
        logger.info(f"No sample image at {path}")
        return None, None
    return image, get_image_id(image)


def shift_steps(steps: int, delta: int) -> tuple[int, str]:
    """Apply a stepper click to the current transposition.

    Args:
        steps: Current transposition in semitones.
        delta: +1 or -1 from the stepper buttons.

    Returns:
        Tuple of (new_steps, display_label) with steps wrapped to 0-11.
    """
    new_steps = wrap_steps(steps + delta)
    return new_steps, format_steps(new_steps)


def format_chord_list(chords: list[str]) -> str:
    """Render chord symbols as one line in reading order."""
    if not chords:
        return "No chords found"
    return "  ".join(chords)


def update_chord_view(
    image_id: str | None, display_width: int | None, steps: int
) -> tuple:
    """Update the chord overlay and detection views for the UI.

    Args:
        image_id: Unique identifier for the registered image.
        display_width: Width the overlay is rendered at.
        steps: Transposition in semitones.

    Returns:
        Tuple of (chord_overlay, processed_view, detection_view, chord_text,
        stage_summary) where the views are NumPy arrays (or None) and the
        rest are strings.
    """
    image = get_image_by_id(image_id)
    if image is None:
        return None, None, None, "", "Upload an image to start"

    try:
        result, summary = cached_recognition(image_id, display_width)
    except RecognitionError as e:
        logger.error(f"Recognition failed for {image_id}: {e}")
        return image, None, None, "", f"Recognition failed: {e}"

    display_size = display_size_for(image_id, display_width)
    visualizations = create_all_visualizations(image, result, steps, display_size)
    chord_text = format_chord_list(
        [transpose_chord(position.chord, steps) for position in result.chords]
    )
    return (
        visualizations.chord_overlay,
        visualizations.processed_image,
        visualizations.detections,
        chord_text,
        summary,
    )
