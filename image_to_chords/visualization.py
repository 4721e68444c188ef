"""
Visualization functions for the chord recognition pipeline.

This module draws the normalized image, the detection boxes the engine
reported, and the recognized (optionally transposed) chords on top of the
input image. All images are RGB NumPy arrays.
"""

from collections.abc import Sequence

import cv2
import numpy as np

from image_to_chords.coordinates import map_to_image_coordinates
from image_to_chords.models.core_models import ChordPosition, ImageSize
from image_to_chords.models.pipeline_models import (
    PreparedImage,
    RecognitionResult,
    ScoredObservation,
)
from image_to_chords.models.visualization_models import VisualizationSet
from image_to_chords.transposition import transpose_chord

FONT = cv2.FONT_HERSHEY_SIMPLEX
# Pixel height of FONT at scale 1.0
FONT_BASE_HEIGHT = 22.0

CHORD_COLOR = (0, 0, 255)
BOX_COLOR = (255, 0, 0)
LABEL_BACKGROUND_ALPHA = 0.7


def to_rgb(image: np.ndarray) -> np.ndarray:
    """Return a 3-channel RGB copy of a grayscale, RGB or RGBA image."""
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_RGBA2RGB)
    return image.copy()


def create_processed_visualization(prepared: PreparedImage | None) -> np.ndarray | None:
    """Convert the normalized grayscale buffer to RGB for display."""
    if prepared is None:
        return None
    return to_rgb(prepared.pixels)


def create_detection_visualization(
    prepared: PreparedImage | None,
    observations: Sequence[ScoredObservation],
) -> np.ndarray | None:
    """Draw detection boxes on the processed image.

    Args:
        prepared: Normalized image the engine ran on, or None.
        observations: Observations whose boxes should be drawn.

    Returns:
        RGB image with one red rectangle per observation, or None if no
        image is available.
    """
    if prepared is None:
        return None

    canvas = to_rgb(prepared.pixels)
    for item in observations:
        rect = map_to_image_coordinates(
            item.observation.box, prepared.size, prepared.size
        )
        cv2.rectangle(
            canvas,
            (int(rect.x), int(rect.y)),
            (int(rect.x + rect.w), int(rect.y + rect.h)),
            BOX_COLOR,
            1,
        )
    return canvas


def draw_chord_label(canvas: np.ndarray, text: str, position: ChordPosition) -> None:
    """Draw one chord label centered on its bounds, in place.

    The label sits on a translucent white box so it stays legible over
    notation.
    """
    scale = position.font_size / FONT_BASE_HEIGHT
    thickness = max(1, round(scale * 1.5))
    (text_w, text_h), baseline = cv2.getTextSize(text, FONT, scale, thickness)

    left = int(position.bounds.cx - text_w / 2)
    top = int(position.bounds.cy - text_h / 2)
    right, bottom = left + text_w, top + text_h + baseline

    height, width = canvas.shape[:2]
    x0, y0 = max(left - 2, 0), max(top - 2, 0)
    x1, y1 = min(right + 2, width), min(bottom + 2, height)
    if x1 > x0 and y1 > y0:
        region = canvas[y0:y1, x0:x1].astype(np.float32)
        blended = region * (1 - LABEL_BACKGROUND_ALPHA) + 255 * LABEL_BACKGROUND_ALPHA
        canvas[y0:y1, x0:x1] = blended.astype(np.uint8)

    cv2.putText(
        canvas, text, (left, top + text_h), FONT, scale, CHORD_COLOR, thickness, cv2.LINE_AA
    )


def create_chord_overlay(
    image: np.ndarray | None,
    chords: Sequence[ChordPosition],
    steps: int = 0,
    display_size: ImageSize | None = None,
) -> np.ndarray | None:
    """Draw recognized chords, transposed by ``steps``, over an image.

    Args:
        image: Original RGB image, or None.
        chords: Recognized chords with bounds in display coordinates.
        steps: Semitones to transpose every chord by before drawing.
        display_size: Size the chord bounds were computed for. The image is
            resized to it first; bounds are in image pixels when omitted.

    Returns:
        RGB image with chord labels drawn, or None if no image is given.
    """
    if image is None:
        return None

    canvas = to_rgb(image)
    if display_size is not None:
        canvas = cv2.resize(
            canvas,
            (int(round(display_size.width)), int(round(display_size.height))),
            interpolation=cv2.INTER_AREA,
        )

    for position in chords:
        draw_chord_label(canvas, transpose_chord(position.chord, steps), position)
    return canvas


def create_all_visualizations(
    image: np.ndarray | None,
    result: RecognitionResult | None,
    steps: int = 0,
    display_size: ImageSize | None = None,
) -> VisualizationSet:
    """Create every visualization for a recognition run.

    Args:
        image: Original RGB image, or None.
        result: Recognition result, or None if recognition did not run.
        steps: Transposition applied to the chord overlay.
        display_size: Size the chord bounds were computed for.

    Returns:
        VisualizationSet; fields are None where inputs are missing.
    """
    if image is None or result is None:
        return VisualizationSet()

    return VisualizationSet(
        processed_image=create_processed_visualization(result.prepared),
        detections=create_detection_visualization(
            result.prepared, result.unique_observations
        ),
        chord_overlay=create_chord_overlay(image, result.chords, steps, display_size),
    )
