"""Mapping of detection boxes into display coordinates and font sizing.

Detection boxes are normalized to the processed image with a bottom-left
origin. Callers draw in a top-left-origin space that may be the original
photo or a scaled view of it.
"""

from image_to_chords.models.core_models import ImageSize, NormalizedBox, PixelRect
from image_to_chords.models.settings_models import LayoutParams


def _scale(rect: PixelRect, sx: float, sy: float) -> PixelRect:
    return PixelRect(x=rect.x * sx, y=rect.y * sy, w=rect.w * sx, h=rect.h * sy)


def map_to_image_coordinates(
    box: NormalizedBox,
    original_size: ImageSize,
    processed_size: ImageSize,
    display_size: ImageSize | None = None,
) -> PixelRect:
    """Convert a normalized detection box into caller coordinates.

    Three axis-independent scalings are applied in order: flip to a top-left
    origin and scale to processed-image pixels, compensate for resizing done
    by the normalizer, and optionally scale to the display surface.

    Args:
        box: Box in normalized detection space.
        original_size: Size of the image before normalization.
        processed_size: Size of the image the engine ran on.
        display_size: Size of the surface chords are drawn on, if any.

    Returns:
        Rectangle in display coordinates, or original-image pixels when no
        display size is given.
    """
    flipped = PixelRect(x=box.x, y=1.0 - box.max_y, w=box.w, h=box.h)
    rect = _scale(flipped, processed_size.width, processed_size.height)

    rect = _scale(
        rect,
        original_size.width / processed_size.width,
        original_size.height / processed_size.height,
    )

    if display_size is not None:
        rect = _scale(
            rect,
            display_size.width / original_size.width,
            display_size.height / original_size.height,
        )
    return rect


def calculate_font_size(
    bounds: PixelRect, image_size: ImageSize, params: LayoutParams | None = None
) -> float:
    """Derive a display font size for a chord.

    The larger of a width-scaled base size and a fraction of the box height
    is used, capped at the maximum font size.

    Args:
        bounds: Chord bounds in display coordinates.
        image_size: Size of the original image.
        params: Font sizing parameters, defaults if omitted.

    Returns:
        Font size in points.
    """
    params = params or LayoutParams()
    scaled_base = params.base_font_size * (image_size.width / params.reference_width)
    height_based = bounds.h * params.height_ratio
    return min(max(scaled_base, height_based), params.max_font_size)
