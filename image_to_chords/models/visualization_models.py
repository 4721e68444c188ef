"""Models for visualization outputs.

The VisualizationSet model aggregates the images shown to the user after a
recognition run, making it easy to pass them to the user interface.
"""

import numpy as np
from pydantic import BaseModel, Field


class VisualizationSet(BaseModel):
    """Complete set of visualizations for the user interface.

    Attributes:
        processed_image: Normalized grayscale image as RGB, or None.
        detections: Processed image with every unique detection box, or None.
        chord_overlay: Original image with (transposed) chords drawn on it,
            or None.
    """

    processed_image: np.ndarray | None = Field(
        None, description="Normalized image handed to the engine"
    )
    detections: np.ndarray | None = Field(
        None, description="Unique detection boxes on the processed image"
    )
    chord_overlay: np.ndarray | None = Field(
        None, description="Chords drawn over the original image"
    )

    class Config:
        arbitrary_types_allowed = True
