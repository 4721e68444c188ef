"""Models for representing pipeline processing stages.

This module contains Pydantic models that carry data between the stages of
the chord recognition pipeline: the normalized image handed to the detection
engine, the confidence-scored observations produced by aggregation, and the
complete result of one recognition run.
"""

import numpy as np
from pydantic import BaseModel, Field

from image_to_chords.models.core_models import (
    ChordPosition,
    ImageSize,
    RawObservation,
)


class PreparedImage(BaseModel):
    """Output of the image normalization stage.

    Attributes:
        pixels: Grayscale uint8 pixel buffer handed to the detection engine.
        size: Pixel dimensions of ``pixels``.
        original_size: Pixel dimensions of the image before normalization.
    """

    pixels: np.ndarray = Field(..., description="Processed grayscale pixels")
    size: ImageSize = Field(..., description="Processed image size")
    original_size: ImageSize = Field(..., description="Original image size")

    class Config:
        arbitrary_types_allowed = True


class ScoredObservation(BaseModel):
    """An observation paired with the confidence of its top candidate."""

    observation: RawObservation = Field(..., description="Detected text region")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Top confidence")

    class Config:
        frozen = True


class RecognitionResult(BaseModel):
    """Everything produced by one recognition run.

    The chord list is the pipeline's output; the intermediate stages are
    kept so that user interfaces can show what the engine saw.

    Attributes:
        prepared: Normalized image the engine ran on.
        observations: All observations from every pass, confidence-sorted.
        unique_observations: Observations left after deduplication.
        chords: Recognized chords sorted by vertical position.
    """

    prepared: PreparedImage = Field(..., description="Normalized image")
    observations: list[ScoredObservation] = Field(
        default_factory=list, description="Aggregated observations"
    )
    unique_observations: list[ScoredObservation] = Field(
        default_factory=list, description="Deduplicated observations"
    )
    chords: list[ChordPosition] = Field(
        default_factory=list, description="Recognized chords"
    )

    class Config:
        arbitrary_types_allowed = True
