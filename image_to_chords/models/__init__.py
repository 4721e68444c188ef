"""Domain models for the image-to-chords application.

This module provides a centralized location for all data models used throughout
the chord recognition pipeline. It includes:

- Core domain models (NormalizedBox, RawObservation, ChordPosition, ...)
- Pipeline processing stage results (PreparedImage, RecognitionResult, ...)
- Configuration parameters for each processing stage
- Visualization data containers

All models are built using Pydantic for data validation and serialization,
ensuring type safety and clear interfaces between pipeline components.
"""

# Re-export core models
from image_to_chords.models.core_models import (
    QualityLevel,
    DetectionConfig,
    NormalizedBox,
    TextCandidate,
    RawObservation,
    ImageSize,
    PixelRect,
    ChordPosition,
)

# Re-export pipeline models
from image_to_chords.models.pipeline_models import (
    PreparedImage,
    ScoredObservation,
    RecognitionResult,
)

# Re-export setting models
from image_to_chords.models.settings_models import (
    NormalizerParams,
    ScanParams,
    RecognitionParams,
    LayoutParams,
    ProcessingParameters,
)

# Re-export visualization models
from image_to_chords.models.visualization_models import VisualizationSet
