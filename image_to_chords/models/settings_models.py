"""Parameter models for pipeline configuration.

This module defines Pydantic models that encapsulate all configurable
parameters for each stage of the chord recognition pipeline. The defaults
reproduce the tuning the recognizer ships with; every field is validated so
that out-of-range settings fail at construction time.
"""

from pydantic import BaseModel, Field


class NormalizerParams(BaseModel):
    """Configuration for image normalization before text detection.

    Images whose width is far from the reference width are resized so that
    glyph sizes are comparable between photos. Contrast and brightness are
    expressed on a 0-1 intensity scale.

    Attributes:
        target_width: Width images are resized to (default 1200).
        rescale_tolerance: Width difference in pixels that triggers a resize.
        contrast: Contrast multiplier around mid-gray (default 1.1).
        brightness: Brightness offset on a 0-1 scale (default 0.1).
    """

    target_width: int = Field(1200, ge=100, le=8000, description="Target width")
    rescale_tolerance: int = Field(
        50, ge=0, description="Width difference that triggers resizing"
    )
    contrast: float = Field(1.1, gt=0.0, le=4.0, description="Contrast multiplier")
    brightness: float = Field(
        0.1, ge=-1.0, le=1.0, description="Brightness offset (0-1 scale)"
    )


class ScanParams(BaseModel):
    """Configuration for the set of detection passes.

    Chord glyphs vary widely in relative size, so several accurate passes
    with different minimum text heights are run, plus one fast pass.

    Attributes:
        reference_width: Image width the base text height is tuned for.
        base_text_height: Minimum text height at multiplier 1.0.
        height_multipliers: Multipliers for the accurate passes, in order.
        fast_multiplier: Multiplier for the trailing fast pass.
    """

    reference_width: float = Field(1200.0, gt=0.0, description="Reference width")
    base_text_height: float = Field(
        0.01, gt=0.0, le=1.0, description="Base minimum text height"
    )
    height_multipliers: tuple[float, ...] = Field(
        (0.05, 0.1, 0.2, 0.3, 0.5, 1.0),
        min_length=1,
        description="Height multipliers for accurate passes",
    )
    fast_multiplier: float = Field(0.3, gt=0.0, description="Fast pass multiplier")


class RecognitionParams(BaseModel):
    """Thresholds for deduplication, candidate selection and token merging.

    Attributes:
        overlap_threshold: Overlap ratio above which two detections are
            duplicates (default 0.2).
        min_confidence: Candidates must exceed this confidence (default 0.3).
        max_candidates: Number of ranked candidates inspected per observation.
        merge_max_dx: Maximum horizontal center distance of merge partners.
        merge_max_dy: Maximum vertical center distance of merge partners.
    """

    overlap_threshold: float = Field(
        0.2, ge=0.0, le=1.0, description="Duplicate overlap ratio"
    )
    min_confidence: float = Field(
        0.3, ge=0.0, le=1.0, description="Minimum candidate confidence"
    )
    max_candidates: int = Field(10, ge=1, le=10, description="Candidates per region")
    merge_max_dx: float = Field(
        0.2, gt=0.0, le=1.0, description="Merge horizontal distance"
    )
    merge_max_dy: float = Field(
        0.05, gt=0.0, le=1.0, description="Merge vertical distance"
    )


class LayoutParams(BaseModel):
    """Configuration for chord font sizing.

    Attributes:
        reference_width: Image width the base font size is tuned for.
        base_font_size: Font size at the reference width (default 12).
        height_ratio: Fraction of the box height used as font size.
        max_font_size: Upper bound for any font size (default 24).
    """

    reference_width: float = Field(1200.0, gt=0.0, description="Reference width")
    base_font_size: float = Field(12.0, gt=0.0, description="Base font size")
    height_ratio: float = Field(0.8, gt=0.0, le=2.0, description="Box height ratio")
    max_font_size: float = Field(24.0, gt=0.0, description="Maximum font size")


class ProcessingParameters(BaseModel):
    """Complete configuration for the chord recognition pipeline.

    Attributes:
        normalizer: Image normalization parameters.
        scan: Detection pass planning parameters.
        recognition: Deduplication, validation and merge thresholds.
        layout: Font sizing parameters.
    """

    normalizer: NormalizerParams = Field(
        default_factory=NormalizerParams, description="Normalization parameters"
    )
    scan: ScanParams = Field(
        default_factory=ScanParams, description="Scan planning parameters"
    )
    recognition: RecognitionParams = Field(
        default_factory=RecognitionParams, description="Recognition thresholds"
    )
    layout: LayoutParams = Field(
        default_factory=LayoutParams, description="Font sizing parameters"
    )
