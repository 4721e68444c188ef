"""Core domain models for chord recognition."""

from enum import Enum

from pydantic import BaseModel, Field


class QualityLevel(str, Enum):
    """Recognition quality requested from the text detection engine."""

    FAST = "fast"
    ACCURATE = "accurate"


class DetectionConfig(BaseModel):
    """One detection pass to run on the processed image.

    Attributes:
        quality_level: Speed/accuracy trade-off requested from the engine.
        minimum_text_height: Smallest text height to report, as a fraction
            of the image height (0-1).
        vocabulary: Hint words the engine should favour.
    """

    quality_level: QualityLevel = Field(..., description="Recognition quality level")
    minimum_text_height: float = Field(
        ..., ge=0.0, le=1.0, description="Minimum text height as image fraction"
    )
    vocabulary: tuple[str, ...] = Field((), description="Custom vocabulary hints")

    class Config:
        frozen = True


class NormalizedBox(BaseModel):
    """Axis-aligned box in normalized detection space.

    Coordinates are fractions of the processed image size with the origin
    at the bottom-left corner and y growing upwards.

    Attributes:
        x: Left edge (0-1).
        y: Bottom edge (0-1).
        w: Width (0-1).
        h: Height (0-1).
    """

    x: float = Field(..., ge=0.0, le=1.0, description="Left edge")
    y: float = Field(..., ge=0.0, le=1.0, description="Bottom edge")
    w: float = Field(..., ge=0.0, le=1.0, description="Width")
    h: float = Field(..., ge=0.0, le=1.0, description="Height")

    class Config:
        frozen = True

    @property
    def cx(self) -> float:
        """Horizontal center of the box."""
        return self.x + self.w / 2

    @property
    def cy(self) -> float:
        """Vertical center of the box."""
        return self.y + self.h / 2

    @property
    def max_x(self) -> float:
        return self.x + self.w

    @property
    def max_y(self) -> float:
        return self.y + self.h

    @property
    def area(self) -> float:
        return self.w * self.h

    def intersection_area(self, other: "NormalizedBox") -> float:
        """Area shared by this box and ``other``.

        Args:
            other: Box to intersect with.

        Returns:
            The intersection area, 0.0 when the boxes are disjoint or only
            touch along an edge.
        """
        width = min(self.max_x, other.max_x) - max(self.x, other.x)
        height = min(self.max_y, other.max_y) - max(self.y, other.y)
        if width <= 0 or height <= 0:
            return 0.0
        return width * height

    def union(self, other: "NormalizedBox") -> "NormalizedBox":
        """Smallest box containing both this box and ``other``."""
        x = min(self.x, other.x)
        y = min(self.y, other.y)
        return NormalizedBox(
            x=x,
            y=y,
            w=min(max(self.max_x, other.max_x) - x, 1.0),
            h=min(max(self.max_y, other.max_y) - y, 1.0),
        )


class TextCandidate(BaseModel):
    """One text hypothesis for an observation.

    Attributes:
        text: Recognized string, exactly as reported by the engine.
        confidence: Engine confidence (0-1).
    """

    text: str = Field(..., description="Recognized text")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Engine confidence")

    class Config:
        frozen = True


class RawObservation(BaseModel):
    """A text region reported by the detection engine.

    Candidates are ordered by descending confidence. The observation keeps
    a reference to the detection pass that produced it.

    Attributes:
        box: Normalized bounding box of the region.
        candidates: Ranked text hypotheses.
        source_config: Detection pass that reported the region, if known.
    """

    box: NormalizedBox = Field(..., description="Normalized bounding box")
    candidates: tuple[TextCandidate, ...] = Field(
        (), description="Text candidates, best first"
    )
    source_config: DetectionConfig | None = Field(
        None, description="Source detection pass"
    )

    class Config:
        frozen = True

    @property
    def top_candidate(self) -> TextCandidate | None:
        return self.candidates[0] if self.candidates else None

    @property
    def top_text(self) -> str | None:
        candidate = self.top_candidate
        return candidate.text if candidate is not None else None


class ImageSize(BaseModel):
    """Width and height of an image or display surface."""

    width: float = Field(..., gt=0, description="Width in pixels or points")
    height: float = Field(..., gt=0, description="Height in pixels or points")

    class Config:
        frozen = True


class PixelRect(BaseModel):
    """Axis-aligned rectangle in the caller's coordinate space.

    The origin is the top-left corner and y grows downwards.

    Attributes:
        x: Left edge.
        y: Top edge.
        w: Width (non-negative).
        h: Height (non-negative).
    """

    x: float = Field(..., description="Left edge")
    y: float = Field(..., description="Top edge")
    w: float = Field(..., ge=0.0, description="Width")
    h: float = Field(..., ge=0.0, description="Height")

    class Config:
        frozen = True

    @property
    def cx(self) -> float:
        return self.x + self.w / 2

    @property
    def cy(self) -> float:
        return self.y + self.h / 2

    @property
    def max_y(self) -> float:
        return self.y + self.h


class ChordPosition(BaseModel):
    """A recognized chord symbol placed on the image.

    Attributes:
        chord: Cleaned chord symbol, always valid for the chord grammar.
        bounds: Position of the symbol in the caller's coordinate space.
        font_size: Suggested display font size in points.
    """

    chord: str = Field(..., min_length=1, description="Chord symbol")
    bounds: PixelRect = Field(..., description="Chord bounds")
    font_size: float = Field(..., gt=0.0, description="Display font size")

    class Config:
        frozen = True
