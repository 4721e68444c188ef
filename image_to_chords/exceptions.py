"""Exceptions raised by the chord recognition pipeline.

Only failures that make a whole recognition call meaningless are errors.
Finding no chords yields an empty list, and a chord the transposer cannot
parse is returned unchanged.
"""


class RecognitionError(Exception):
    """Base exception for chord recognition failures."""

    pass


class ImagePreparationError(RecognitionError):
    """Raised when the input image cannot be normalized into a pixel buffer."""

    pass


class EngineError(RecognitionError):
    """Raised when the text detection engine aborts a detection pass."""

    pass
