"""Chord recognition and transposition for photographed sheet music.

This package finds chord symbols such as "Am7" or "D/F#" in photos of lead
sheets and shifts them by semitones for display. Text detection is delegated
to an OCR engine; the package turns its noisy, redundant output into a clean
list of positioned chords.

The main processing pipeline consists of:
1. Image normalization (resize, contrast, grayscale)
2. Several detection passes with different minimum text heights
3. Aggregation and spatial deduplication of observations
4. Cleaning and validation of chord text, merging of split chords
5. Mapping of boxes into display coordinates and font sizing

Example:
    Basic usage through the pipeline API:

    >>> import asyncio
    >>> from image_to_chords.pipeline import recognize_chords
    >>> from image_to_chords.text_detection import TesseractEngine
    >>> from image_to_chords.transposition import transpose_chord
    >>>
    >>> chords = asyncio.run(recognize_chords(image, TesseractEngine()))
    >>> [transpose_chord(c.chord, 2) for c in chords]
"""
