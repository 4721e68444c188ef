"""Detection pass planning.

Chord symbols on sheet music vary widely in relative size, and no single
minimum text height finds all of them. The planner therefore asks the
detection engine for several redundant passes; the duplicates they produce
are resolved by the deduplication stage.
"""

from image_to_chords.models.core_models import DetectionConfig, QualityLevel
from image_to_chords.models.settings_models import ScanParams

ROOTS = ("A", "B", "C", "D", "E", "F", "G")

CHORD_VOCABULARY: tuple[str, ...] = (
    # Plain roots and numbered-root markup
    *ROOTS,
    *(f"{root}." for root in ROOTS),
    # Minor chords, including lowercase misreads
    *(f"{root}m" for root in ROOTS),
    *(f"{root.lower()}m" for root in ROOTS),
    # Dominant sevenths
    *(f"{root}7" for root in ROOTS),
    *(f"{root.lower()}7" for root in ROOTS),
    # Accidentals in ASCII and Unicode spellings
    "A#", "C#", "D#", "F#", "G#",
    "Ab", "Bb", "Cb", "Db", "Eb", "Fb", "Gb",
    "A♯", "C♯", "D♯", "F♯", "G♯",
    "A♭", "B♭", "C♭", "D♭", "E♭", "F♭", "G♭",
    # Minor chords on accidentals
    "C#m", "D#m", "F#m", "G#m",
    "Bbm", "Ebm", "Abm",
    "c#m", "d#m", "f#m", "g#m",
    "bbm", "ebm", "abm",
    # Slash chords
    "G/A", "A/C#", "D/F#", "E/G#", "D/E", "E/D",
    "g/a", "a/c#", "d/f#", "e/g#", "d/e", "e/d",
    "A/c#", "a/C#", "D/e", "d/E", "G/a", "g/A",
    # Other common qualities
    "Amaj7", "Dmaj7", "Gmaj7", "amaj7", "dmaj7", "gmaj7",
    "Asus4", "Dsus4", "Esus4", "asus4", "dsus4", "esus4",
    "Cadd9", "Dadd9", "Gadd9", "cadd9", "dadd9", "gadd9",
    # Repeat marks and navigation
    "1.", "2.", "3.", "4.", "D.C.", "D.S.", "Fine", "Coda",
    # Isolated suffixes and symbols, for chords split across detections
    "m", "7", "maj", "dim", "sus", "add", "aug",
    "b", "#", "9", "♯", "♭",
)


def plan_scans(
    processed_width: float, params: ScanParams | None = None
) -> list[DetectionConfig]:
    """Build the detection passes to run on a processed image.

    One accurate pass is planned per height multiplier, followed by a single
    fast pass. Minimum text heights scale with the image width relative to
    the reference width.

    Args:
        processed_width: Width of the processed image in pixels.
        params: Scan parameters, defaults if omitted.

    Returns:
        Detection configurations in the order they should be reported.
    """
    params = params or ScanParams()
    scale_factor = processed_width / params.reference_width

    def config(level: QualityLevel, multiplier: float) -> DetectionConfig:
        height = params.base_text_height * multiplier * scale_factor
        return DetectionConfig(
            quality_level=level,
            minimum_text_height=min(height, 1.0),
            vocabulary=CHORD_VOCABULARY,
        )

    configs = [
        config(QualityLevel.ACCURATE, multiplier)
        for multiplier in params.height_multipliers
    ]
    configs.append(config(QualityLevel.FAST, params.fast_multiplier))
    return configs
