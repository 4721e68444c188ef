"""Cleaning and validation of OCR text as chord symbols.

OCR engines confuse a handful of characters on chord charts (a "C" read as
"0", a slash read as "|", an "m" read as "n"). Text is cleaned with a fixed
substitution table and then checked against the chord grammar.
"""

import re

from image_to_chords.hooks import RecognitionHooks, RejectionReason
from image_to_chords.models.core_models import RawObservation

# Applied to every occurrence, not only the leading character
OCR_SUBSTITUTIONS = str.maketrans(
    {
        "0": "C",
        "O": "C",
        "l": "I",
        "1": "I",
        "|": "/",
        "S": "5",
        "Z": "2",
        "n": "m",
    }
)

ROOT_LETTERS = "ABCDEFG"

# Quality tokens are case-sensitive: "maj7" and "M7" match, "MAJ7" does not
CHORD_PATTERN = re.compile(
    r"[A-Ga-g][#b]?(maj7|M7|maj|min|dim|sus|sus4|add|aug|m)?[0-9]*(/[A-Ga-g][#b]?)?"
)


def cleanup_chord_text(text: str) -> str:
    """Correct common OCR confusions in a chord symbol.

    Args:
        text: Raw text from the detection engine.

    Returns:
        Trimmed text with substitutions applied, the first character in
        upper case, and a trailing "M" lowered to the minor "m" unless it
        follows a digit (as in "7M").
    """
    cleaned = text.strip().translate(OCR_SUBSTITUTIONS)
    cleaned = cleaned[:1].upper() + cleaned[1:]

    if len(cleaned) > 1 and cleaned.endswith("M") and not cleaned[-2].isdigit():
        cleaned = cleaned[:-1] + "m"

    return cleaned


def is_valid_chord(text: str) -> bool:
    """Check whether text is a chord symbol.

    Accepts a bare root letter, a root letter followed by "." (numbering
    markup), or a match of the chord grammar. The root letter is
    case-insensitive in the first two forms only.

    Args:
        text: Cleaned chord text.

    Returns:
        True if the text is a chord symbol.
    """
    if not text:
        return False

    root = text[0].upper()
    if len(text) == 1 and root in ROOT_LETTERS:
        return True
    if len(text) == 2 and root in ROOT_LETTERS and text[1] == ".":
        return True

    return CHORD_PATTERN.fullmatch(text) is not None


def select_chord_candidate(
    observation: RawObservation,
    max_candidates: int = 10,
    min_confidence: float = 0.3,
    hooks: RecognitionHooks | None = None,
) -> str | None:
    """Pick the first acceptable chord among an observation's candidates.

    Candidates are tried in ranked order. The first one whose cleaned text
    is a valid chord and whose confidence exceeds ``min_confidence`` wins;
    later candidates are not considered even if they are also valid.

    Args:
        observation: Observation to read.
        max_candidates: Number of top candidates to inspect.
        min_confidence: Confidence a candidate must exceed.
        hooks: Optional observer notified of rejected candidates.

    Returns:
        The cleaned chord symbol, or None if no candidate qualifies.
    """
    hooks = hooks or RecognitionHooks()

    for candidate in observation.candidates[:max_candidates]:
        text = candidate.text.strip()
        if not text:
            hooks.candidate_rejected(
                candidate.text, candidate.confidence, RejectionReason.EMPTY
            )
            continue

        cleaned = cleanup_chord_text(text)
        if not is_valid_chord(cleaned):
            hooks.candidate_rejected(
                candidate.text, candidate.confidence, RejectionReason.INVALID
            )
            continue
        if candidate.confidence <= min_confidence:
            hooks.candidate_rejected(
                candidate.text, candidate.confidence, RejectionReason.LOW_CONFIDENCE
            )
            continue

        return cleaned

    return None
