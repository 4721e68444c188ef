"""
Chord transposition utilities.

This module shifts chord symbols by a number of semitones. Roots and bass
notes are looked up in a fixed sharp-spelled chromatic scale, so the output
is always spelled with sharps: transposing "Bb" up and back down again gives
"A#". Chords whose root cannot be read are returned unchanged.
"""

import logging
from collections.abc import Sequence

from image_to_chords.models.core_models import ChordPosition

logger = logging.getLogger(__name__)


NOTE_NAMES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

FLAT_TO_SHARP = {
    "Db": "C#",
    "Eb": "D#",
    "Gb": "F#",
    "Ab": "G#",
    "Bb": "A#",
}


def normalize_note(note: str) -> str:
    """Rewrite a flat-spelled note as its sharp equivalent.

    Args:
        note: Note name such as "Eb" or "F#".

    Returns:
        The sharp spelling for Db, Eb, Gb, Ab and Bb; any other input as is.
    """
    return FLAT_TO_SHARP.get(note, note)


def transpose_note(note: str, steps: int) -> str | None:
    """Shift a single note name by a number of semitones.

    Args:
        note: Note name, sharp or flat spelled (e.g. "C", "Db", "F#").
        steps: Semitones to shift, any integer.

    Returns:
        The sharp-spelled transposed note, or None if the note is unknown.
    """
    try:
        index = NOTE_NAMES.index(normalize_note(note))
    except ValueError:
        return None
    return NOTE_NAMES[(index + steps) % 12]


def split_chord(chord: str) -> tuple[str, str, str | None]:
    """Split a chord symbol into root, quality remainder and bass note.

    Args:
        chord: Chord symbol such as "Bbm7/F".

    Returns:
        (root, remainder, bass) where bass is None without a slash, e.g.
        ("Bb", "m7", "F").
    """
    root, remainder = chord[:1], chord[1:]
    if remainder[:1] in ("#", "b"):
        root, remainder = root + remainder[0], remainder[1:]

    remainder, slash, bass = remainder.partition("/")
    return root, remainder, bass if slash else None


def transpose_chord(chord: str, steps: int) -> str:
    """Transpose a chord symbol by a number of semitones.

    The quality remainder ("m7", "sus4", ...) is carried through unchanged.
    A bass note after "/" is transposed by the same amount; a bass note that
    cannot be read is dropped together with its slash.

    Args:
        chord: Chord symbol such as "Am7" or "D/F#".
        steps: Semitones to shift, any integer.

    Returns:
        The transposed chord, or ``chord`` itself if its root is unknown.
    """
    if not chord:
        return chord

    root, remainder, bass = split_chord(chord)
    new_root = transpose_note(root, steps)
    if new_root is None:
        logger.debug(f"Could not transpose chord {chord!r}")
        return chord

    transposed = new_root + remainder
    new_bass = transpose_note(bass, steps) if bass is not None else None
    if new_bass is not None:
        transposed += "/" + new_bass

    return transposed


def transpose_chord_positions(
    positions: Sequence[ChordPosition], steps: int
) -> list[ChordPosition]:
    """Transpose every chord in a recognition result.

    Args:
        positions: Recognized chords.
        steps: Semitones to shift, any integer.

    Returns:
        New ChordPosition objects with transposed symbols and unchanged
        bounds and font sizes. Flat roots come back sharp-spelled even for
        ``steps=0``.
    """
    return [
        position.model_copy(update={"chord": transpose_chord(position.chord, steps)})
        for position in positions
    ]


def wrap_steps(steps: int) -> int:
    """Fold any semitone offset into the 0-11 range shown by the UI."""
    return steps % 12


def format_steps(steps: int) -> str:
    """Format a semitone offset for display, e.g. "+2" or "-3"."""
    return f"{steps:+d}"
