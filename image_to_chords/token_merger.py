"""Recovery of chords split across two adjacent detections.

Engines sometimes report "A" and "/C#" or "G" and "m7" as separate words.
An observation that yields no chord on its own is concatenated with nearby
observations on the same text line until the result validates.
"""

from collections.abc import Sequence

from image_to_chords.chord_text import cleanup_chord_text, is_valid_chord
from image_to_chords.models.core_models import NormalizedBox, RawObservation


def find_merge_partners(
    index: int,
    observations: Sequence[RawObservation],
    max_dx: float = 0.2,
    max_dy: float = 0.05,
) -> list[RawObservation]:
    """Find observations close enough to continue the one at ``index``.

    Args:
        index: Position of the unmatched observation in ``observations``.
        observations: Deduplicated observations.
        max_dx: Horizontal center distance a partner must stay below.
        max_dy: Vertical center distance a partner must stay below.

    Returns:
        Partners ordered by ascending left edge, ties in input order.
    """
    box = observations[index].box
    partners = [
        other
        for j, other in enumerate(observations)
        if j != index
        and abs(other.box.cx - box.cx) < max_dx
        and abs(other.box.cy - box.cy) < max_dy
    ]
    return sorted(partners, key=lambda other: other.box.x)


def merge_with_neighbors(
    index: int,
    observations: Sequence[RawObservation],
    max_dx: float = 0.2,
    max_dy: float = 0.05,
) -> tuple[str, NormalizedBox] | None:
    """Try to complete an unmatched observation with a neighbour's text.

    The unmatched observation's top text always comes first and the
    partner's second, in partner order; the first concatenation that
    cleans to a valid chord wins.

    Args:
        index: Position of the unmatched observation in ``observations``.
        observations: Deduplicated observations.
        max_dx: Horizontal center distance a partner must stay below.
        max_dy: Vertical center distance a partner must stay below.

    Returns:
        (chord, union of both boxes), or None if no partner completes it.
    """
    observation = observations[index]
    text = observation.top_text
    if text is None:
        return None

    for partner in find_merge_partners(index, observations, max_dx, max_dy):
        partner_text = partner.top_text
        if partner_text is None:
            continue
        cleaned = cleanup_chord_text(text + partner_text)
        if is_valid_chord(cleaned):
            return cleaned, observation.box.union(partner.box)

    return None
