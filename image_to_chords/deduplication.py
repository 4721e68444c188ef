"""Spatial deduplication of detections.

Redundant detection passes report the same glyphs several times with
slightly different boxes. Clusters of overlapping boxes are collapsed to
their most confident member.
"""

import logging
from collections.abc import Sequence

import numpy as np

from image_to_chords.models.core_models import NormalizedBox
from image_to_chords.models.pipeline_models import ScoredObservation

logger = logging.getLogger(__name__)


def overlap_ratio(a: NormalizedBox, b: NormalizedBox) -> float:
    """Intersection area divided by the area of the smaller box.

    Args:
        a: First box.
        b: Second box.

    Returns:
        Ratio in [0, 1]. A box fully inside the other scores 1.0. Returns
        0.0 when the smaller box has no area.
    """
    smaller = min(a.area, b.area)
    if smaller <= 0:
        return 0.0
    return a.intersection_area(b) / smaller


def deduplicate_observations(
    scored: Sequence[ScoredObservation], threshold: float = 0.2
) -> list[ScoredObservation]:
    """Keep one representative per cluster of overlapping observations.

    Greedy single pass over the confidence-sorted input: each unclaimed item
    becomes a representative and claims every other unclaimed item whose
    overlap ratio with it exceeds ``threshold``. Because the input is sorted,
    every representative is the most confident member of its cluster.

    Args:
        scored: Observations sorted by descending confidence.
        threshold: Overlap ratio above which two observations are duplicates.

    Returns:
        Representatives in confidence-descending order.
    """
    count = len(scored)
    claimed = np.zeros(count, dtype=bool)
    boxes = [item.observation.box for item in scored]
    unique: list[ScoredObservation] = []

    for i in range(count):
        if claimed[i]:
            continue
        claimed[i] = True
        unique.append(scored[i])
        for j in range(count):
            if not claimed[j] and overlap_ratio(boxes[i], boxes[j]) > threshold:
                claimed[j] = True

    logger.debug(f"Kept {len(unique)} of {count} observations after deduplication")
    return unique
