"""Merging of observations from all detection passes."""

from collections.abc import Iterable, Sequence

from image_to_chords.models.core_models import DetectionConfig, RawObservation
from image_to_chords.models.pipeline_models import ScoredObservation


def aggregate_observations(
    batches: Iterable[tuple[DetectionConfig, Sequence[RawObservation]]],
) -> list[ScoredObservation]:
    """Flatten per-pass results into one confidence-ranked list.

    Each observation is scored with the confidence of its first candidate.
    Observations without candidates carry no text and are skipped. The sort
    is stable, so ties keep the order in which passes reported them.

    Args:
        batches: (config, observations) pairs, one per detection pass.

    Returns:
        Scored observations sorted by descending confidence. Empty if the
        engine found nothing.
    """
    scored = [
        ScoredObservation(observation=obs, confidence=obs.top_candidate.confidence)
        for _, observations in batches
        for obs in observations
        if obs.top_candidate is not None
    ]
    return sorted(scored, key=lambda item: item.confidence, reverse=True)
