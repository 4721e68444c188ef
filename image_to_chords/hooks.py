"""Observability hooks for the chord recognition pipeline.

The pipeline reports how many observations survive each stage and why
individual candidates were dropped. Hooks only observe: nothing they do
changes the recognized chords.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class RejectionReason(str, Enum):
    """Why a candidate or observation did not produce a chord."""

    EMPTY = "empty"
    INVALID = "invalid"
    LOW_CONFIDENCE = "low_confidence"
    UNMERGED = "unmerged"


class RecognitionHooks:
    """No-op base class for pipeline observers.

    Subclasses override the callbacks they care about.
    """

    def stage_completed(self, stage: str, count: int) -> None:
        """Called after a pipeline stage with the number of items it produced."""

    def candidate_rejected(
        self, text: str, confidence: float, reason: RejectionReason
    ) -> None:
        """Called for every candidate or observation that is dropped."""

    def chord_accepted(self, chord: str, merged: bool) -> None:
        """Called when a chord is accepted, ``merged`` for merged tokens."""


class LoggingHooks(RecognitionHooks):
    """Hooks that write every event to the module logger at debug level."""

    def stage_completed(self, stage: str, count: int) -> None:
        logger.debug(f"Stage {stage!r} produced {count} items")

    def candidate_rejected(
        self, text: str, confidence: float, reason: RejectionReason
    ) -> None:
        logger.debug(
            f"Rejected candidate {text!r} ({confidence:.2f}): {reason.value}"
        )

    def chord_accepted(self, chord: str, merged: bool) -> None:
        kind = "merged chord" if merged else "chord"
        logger.debug(f"Accepted {kind} {chord!r}")


class StageCounter(RecognitionHooks):
    """Hooks that collect stage counts and rejections for later inspection.

    Attributes:
        counts: Item count per stage name, in the order stages completed.
        rejections: (text, confidence, reason) for every rejected candidate.
        accepted: (chord, merged) for every accepted chord.
    """

    def __init__(self) -> None:
        self.counts: dict[str, int] = {}
        self.rejections: list[tuple[str, float, RejectionReason]] = []
        self.accepted: list[tuple[str, bool]] = []

    def stage_completed(self, stage: str, count: int) -> None:
        self.counts[stage] = count

    def candidate_rejected(
        self, text: str, confidence: float, reason: RejectionReason
    ) -> None:
        self.rejections.append((text, confidence, reason))

    def chord_accepted(self, chord: str, merged: bool) -> None:
        self.accepted.append((chord, merged))

    def summary(self) -> str:
        """Format the collected stage counts as one line for display."""
        if not self.counts:
            return "No stages completed"
        return ", ".join(f"{stage}: {count}" for stage, count in self.counts.items())
