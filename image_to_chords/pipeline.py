"""
Pipeline processing functions for chord recognition.

This module wires the recognition stages together: image normalization,
concurrent detection passes, aggregation, deduplication, chord selection,
token merging, and coordinate mapping. Every stage after detection is a pure
function over an already collected snapshot of observations.
"""

import asyncio
import logging
from collections.abc import Sequence

import numpy as np

from image_to_chords.aggregation import aggregate_observations
from image_to_chords.chord_text import select_chord_candidate
from image_to_chords.coordinates import calculate_font_size, map_to_image_coordinates
from image_to_chords.deduplication import deduplicate_observations
from image_to_chords.exceptions import EngineError
from image_to_chords.hooks import LoggingHooks, RecognitionHooks, RejectionReason
from image_to_chords.image_processing import prepare_image
from image_to_chords.models.core_models import (
    ChordPosition,
    DetectionConfig,
    ImageSize,
    NormalizedBox,
    RawObservation,
)
from image_to_chords.models.pipeline_models import (
    RecognitionResult,
    ScoredObservation,
)
from image_to_chords.models.settings_models import ProcessingParameters
from image_to_chords.scan_planner import plan_scans
from image_to_chords.text_detection import TextDetectionEngine
from image_to_chords.token_merger import merge_with_neighbors

logger = logging.getLogger(__name__)


async def run_detection_passes(
    engine: TextDetectionEngine,
    pixels: np.ndarray,
    configs: Sequence[DetectionConfig],
) -> list[tuple[DetectionConfig, list[RawObservation]]]:
    """Run every detection pass concurrently and wait for all of them.

    If any pass fails the remaining passes are cancelled and a single
    EngineError is raised; no partial results are returned.

    Args:
        engine: Text detection engine.
        pixels: Processed pixel buffer.
        configs: Detection passes to run.

    Returns:
        (config, observations) pairs in the order of ``configs``.

    Raises:
        EngineError: If any detection pass fails.
    """
    tasks = [
        asyncio.ensure_future(engine.detect_async(pixels, config)) for config in configs
    ]
    try:
        results = await asyncio.gather(*tasks)
    except EngineError:
        for task in tasks:
            task.cancel()
        raise
    except Exception as e:
        for task in tasks:
            task.cancel()
        logger.error(f"Error in text detection: {str(e)}")
        raise EngineError(f"Text detection failed: {e}") from e

    return list(zip(configs, results))


def extract_chord_positions(
    unique: Sequence[ScoredObservation],
    original_size: ImageSize,
    processed_size: ImageSize,
    display_size: ImageSize | None = None,
    params: ProcessingParameters | None = None,
    hooks: RecognitionHooks | None = None,
) -> list[ChordPosition]:
    """Turn deduplicated observations into positioned chord symbols.

    Each observation contributes its first acceptable candidate. Observations
    without one are merged with a neighbour on the same line when the
    combined text is a chord; otherwise they are dropped.

    Args:
        unique: Deduplicated observations in confidence order.
        original_size: Size of the input image.
        processed_size: Size of the image the engine ran on.
        display_size: Size of the display surface, if chords are drawn on a
            scaled view.
        params: Pipeline parameters, defaults if omitted.
        hooks: Observer for rejections and accepted chords.

    Returns:
        Chords sorted by ascending vertical position.
    """
    params = params or ProcessingParameters()
    hooks = hooks or RecognitionHooks()
    settings = params.recognition
    observations = [item.observation for item in unique]

    def position(chord: str, box: NormalizedBox) -> ChordPosition:
        bounds = map_to_image_coordinates(
            box, original_size, processed_size, display_size
        )
        font_size = calculate_font_size(bounds, original_size, params.layout)
        return ChordPosition(chord=chord, bounds=bounds, font_size=font_size)

    chords: list[ChordPosition] = []
    matched = merged = 0
    for index, observation in enumerate(observations):
        chord = select_chord_candidate(
            observation,
            max_candidates=settings.max_candidates,
            min_confidence=settings.min_confidence,
            hooks=hooks,
        )
        if chord is not None:
            chords.append(position(chord, observation.box))
            hooks.chord_accepted(chord, merged=False)
            matched += 1
            continue

        merge = merge_with_neighbors(
            index, observations, settings.merge_max_dx, settings.merge_max_dy
        )
        if merge is None:
            top = observation.top_candidate
            hooks.candidate_rejected(
                top.text if top else "",
                top.confidence if top else 0.0,
                RejectionReason.UNMERGED,
            )
            continue

        chord, box = merge
        chords.append(position(chord, box))
        hooks.chord_accepted(chord, merged=True)
        merged += 1

    hooks.stage_completed("matched", matched)
    hooks.stage_completed("merged", merged)
    return sorted(chords, key=lambda c: c.bounds.y)


async def analyze_image(
    image: np.ndarray | None,
    engine: TextDetectionEngine,
    display_size: ImageSize | None = None,
    params: ProcessingParameters | None = None,
    hooks: RecognitionHooks | None = None,
) -> RecognitionResult:
    """Run the complete chord recognition pipeline on one image.

    Args:
        image: RGB, RGBA or grayscale image as a NumPy array.
        engine: Text detection engine to run the passes with.
        display_size: Size of the surface chords will be drawn on. Bounds
            are in original-image pixels when omitted.
        params: Pipeline parameters, defaults if omitted.
        hooks: Observer for stage counts and rejections, logging by default.

    Returns:
        RecognitionResult with the prepared image, the intermediate
        observation lists, and the recognized chords.

    Raises:
        ImagePreparationError: If the image cannot be normalized.
        EngineError: If any detection pass fails.
    """
    params = params or ProcessingParameters()
    hooks = hooks or LoggingHooks()

    prepared = prepare_image(image, params.normalizer)
    logger.info(
        f"Recognizing chords in {prepared.original_size.width:g}x"
        f"{prepared.original_size.height:g} image "
        f"(processed {prepared.size.width:g}x{prepared.size.height:g})"
    )

    configs = plan_scans(prepared.size.width, params.scan)
    hooks.stage_completed("passes", len(configs))

    batches = await run_detection_passes(engine, prepared.pixels, configs)

    observations = aggregate_observations(batches)
    hooks.stage_completed("observations", len(observations))

    unique = deduplicate_observations(
        observations, params.recognition.overlap_threshold
    )
    hooks.stage_completed("unique", len(unique))

    chords = extract_chord_positions(
        unique,
        prepared.original_size,
        prepared.size,
        display_size,
        params,
        hooks,
    )
    hooks.stage_completed("chords", len(chords))
    if not chords:
        logger.warning("No chords found in image")

    return RecognitionResult(
        prepared=prepared,
        observations=observations,
        unique_observations=unique,
        chords=chords,
    )


async def recognize_chords(
    image: np.ndarray | None,
    engine: TextDetectionEngine,
    display_size: ImageSize | None = None,
    params: ProcessingParameters | None = None,
    hooks: RecognitionHooks | None = None,
) -> list[ChordPosition]:
    """Recognize chord symbols in an image.

    See ``analyze_image`` for arguments and errors.

    Returns:
        Chords sorted by ascending vertical position; empty if none found.
    """
    result = await analyze_image(image, engine, display_size, params, hooks)
    return result.chords


def analyze_image_sync(
    image: np.ndarray | None,
    engine: TextDetectionEngine,
    display_size: ImageSize | None = None,
    params: ProcessingParameters | None = None,
    hooks: RecognitionHooks | None = None,
) -> RecognitionResult:
    """Blocking wrapper around ``analyze_image`` for synchronous callers.

    Must not be called from a running event loop.
    """
    return asyncio.run(analyze_image(image, engine, display_size, params, hooks))
