import asyncio

import numpy as np
import pytest

from image_to_chords.models.core_models import (
    NormalizedBox,
    RawObservation,
    TextCandidate,
)
from image_to_chords.text_detection import TextDetectionEngine


class FakeEngine(TextDetectionEngine):
    """Engine that reports the same observations for every pass."""

    def __init__(self, observations=(), error=None, delay=0.0):
        self.observations = list(observations)
        self.error = error
        self.delay = delay
        self.configs = []
        self.active = 0
        self.peak = 0

    def detect(self, pixels, config):
        self.configs.append(config)
        if self.error is not None:
            raise self.error
        return list(self.observations)

    async def detect_async(self, pixels, config):
        self.active += 1
        self.peak = max(self.peak, self.active)
        try:
            await asyncio.sleep(self.delay)
            return self.detect(pixels, config)
        finally:
            self.active -= 1


@pytest.fixture
def make_observation():
    def _make(x, y, w, h, *candidates):
        return RawObservation(
            box=NormalizedBox(x=x, y=y, w=w, h=h),
            candidates=[TextCandidate(text=t, confidence=c) for t, c in candidates],
        )

    return _make


@pytest.fixture
def make_engine():
    return FakeEngine


@pytest.fixture
def blank_rgb_image():
    # 600×1200 white RGB page, already at the reference width
    return np.full((600, 1200, 3), 255, dtype=np.uint8)


@pytest.fixture
def small_rgb_image():
    # 2×2 RGB image: red, green, blue, black
    img = np.array(
        [[[255, 0, 0], [0, 255, 0]], [[0, 0, 255], [0, 0, 0]]], dtype=np.uint8
    )
    return img
