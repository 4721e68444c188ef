"""Text detection engines.

A text detection engine takes the normalized pixel buffer and one detection
configuration and reports raw text observations: normalized bounding boxes
with ranked text candidates. Engines report literal text only; cleaning and
chord validation happen later in the pipeline.
"""

import asyncio
import logging
import os
import tempfile
from abc import ABC, abstractmethod

import cv2
import numpy as np
import pytesseract
from PIL import Image

from image_to_chords.exceptions import EngineError
from image_to_chords.models.core_models import (
    DetectionConfig,
    NormalizedBox,
    QualityLevel,
    RawObservation,
    TextCandidate,
)

logger = logging.getLogger(__name__)

# Tesseract reports word rows at this level of its layout hierarchy
WORD_LEVEL = 5


class TextDetectionEngine(ABC):
    """Interface for text detection engines.

    Engines must return observations with boxes in normalized space (origin
    bottom-left, y up) and at most ten candidates per observation, best
    first. Failures must be raised as EngineError.
    """

    @abstractmethod
    def detect(
        self, pixels: np.ndarray, config: DetectionConfig
    ) -> list[RawObservation]:
        raise NotImplementedError

    async def detect_async(
        self, pixels: np.ndarray, config: DetectionConfig
    ) -> list[RawObservation]:
        """Run one detection pass without blocking the event loop."""
        return await asyncio.to_thread(self.detect, pixels, config)


def pixel_box_to_normalized(
    left: float, top: float, width: float, height: float, image_w: int, image_h: int
) -> NormalizedBox:
    """Convert a top-left-origin pixel box to a normalized bottom-left box.

    Args:
        left: Left edge in pixels.
        top: Top edge in pixels.
        width: Box width in pixels.
        height: Box height in pixels.
        image_w: Image width in pixels.
        image_h: Image height in pixels.

    Returns:
        The box in normalized detection space, clamped to the unit square.
    """

    def clamp(value: float) -> float:
        return max(0.0, min(1.0, value))

    x = clamp(left / image_w)
    y = clamp(1.0 - (top + height) / image_h)
    return NormalizedBox(
        x=x,
        y=y,
        w=clamp(min(width / image_w, 1.0 - x)),
        h=clamp(min(height / image_h, 1.0 - y)),
    )


class TesseractEngine(TextDetectionEngine):
    """Text detection through Tesseract, via pytesseract.

    Tesseract reports a single hypothesis per word, so every observation
    carries exactly one candidate. Fast passes run on a downscaled copy of
    the image; boxes are normalized, so they need no correction.

    Attributes:
        lang: Tesseract language code.
        psm: Page segmentation mode (11 finds sparse text in any order).
        oem: OCR engine mode.
        fast_scale: Downscale factor applied for fast passes.
    """

    def __init__(
        self,
        lang: str = "eng",
        psm: int = 11,
        oem: int = 1,
        fast_scale: float = 0.5,
        tesseract_cmd: str | None = None,
    ):
        self.lang = lang
        self.psm = psm
        self.oem = oem
        self.fast_scale = fast_scale
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def _scaled_pixels(self, pixels: np.ndarray, config: DetectionConfig) -> np.ndarray:
        if config.quality_level is QualityLevel.FAST and self.fast_scale != 1.0:
            return cv2.resize(
                pixels,
                None,
                fx=self.fast_scale,
                fy=self.fast_scale,
                interpolation=cv2.INTER_AREA,
            )
        return pixels

    def detect(
        self, pixels: np.ndarray, config: DetectionConfig
    ) -> list[RawObservation]:
        """Run Tesseract once with the given detection configuration.

        Args:
            pixels: Grayscale or RGB image as a NumPy array.
            config: Detection pass to run.

        Returns:
            One observation per recognized word at least as tall as the
            configured minimum text height.

        Raises:
            EngineError: If Tesseract is missing or fails.
        """
        image = self._scaled_pixels(pixels, config)
        image_h, image_w = image.shape[:2]

        with tempfile.TemporaryDirectory(prefix="image-to-chords-") as tmp_dir:
            tess_config = f"--oem {self.oem} --psm {self.psm}"
            if config.vocabulary:
                words_path = os.path.join(tmp_dir, "chords.user-words")
                with open(words_path, "w", encoding="utf-8") as f:
                    f.write("\n".join(config.vocabulary) + "\n")
                tess_config += f" --user-words {words_path}"

            try:
                data = pytesseract.image_to_data(
                    Image.fromarray(image),
                    lang=self.lang,
                    config=tess_config,
                    output_type=pytesseract.Output.DICT,
                )
            except (pytesseract.TesseractError, RuntimeError, OSError) as e:
                logger.error(f"Tesseract failed: {e}")
                raise EngineError(f"Tesseract failed: {e}") from e

        observations = []
        for i, text in enumerate(data["text"]):
            if int(data["level"][i]) != WORD_LEVEL or not str(text).strip():
                continue
            confidence = float(data["conf"][i])
            if confidence < 0:
                continue
            height = float(data["height"][i])
            if height / image_h < config.minimum_text_height:
                continue

            box = pixel_box_to_normalized(
                float(data["left"][i]),
                float(data["top"][i]),
                float(data["width"][i]),
                height,
                image_w,
                image_h,
            )
            candidate = TextCandidate(
                text=str(text), confidence=min(confidence / 100.0, 1.0)
            )
            observations.append(
                RawObservation(box=box, candidates=(candidate,), source_config=config)
            )

        logger.debug(
            f"Tesseract {config.quality_level.value} pass "
            f"(min height {config.minimum_text_height:.4f}) found "
            f"{len(observations)} words"
        )
        return observations
