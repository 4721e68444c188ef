import asyncio

import numpy as np
import pytesseract
import pytest

from image_to_chords.exceptions import EngineError
from image_to_chords.models import DetectionConfig, QualityLevel
from image_to_chords.text_detection import TesseractEngine, pixel_box_to_normalized


def tesseract_rows(*rows):
    """Build an image_to_data DICT from (level, text, conf, left, top, w, h)."""
    keys = ("level", "text", "conf", "left", "top", "width", "height")
    return {key: [row[i] for row in rows] for i, key in enumerate(keys)}


@pytest.fixture
def gray_page():
    return np.full((100, 200), 255, dtype=np.uint8)


@pytest.fixture
def accurate():
    return DetectionConfig(
        quality_level=QualityLevel.ACCURATE,
        minimum_text_height=0.0,
        vocabulary=("Am", "C"),
    )


@pytest.fixture
def fake_tesseract(monkeypatch):
    calls = []
    data = {"rows": tesseract_rows((5, "Am", 91, 20, 10, 40, 20))}

    def image_to_data(image, lang=None, config="", output_type=None):
        words = None
        if "--user-words" in config:
            path = config.split("--user-words ")[1]
            with open(path, encoding="utf-8") as f:
                words = f.read().split()
        calls.append({"size": image.size, "lang": lang, "config": config, "words": words})
        return data["rows"]

    monkeypatch.setattr(pytesseract, "image_to_data", image_to_data)
    return calls, data


def test_pixel_box_to_normalized_flips_y():
    box = pixel_box_to_normalized(20, 10, 40, 20, 200, 100)
    assert (box.x, box.y, box.w, box.h) == pytest.approx((0.1, 0.7, 0.2, 0.2))


def test_pixel_box_to_normalized_clamps_overflow():
    box = pixel_box_to_normalized(180, -5, 40, 20, 200, 100)
    assert box.max_x == pytest.approx(1.0)
    assert box.max_y == pytest.approx(1.0)


def test_detect_reports_word_boxes(fake_tesseract, gray_page, accurate):
    observations = TesseractEngine().detect(gray_page, accurate)

    assert len(observations) == 1
    obs = observations[0]
    assert obs.top_text == "Am"
    assert obs.top_candidate.confidence == pytest.approx(0.91)
    assert (obs.box.x, obs.box.y, obs.box.w, obs.box.h) == pytest.approx(
        (0.1, 0.7, 0.2, 0.2)
    )
    assert obs.source_config == accurate


def test_detect_passes_vocabulary_and_modes(fake_tesseract, gray_page, accurate):
    calls, _ = fake_tesseract
    TesseractEngine(lang="deu", psm=6).detect(gray_page, accurate)

    assert calls[0]["lang"] == "deu"
    assert "--psm 6" in calls[0]["config"]
    assert calls[0]["words"] == ["Am", "C"]


def test_detect_without_vocabulary(fake_tesseract, gray_page):
    calls, _ = fake_tesseract
    config = DetectionConfig(quality_level=QualityLevel.ACCURATE, minimum_text_height=0.0)
    TesseractEngine().detect(gray_page, config)
    assert "--user-words" not in calls[0]["config"]


def test_fast_pass_runs_on_downscaled_image(fake_tesseract, gray_page):
    calls, _ = fake_tesseract
    fast = DetectionConfig(quality_level=QualityLevel.FAST, minimum_text_height=0.0)
    TesseractEngine().detect(gray_page, fast)
    assert calls[0]["size"] == (100, 50)


def test_detect_filters_non_words(fake_tesseract, gray_page, accurate):
    _, data = fake_tesseract
    data["rows"] = tesseract_rows(
        (4, "line", 95, 0, 0, 200, 30),
        (5, "  ", 95, 0, 0, 10, 10),
        (5, "G", -1, 0, 0, 10, 10),
        (5, "D7", 80, 100, 50, 30, 20),
    )
    observations = TesseractEngine().detect(gray_page, accurate)
    assert [obs.top_text for obs in observations] == ["D7"]


def test_detect_applies_minimum_text_height(fake_tesseract, gray_page):
    config = DetectionConfig(quality_level=QualityLevel.ACCURATE, minimum_text_height=0.25)
    assert TesseractEngine().detect(gray_page, config) == []


def test_detect_wraps_tesseract_errors(monkeypatch, gray_page, accurate):
    def fail(*args, **kwargs):
        raise pytesseract.TesseractError(1, "boom")

    monkeypatch.setattr(pytesseract, "image_to_data", fail)
    with pytest.raises(EngineError):
        TesseractEngine().detect(gray_page, accurate)


def test_detect_async_runs_detect(fake_tesseract, gray_page, accurate):
    observations = asyncio.run(TesseractEngine().detect_async(gray_page, accurate))
    assert [obs.top_text for obs in observations] == ["Am"]
