import pytest
from pydantic import ValidationError
from image_to_chords.models import (
    QualityLevel,
    DetectionConfig,
    NormalizedBox,
    TextCandidate,
    RawObservation,
    ImageSize,
    PixelRect,
    ChordPosition,
)


def test_normalizedbox_properties(valid_box):
    assert valid_box.cx == pytest.approx(0.1 + 0.3 / 2)
    assert valid_box.cy == pytest.approx(0.2 + 0.4 / 2)
    assert valid_box.max_x == pytest.approx(0.4)
    assert valid_box.max_y == pytest.approx(0.6)
    assert valid_box.area == pytest.approx(0.12)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"x": -0.1, "y": 0.0, "w": 0.1, "h": 0.1},
        {"x": 0.0, "y": 1.1, "w": 0.1, "h": 0.1},
        {"x": 0.0, "y": 0.0, "w": 1.5, "h": 0.1},
        {"x": 0.0, "y": 0.0, "w": 0.1, "h": -0.2},
    ],
)
def test_normalizedbox_validation_raises(kwargs):
    with pytest.raises(ValidationError):
        NormalizedBox(**kwargs)


def test_normalizedbox_intersection_area():
    a = NormalizedBox(x=0.0, y=0.0, w=0.4, h=0.4)
    b = NormalizedBox(x=0.2, y=0.2, w=0.4, h=0.4)
    assert a.intersection_area(b) == pytest.approx(0.04)
    assert b.intersection_area(a) == pytest.approx(0.04)


def test_normalizedbox_touching_edges_do_not_intersect():
    a = NormalizedBox(x=0.0, y=0.0, w=0.2, h=0.2)
    b = NormalizedBox(x=0.2, y=0.0, w=0.2, h=0.2)
    assert a.intersection_area(b) == 0.0


def test_normalizedbox_union():
    a = NormalizedBox(x=0.1, y=0.5, w=0.1, h=0.1)
    b = NormalizedBox(x=0.3, y=0.4, w=0.1, h=0.1)
    u = a.union(b)
    assert (u.x, u.y) == pytest.approx((0.1, 0.4))
    assert (u.w, u.h) == pytest.approx((0.3, 0.2))


def test_rawobservation_top_candidate(valid_box):
    obs = RawObservation(
        box=valid_box,
        candidates=[TextCandidate(text="Am", confidence=0.9)],
    )
    assert obs.top_text == "Am"
    assert obs.top_candidate.confidence == 0.9


def test_rawobservation_without_candidates(valid_box):
    obs = RawObservation(box=valid_box)
    assert obs.top_candidate is None
    assert obs.top_text is None


@pytest.mark.parametrize("confidence", [-0.1, 1.01])
def test_textcandidate_confidence_range(confidence):
    with pytest.raises(ValidationError):
        TextCandidate(text="A", confidence=confidence)


def test_detectionconfig_is_hashable_and_frozen():
    config = DetectionConfig(
        quality_level=QualityLevel.FAST, minimum_text_height=0.003, vocabulary=("A",)
    )
    assert hash(config) == hash(config.model_copy())
    with pytest.raises(ValidationError):
        config.minimum_text_height = 0.5


def test_chordposition_is_frozen(valid_chord_position):
    with pytest.raises(ValidationError):
        valid_chord_position.chord = "G"


def test_chordposition_requires_symbol():
    with pytest.raises(ValidationError):
        ChordPosition(chord="", bounds=PixelRect(x=0, y=0, w=1, h=1), font_size=12)


def test_pixelrect_center():
    rect = PixelRect(x=10.0, y=20.0, w=30.0, h=10.0)
    assert (rect.cx, rect.cy) == (25.0, 25.0)
    assert rect.max_y == 30.0


@pytest.mark.parametrize("kwargs", [{"width": 0, "height": 1}, {"width": 1, "height": -1}])
def test_imagesize_must_be_positive(kwargs):
    with pytest.raises(ValidationError):
        ImageSize(**kwargs)
