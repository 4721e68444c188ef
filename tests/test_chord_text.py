import pytest

from image_to_chords.chord_text import (
    cleanup_chord_text,
    is_valid_chord,
    select_chord_candidate,
)
from image_to_chords.hooks import RejectionReason, StageCounter


@pytest.mark.parametrize(
    "text", ["A", "Bm", "D/F#", "Csus4", "G7", "A.", "Amaj7", "BbM7", "F#m7/C#", "g"]
)
def test_is_valid_chord_accepts(text):
    assert is_valid_chord(text)


@pytest.mark.parametrize("text", ["", "H", "123", "AMAJ7", "Am/", "A..", "Fine", "/C#"])
def test_is_valid_chord_rejects(text):
    assert not is_valid_chord(text)


def test_is_valid_chord_root_case_only_relaxed_for_short_forms():
    # lowercase root with a dot is accepted, quality tokens stay case-sensitive
    assert is_valid_chord("a.")
    assert not is_valid_chord("ASUS4")


@pytest.mark.parametrize(
    "raw, cleaned",
    [
        ("0m", "Cm"),
        ("AM", "Am"),
        ("7M", "7M"),
        ("  Dm  ", "Dm"),
        ("A|C#", "A/C#"),
        ("an", "Am"),
        ("C1", "CI"),
        ("M", "M"),
        ("G7M", "G7M"),
    ],
)
def test_cleanup_chord_text(raw, cleaned):
    assert cleanup_chord_text(raw) == cleaned


def test_cleanup_substitutes_every_occurrence():
    # S→5 applies anywhere in the string, not only at the root
    assert cleanup_chord_text("ASUS") == "A5U5"


def test_select_first_valid_confident_candidate(make_observation):
    obs = make_observation(
        0.1, 0.1, 0.1, 0.1, ("H", 0.9), ("Am", 0.8), ("Em", 0.7)
    )
    assert select_chord_candidate(obs) == "Am"


def test_select_skips_low_confidence_valid_candidate(make_observation):
    obs = make_observation(0.1, 0.1, 0.1, 0.1, ("A", 0.3), ("E", 0.31))
    assert select_chord_candidate(obs) == "E"


def test_select_only_inspects_top_candidates(make_observation):
    candidates = [("x", 0.9)] * 10 + [("A", 0.8)]
    obs = make_observation(0.1, 0.1, 0.1, 0.1, *candidates)
    assert select_chord_candidate(obs, max_candidates=10) is None
    assert select_chord_candidate(obs, max_candidates=11) == "A"


def test_select_reports_rejections(make_observation):
    counter = StageCounter()
    obs = make_observation(0.1, 0.1, 0.1, 0.1, ("  ", 0.9), ("H", 0.8), ("A", 0.2))
    assert select_chord_candidate(obs, hooks=counter) is None
    assert [reason for _, _, reason in counter.rejections] == [
        RejectionReason.EMPTY,
        RejectionReason.INVALID,
        RejectionReason.LOW_CONFIDENCE,
    ]
