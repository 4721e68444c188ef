import pytest

from image_to_chords.token_merger import find_merge_partners, merge_with_neighbors


def test_merge_slash_bass(make_observation):
    observations = [
        make_observation(0.10, 0.5, 0.03, 0.04, ("A", 0.25)),
        make_observation(0.13, 0.5, 0.06, 0.04, ("/C#", 0.8)),
    ]

    chord, box = merge_with_neighbors(0, observations)

    assert chord == "A/C#"
    assert box.x == pytest.approx(0.10)
    assert box.w == pytest.approx(0.09)
    assert box.h == pytest.approx(0.04)


def test_merge_order_is_own_text_first(make_observation):
    # The suffix sits left of the root, yet the unmatched text leads
    observations = [
        make_observation(0.10, 0.5, 0.03, 0.04, ("m7", 0.9)),
        make_observation(0.14, 0.5, 0.03, 0.04, ("G", 0.9)),
    ]
    assert merge_with_neighbors(1, observations)[0] == "Gm7"
    assert merge_with_neighbors(0, observations) is None


def test_merge_requires_same_line(make_observation):
    observations = [
        make_observation(0.10, 0.5, 0.03, 0.04, ("A", 0.25)),
        make_observation(0.13, 0.6, 0.06, 0.04, ("/C#", 0.8)),
    ]
    assert merge_with_neighbors(0, observations) is None


def test_merge_skips_partner_that_does_not_validate(make_observation):
    observations = [
        make_observation(0.30, 0.5, 0.03, 0.04, ("D", 0.9)),
        make_observation(0.20, 0.5, 0.03, 0.04, ("xyz", 0.9)),
        make_observation(0.33, 0.5, 0.03, 0.04, ("sus4", 0.9)),
    ]
    assert merge_with_neighbors(0, observations)[0] == "Dsus4"


def test_find_partners_sorted_by_left_edge(make_observation):
    observations = [
        make_observation(0.30, 0.5, 0.03, 0.04, ("D", 0.9)),
        make_observation(0.40, 0.5, 0.03, 0.04, ("b", 0.9)),
        make_observation(0.20, 0.5, 0.03, 0.04, ("m", 0.9)),
        make_observation(0.90, 0.5, 0.03, 0.04, ("7", 0.9)),
    ]
    partners = find_merge_partners(0, observations)
    assert [p.top_text for p in partners] == ["m", "b"]


def test_find_partners_excludes_self(make_observation):
    observations = [make_observation(0.30, 0.5, 0.03, 0.04, ("D", 0.9))]
    assert find_merge_partners(0, observations) == []


def test_merge_without_text(make_observation):
    observations = [
        make_observation(0.30, 0.5, 0.03, 0.04),
        make_observation(0.33, 0.5, 0.03, 0.04, ("A", 0.9)),
    ]
    assert merge_with_neighbors(0, observations) is None
