import logging

from image_to_chords.hooks import (
    LoggingHooks,
    RecognitionHooks,
    RejectionReason,
    StageCounter,
)


def test_base_hooks_are_noops():
    hooks = RecognitionHooks()
    assert hooks.stage_completed("passes", 7) is None
    assert hooks.candidate_rejected("H", 0.9, RejectionReason.INVALID) is None
    assert hooks.chord_accepted("A", merged=False) is None


def test_stage_counter_summary():
    counter = StageCounter()
    assert counter.summary() == "No stages completed"

    counter.stage_completed("passes", 7)
    counter.stage_completed("chords", 2)
    counter.candidate_rejected("H", 0.9, RejectionReason.INVALID)
    counter.chord_accepted("A/C#", merged=True)

    assert counter.summary() == "passes: 7, chords: 2"
    assert counter.rejections == [("H", 0.9, RejectionReason.INVALID)]
    assert counter.accepted == [("A/C#", True)]


def test_logging_hooks_write_debug_records(caplog):
    hooks = LoggingHooks()
    with caplog.at_level(logging.DEBUG, logger="image_to_chords.hooks"):
        hooks.stage_completed("unique", 3)
        hooks.candidate_rejected("xx", 0.5, RejectionReason.LOW_CONFIDENCE)
        hooks.chord_accepted("Gm7", merged=True)

    messages = [record.getMessage() for record in caplog.records]
    assert "Stage 'unique' produced 3 items" in messages
    assert "Rejected candidate 'xx' (0.50): low_confidence" in messages
    assert "Accepted merged chord 'Gm7'" in messages
