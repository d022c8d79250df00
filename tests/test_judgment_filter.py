import pytest

from conftest import pushup_frame, squat_frame
from ds_modules import JudgmentSmoother, JudgmentStatus, evaluate


BAD_KNEES = squat_frame(left_knee=175.0)
GOOD = squat_frame()


def _run(smoother, frames, exercise="squats"):
    return [smoother.smooth(evaluate(exercise, f)) for f in frames]


def test_single_noisy_frame_is_suppressed():
    smoother = JudgmentSmoother(window=3)

    results = _run(smoother, [GOOD, GOOD, BAD_KNEES, GOOD])

    assert [r.messages for r in results] == [(), (), (), ()]


def test_persistent_error_survives_majority():
    smoother = JudgmentSmoother(window=3)

    results = _run(smoother, [GOOD, BAD_KNEES, BAD_KNEES, BAD_KNEES])

    assert results[1].messages == ()
    assert results[2].messages == ("Bend knees more",)
    assert results[3].messages == ("Bend knees more",)
    assert results[3].flagged_indices == (25, 26)


def test_suppressed_rule_reports_ok():
    smoother = JudgmentSmoother(window=3)

    results = _run(smoother, [GOOD, GOOD, BAD_KNEES])

    assert results[-1].checks[1].status == "ok"
    assert results[-1].flagged_indices == ()


def test_window_of_one_passes_through():
    smoother = JudgmentSmoother(window=1)
    raw = evaluate("squats", BAD_KNEES)

    assert smoother.smooth(raw) == raw


def test_no_person_passes_through_and_resets():
    smoother = JudgmentSmoother(window=3)
    _run(smoother, [BAD_KNEES, BAD_KNEES])

    no_person = smoother.smooth(evaluate("squats", None))

    assert no_person.status == JudgmentStatus.NO_PERSON
    assert len(smoother) == 0
    assert smoother.smooth(evaluate("squats", GOOD)).messages == ()


def test_exercise_change_resets_history():
    smoother = JudgmentSmoother(window=5)
    _run(smoother, [BAD_KNEES, BAD_KNEES])

    result = smoother.smooth(evaluate("pushups", pushup_frame(left_elbow=175.0)))

    assert len(smoother) == 1
    assert result.messages == ("Lower elbows more",)


def test_invalid_window():
    with pytest.raises(ValueError):
        JudgmentSmoother(window=0)
