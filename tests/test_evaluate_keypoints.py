import importlib.util
import json
from pathlib import Path

import pytest

from conftest import squat_frame

_SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "evaluate_keypoints.py"
_loader_spec = importlib.util.spec_from_file_location("evaluate_keypoints", _SCRIPT)
evaluate_keypoints = importlib.util.module_from_spec(_loader_spec)
_loader_spec.loader.exec_module(evaluate_keypoints)


@pytest.fixture
def frames_file(tmp_path):
    frames = [
        [[p.x, p.y] for p in squat_frame()],
        [{"x": p.x, "y": p.y} for p in squat_frame(back_angle=45.0)],
        None,
    ]
    path = tmp_path / "frames.json"
    path.write_text(json.dumps({"frames": frames}), encoding="utf-8")
    return path


def test_cli_prints_feedback_and_writes_output(frames_file, tmp_path, capsys):
    output = tmp_path / "out" / "result.json"

    code = evaluate_keypoints.main(
        ["--input", str(frames_file), "--exercise", "squats", "--output", str(output)]
    )

    assert code == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "[00000] Great posture!"
    assert lines[1] == "[00001] Leaned forward too much"
    assert lines[2] == "[00002] No person detected."
    saved = json.loads(output.read_text(encoding="utf-8"))
    assert [s["status"] for s in saved] == ["evaluated", "evaluated", "no_person"]


def test_cli_unknown_exercise(frames_file, capsys):
    code = evaluate_keypoints.main(["--input", str(frames_file), "--exercise", "deadlift"])

    assert code == 2
    assert "deadlift" in capsys.readouterr().err


def test_cli_missing_input(tmp_path):
    code = evaluate_keypoints.main(["--input", str(tmp_path / "nope.json"), "--exercise", "squats"])

    assert code == 1


def test_evaluate_frames_strict_sides():
    frames = [squat_frame(right_knee=175.0)]

    judgments = evaluate_keypoints.evaluate_frames(frames, "squats", strict_sides=True)

    assert judgments[0].flagged_indices == (26,)
