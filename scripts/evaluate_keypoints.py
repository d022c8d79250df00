"""
키포인트 JSON → 프레임별 자세 평가 스크립트

입력 JSON은 프레임 리스트이며, 각 프레임은 키포인트 33개 리스트
({"x":..,"y":..} 또는 [x, y]) 이거나 사람 미검출 시 null 이다.
{"frames": [...]} 형태도 허용한다.

사용법:
    python scripts/evaluate_keypoints.py --input frames.json --exercise squats
    python scripts/evaluate_keypoints.py --input frames.json --exercise pushups --smooth 5 --output result.json
"""
import sys
import json
import argparse
import logging
from pathlib import Path

# 경로 설정
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

import config
from ds_modules import JudgmentSmoother, UnknownExerciseError, create_evaluator, evaluate, resolve_exercise
from utils.visualization import feedback_text

logger = logging.getLogger(__name__)


def load_frames(input_path):
    """JSON 파일에서 프레임 리스트를 읽는다."""
    with open(input_path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("frames")
    if not isinstance(data, list):
        raise ValueError(f"프레임 리스트가 아님: {input_path}")
    return data


def evaluate_frames(frames, exercise, smooth=0, strict_sides=False):
    """프레임 순서대로 평가한 Judgment 리스트를 반환한다."""
    kind = resolve_exercise(exercise)
    evaluator = create_evaluator(kind, strict_sides=strict_sides) if kind else None
    smoother = JudgmentSmoother(smooth) if smooth > 0 else None

    judgments = []
    for frame in frames:
        judgment = evaluate(kind, frame, evaluator=evaluator)
        if smoother is not None:
            judgment = smoother.smooth(judgment)
        judgments.append(judgment)
    return judgments


def main(argv=None):
    parser = argparse.ArgumentParser(description="키포인트 JSON 프레임별 자세 평가")
    parser.add_argument("--input", required=True, help="키포인트 프레임 JSON 경로")
    parser.add_argument("--exercise", required=True, help="운동 종류 (squats, pushups)")
    parser.add_argument("--smooth", type=int, default=0, help="판정 다수결 창 크기 (0=끔)")
    parser.add_argument("--strict-sides", action="store_true", help="위반한 쪽 관절만 표시")
    parser.add_argument("--output", default=None, help="판정 결과 JSON 저장 경로")
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

    try:
        frames = load_frames(args.input)
        judgments = evaluate_frames(frames, args.exercise, args.smooth, args.strict_sides)
    except UnknownExerciseError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    except (OSError, ValueError) as e:
        print(f"[ERROR] 입력 읽기 실패: {e}", file=sys.stderr)
        return 1

    for i, judgment in enumerate(judgments):
        print(f"[{i:05d}] {feedback_text(judgment)}")

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", encoding="utf-8") as f:
            json.dump([j.to_dict() for j in judgments], f, ensure_ascii=False, indent=2)
        print(f"  -> {output_path} 저장 ({len(judgments)}프레임)")

    return 0


if __name__ == "__main__":
    sys.exit(main())
