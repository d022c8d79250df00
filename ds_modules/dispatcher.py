"""
운동 종류별 평가기 선택 및 판정 정규화

evaluate(exercise, keypoints) 하나로 외부(렌더러, API, CLI)에 노출된다.
  - keypoints is None  → "No person detected." (운동 종류와 무관)
  - exercise is None   → 빈 판정 (표시 문구는 호출 측이 결정)
  - 지원하지 않는 운동 → UnknownExerciseError
"""
import logging
from typing import Dict, Optional, Type

from ds_modules.exceptions import MalformedFrameError, UnknownExerciseError
from ds_modules.pose_types import ExerciseKind, Judgment, coerce_frame
from ds_modules.posture_evaluator import ExerciseEvaluator, PushUpEvaluator, SquatEvaluator

logger = logging.getLogger(__name__)

EVALUATOR_REGISTRY: Dict[ExerciseKind, Type[ExerciseEvaluator]] = {
    ExerciseKind.SQUAT: SquatEvaluator,
    ExerciseKind.PUSHUP: PushUpEvaluator,
}

_missing = set(ExerciseKind) - set(EVALUATOR_REGISTRY)
if _missing:
    raise RuntimeError(f"평가기가 없는 운동 종류: {sorted(k.value for k in _missing)}")

# 평가기는 설정값만 가지므로 공유해도 안전하다
_DEFAULT_EVALUATORS = {kind: cls() for kind, cls in EVALUATOR_REGISTRY.items()}


def resolve_exercise(exercise) -> Optional[ExerciseKind]:
    """None은 그대로, 그 외는 ExerciseKind로 변환한다."""
    if exercise is None:
        return None
    try:
        return ExerciseKind.parse(exercise)
    except UnknownExerciseError:
        logger.warning(f"알 수 없는 운동 종류: {exercise!r}")
        raise


def create_evaluator(exercise, strict_sides: bool = False) -> ExerciseEvaluator:
    kind = ExerciseKind.parse(exercise)
    return EVALUATOR_REGISTRY[kind](strict_sides=strict_sides)


def evaluate(exercise, keypoints, evaluator: Optional[ExerciseEvaluator] = None) -> Judgment:
    """
    한 프레임을 선택된 운동 기준으로 평가한다.

    Args:
        exercise: ExerciseKind, 운동 이름 문자열, 또는 None(미선택)
        keypoints: 키포인트 배열, 또는 None(사람 미검출)
        evaluator: 기본 평가기 대신 사용할 평가기 (예: strict_sides=True)

    Returns:
        Judgment

    Raises:
        UnknownExerciseError: exercise가 지원 목록 밖일 때
    """
    kind = resolve_exercise(exercise)

    if keypoints is None:
        return Judgment.no_person(kind)

    if kind is None:
        try:
            num_keypoints = len(coerce_frame(keypoints))
        except MalformedFrameError:
            num_keypoints = 0
        return Judgment.neutral(num_keypoints)

    if evaluator is None:
        evaluator = _DEFAULT_EVALUATORS[kind]
    elif evaluator.KIND is not kind:
        raise ValueError(
            f"평가기 종류 불일치: evaluator={evaluator.KIND.value}, exercise={kind.value}"
        )
    return evaluator.evaluate(keypoints)
