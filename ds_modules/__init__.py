"""
DS 모듈 패키지: 규칙 기반 운동 자세 평가

angle_utils:        각도/중점 계산
pose_types:         Point2D, Judgment 등 평가 입출력 타입
posture_evaluator:  스쿼트/푸시업 평가기
dispatcher:         운동 종류별 평가기 선택 (evaluate 진입점)
judgment_filter:    판정 다수결 스무딩
"""
from ds_modules.angle_utils import (
    cal_angle,
    midpoint,
)
from ds_modules.exceptions import (
    PoseCoachError,
    MalformedFrameError,
    UnknownExerciseError,
)
from ds_modules.pose_types import (
    Annotation,
    ExerciseKind,
    JointStatus,
    Judgment,
    JudgmentStatus,
    Point2D,
    RuleCheck,
    STATUS_COLORS,
    coerce_frame,
)
from ds_modules.posture_evaluator import ExerciseEvaluator, SquatEvaluator, PushUpEvaluator
from ds_modules.dispatcher import create_evaluator, evaluate, resolve_exercise
from ds_modules.judgment_filter import JudgmentSmoother

__all__ = [
    'cal_angle',
    'midpoint',
    'PoseCoachError',
    'MalformedFrameError',
    'UnknownExerciseError',
    'Annotation',
    'ExerciseKind',
    'JointStatus',
    'Judgment',
    'JudgmentStatus',
    'Point2D',
    'RuleCheck',
    'STATUS_COLORS',
    'coerce_frame',
    'ExerciseEvaluator',
    'SquatEvaluator',
    'PushUpEvaluator',
    'create_evaluator',
    'evaluate',
    'resolve_exercise',
    'JudgmentSmoother',
]
