"""
평가 입출력 데이터 타입

Point2D:    정규화 좌표 (x, y) ∈ [0, 1]
Judgment:   한 프레임의 평가 결과 (피드백 문구, 관절 상태, 주석)

모든 객체는 프레임마다 새로 생성되며 불변이다.
"""
import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple

from ds_modules.exceptions import MalformedFrameError, UnknownExerciseError


NO_PERSON_MESSAGE = "No person detected."
INVALID_POSE_MESSAGE = "Invalid pose data"


class Point2D(NamedTuple):
    x: float
    y: float


# ─── 운동 종류 ───────────────────────────────────────────

class ExerciseKind(str, Enum):
    """지원 운동 (닫힌 집합). 새 운동은 여기와 dispatcher 레지스트리에 함께 추가한다."""
    SQUAT = "squats"
    PUSHUP = "pushups"

    @classmethod
    def parse(cls, value) -> "ExerciseKind":
        """
        enum, 값("squats"), 이름("SQUAT"), 별칭("push-up")을 ExerciseKind로 변환한다.

        Raises:
            UnknownExerciseError: 어느 것에도 해당하지 않을 때
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "").replace("_", "").replace(" ", "")
            kind = _EXERCISE_ALIASES.get(key)
            if kind is not None:
                return kind
        raise UnknownExerciseError(value)


_EXERCISE_ALIASES = {
    "squat": ExerciseKind.SQUAT,
    "squats": ExerciseKind.SQUAT,
    "pushup": ExerciseKind.PUSHUP,
    "pushups": ExerciseKind.PUSHUP,
}


# ─── 관절 상태 ───────────────────────────────────────────

class JointStatus(str, Enum):
    OK = "ok"
    FLAGGED = "flagged"

    @property
    def color(self) -> str:
        """렌더러용 색상. FLAGGED → red, OK → green."""
        return STATUS_COLORS[self]


STATUS_COLORS = {
    JointStatus.OK: "green",
    JointStatus.FLAGGED: "red",
}


class JudgmentStatus(str, Enum):
    EVALUATED = "evaluated"
    NO_PERSON = "no_person"
    NO_EXERCISE = "no_exercise"
    MALFORMED_FRAME = "malformed_frame"


class Annotation(NamedTuple):
    joint_index: int
    message: str


@dataclass(frozen=True)
class RuleCheck:
    """
    규칙 하나의 판정 결과.

    status:
      - "ok":      기준 통과
      - "error":   기준 위반 → message, flagged, annotation 이 판정에 반영됨
      - "skipped": 각도 계산 불가 (겹친 랜드마크) → 통과도 위반도 아님
    sides: 위반을 일으킨 쪽 ("left", "right"), 좌우 구분 없는 규칙은 빈 튜플
    """
    name: str
    status: str
    value: Optional[float]
    message: str = ""
    flagged: Tuple[int, ...] = ()
    annotation: Optional[Annotation] = None
    sides: Tuple[str, ...] = ()

    @property
    def triggered(self) -> bool:
        return self.status == "error"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status,
            "value": None if self.value is None else round(self.value, 2),
            "message": self.message,
            "flagged": [int(i) for i in self.flagged],
            "sides": list(self.sides),
        }


# ─── 평가 결과 ───────────────────────────────────────────

@dataclass(frozen=True)
class Judgment:
    """
    한 프레임의 평가 결과.

    messages가 비어 있으면 "자세 양호"를 뜻한다. 단, status가 EVALUATED일 때만.
    joint_status는 프레임 인덱스 순서의 상태 튜플이다 (기본 OK).
    """
    status: JudgmentStatus
    exercise: Optional[ExerciseKind] = None
    messages: Tuple[str, ...] = ()
    joint_status: Tuple[JointStatus, ...] = ()
    annotations: Tuple[Annotation, ...] = ()
    checks: Tuple[RuleCheck, ...] = ()

    # ── 생성 헬퍼 ──────────────────────────────────────
    @classmethod
    def from_checks(cls, exercise: ExerciseKind, checks: Sequence[RuleCheck],
                    num_keypoints: int) -> "Judgment":
        """규칙 판정 목록을 평가 순서대로 합쳐 Judgment를 만든다."""
        statuses = [JointStatus.OK] * num_keypoints
        messages = []
        annotations = []
        for check in checks:
            if not check.triggered:
                continue
            messages.append(check.message)
            for idx in check.flagged:
                if idx < num_keypoints:
                    statuses[idx] = JointStatus.FLAGGED
            if check.annotation is not None:
                annotations.append(check.annotation)
        return cls(
            status=JudgmentStatus.EVALUATED,
            exercise=exercise,
            messages=tuple(messages),
            joint_status=tuple(statuses),
            annotations=tuple(annotations),
            checks=tuple(checks),
        )

    @classmethod
    def no_person(cls, exercise: Optional[ExerciseKind] = None) -> "Judgment":
        return cls(status=JudgmentStatus.NO_PERSON, exercise=exercise,
                   messages=(NO_PERSON_MESSAGE,))

    @classmethod
    def neutral(cls, num_keypoints: int = 0) -> "Judgment":
        return cls(status=JudgmentStatus.NO_EXERCISE,
                   joint_status=(JointStatus.OK,) * num_keypoints)

    @classmethod
    def malformed(cls, exercise: Optional[ExerciseKind], num_keypoints: int = 0) -> "Judgment":
        return cls(status=JudgmentStatus.MALFORMED_FRAME, exercise=exercise,
                   messages=(INVALID_POSE_MESSAGE,),
                   joint_status=(JointStatus.OK,) * num_keypoints)

    # ── 조회 ───────────────────────────────────────────
    @property
    def is_correct(self) -> bool:
        return self.status == JudgmentStatus.EVALUATED and not self.messages

    @property
    def flagged_indices(self) -> Tuple[int, ...]:
        return tuple(i for i, s in enumerate(self.joint_status) if s is JointStatus.FLAGGED)

    def status_of(self, index: int) -> JointStatus:
        if 0 <= index < len(self.joint_status):
            return self.joint_status[index]
        return JointStatus.OK

    def colors(self) -> List[str]:
        return [s.color for s in self.joint_status]

    def feedback_text(self, default: str = "Great posture!") -> str:
        """표시용 한 줄 피드백. 평가 결과 문구가 없으면 default."""
        if self.messages:
            return " | ".join(self.messages)
        if self.status == JudgmentStatus.EVALUATED:
            return default
        return ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "exercise": self.exercise.value if self.exercise else None,
            "messages": list(self.messages),
            "joint_status": [s.value for s in self.joint_status],
            "annotations": [
                {"joint_index": int(a.joint_index), "message": a.message} for a in self.annotations
            ],
            "checks": [c.to_dict() for c in self.checks],
        }


# ─── 프레임 변환 ─────────────────────────────────────────

def _coerce_point(item, index, frame_length) -> Point2D:
    if isinstance(item, Point2D):
        pt = item
    elif isinstance(item, Mapping):
        pt = Point2D(float(item["x"]), float(item["y"]))
    elif hasattr(item, "x") and hasattr(item, "y"):
        pt = Point2D(float(item.x), float(item.y))
    else:
        pt = Point2D(float(item[0]), float(item[1]))
    if not (math.isfinite(pt.x) and math.isfinite(pt.y)):
        raise MalformedFrameError(f"비유한 좌표 (index {index}): {pt}", frame_length=frame_length)
    return pt


def coerce_frame(frame) -> Tuple[Point2D, ...]:
    """
    외부 키포인트 배열을 Point2D 튜플로 변환한다. 입력은 수정하지 않는다.

    허용 항목: Point2D, .x/.y 속성 객체(MediaPipe 랜드마크), {"x", "y"} dict, [x, y, ...]

    Raises:
        MalformedFrameError: 읽을 수 없는 항목 또는 NaN/inf 좌표
    """
    try:
        items = list(frame)
    except TypeError as e:
        raise MalformedFrameError(f"키포인트 배열이 아님: {type(frame).__name__}") from e
    points = []
    for i, item in enumerate(items):
        try:
            points.append(_coerce_point(item, i, len(items)))
        except MalformedFrameError:
            raise
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise MalformedFrameError(f"읽을 수 없는 키포인트 (index {i}): {item!r}",
                                      frame_length=len(items)) from e
    return tuple(points)
