"""
규칙 기반 자세 평가기

BlazePose 33 키포인트 한 프레임으로 스쿼트/푸시업 자세를 검증하고
피드백 문구, 관절별 상태, 관절 주석을 담은 Judgment를 반환한다.

입력: 정규화 좌표 키포인트 배열 (길이 33, x/y ∈ [0, 1], y는 아래로 증가)

평가기는 프레임 간 상태를 갖지 않는다. 같은 프레임은 항상 같은 결과를 낸다.
"""
import logging
import math
from typing import List, Sequence, Tuple

from ds_modules.angle_utils import cal_angle, midpoint
from ds_modules.exceptions import MalformedFrameError
from ds_modules.pose_types import (
    Annotation,
    ExerciseKind,
    Judgment,
    Point2D,
    RuleCheck,
    coerce_frame,
)
from utils.keypoints import Landmark, landmark_name

logger = logging.getLogger(__name__)

# 임계값 경계 비교 시 부동소수 오차 제거용 반올림 자릿수 (1e-9 미만 차이는 경계와 같은 값으로 본다)
ANGLE_PRECISION = 9
POSITION_PRECISION = 9


class ExerciseEvaluator:
    """
    운동별 평가기 공통 부분.

    서브클래스는 KIND, REQUIRED_INDICES, _run_checks()를 정의한다.
    strict_sides=True이면 좌우 규칙에서 위반한 쪽 관절만 표시한다
    (기본은 한쪽만 위반해도 양쪽 모두 표시).
    """

    KIND: ExerciseKind = None
    REQUIRED_INDICES: Tuple[int, ...] = ()

    def __init__(self, strict_sides: bool = False):
        self.strict_sides = strict_sides

    @property
    def min_frame_length(self) -> int:
        return max(self.REQUIRED_INDICES) + 1

    def evaluate(self, keypoints) -> Judgment:
        """
        단일 프레임을 평가한다.

        Args:
            keypoints: 키포인트 배열. None이면 "사람 없음" 판정.

        Returns:
            Judgment. 프레임이 손상된 경우 "Invalid pose data" 단일 문구.
        """
        if keypoints is None:
            return Judgment.no_person(self.KIND)

        try:
            pts = self._validate(keypoints)
        except MalformedFrameError as e:
            logger.warning(f"{self.KIND.value} 평가 불가: {e.reason}")
            return Judgment.malformed(self.KIND, e.frame_length or 0)

        checks = self._run_checks(pts)
        return Judgment.from_checks(self.KIND, checks, len(pts))

    def _validate(self, keypoints) -> Tuple[Point2D, ...]:
        pts = coerce_frame(keypoints)
        if len(pts) < self.min_frame_length:
            raise MalformedFrameError(
                f"키포인트 {len(pts)}개: 최소 {self.min_frame_length}개 필요",
                frame_length=len(pts),
            )
        return pts

    def _run_checks(self, pts: Sequence[Point2D]) -> List[RuleCheck]:
        raise NotImplementedError

    # ── 공통 체크 헬퍼 ─────────────────────────────────
    @staticmethod
    def _angle(a, b, c) -> float:
        angle = cal_angle(a, b, c)
        return angle if math.isnan(angle) else round(angle, ANGLE_PRECISION)

    def _check_two_sided_max(self, name, left_angle, right_angle, threshold, *,
                             joints, message, annotation) -> RuleCheck:
        """
        좌우 각도 중 하나라도 threshold 초과 시 위반.

        한쪽이 NaN이어도 다른 쪽이 위반이면 위반으로 판정한다.
        위반 없이 NaN이 섞여 있으면 skipped.

        Args:
            joints: {"left": 왼쪽 관절 인덱스, "right": 오른쪽 관절 인덱스}
        """
        angles = {"left": left_angle, "right": right_angle}
        finite = [v for v in angles.values() if not math.isnan(v)]
        value = max(finite) if finite else None
        sides = tuple(side for side, v in angles.items() if not math.isnan(v) and v > threshold)

        if sides:
            flag_sides = sides if self.strict_sides else ("left", "right")
            return RuleCheck(
                name=name, status="error", value=value, message=message,
                flagged=tuple(int(joints[s]) for s in flag_sides),
                annotation=annotation, sides=sides,
            )
        if len(finite) < len(angles):
            undetermined = [landmark_name(joints[s]) for s, v in angles.items() if math.isnan(v)]
            logger.debug(f"{name} 스킵: 랜드마크 겹침: {undetermined}")
            return RuleCheck(name=name, status="skipped", value=value)
        return RuleCheck(name=name, status="ok", value=value)


# ─── 스쿼트 평가 ───────────────────────────────────────────

class SquatEvaluator(ExerciseEvaluator):
    """
    스쿼트 자세 평가기.

    체크 항목 (모두 매 프레임 독립 평가):
      1. 상체 숙임: (Waist 바로 아래 점)-Waist-Neck 각도 < 70° = 과도한 숙임
      2. 무릎 굽힘: 엉덩이-무릎-발목 각도, 한쪽이라도 > 160° = 덜 굽힘
    """

    KIND = ExerciseKind.SQUAT
    REQUIRED_INDICES = (
        Landmark.LEFT_SHOULDER, Landmark.RIGHT_SHOULDER,
        Landmark.LEFT_HIP, Landmark.RIGHT_HIP,
        Landmark.LEFT_KNEE, Landmark.RIGHT_KNEE,
        Landmark.LEFT_ANKLE, Landmark.RIGHT_ANKLE,
    )

    # 상체가 수직이면 180°, 앞으로 숙일수록 작아진다
    BACK_LEAN_MIN_ANGLE = 70
    # 엉덩이 중점에서 수직 아래로 내린 기준점 거리 (정규화 y)
    BACK_REFERENCE_OFFSET = 0.1
    KNEE_STRAIGHT_ANGLE = 160

    def _run_checks(self, pts):
        return [
            self._check_back_lean(pts),
            self._check_knee_bend(pts),
        ]

    def _check_back_lean(self, pts) -> RuleCheck:
        neck = midpoint(pts[Landmark.LEFT_SHOULDER], pts[Landmark.RIGHT_SHOULDER])
        waist = midpoint(pts[Landmark.LEFT_HIP], pts[Landmark.RIGHT_HIP])
        below_waist = Point2D(waist.x, waist.y + self.BACK_REFERENCE_OFFSET)
        back_angle = self._angle(below_waist, waist, neck)

        if math.isnan(back_angle):
            logger.debug("back_lean 스킵: 어깨 중점과 엉덩이 중점이 겹침")
            return RuleCheck(name="back_lean", status="skipped", value=None)
        if back_angle < self.BACK_LEAN_MIN_ANGLE:
            return RuleCheck(
                name="back_lean", status="error", value=back_angle,
                message="Leaned forward too much",
                flagged=(Landmark.LEFT_SHOULDER, Landmark.RIGHT_SHOULDER,
                         Landmark.LEFT_HIP, Landmark.RIGHT_HIP),
                annotation=Annotation(Landmark.LEFT_HIP, "Keep back straighter"),
            )
        return RuleCheck(name="back_lean", status="ok", value=back_angle)

    def _check_knee_bend(self, pts) -> RuleCheck:
        knee_l = self._angle(pts[Landmark.LEFT_HIP], pts[Landmark.LEFT_KNEE], pts[Landmark.LEFT_ANKLE])
        knee_r = self._angle(pts[Landmark.RIGHT_HIP], pts[Landmark.RIGHT_KNEE], pts[Landmark.RIGHT_ANKLE])
        return self._check_two_sided_max(
            "knee_bend", knee_l, knee_r, self.KNEE_STRAIGHT_ANGLE,
            joints={"left": Landmark.LEFT_KNEE, "right": Landmark.RIGHT_KNEE},
            message="Bend knees more",
            annotation=Annotation(Landmark.LEFT_KNEE, "Knees too straight"),
        )


# ─── 푸시업 평가 ───────────────────────────────────────────

class PushUpEvaluator(ExerciseEvaluator):
    """
    푸시업 자세 평가기.

    체크 항목 (모두 매 프레임 독립 평가, 조기 종료 없음):
      1. 팔꿈치 굽힘: 어깨-팔꿈치-손목 각도, 한쪽이라도 > 160° = 팔 펴짐
      2. 가슴 높이:   어깨 y > 엉덩이 y - 0.1 = 가슴이 덜 내려감
      3. 허리 처짐:   엉덩이 y > 어깨 y + 0.1 = 허리 처짐

    2와 3은 같은 측정값에 대한 반대 방향 기준이다.
    """

    KIND = ExerciseKind.PUSHUP
    REQUIRED_INDICES = (
        Landmark.LEFT_SHOULDER, Landmark.RIGHT_SHOULDER,
        Landmark.LEFT_ELBOW, Landmark.RIGHT_ELBOW,
        Landmark.LEFT_WRIST, Landmark.RIGHT_WRIST,
        Landmark.LEFT_HIP, Landmark.RIGHT_HIP,
    )

    ELBOW_STRAIGHT_ANGLE = 160
    # 어깨와 엉덩이의 정규화 y 차이 기준
    CHEST_DROP_MARGIN = 0.1

    def _run_checks(self, pts):
        shoulder_y = (pts[Landmark.LEFT_SHOULDER].y + pts[Landmark.RIGHT_SHOULDER].y) / 2
        hip_y = (pts[Landmark.LEFT_HIP].y + pts[Landmark.RIGHT_HIP].y) / 2
        # hip_y - shoulder_y: 양수면 어깨가 엉덩이보다 화면상 위
        drop = round(hip_y - shoulder_y, POSITION_PRECISION)
        return [
            self._check_elbow_bend(pts),
            self._check_chest_height(drop),
            self._check_back_sag(drop),
        ]

    def _check_elbow_bend(self, pts) -> RuleCheck:
        elbow_l = self._angle(pts[Landmark.LEFT_SHOULDER], pts[Landmark.LEFT_ELBOW], pts[Landmark.LEFT_WRIST])
        elbow_r = self._angle(pts[Landmark.RIGHT_SHOULDER], pts[Landmark.RIGHT_ELBOW], pts[Landmark.RIGHT_WRIST])
        return self._check_two_sided_max(
            "elbow_bend", elbow_l, elbow_r, self.ELBOW_STRAIGHT_ANGLE,
            joints={"left": Landmark.LEFT_ELBOW, "right": Landmark.RIGHT_ELBOW},
            message="Lower elbows more",
            annotation=Annotation(Landmark.LEFT_ELBOW, "Bend elbows"),
        )

    def _check_chest_height(self, drop) -> RuleCheck:
        # shoulder_y > hip_y - margin
        if drop < self.CHEST_DROP_MARGIN:
            return RuleCheck(
                name="chest_height", status="error", value=drop,
                message="Lower your chest",
                flagged=(Landmark.LEFT_SHOULDER, Landmark.RIGHT_SHOULDER),
                annotation=Annotation(Landmark.LEFT_SHOULDER, "Chest too high"),
            )
        return RuleCheck(name="chest_height", status="ok", value=drop)

    def _check_back_sag(self, drop) -> RuleCheck:
        # hip_y > shoulder_y + margin
        if drop > self.CHEST_DROP_MARGIN:
            return RuleCheck(
                name="back_sag", status="error", value=drop,
                message="Don't sag your back",
                flagged=(Landmark.LEFT_HIP, Landmark.RIGHT_HIP),
                annotation=Annotation(Landmark.LEFT_HIP, "Back sagging"),
            )
        return RuleCheck(name="back_sag", status="ok", value=drop)
