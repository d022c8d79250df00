"""
판정 스무딩 필터

최근 N 프레임 판정의 규칙별 다수결로 한 프레임 노이즈에 의한 피드백 깜빡임을 줄인다.
평가기와 분리된 선택적 구성요소이며, 하나의 프레임 스트림이 하나의 인스턴스를 소유한다.
"""
import logging
from collections import deque

from ds_modules.pose_types import Judgment, JudgmentStatus, RuleCheck

logger = logging.getLogger(__name__)


class JudgmentSmoother:
    """규칙 위반 다수결 스무더."""

    def __init__(self, window=5):
        if window < 1:
            raise ValueError(f"window는 1 이상이어야 합니다: {window}")
        self.window = window
        self._history = deque(maxlen=window)  # deque([Judgment, ...])

    def reset(self):
        self._history.clear()

    def __len__(self):
        return len(self._history)

    def smooth(self, judgment: Judgment) -> Judgment:
        """
        judgment를 기록하고 스무딩된 판정을 반환한다.

        - EVALUATED 외 판정(사람 없음, 운동 미선택, 손상 프레임)은 그대로 통과시키고 기록을 비운다.
        - 운동 종류가 바뀌면 기록을 비우고 다시 시작한다.
        - 규칙은 창 안 판정의 과반에서 위반일 때만 유지된다.
          유지된 규칙의 문구/관절/주석은 그 규칙이 위반이었던 가장 최근 판정에서 가져온다.
        """
        if judgment.status != JudgmentStatus.EVALUATED:
            if self._history:
                logger.debug(f"스무딩 기록 초기화 ({judgment.status.value})")
            self.reset()
            return judgment

        if self._history and self._history[-1].exercise != judgment.exercise:
            logger.debug(
                f"운동 변경 {self._history[-1].exercise.value} → {judgment.exercise.value}, 기록 초기화"
            )
            self.reset()

        self._history.append(judgment)

        votes = {}
        latest_error = {}
        for past in self._history:
            for check in past.checks:
                if check.triggered:
                    votes[check.name] = votes.get(check.name, 0) + 1
                    latest_error[check.name] = check

        smoothed_checks = []
        for check in judgment.checks:
            if votes.get(check.name, 0) * 2 > len(self._history):
                smoothed_checks.append(latest_error[check.name])
            elif check.triggered:
                smoothed_checks.append(
                    RuleCheck(name=check.name, status="ok", value=check.value)
                )
            else:
                smoothed_checks.append(check)

        return Judgment.from_checks(judgment.exercise, smoothed_checks, len(judgment.joint_status))
