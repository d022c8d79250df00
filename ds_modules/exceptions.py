"""자세 평가 모듈 예외 정의."""


class PoseCoachError(Exception):
    """ds_modules 예외의 공통 부모."""


class MalformedFrameError(PoseCoachError, ValueError):
    """키포인트 프레임 길이 부족, 읽을 수 없는 항목, 비유한 좌표."""

    def __init__(self, reason, frame_length=None):
        super().__init__(reason)
        self.reason = reason
        self.frame_length = frame_length


class UnknownExerciseError(PoseCoachError, ValueError):
    """지원하지 않는 운동 종류."""

    def __init__(self, exercise):
        super().__init__(f"알 수 없는 운동 종류: {exercise!r}")
        self.exercise = exercise
