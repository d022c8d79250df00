"""
BlazePose(MediaPipe Pose) 33 키포인트 정의 및 스켈레톤 연결

모든 평가기, 렌더러, API가 이 모듈을 참조한다.
인덱스는 포즈 모델 출력 배열 순서와 동일하다 (pts[11] = Left Shoulder).
"""
from enum import IntEnum


class Landmark(IntEnum):
    """BlazePose 33 랜드마크 인덱스."""
    NOSE = 0
    LEFT_EYE_INNER = 1
    LEFT_EYE = 2
    LEFT_EYE_OUTER = 3
    RIGHT_EYE_INNER = 4
    RIGHT_EYE = 5
    RIGHT_EYE_OUTER = 6
    LEFT_EAR = 7
    RIGHT_EAR = 8
    MOUTH_LEFT = 9
    MOUTH_RIGHT = 10
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_ELBOW = 13
    RIGHT_ELBOW = 14
    LEFT_WRIST = 15
    RIGHT_WRIST = 16
    LEFT_PINKY = 17
    RIGHT_PINKY = 18
    LEFT_INDEX = 19
    RIGHT_INDEX = 20
    LEFT_THUMB = 21
    RIGHT_THUMB = 22
    LEFT_HIP = 23
    RIGHT_HIP = 24
    LEFT_KNEE = 25
    RIGHT_KNEE = 26
    LEFT_ANKLE = 27
    RIGHT_ANKLE = 28
    LEFT_HEEL = 29
    RIGHT_HEEL = 30
    LEFT_FOOT_INDEX = 31
    RIGHT_FOOT_INDEX = 32


NUM_KEYPOINTS = len(Landmark)

# ===== 이름 매핑 ("Left Shoulder" 형식) =====
BLAZEPOSE_KEYPOINT_MAP = {
    lm.name.replace("_", " ").title(): int(lm) for lm in Landmark
}

BLAZEPOSE_INDEX_TO_NAME = {v: k for k, v in BLAZEPOSE_KEYPOINT_MAP.items()}

# ===== 스켈레톤 연결 (몸통 + 팔 + 다리, 12개) =====
SKELETON_CONNECTIONS = [
    # 몸통
    (Landmark.LEFT_SHOULDER, Landmark.RIGHT_SHOULDER),
    (Landmark.LEFT_SHOULDER, Landmark.LEFT_HIP),
    (Landmark.RIGHT_SHOULDER, Landmark.RIGHT_HIP),
    (Landmark.LEFT_HIP, Landmark.RIGHT_HIP),
    # 하체
    (Landmark.LEFT_HIP, Landmark.LEFT_KNEE),
    (Landmark.RIGHT_HIP, Landmark.RIGHT_KNEE),
    (Landmark.LEFT_KNEE, Landmark.LEFT_ANKLE),
    (Landmark.RIGHT_KNEE, Landmark.RIGHT_ANKLE),
    # 상체
    (Landmark.LEFT_SHOULDER, Landmark.LEFT_ELBOW),
    (Landmark.RIGHT_SHOULDER, Landmark.RIGHT_ELBOW),
    (Landmark.LEFT_ELBOW, Landmark.LEFT_WRIST),
    (Landmark.RIGHT_ELBOW, Landmark.RIGHT_WRIST),
]


def landmark_name(index):
    """인덱스에 해당하는 "Left Shoulder" 형식 이름을 반환한다. 없으면 "#<index>"."""
    return BLAZEPOSE_INDEX_TO_NAME.get(int(index), f"#{index}")
