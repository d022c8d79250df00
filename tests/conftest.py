import math
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from ds_modules.pose_types import Point2D
from utils.keypoints import Landmark, NUM_KEYPOINTS


def polar(origin, angle_deg, length, reference=(0.0, 1.0)):
    """origin에서 reference 방향으로부터 angle_deg 만큼 돌린 방향으로 length 떨어진 점."""
    rx, ry = reference
    a = math.radians(angle_deg)
    dx = rx * math.cos(a) - ry * math.sin(a)
    dy = rx * math.sin(a) + ry * math.cos(a)
    return Point2D(origin[0] + dx * length, origin[1] + dy * length)


def make_frame(**overrides):
    """기본값 (0.5, 0.5) 33점 프레임에 Landmark 이름으로 좌표를 덮어쓴다."""
    pts = [Point2D(0.5, 0.5)] * NUM_KEYPOINTS
    for name, value in overrides.items():
        pts[Landmark[name.upper()]] = Point2D(*value)
    return pts


def squat_frame(back_angle=180.0, left_knee=140.0, right_knee=140.0):
    """
    스쿼트 프레임.
    back_angle: 엉덩이 중점 아래 기준점–엉덩이 중점–어깨 중점 각도
    left_knee/right_knee: 엉덩이–무릎–발목 각도
    """
    waist = (0.5, 0.5)
    neck = polar(waist, back_angle, 0.3)
    left_knee_pt = (0.42, 0.7)
    right_knee_pt = (0.58, 0.7)
    return make_frame(
        left_shoulder=(neck.x - 0.05, neck.y),
        right_shoulder=(neck.x + 0.05, neck.y),
        left_hip=(0.42, 0.5),
        right_hip=(0.58, 0.5),
        left_knee=left_knee_pt,
        right_knee=right_knee_pt,
        # 무릎→엉덩이 방향 (0, -1) 기준 회전
        left_ankle=polar(left_knee_pt, left_knee, 0.2, reference=(0.0, -1.0)),
        right_ankle=polar(right_knee_pt, -right_knee, 0.2, reference=(0.0, -1.0)),
    )


def pushup_frame(left_elbow=90.0, right_elbow=90.0, shoulder_y=0.5, hip_y=0.6):
    """
    푸시업 프레임 (측면).
    left_elbow/right_elbow: 어깨–팔꿈치–손목 각도
    """
    left_elbow_pt = (0.3, shoulder_y + 0.15)
    right_elbow_pt = (0.32, shoulder_y + 0.15)
    return make_frame(
        left_shoulder=(0.3, shoulder_y),
        right_shoulder=(0.32, shoulder_y),
        left_elbow=left_elbow_pt,
        right_elbow=right_elbow_pt,
        # 팔꿈치→어깨 방향 (0, -1) 기준 회전
        left_wrist=polar(left_elbow_pt, left_elbow, 0.15, reference=(0.0, -1.0)),
        right_wrist=polar(right_elbow_pt, right_elbow, 0.15, reference=(0.0, -1.0)),
        left_hip=(0.6, hip_y),
        right_hip=(0.62, hip_y),
    )


@pytest.fixture
def good_squat():
    return squat_frame()


@pytest.fixture
def good_pushup():
    return pushup_frame()
