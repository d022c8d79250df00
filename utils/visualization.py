"""
스켈레톤 시각화 유틸리티
프레임 이미지 위에 BlazePose 키포인트와 평가 결과(관절 색상, 주석)를 오버레이한다.
"""
import logging

import cv2
import numpy as np

import config
from ds_modules.exceptions import MalformedFrameError
from ds_modules.pose_types import JointStatus, Judgment, JudgmentStatus, coerce_frame
from utils.keypoints import SKELETON_CONNECTIONS

logger = logging.getLogger(__name__)

# 색상 이름 → BGR
COLOR_BGR = {
    "green": (0, 255, 0),
    "red": (0, 0, 255),
}
JOINT_RADIUS = 5
CONNECTION_THICKNESS = 3
ANNOTATION_FONT = cv2.FONT_HERSHEY_SIMPLEX
ANNOTATION_SCALE = 0.5
ANNOTATION_OFFSET = (8, -8)


def connection_color(judgment, i, j):
    """두 끝점 중 하나라도 FLAGGED면 red, 아니면 green."""
    if JointStatus.FLAGGED in (judgment.status_of(i), judgment.status_of(j)):
        return JointStatus.FLAGGED.color
    return JointStatus.OK.color


def feedback_text(judgment: Judgment) -> str:
    """피드백 표시 문구. 운동 미선택 시 안내 문구."""
    if judgment.status == JudgmentStatus.NO_EXERCISE:
        return config.NO_EXERCISE_TEXT
    return judgment.feedback_text(default=config.CORRECT_FORM_TEXT)


def _to_pixel(pt, w, h):
    return int(round(pt.x * w)), int(round(pt.y * h))


def draw_judgment_on_frame(img, keypoints, judgment: Judgment):
    """
    프레임 위에 관절점, 연결선, 주석을 그린다.

    Args:
        img: BGR numpy array (수정하지 않음)
        keypoints: 정규화 좌표 키포인트 배열, None이거나 손상된 프레임이면 원본 복사본 반환
        judgment: evaluate() 결과

    Returns:
        오버레이가 그려진 BGR numpy array
    """
    canvas = np.array(img, copy=True)
    # 손상된 프레임은 그리지 않음
    if keypoints is None or judgment.status == JudgmentStatus.MALFORMED_FRAME:
        return canvas

    try:
        pts = coerce_frame(keypoints)
    except MalformedFrameError as e:
        logger.warning(f"오버레이 생략: {e.reason}")
        return canvas
    h, w = canvas.shape[:2]

    # 연결선 먼저 그리기 (관절점 아래에 깔림)
    for i, j in SKELETON_CONNECTIONS:
        if i >= len(pts) or j >= len(pts):
            continue
        color = COLOR_BGR[connection_color(judgment, i, j)]
        cv2.line(canvas, _to_pixel(pts[i], w, h), _to_pixel(pts[j], w, h), color, CONNECTION_THICKNESS)

    # 관절점 그리기
    for idx, pt in enumerate(pts):
        color = COLOR_BGR[judgment.status_of(idx).color]
        cv2.circle(canvas, _to_pixel(pt, w, h), JOINT_RADIUS, color, -1)

    # 주석 (관절 옆 빨간 글씨)
    for ann in judgment.annotations:
        if ann.joint_index >= len(pts):
            continue
        x, y = _to_pixel(pts[ann.joint_index], w, h)
        org = (x + ANNOTATION_OFFSET[0], y + ANNOTATION_OFFSET[1])
        cv2.putText(canvas, ann.message, org, ANNOTATION_FONT, ANNOTATION_SCALE,
                    COLOR_BGR["red"], 1, cv2.LINE_AA)

    return canvas
