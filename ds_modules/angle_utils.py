"""
각도 계산 및 중점 유틸리티

입력 점은 Point2D, (x, y) 튜플, [x, y] 리스트 모두 허용한다.
"""
import numpy as np
from numpy import degrees, arccos, dot
from numpy.linalg import norm

from ds_modules.pose_types import Point2D

# 이 길이 미만의 벡터는 방향이 없는 것으로 본다
_MIN_VECTOR_NORM = 1e-8


def cal_angle(A, B, C):
    """
    코사인 법칙으로 ∠ABC를 도(°) 단위로 반환한다. 범위 [0, 180].

    B와 A, 또는 B와 C가 겹쳐 벡터 길이가 0이면 각도가 정의되지 않으므로 NaN을 반환한다.
    호출 측은 NaN을 "판정 불가"로 처리해야 한다.
    """
    A, B, C = (np.asarray(p, dtype=float)[:2] for p in (A, B, C))
    ba = A - B
    bc = C - B
    norm_ba = norm(ba)
    norm_bc = norm(bc)
    if not (norm_ba >= _MIN_VECTOR_NORM and norm_bc >= _MIN_VECTOR_NORM):
        return float("nan")
    cos_val = np.clip(dot(ba, bc) / (norm_ba * norm_bc), -1.0, 1.0)
    return float(degrees(arccos(cos_val)))


def midpoint(p1, p2):
    """두 점의 중점을 반환한다."""
    return Point2D((p1[0] + p2[0]) / 2, (p1[1] + p2[1]) / 2)
