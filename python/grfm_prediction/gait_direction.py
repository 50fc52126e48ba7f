"""보행 방향: 기준 body heading의 이동 평균

반력 하중은 최근 N 프레임 평균 보행 방향으로 수직축 회전한 프레임에서 표현.
"""

from collections import deque

import numpy as np
from scipy.spatial.transform import Rotation

from .errors import ConfigurationError


def projection_on_plane(v, normal):
    """원점을 지나고 법선이 normal인 평면에 v 투영"""
    n = np.asarray(normal, dtype=float)
    n = n / np.linalg.norm(n)
    v = np.asarray(v, dtype=float)
    return v - np.dot(v, n) * n


class GaitDirectionEstimator:
    """고정 크기 heading 원형 버퍼 → 수직축 회전"""

    def __init__(self, window_size: int, vertical_axis=(0.0, 0.0, 1.0),
                 forward_axis=(1.0, 0.0, 0.0)):
        if int(window_size) < 1:
            raise ConfigurationError(
                f"direction window size must be >= 1, got {window_size}"
            )
        self.window_size = int(window_size)
        self.vertical_axis = np.asarray(vertical_axis, dtype=float)
        self.vertical_axis /= np.linalg.norm(self.vertical_axis)
        self.forward_axis = np.asarray(forward_axis, dtype=float)

        self.buffer = deque(maxlen=self.window_size)

    def reset(self):
        self.buffer.clear()

    def mean_direction(self) -> np.ndarray:
        """버퍼 평균의 수평 투영"""
        if not self.buffer:
            return np.zeros(3)
        mean = np.mean(np.asarray(self.buffer), axis=0)
        return projection_on_plane(mean, self.vertical_axis)

    def update(self, heading) -> Rotation:
        """현재 heading 축 추가 후 보행 방향 회전 반환

        Args:
            heading: (3,) ground 프레임에서 기준 body의 전방 축

        Returns:
            수직축 기준 scipy Rotation
        """
        self.buffer.append(np.asarray(heading, dtype=float).copy())
        return self.rotation()

    def rotation(self) -> Rotation:
        direction = self.mean_direction()

        cross_prod = np.cross(direction, self.forward_axis)   # |a||b| sin(q) n
        dot_prod = np.dot(direction, self.forward_axis)       # |a||b| cos(q)
        cross_norm = np.linalg.norm(cross_prod)

        # 평균 heading = 0, 정렬할 방향 없음
        if cross_norm == 0.0 and dot_prod == 0.0:
            return Rotation.identity()

        with np.errstate(divide="ignore"):
            q = np.arctan(cross_norm / dot_prod)

        return Rotation.from_rotvec(q * self.vertical_axis)
