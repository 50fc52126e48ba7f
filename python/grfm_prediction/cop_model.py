"""발별 압력 중심(CoP) 배치

DSP: leading foot는 heel, trailing foot는 toe.
SSP: stance foot CoP가 마지막 toe off 이후 시간에 따라 heel → toe 이동.
swing foot 점은 0.
"""

import numpy as np

from . import config
from .gait_phase import GaitPhase, LeadingLeg
from .rigid_body import RigidBodyModel
from .transitions import cop_position


class CopModel:
    """heel/toe station 테이블을 소유하는 CoP 모델

    station offset은 생성 시 복사해 보관, 같은 모델 어댑터를 공유하는
    다른 엔진이 station을 등록해도 바뀌지 않음.
    """

    def __init__(self, model: RigidBodyModel, stations: dict):
        """
        Args:
            model: RigidBodyModel
            stations: station 이름 -> (body_name, body 프레임 offset),
                config의 heel/toe station 이름 4개 필요
        """
        self.model = model
        self.stations = {}
        for name in (config.HEEL_STATION_NAME_R, config.HEEL_STATION_NAME_L,
                     config.TOE_STATION_NAME_R, config.TOE_STATION_NAME_L):
            body_name, location = stations[name]
            model.body_index(body_name)
            offset = np.array(location, dtype=float).reshape(3)
            offset.setflags(write=False)
            self.stations[name] = (body_name, offset)

    def station_location(self, name: str) -> np.ndarray:
        body_name, offset = self.stations[name]
        return self.model.station_world_location(body_name, offset)

    def _stance_point(self, heel, toe, time, tss):
        heel_pos = self.station_location(heel)
        # heel -> toe 거리 벡터
        d = self.station_location(toe) - heel_pos
        return heel_pos + cop_position(time, d, tss)

    def compute(self, phase, leading_leg, time_since_toe_off, tss):
        """right_point (3,), left_point (3,) 반환, ground 프레임"""
        if phase is GaitPhase.DOUBLE_SUPPORT:
            if leading_leg is LeadingLeg.RIGHT:
                return (self.station_location(config.HEEL_STATION_NAME_R),
                        self.station_location(config.TOE_STATION_NAME_L))
            if leading_leg is LeadingLeg.LEFT:
                return (self.station_location(config.TOE_STATION_NAME_R),
                        self.station_location(config.HEEL_STATION_NAME_L))
            return np.zeros(3), np.zeros(3)

        if phase is GaitPhase.LEFT_SWING:
            right = self._stance_point(config.HEEL_STATION_NAME_R,
                                       config.TOE_STATION_NAME_R, time_since_toe_off, tss)
            return right, np.zeros(3)

        if phase is GaitPhase.RIGHT_SWING:
            left = self._stance_point(config.HEEL_STATION_NAME_L,
                                      config.TOE_STATION_NAME_L, time_since_toe_off, tss)
            return np.zeros(3), left

        return np.zeros(3), np.zeros(3)
