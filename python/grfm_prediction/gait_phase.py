"""보행 phase source 인터페이스

GRFM 엔진은 보행 phase를 직접 분류하지 않고 GaitPhaseSource로 외부 검출기
상태를 읽음. GaitPhaseState는 파이프라인이 매 프레임 검출기 출력으로
갱신하는 단순 holder.
"""

from abc import ABC, abstractmethod
from enum import Enum


class GaitPhase(Enum):
    INVALID = -1
    DOUBLE_SUPPORT = 0
    LEFT_SWING = 1
    RIGHT_SWING = 2


class LeadingLeg(Enum):
    INVALID = -1
    RIGHT = 0
    LEFT = 1


class GaitPhaseSource(ABC):
    """보행 phase 검출기 읽기 전용 뷰"""

    @abstractmethod
    def is_ready(self) -> bool:
        """phase/timing을 신뢰할 만큼 이력이 쌓이면 True"""

    @abstractmethod
    def phase(self) -> GaitPhase:
        ...

    @abstractmethod
    def leading_leg(self) -> LeadingLeg:
        ...

    @abstractmethod
    def heel_strike_time(self) -> float:
        """마지막 heel strike 시각 (s)"""

    @abstractmethod
    def toe_off_time(self) -> float:
        """마지막 toe off 시각 (s)"""

    @abstractmethod
    def double_support_duration(self) -> float:
        """마지막 DSP 구간 길이 (s)"""

    @abstractmethod
    def single_support_duration(self) -> float:
        """마지막 SSP 구간 길이 (s)"""


class GaitPhaseState(GaitPhaseSource):
    """호출자가 프레임마다 넣어주는 검출기 출력"""

    def __init__(self):
        self.ready = False
        self.current_phase = GaitPhase.INVALID
        self.current_leading_leg = LeadingLeg.INVALID
        self.t_heel_strike = float("nan")
        self.t_toe_off = float("nan")
        self.t_double_support = float("nan")
        self.t_single_support = float("nan")

    def update(self, phase=None, leading_leg=None, heel_strike_time=None,
               toe_off_time=None, double_support_duration=None,
               single_support_duration=None, ready=None):
        """주어진 필드만 갱신, 나머지는 유지"""
        if phase is not None:
            self.current_phase = GaitPhase(phase)
        if leading_leg is not None:
            self.current_leading_leg = LeadingLeg(leading_leg)
        if heel_strike_time is not None:
            self.t_heel_strike = float(heel_strike_time)
        if toe_off_time is not None:
            self.t_toe_off = float(toe_off_time)
        if double_support_duration is not None:
            self.t_double_support = float(double_support_duration)
        if single_support_duration is not None:
            self.t_single_support = float(single_support_duration)
        if ready is not None:
            self.ready = bool(ready)

    def is_ready(self) -> bool:
        return self.ready

    def phase(self) -> GaitPhase:
        return self.current_phase

    def leading_leg(self) -> LeadingLeg:
        return self.current_leading_leg

    def heel_strike_time(self) -> float:
        return self.t_heel_strike

    def toe_off_time(self) -> float:
        return self.t_toe_off

    def double_support_duration(self) -> float:
        return self.t_double_support

    def single_support_duration(self) -> float:
        return self.t_single_support
