"""GRFM 예측: 발별 지면 반력, 모멘트, CoP

프레임마다:
  기구학 (q, q_dot, q_ddot) → 총 반력 (NE 또는 ID)
  → 보행 방향 프레임 → 좌우 분할 (gait phase) → 발별 CoP

엔진은 호출 사이에 heel strike snapshot, Tds/Tss, heading 버퍼를 유지.
재진입 불가: 인스턴스당 호출자 하나.
"""

import logging
from dataclasses import dataclass, field

import numpy as np

from . import config
from .cop_model import CopModel
from .gait_direction import GaitDirectionEstimator
from .gait_phase import GaitPhase, GaitPhaseSource, LeadingLeg
from .reaction_split import separate_reaction_components
from .rigid_body import RigidBodyModel
from .total_reaction import TotalReactionSolver, select_method
from .transitions import reaction_component_transition

logger = logging.getLogger(__name__)


def _vec3(values):
    return tuple(float(v) for v in values)


@dataclass(frozen=True)
class GRFMParameters:
    method: object = config.METHOD
    r_station_body_name: str = config.R_STATION_BODY_NAME
    l_station_body_name: str = config.L_STATION_BODY_NAME
    r_heel_station_location: tuple = config.R_HEEL_STATION_LOCATION
    l_heel_station_location: tuple = config.L_HEEL_STATION_LOCATION
    r_toe_station_location: tuple = config.R_TOE_STATION_LOCATION
    l_toe_station_location: tuple = config.L_TOE_STATION_LOCATION
    pelvis_body_name: str = config.PELVIS_BODY_NAME
    direction_window_size: int = config.DIRECTION_WINDOW_SIZE
    vertical_axis: tuple = config.VERTICAL_AXIS
    forward_axis: tuple = config.FORWARD_AXIS

    def __post_init__(self):
        for name in ("r_heel_station_location", "l_heel_station_location",
                     "r_toe_station_location", "l_toe_station_location",
                     "vertical_axis", "forward_axis"):
            object.__setattr__(self, name, _vec3(getattr(self, name)))


@dataclass
class GRFMInput:
    t: float
    q: np.ndarray
    q_dot: np.ndarray
    q_ddot: np.ndarray


def _frozen(v):
    a = np.array(v, dtype=float).reshape(3)
    a.setflags(write=False)
    return a


@dataclass(frozen=True)
class ReactionBundle:
    force: np.ndarray = field(default_factory=lambda: np.zeros(3))
    torque: np.ndarray = field(default_factory=lambda: np.zeros(3))
    point: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self):
        for name in ("force", "torque", "point"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))


@dataclass(frozen=True)
class GRFMOutput:
    t: float
    right: ReactionBundle = field(default_factory=ReactionBundle)
    left: ReactionBundle = field(default_factory=ReactionBundle)

    @staticmethod
    def column_labels() -> list:
        """as_vector() 순서의 라벨, external loads 명명 규칙"""
        labels = []
        for side in ("r", "l"):
            for quantity in ("ground_force_v", "ground_force_p", "ground_torque_"):
                labels += [f"{side}_{quantity}{axis}" for axis in "xyz"]
        return labels

    def as_vector(self) -> np.ndarray:
        """(18,) [r force, r point, r torque, l force, l point, l torque] 벡터"""
        return np.concatenate([
            self.right.force, self.right.point, self.right.torque,
            self.left.force, self.left.point, self.left.torque,
        ])


class GRFMPrediction:
    """기구학과 gait phase로부터 지면 반력/모멘트 예측"""

    def __init__(self, model: RigidBodyModel, parameters: GRFMParameters,
                 gait_phase: GaitPhaseSource):
        self.model = model
        self.parameters = parameters
        self.gait_phase = gait_phase

        self.method = select_method(parameters.method)
        self.direction = GaitDirectionEstimator(
            parameters.direction_window_size,
            vertical_axis=parameters.vertical_axis,
            forward_axis=parameters.forward_axis,
        )
        self.solver = TotalReactionSolver(model, self.method, parameters.pelvis_body_name)

        # CoP 궤적용 station, 엔진 수명 동안 고정
        self.cop = CopModel(model, {
            config.HEEL_STATION_NAME_R: (parameters.r_station_body_name,
                                         parameters.r_heel_station_location),
            config.HEEL_STATION_NAME_L: (parameters.l_station_body_name,
                                         parameters.l_heel_station_location),
            config.TOE_STATION_NAME_R: (parameters.r_station_body_name,
                                        parameters.r_toe_station_location),
            config.TOE_STATION_NAME_L: (parameters.l_station_body_name,
                                        parameters.l_toe_station_location),
        })

        self.transition = reaction_component_transition

        # 실행 상태
        self.total_force_at_hs = np.zeros(3)
        self.total_moment_at_hs = np.zeros(3)
        self.tds = float("nan")
        self.tss = float("nan")
        self.last_leading_leg = LeadingLeg.INVALID

        logger.debug("GRFM prediction initialized (method=%s, window=%d)",
                     self.method.value, parameters.direction_window_size)

    def compute_gait_direction_rotation(self, body_name: str):
        """body_name 평균 heading 방향으로의 수직축 회전"""
        R_GB, _ = self.model.body_transform(body_name)
        # ground 프레임에서 body 전방 축
        return self.direction.update(R_GB[:, 0])

    def _resolve_leading_leg(self, phase) -> LeadingLeg:
        if phase is not GaitPhase.DOUBLE_SUPPORT:
            return self.gait_phase.leading_leg()

        leading_leg = self.gait_phase.leading_leg()
        if leading_leg is LeadingLeg.INVALID:
            logger.warning("invalid LeadingLeg state during double support, "
                           "keeping %s", self.last_leading_leg.name)
            return self.last_leading_leg

        self.last_leading_leg = leading_leg
        return leading_leg

    def solve(self, frame: GRFMInput) -> GRFMOutput:
        if not self.gait_phase.is_ready():
            return GRFMOutput(t=frame.t)

        # 모델 상태 갱신 및 realize
        self.model.set_configuration(frame.q, frame.q_dot)
        self.model.realize_dynamics()

        R = self.compute_gait_direction_rotation(self.parameters.pelvis_body_name)

        total_force, total_moment = self.solver.compute(frame.q_ddot)

        # 총 반력을 heading 방향 프레임으로 표현
        total_force = R.apply(total_force)
        total_moment = R.apply(total_moment)

        # 마지막 heel strike 이후 시간
        time = frame.t - self.gait_phase.heel_strike_time()
        if time == 0.0:
            self.total_force_at_hs = total_force.copy()
            self.total_moment_at_hs = total_moment.copy()
            logger.debug("heel strike at t=%.4f, reaction snapshot stored", frame.t)

        # 이전 DSP 구간
        self.tds = self.gait_phase.double_support_duration()

        phase = self.gait_phase.phase()
        leading_leg = self._resolve_leading_leg(phase)
        transitions = (self.transition,) * 3

        right_force, left_force = separate_reaction_components(
            phase, leading_leg, time, total_force, self.total_force_at_hs,
            self.tds, transitions,
        )
        right_moment, left_moment = separate_reaction_components(
            phase, leading_leg, time, total_moment, self.total_moment_at_hs,
            self.tds, transitions,
        )

        # 이전 SSP 구간
        self.tss = self.gait_phase.single_support_duration()
        right_point, left_point = self.cop.compute(
            phase, leading_leg, frame.t - self.gait_phase.toe_off_time(), self.tss,
        )

        return GRFMOutput(
            t=frame.t,
            right=ReactionBundle(right_force, right_moment, right_point),
            left=ReactionBundle(left_force, left_moment, left_point),
        )
