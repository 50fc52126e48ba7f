"""body 기구학으로부터 총(양발) 지면 반력/모멘트

두 가지 방법:
  InverseDynamics: 기준 body(floating base)의 잔차 힘
  NewtonEuler:     F = sum m_i (a_i - g),  M = sum I_i alpha_i + w_i x (I_i w_i)
"""

from enum import Enum

import numpy as np

from .errors import ConfigurationError
from .rigid_body import RigidBodyModel


class Method(Enum):
    NEWTON_EULER = "NewtonEuler"
    INVERSE_DYNAMICS = "InverseDynamics"


# 방법별 허용 이름 (소문자)
VALID_NE_NAMES = ("newtoneuler", "newton-euler", "newton_euler", "ne")
VALID_ID_NAMES = ("inversedynamics", "inverse-dynamics", "inverse_dynamics", "id")


def select_method(method) -> Method:
    """방법 이름(또는 Method) → Method"""
    if isinstance(method, Method):
        return method
    name = str(method).lower()
    if name in VALID_NE_NAMES:
        return Method.NEWTON_EULER
    if name in VALID_ID_NAMES:
        return Method.INVERSE_DYNAMICS
    raise ConfigurationError(
        f"Wrong input method '{method}'. Select one of "
        f"{VALID_NE_NAMES + VALID_ID_NAMES}."
    )


class TotalReactionSolver:
    """ground 프레임 총 반력/모멘트, 인스턴스당 한 가지 방법"""

    def __init__(self, model: RigidBodyModel, method, reference_body_name: str):
        self.model = model
        self.method = select_method(method)
        self.reference_body_name = reference_body_name
        self.model.body_index(reference_body_name)

    def compute(self, q_ddot):
        """(force (3,), moment (3,)) 반환, 모델은 미리 realize 되어 있어야 함"""
        if self.method is Method.INVERSE_DYNAMICS:
            return self._inverse_dynamics(q_ddot)
        return self._newton_euler(q_ddot)

    def _inverse_dynamics(self, q_ddot):
        model = self.model

        # 모델 구성요소가 만드는 힘과 body 외력
        applied_generalized = model.applied_generalized_forces()
        applied_body = model.applied_body_forces()

        tau = model.compute_residual_generalized_force(
            q_ddot, applied_generalized, applied_body
        )

        # 기준 body의 ground 기준 공간 힘/모멘트
        spatial = model.map_generalized_force_to_spatial(tau)
        idx = model.body_index(self.reference_body_name)
        return spatial[idx, 3:].copy(), spatial[idx, :3].copy()

    def _newton_euler(self, q_ddot):
        model = self.model
        model.set_acceleration(q_ddot)

        force = np.zeros(3)
        moment = np.zeros(3)
        for name in model.body_names():
            velocity = model.body_spatial_velocity(name)
            acceleration = model.body_spatial_acceleration(name)
            omega, alpha = velocity[:3], acceleration[:3]

            # F_ext, 선가속도는 이미 a - g
            force += model.body_mass(name) * acceleration[3:]

            # M_ext
            inertia = model.body_inertia(name)
            moment += inertia @ alpha + np.cross(omega, inertia @ omega)

        return force, moment
