"""GRFM 엔진이 사용하는 강체 모델 질의

RigidBodyModel은 엔진이 의존하는 인터페이스,
MujocoModel은 mujoco.MjModel / mujoco.MjData 기반 구현.

공간 벡터는 MuJoCo 배치 [rot(3), lin(3)]를 따름.
"""

from abc import ABC, abstractmethod

import numpy as np
import mujoco

from .errors import ConfigurationError


class RigidBodyModel(ABC):
    """한 configuration에서 다관절 모델의 기구학/동역학 양"""

    def __init__(self):
        self.stations = {}   # name -> (body_name, body 프레임 offset)

    # ------------------------------------------------------------------ #
    # Configuration
    # ------------------------------------------------------------------ #
    @abstractmethod
    def set_configuration(self, q, q_dot):
        ...

    @abstractmethod
    def realize_dynamics(self):
        """위치/속도 의존 양 전부 계산"""

    @abstractmethod
    def set_acceleration(self, q_ddot):
        """주어진 일반화 가속도로 body 가속도 계산"""

    # ------------------------------------------------------------------ #
    # Bodies
    # ------------------------------------------------------------------ #
    @abstractmethod
    def body_names(self) -> list:
        """움직이는 body 이름 전체 (ground 제외)"""

    @abstractmethod
    def body_index(self, body_name: str) -> int:
        ...

    @abstractmethod
    def body_transform(self, body_name: str):
        """(R, p): ground 기준 body 프레임 자세 (3, 3)와 원점 (3,)"""

    @abstractmethod
    def body_spatial_velocity(self, body_name: str) -> np.ndarray:
        """(6,) body 질량중심의 [omega, v], ground 프레임"""

    @abstractmethod
    def body_spatial_acceleration(self, body_name: str) -> np.ndarray:
        """(6,) body 질량중심의 [alpha, a - g], ground 프레임 (중력 반력 포함)"""

    @abstractmethod
    def body_mass(self, body_name: str) -> float:
        ...

    @abstractmethod
    def body_inertia(self, body_name: str) -> np.ndarray:
        """(3, 3) 질량중심 기준 관성, ground 프레임"""

    @abstractmethod
    def gravity(self) -> np.ndarray:
        ...

    # ------------------------------------------------------------------ #
    # Forces
    # ------------------------------------------------------------------ #
    @abstractmethod
    def applied_generalized_forces(self) -> np.ndarray:
        """(nv,) 모델 구성요소가 가하는 일반화 힘"""

    @abstractmethod
    def applied_body_forces(self) -> np.ndarray:
        """(nbody, 6) 각 body 질량중심에 가해지는 [force, torque]"""

    @abstractmethod
    def compute_residual_generalized_force(self, q_ddot, applied_generalized,
                                           applied_body) -> np.ndarray:
        """구속 무시 역동역학: tau = M q_ddot + C - applied"""

    @abstractmethod
    def map_generalized_force_to_spatial(self, tau) -> np.ndarray:
        """(nbody, 6) 시스템 Jacobian × tau, body별 [rot, lin]"""

    # ------------------------------------------------------------------ #
    # Stations
    # ------------------------------------------------------------------ #
    def add_station(self, name: str, body_name: str, location):
        """body에 고정된 점 등록 (body 프레임 offset)"""
        self.body_index(body_name)
        self.stations[name] = (body_name, np.asarray(location, dtype=float).copy())

    def station_world_location(self, body_name: str, location) -> np.ndarray:
        R, p = self.body_transform(body_name)
        return p + R @ np.asarray(location, dtype=float)

    def station_location(self, name: str) -> np.ndarray:
        body_name, location = self.stations[name]
        return self.station_world_location(body_name, location)


class MujocoModel(RigidBodyModel):
    """MuJoCo 기반 RigidBodyModel

    어댑터가 자체 MjData를 소유, MjModel은 읽기만 하므로 같은 MjModel의
    다른 사용자 상태를 건드리지 않음. actuator 힘은 applied force에서 제외
    (actuator 비활성 취급).
    """

    def __init__(self, model: mujoco.MjModel):
        super().__init__()
        self.model = model
        self.data = mujoco.MjData(model)

        self._body_ids = {}
        for i in range(1, model.nbody):
            self._body_ids[model.body(i).name] = i

        # 재사용 버퍼
        self._jacp = np.zeros((3, model.nv))
        self._jacr = np.zeros((3, model.nv))
        self._res6 = np.zeros(6)

    @classmethod
    def from_xml_string(cls, xml: str):
        return cls(mujoco.MjModel.from_xml_string(xml))

    @classmethod
    def from_xml_path(cls, path: str):
        return cls(mujoco.MjModel.from_xml_path(path))

    # ------------------------------------------------------------------ #
    # Configuration
    # ------------------------------------------------------------------ #
    def set_configuration(self, q, q_dot):
        self.data.qpos[:] = q
        self.data.qvel[:] = q_dot

    def realize_dynamics(self):
        mujoco.mj_forward(self.model, self.data)

    def set_acceleration(self, q_ddot):
        self.data.qacc[:] = q_ddot
        # cacc 갱신, world body cacc = -gravity → body 선가속도 = a - g
        mujoco.mj_rnePostConstraint(self.model, self.data)

    # ------------------------------------------------------------------ #
    # Bodies
    # ------------------------------------------------------------------ #
    def body_names(self) -> list:
        return list(self._body_ids)

    def body_index(self, body_name: str) -> int:
        try:
            return self._body_ids[body_name]
        except KeyError:
            raise ConfigurationError(f"unknown body '{body_name}'") from None

    def body_transform(self, body_name: str):
        i = self.body_index(body_name)
        return self.data.xmat[i].reshape(3, 3).copy(), self.data.xpos[i].copy()

    def body_spatial_velocity(self, body_name: str) -> np.ndarray:
        i = self.body_index(body_name)
        mujoco.mj_objectVelocity(
            self.model, self.data, mujoco.mjtObj.mjOBJ_BODY, i, self._res6, 0
        )
        return self._res6.copy()

    def body_spatial_acceleration(self, body_name: str) -> np.ndarray:
        i = self.body_index(body_name)
        mujoco.mj_objectAcceleration(
            self.model, self.data, mujoco.mjtObj.mjOBJ_BODY, i, self._res6, 0
        )
        return self._res6.copy()

    def body_mass(self, body_name: str) -> float:
        return float(self.model.body_mass[self.body_index(body_name)])

    def body_inertia(self, body_name: str) -> np.ndarray:
        # body_inertia는 관성 주축 프레임(ximat) 기준 대각 성분
        i = self.body_index(body_name)
        R = self.data.ximat[i].reshape(3, 3)
        return R @ np.diag(self.model.body_inertia[i]) @ R.T

    def gravity(self) -> np.ndarray:
        return np.array(self.model.opt.gravity)

    def total_mass(self) -> float:
        return float(np.sum(self.model.body_mass))

    # ------------------------------------------------------------------ #
    # Forces
    # ------------------------------------------------------------------ #
    def applied_generalized_forces(self) -> np.ndarray:
        return self.data.qfrc_passive + self.data.qfrc_applied

    def applied_body_forces(self) -> np.ndarray:
        return self.data.xfrc_applied.copy()

    def compute_residual_generalized_force(self, q_ddot, applied_generalized,
                                           applied_body) -> np.ndarray:
        model, data = self.model, self.data
        data.qacc[:] = q_ddot

        # M*qacc + C (중력 포함)
        tau = np.zeros(model.nv)
        mujoco.mj_rne(model, data, 1, tau)

        # body 외력 → 일반화 힘
        body_qfrc = np.zeros(model.nv)
        for i in range(1, model.nbody):
            wrench = np.asarray(applied_body[i], dtype=float)
            if not np.any(wrench):
                continue
            mujoco.mj_applyFT(
                model, data, wrench[:3].copy(), wrench[3:].copy(),
                data.xipos[i].copy(), i, body_qfrc,
            )

        return tau - applied_generalized - body_qfrc

    def map_generalized_force_to_spatial(self, tau) -> np.ndarray:
        tau = np.asarray(tau, dtype=float)
        spatial = np.zeros((self.model.nbody, 6))
        for i in range(1, self.model.nbody):
            mujoco.mj_jacBody(self.model, self.data, self._jacp, self._jacr, i)
            spatial[i, :3] = self._jacr @ tau
            spatial[i, 3:] = self._jacp @ tau
        return spatial
