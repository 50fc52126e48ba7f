"""공용 fixture: 7-body biped MJCF + gait phase holder"""

import sys
import os
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from grfm_prediction.gait_phase import GaitPhaseState
from grfm_prediction.rigid_body import MujocoModel


BIPED_XML = """
<mujoco model="biped">
  <option gravity="0 0 -9.81" timestep="0.002"/>
  <worldbody>
    <body name="pelvis" pos="0 0 1.0">
      <freejoint name="root"/>
      <inertial pos="0 0 0.05" mass="10.0" diaginertia="0.10 0.08 0.06"/>
      <body name="femur_r" pos="0 -0.09 0">
        <joint name="hip_flexion_r" type="hinge" axis="0 1 0"/>
        <joint name="hip_adduction_r" type="hinge" axis="1 0 0"/>
        <inertial pos="0 0 -0.18" mass="7.0" diaginertia="0.11 0.11 0.02"/>
        <body name="tibia_r" pos="0 0 -0.42">
          <joint name="knee_r" type="hinge" axis="0 1 0"/>
          <inertial pos="0 0 -0.18" mass="3.5" diaginertia="0.05 0.05 0.006"/>
          <body name="calcn_r" pos="0 0 -0.42">
            <joint name="ankle_r" type="hinge" axis="0 1 0"/>
            <inertial pos="0.06 0 -0.03" mass="1.2" diaginertia="0.002 0.005 0.005"/>
          </body>
        </body>
      </body>
      <body name="femur_l" pos="0 0.09 0">
        <joint name="hip_flexion_l" type="hinge" axis="0 1 0"/>
        <joint name="hip_adduction_l" type="hinge" axis="1 0 0"/>
        <inertial pos="0 0 -0.18" mass="7.0" diaginertia="0.11 0.11 0.02"/>
        <body name="tibia_l" pos="0 0 -0.42">
          <joint name="knee_l" type="hinge" axis="0 1 0"/>
          <inertial pos="0 0 -0.18" mass="3.5" diaginertia="0.05 0.05 0.006"/>
          <body name="calcn_l" pos="0 0 -0.42">
            <joint name="ankle_l" type="hinge" axis="0 1 0"/>
            <inertial pos="0.06 0 -0.03" mass="1.2" diaginertia="0.002 0.005 0.005"/>
          </body>
        </body>
      </body>
    </body>
  </worldbody>
</mujoco>
"""

BIPED_MASS = 10.0 + 2 * (7.0 + 3.5 + 1.2)
GRAVITY = 9.81


@pytest.fixture
def biped():
    """MuJoCo 어댑터 (매 테스트마다 새 MjData)."""
    return MujocoModel.from_xml_string(BIPED_XML)


@pytest.fixture
def static_frame(biped):
    """정지 자세: qpos0, 속도/가속도 0."""
    model = biped.model
    return model.qpos0.copy(), np.zeros(model.nv), np.zeros(model.nv)


@pytest.fixture
def moving_frame(biped):
    """임의 자세/속도/가속도 (재현 가능한 seed)."""
    rng = np.random.default_rng(7)
    model = biped.model
    q = model.qpos0.copy()
    q[7:] = rng.uniform(-0.4, 0.4, model.nq - 7)
    q_dot = rng.uniform(-1.0, 1.0, model.nv)
    q_ddot = rng.uniform(-3.0, 3.0, model.nv)
    return q, q_dot, q_ddot


@pytest.fixture
def phase_state():
    return GaitPhaseState()
