"""MujocoModel 어댑터 테스트"""

import sys
import os
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from grfm_prediction.errors import ConfigurationError
from grfm_prediction.gait_phase import GaitPhase, GaitPhaseState, LeadingLeg


@pytest.fixture
def realized(biped, moving_frame):
    q, q_dot, q_ddot = moving_frame
    biped.set_configuration(q, q_dot)
    biped.realize_dynamics()
    biped.set_acceleration(q_ddot)
    return biped


class TestBodies:
    def test_body_names_exclude_world(self, biped):
        assert biped.body_names() == [
            "pelvis", "femur_r", "tibia_r", "calcn_r", "femur_l", "tibia_l", "calcn_l",
        ]

    def test_unknown_body(self, biped):
        with pytest.raises(ConfigurationError):
            biped.body_index("torso")

    def test_mass(self, biped):
        assert biped.body_mass("tibia_l") == 3.5

    def test_gravity(self, biped):
        np.testing.assert_allclose(biped.gravity(), [0.0, 0.0, -9.81])

    def test_transform_is_rotation(self, realized):
        R, _ = realized.body_transform("tibia_r")
        np.testing.assert_allclose(R @ R.T, np.eye(3), atol=1e-12)

    def test_inertia_symmetric(self, realized):
        inertia = realized.body_inertia("femur_l")
        np.testing.assert_allclose(inertia, inertia.T, atol=1e-12)
        assert np.isclose(np.trace(inertia), 0.11 + 0.11 + 0.02)

    def test_pelvis_velocity_matches_free_joint(self, realized, moving_frame):
        _, q_dot, _ = moving_frame
        velocity = realized.body_spatial_velocity("pelvis")
        # 골반 자세 = 단위 회전 → 각속도 = qvel[3:6]
        np.testing.assert_allclose(velocity[:3], q_dot[3:6], atol=1e-12)

    def test_static_acceleration_is_gravity_reaction(self, biped, static_frame):
        q, q_dot, q_ddot = static_frame
        biped.set_configuration(q, q_dot)
        biped.realize_dynamics()
        biped.set_acceleration(q_ddot)
        # 정지 상태 → a - g = (0, 0, 9.81)
        for name in biped.body_names():
            np.testing.assert_allclose(biped.body_spatial_acceleration(name),
                                       [0.0, 0.0, 0.0, 0.0, 0.0, 9.81], atol=1e-12)

    def test_acceleration_leaves_model_untouched(self, biped, moving_frame):
        q, q_dot, q_ddot = moving_frame
        gravity = biped.model.opt.gravity.copy()
        biped.set_configuration(q, q_dot)
        biped.realize_dynamics()
        biped.set_acceleration(q_ddot)
        np.testing.assert_array_equal(biped.model.opt.gravity, gravity)


class TestForces:
    def test_no_applied_forces(self, realized):
        np.testing.assert_array_equal(realized.applied_generalized_forces(),
                                      np.zeros(realized.model.nv))
        assert realized.applied_body_forces().shape == (realized.model.nbody, 6)

    def test_spatial_map_shape(self, realized):
        tau = np.ones(realized.model.nv)
        spatial = realized.map_generalized_force_to_spatial(tau)
        assert spatial.shape == (realized.model.nbody, 6)
        np.testing.assert_array_equal(spatial[0], np.zeros(6))

    def test_pelvis_force_is_translational_residual(self, realized, moving_frame):
        _, _, q_ddot = moving_frame
        tau = realized.compute_residual_generalized_force(
            q_ddot, realized.applied_generalized_forces(), realized.applied_body_forces()
        )
        spatial = realized.map_generalized_force_to_spatial(tau)
        np.testing.assert_allclose(spatial[realized.body_index("pelvis"), 3:], tau[:3],
                                   atol=1e-9)


class TestStations:
    def test_world_location(self, realized):
        realized.add_station("marker", "tibia_r", (0.0, 0.02, -0.1))
        R, p = realized.body_transform("tibia_r")
        np.testing.assert_allclose(realized.station_location("marker"),
                                   p + R @ np.array([0.0, 0.02, -0.1]))

    def test_offset_is_copied(self, biped):
        offset = np.array([0.1, 0.0, 0.0])
        biped.add_station("marker", "pelvis", offset)
        offset[0] = 5.0
        np.testing.assert_array_equal(biped.stations["marker"][1], [0.1, 0.0, 0.0])


class TestGaitPhaseState:
    def test_initial_state(self):
        state = GaitPhaseState()
        assert not state.is_ready()
        assert state.phase() is GaitPhase.INVALID
        assert state.leading_leg() is LeadingLeg.INVALID
        assert np.isnan(state.heel_strike_time())

    def test_partial_update(self):
        state = GaitPhaseState()
        state.update(phase=GaitPhase.DOUBLE_SUPPORT, heel_strike_time=1.2, ready=True)
        state.update(leading_leg=LeadingLeg.LEFT)
        assert state.is_ready()
        assert state.phase() is GaitPhase.DOUBLE_SUPPORT
        assert state.leading_leg() is LeadingLeg.LEFT
        assert state.heel_strike_time() == 1.2

    def test_update_from_values(self):
        state = GaitPhaseState()
        state.update(phase=2, leading_leg=0, double_support_duration=0.1,
                     single_support_duration=0.4, toe_off_time=0.9)
        assert state.phase() is GaitPhase.RIGHT_SWING
        assert state.leading_leg() is LeadingLeg.RIGHT
        assert state.double_support_duration() == 0.1
        assert state.single_support_duration() == 0.4
        assert state.toe_off_time() == 0.9
