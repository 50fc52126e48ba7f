"""총 반력 → 오른발/왼발 성분 분리

DSP: trailing leg는 heel strike snapshot × transition 함수, leading leg는 나머지.
SSP: stance leg가 전부 지지.
"""

import numpy as np

from .gait_phase import GaitPhase, LeadingLeg
from .transitions import reaction_component_transition


def separate_reaction_components(phase, leading_leg, time, total_reaction,
                                 total_reaction_at_hs, tds,
                                 transitions=(reaction_component_transition,) * 3):
    """총 반력 벡터(힘 또는 모멘트)를 두 발로 분할

    Args:
        phase: 현재 GaitPhase
        leading_leg: 확정된 LeadingLeg (RIGHT/LEFT), DSP에서 INVALID이면
            0 반환
        time: 마지막 heel strike 이후 경과 시간 (s)
        total_reaction: (3,) 총 반력 성분
        total_reaction_at_hs: (3,) 마지막 heel strike 시점 총 반력
        tds: 마지막 DSP 구간 길이 (s)
        transitions: 축별 transition 함수 f(t, tds)

    Returns:
        right (3,), left (3,)
    """
    total = np.asarray(total_reaction, dtype=float)

    if phase is GaitPhase.DOUBLE_SUPPORT:
        at_hs = np.asarray(total_reaction_at_hs, dtype=float)

        # trailing / leading leg 성분
        trailing = np.array([at_hs[i] * transitions[i](time, tds) for i in range(3)])
        leading = total - trailing

        if leading_leg is LeadingLeg.RIGHT:
            return leading, trailing
        if leading_leg is LeadingLeg.LEFT:
            return trailing, leading
        return np.zeros(3), np.zeros(3)

    if phase is GaitPhase.LEFT_SWING:
        return total.copy(), np.zeros(3)

    if phase is GaitPhase.RIGHT_SWING:
        return np.zeros(3), total.copy()

    return np.zeros(3), np.zeros(3)
