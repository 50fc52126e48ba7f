"""반력 분할 및 CoP 이동용 transition 함수

반력 transition (smooth transition assumption), Ren et al. 2008:
  https://doi.org/10.1016/j.jbiomech.2008.06.001
  f(t) = exp(-(2t / Tds)^3)

heel → metatarsal CoP 이동, Karatsidis et al. 2013:
  https://doi.org/10.1016/j.jbiomech.2013.09.012
  s(t) = -2/(3pi) * (sin(wt) - sin(2wt)/8 - 3/4 wt),  w = 2pi / Tss

Tds/Tss는 이전 보행 주기의 추정값이므로 두 출력 모두 [0, 1]로 clip.
구간 길이가 양수가 아니거나(완료된 구간 없음) 경과 시간이 유효하지 않으면
구간 길이 → 0 극한값을 사용.
"""

import numpy as np


def _valid_duration(duration: float) -> bool:
    return np.isfinite(duration) and duration > 0.0


def reaction_component_transition(t: float, tds: float) -> float:
    """trailing leg가 여전히 지지하는 heel strike 하중 비율"""
    if t <= 0.0:
        return 1.0
    if not (np.isfinite(t) and _valid_duration(tds)):
        return 0.0
    return float(np.clip(np.exp(-np.power(2.0 * t / tds, 3)), 0.0, 1.0))


def cop_translation_scale(t: float, tss: float) -> float:
    """CoP가 이동한 heel → toe 거리 비율"""
    if t <= 0.0:
        return 0.0
    if not (np.isfinite(t) and _valid_duration(tss)):
        return 1.0
    omega = 2.0 * np.pi / tss
    scale = -2.0 / (3.0 * np.pi) * (
        np.sin(omega * t) - np.sin(2.0 * omega * t) / 8.0 - 3.0 / 4.0 * omega * t
    )
    return float(np.clip(scale, 0.0, 1.0))


def cop_position(t: float, d: np.ndarray, tss: float) -> np.ndarray:
    """heel → toe 벡터 d를 시각 t의 CoP 이동 비율로 스케일"""
    return cop_translation_scale(t, tss) * np.asarray(d, dtype=float)
