"""GRFM 예측 기본 파라미터

발 station offset은 Z-up, X-forward 모델(MuJoCo 규약)의
발(calcaneus) body 프레임 기준.
"""

# ============================================
# 총 반력 계산 방법
# ============================================
METHOD: str = "NewtonEuler"   # NewtonEuler | InverseDynamics (동의어 허용)

# ============================================
# Body
# ============================================
PELVIS_BODY_NAME: str = "pelvis"
R_STATION_BODY_NAME: str = "calcn_r"
L_STATION_BODY_NAME: str = "calcn_l"

# ============================================
# 발 station (m, 발 프레임)
# ============================================
R_HEEL_STATION_LOCATION: tuple = (0.0, 0.0, -0.04)
L_HEEL_STATION_LOCATION: tuple = (0.0, 0.0, -0.04)
R_TOE_STATION_LOCATION: tuple = (0.25, 0.015, -0.028)
L_TOE_STATION_LOCATION: tuple = (0.25, -0.015, -0.028)

HEEL_STATION_NAME_R: str = "heel_station_point_r"
HEEL_STATION_NAME_L: str = "heel_station_point_l"
TOE_STATION_NAME_R: str = "toe_station_point_r"
TOE_STATION_NAME_L: str = "toe_station_point_l"

# ============================================
# 보행 방향
# ============================================
DIRECTION_WINDOW_SIZE: int = 15   # 이동 평균 heading 샘플 수
VERTICAL_AXIS: tuple = (0.0, 0.0, 1.0)
FORWARD_AXIS: tuple = (1.0, 0.0, 0.0)
