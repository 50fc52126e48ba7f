from .errors import ConfigurationError
from .gait_phase import GaitPhase, GaitPhaseSource, GaitPhaseState, LeadingLeg
from .grfm import GRFMInput, GRFMOutput, GRFMParameters, GRFMPrediction, ReactionBundle
from .rigid_body import MujocoModel, RigidBodyModel
from .total_reaction import Method, select_method
