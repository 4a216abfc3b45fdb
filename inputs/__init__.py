"""
Input handling — loading model definitions and validating assumptions.
"""

from .loader import AssumptionsModel, ModelFile, VariationModel, load_model_file, parse_model
from .validators import ValidationResult, validate_assumptions

__all__ = [
    "AssumptionsModel",
    "ModelFile",
    "VariationModel",
    "load_model_file",
    "parse_model",
    "ValidationResult",
    "validate_assumptions",
]
