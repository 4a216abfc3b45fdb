"""
Scenario analysis — what-if variations of the base assumptions and their comparison.
"""

from .base import ScenarioVariation, slugify
from .presets import DEFAULT_VARIATIONS
from .comparison import (
    COMPARISON_METRICS,
    ScenarioResult,
    ScenarioSet,
    build_example_model,
    run_scenario_comparison,
)

__all__ = [
    "ScenarioVariation",
    "slugify",
    "DEFAULT_VARIATIONS",
    "COMPARISON_METRICS",
    "ScenarioResult",
    "ScenarioSet",
    "build_example_model",
    "run_scenario_comparison",
]
