"""
Core package — assumption schemas, configuration, and shared utilities.
No business logic lives here.
"""

from .schema import (
    BusinessAssumptions,
    PlanningAssumptions,
    default_business_assumptions,
    default_planning_assumptions,
)
from .config import ProjectionConfig
from .utils import format_currency, round_half_up, month_label

__all__ = [
    "BusinessAssumptions",
    "PlanningAssumptions",
    "default_business_assumptions",
    "default_planning_assumptions",
    "ProjectionConfig",
    "format_currency",
    "round_half_up",
    "month_label",
]
