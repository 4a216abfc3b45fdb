"""
Projection engine — monthly recurrence, period roll-ups, and the runner.
"""

from .runner import ProjectionResult, run_months, run_projection
from .aggregator import aggregate_snapshots
from .planning import run_planning_projection

__all__ = [
    "ProjectionResult",
    "run_months",
    "run_projection",
    "aggregate_snapshots",
    "run_planning_projection",
]
