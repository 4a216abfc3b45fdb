"""
Projection configuration.
Business assumptions live in core/schema.py (BusinessAssumptions).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pandas as pd

DEFAULT_INITIAL_CAPITAL: float = 500_000.0
DEFAULT_PROJECTION_YEARS: int = 5
DEFAULT_SCENARIO_YEARS: int = 3


@dataclass(frozen=True)
class ProjectionConfig:
    initial_capital: float = DEFAULT_INITIAL_CAPITAL
    projection_years: int = DEFAULT_PROJECTION_YEARS

    # optional calendar anchor; month 0 is the month containing this date
    start_date: Optional[pd.Timestamp] = None

    @property
    def horizon_months(self) -> int:
        return int(self.projection_years) * 12
