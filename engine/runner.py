"""
Projection runner — folds the monthly recurrence over the horizon and
assembles the ProjectionResult consumed by reports and scenario analysis.

Two entry points:
  1. run_months:     just the ordered monthly snapshots
  2. run_projection: monthly + quarterly + yearly views and summary scalars
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Literal, Optional

import pandas as pd

from core.config import DEFAULT_INITIAL_CAPITAL, DEFAULT_PROJECTION_YEARS
from core.schema import BusinessAssumptions
from core.utils import break_even_label, period_dates, round_half_up

from .aggregator import quarterly, yearly
from .recurrence import MonthStep, SimulationState, advance_month
from .snapshot import Snapshot, snapshots_to_frame

logger = logging.getLogger(__name__)

CHART_SAMPLE_EVERY = 3


@dataclass(frozen=True)
class PeakBurn:
    month: int
    amount: int


@dataclass(frozen=True)
class ProjectionResult:
    """Output of run_projection. Nothing in it is mutated after construction."""
    monthly: List[Snapshot]
    quarterly: List[Snapshot]
    yearly: List[Snapshot]

    initial_capital: float
    break_even_month: Optional[int]
    peak_burn: PeakBurn
    total_investment_required: float

    chart_series: Dict[str, List[dict]] = field(default_factory=dict)

    @property
    def break_even_label(self) -> Optional[str]:
        return break_even_label(self.break_even_month)

    @property
    def horizon_months(self) -> int:
        return len(self.monthly)

    def to_dataframe(
        self, freq: Literal["monthly", "quarterly", "yearly"] = "monthly"
    ) -> pd.DataFrame:
        snaps = {"monthly": self.monthly, "quarterly": self.quarterly, "yearly": self.yearly}
        if freq not in snaps:
            raise ValueError(f"freq must be monthly, quarterly or yearly, got {freq!r}.")
        return snapshots_to_frame(snaps[freq])


def iter_months(
    assumptions: BusinessAssumptions,
    initial_capital: float = DEFAULT_INITIAL_CAPITAL,
    horizon_months: int = DEFAULT_PROJECTION_YEARS * 12,
    *,
    start_date: Optional[pd.Timestamp] = None,
) -> Iterator[MonthStep]:
    """Yield one MonthStep per month, threading the carry state explicitly."""
    dates = period_dates(pd.Timestamp(start_date), horizon_months) if start_date is not None else None
    state = SimulationState.initial(initial_capital)
    for m in range(horizon_months):
        step = advance_month(assumptions, state, m, date=dates[m] if dates else None)
        state = step.state
        yield step


def run_months(
    assumptions: BusinessAssumptions,
    initial_capital: float = DEFAULT_INITIAL_CAPITAL,
    horizon_months: int = DEFAULT_PROJECTION_YEARS * 12,
    *,
    start_date: Optional[pd.Timestamp] = None,
) -> List[Snapshot]:
    return [
        step.snapshot
        for step in iter_months(assumptions, initial_capital, horizon_months, start_date=start_date)
    ]


def build_chart_series(monthly: List[Snapshot], every: int = CHART_SAMPLE_EVERY) -> Dict[str, List[dict]]:
    """Time series points ({label, value}) sampled every `every` months for charts."""
    sampled = monthly[::every]
    return {
        "user_growth": [{"label": s.period.label, "value": s.users.total} for s in sampled],
        "revenue": [{"label": s.period.label, "value": s.revenue.total} for s in sampled],
        "costs": [{"label": s.period.label, "value": s.costs.total} for s in sampled],
        "margins": [
            {"label": s.period.label, "gross": s.metrics.gross_margin_pct, "net": s.metrics.net_margin_pct}
            for s in sampled
        ],
        "runway": [{"label": s.period.label, "value": s.metrics.runway_months} for s in sampled],
        "ltv_cac": [{"label": s.period.label, "value": s.metrics.ltv_cac_ratio} for s in sampled],
    }


def total_investment_required(monthly: List[Snapshot], initial_capital: float) -> float:
    """Initial capital plus the depth of the lowest cash balance, if it goes negative."""
    lowest = min([initial_capital] + [s.cash.balance for s in monthly])
    return abs(lowest) + initial_capital if lowest < 0 else initial_capital


def run_projection(
    assumptions: BusinessAssumptions,
    initial_capital: float = DEFAULT_INITIAL_CAPITAL,
    projection_years: int = DEFAULT_PROJECTION_YEARS,
    *,
    start_date: Optional[pd.Timestamp] = None,
) -> ProjectionResult:
    """
    Run the full projection.

    Parameters
    ----------
    assumptions : BusinessAssumptions
        Business inputs; not validated here (see inputs.validators)
    initial_capital : float
        Opening cash balance
    projection_years : int
        Horizon in years; the monthly sequence has projection_years * 12 entries
    start_date : pd.Timestamp, optional
        Calendar anchor for period dates

    Returns
    -------
    ProjectionResult
    """
    if projection_years < 1:
        raise ValueError(f"projection_years must be >= 1, got {projection_years}.")

    horizon = int(projection_years) * 12
    monthly: List[Snapshot] = []
    break_even: Optional[int] = None
    peak_month, peak_amount = 0, 0.0

    for step in iter_months(assumptions, initial_capital, horizon, start_date=start_date):
        m = step.snapshot.period.index
        monthly.append(step.snapshot)

        if break_even is None and step.profit > 0:
            break_even = m
        if step.profit < 0 and -step.profit > peak_amount:
            peak_month, peak_amount = m, -step.profit

    result = ProjectionResult(
        monthly=monthly,
        quarterly=quarterly(monthly),
        yearly=yearly(monthly),
        initial_capital=initial_capital,
        break_even_month=break_even,
        peak_burn=PeakBurn(month=peak_month, amount=round_half_up(peak_amount)),
        total_investment_required=total_investment_required(monthly, initial_capital),
        chart_series=build_chart_series(monthly),
    )
    logger.debug(
        "Projection: %d months, break-even=%s, peak burn %.0f in month %d, investment %.0f",
        horizon,
        break_even,
        peak_amount,
        peak_month,
        result.total_investment_required,
    )
    return result
