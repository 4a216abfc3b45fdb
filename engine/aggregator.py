"""
Roll monthly snapshots up into quarterly and yearly snapshots.

Reducers per field:
  sum        revenue components, cost components, new/churned users, profit
  last       total/paying users, cash balance, MRR, CAC, LTV, LTV:CAC,
             payback period, runway
  average    gross margin, net margin, burn

A trailing partial period is emitted from the months that exist.
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from .snapshot import (
    CashPosition,
    CostBreakdown,
    DerivedMetrics,
    Period,
    RevenueBreakdown,
    Snapshot,
    UserCounts,
)

QUARTER_MONTHS = 3
YEAR_MONTHS = 12


def _period_label(period_months: int, index: int, first: Period) -> str:
    if period_months == YEAR_MONTHS:
        return f"Year {first.year}"
    if period_months == QUARTER_MONTHS:
        return f"Y{first.year}Q{(first.month - 1) // 3 + 1}"
    return f"P{index + 1}"


def _mean(values) -> float:
    return float(np.mean(values))


def combine_snapshots(months: Sequence[Snapshot], *, period: Period) -> Snapshot:
    """Reduce a non-empty run of consecutive monthly snapshots into one snapshot."""
    if not months:
        raise ValueError("Cannot aggregate an empty period.")
    last = months[-1]

    return Snapshot(
        period=period,
        users=UserCounts(
            total=last.users.total,
            paying=last.users.paying,
            new=sum(s.users.new for s in months),
            churned=sum(s.users.churned for s in months),
        ),
        revenue=RevenueBreakdown(
            initial_purchases=sum(s.revenue.initial_purchases for s in months),
            recurring_purchases=sum(s.revenue.recurring_purchases for s in months),
            total=sum(s.revenue.total for s in months),
            mrr=last.revenue.mrr,
        ),
        costs=CostBreakdown(
            ai_provider=sum(s.costs.ai_provider for s in months),
            infrastructure=sum(s.costs.infrastructure for s in months),
            team=sum(s.costs.team for s in months),
            marketing=sum(s.costs.marketing for s in months),
            user_acquisition=sum(s.costs.user_acquisition for s in months),
            total=sum(s.costs.total for s in months),
        ),
        metrics=DerivedMetrics(
            gross_margin_pct=_mean([s.metrics.gross_margin_pct for s in months]),
            net_margin_pct=_mean([s.metrics.net_margin_pct for s in months]),
            cac=last.metrics.cac,
            ltv=last.metrics.ltv,
            ltv_cac_ratio=last.metrics.ltv_cac_ratio,
            payback_period_months=last.metrics.payback_period_months,
            runway_months=last.metrics.runway_months,
        ),
        cash=CashPosition(
            burn=_mean([s.cash.burn for s in months]),
            balance=last.cash.balance,
            profit=sum(s.cash.profit for s in months),
        ),
    )


def aggregate_snapshots(
    monthly: Sequence[Snapshot],
    period_months: int,
) -> List[Snapshot]:
    """
    Aggregate monthly snapshots into consecutive periods of `period_months`.

    Parameters
    ----------
    monthly : sequence of Snapshot
        Ordered monthly snapshots, month 0 first
    period_months : int
        3 for quarters, 12 for years (any positive length is accepted)

    Returns
    -------
    One snapshot per period, in order; the last one may cover fewer months.
    """
    if period_months < 1:
        raise ValueError(f"period_months must be >= 1, got {period_months}.")

    out: List[Snapshot] = []
    for i, start in enumerate(range(0, len(monthly), period_months)):
        chunk = monthly[start:start + period_months]
        first = chunk[0].period
        period = Period(
            index=i,
            year=first.year,
            month=0,
            label=_period_label(period_months, i, first),
            date=first.date,
        )
        out.append(combine_snapshots(chunk, period=period))
    return out


def quarterly(monthly: Sequence[Snapshot]) -> List[Snapshot]:
    return aggregate_snapshots(monthly, QUARTER_MONTHS)


def yearly(monthly: Sequence[Snapshot]) -> List[Snapshot]:
    return aggregate_snapshots(monthly, YEAR_MONTHS)
