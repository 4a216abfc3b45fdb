"""
Snapshot records emitted by the recurrence and by the aggregator.

Monthly and aggregated (quarterly / yearly) snapshots share one shape;
only the reducers that produced the numbers differ.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import pandas as pd


@dataclass(frozen=True)
class Period:
    index: int          # 0-based position in its sequence (month, quarter or year)
    year: int           # 1-based projection year
    month: int          # month of year (1-12); 0 for aggregated periods
    label: str
    date: Optional[pd.Timestamp] = None


@dataclass(frozen=True)
class UserCounts:
    total: int
    paying: int
    new: int
    churned: int


@dataclass(frozen=True)
class RevenueBreakdown:
    initial_purchases: int
    recurring_purchases: int
    total: int
    mrr: int


@dataclass(frozen=True)
class CostBreakdown:
    ai_provider: int
    infrastructure: int
    team: int
    marketing: int
    user_acquisition: int
    total: int


@dataclass(frozen=True)
class DerivedMetrics:
    gross_margin_pct: float
    net_margin_pct: float
    cac: float
    ltv: int
    ltv_cac_ratio: float
    payback_period_months: float
    runway_months: int


@dataclass(frozen=True)
class CashPosition:
    burn: float
    balance: int
    profit: int


@dataclass(frozen=True)
class Snapshot:
    period: Period
    users: UserCounts
    revenue: RevenueBreakdown
    costs: CostBreakdown
    metrics: DerivedMetrics
    cash: CashPosition

    def to_record(self) -> Dict[str, Any]:
        """Flat dict for table views (one row per snapshot)."""
        p, u, r, c, m, k = self.period, self.users, self.revenue, self.costs, self.metrics, self.cash
        return {
            "period": p.label,
            "index": p.index,
            "year": p.year,
            "month": p.month,
            "date": p.date,
            "users_total": u.total,
            "users_paying": u.paying,
            "users_new": u.new,
            "users_churned": u.churned,
            "revenue_initial": r.initial_purchases,
            "revenue_recurring": r.recurring_purchases,
            "revenue_total": r.total,
            "mrr": r.mrr,
            "cost_ai_provider": c.ai_provider,
            "cost_infrastructure": c.infrastructure,
            "cost_team": c.team,
            "cost_marketing": c.marketing,
            "cost_user_acquisition": c.user_acquisition,
            "cost_total": c.total,
            "gross_margin_pct": m.gross_margin_pct,
            "net_margin_pct": m.net_margin_pct,
            "cac": m.cac,
            "ltv": m.ltv,
            "ltv_cac_ratio": m.ltv_cac_ratio,
            "payback_period_months": m.payback_period_months,
            "runway_months": m.runway_months,
            "burn": k.burn,
            "cash_balance": k.balance,
            "profit": k.profit,
        }


def snapshots_to_frame(snapshots) -> pd.DataFrame:
    return pd.DataFrame([s.to_record() for s in snapshots])
