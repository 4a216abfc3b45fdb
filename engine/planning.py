"""
Planning-form projection — the simpler model behind the interactive
financial plan.

Differences from the executive model (engine.recurrence):
  - no churn, acquisition spend, per-user infrastructure or team steps;
    fixed costs are one flat monthly amount
  - first purchases are NOT scaled by the conversion rate
  - quarterly/yearly users are the period maximum; revenue, costs and profit
    are sums of the rounded monthly values
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import List

import pandas as pd

from core.schema import PlanningAssumptions
from core.utils import round_half_up

PLANNING_YEARS = 3


@dataclass(frozen=True)
class PlanningRow:
    label: str
    users: int
    revenue: int
    costs: int
    profit: int


@dataclass(frozen=True)
class PlanningProjection:
    monthly: List[PlanningRow]
    quarterly: List[PlanningRow]
    yearly: List[PlanningRow]

    @property
    def first_year(self) -> List[PlanningRow]:
        return self.monthly[:12]

    @property
    def revenue_chart(self) -> List[dict]:
        return [{"month": f"Month {i + 1}", "revenue": r.revenue} for i, r in enumerate(self.first_year)]

    @property
    def users_chart(self) -> List[dict]:
        return [{"month": f"Month {i + 1}", "users": r.users} for i, r in enumerate(self.first_year)]

    def to_dataframe(self, freq: str = "monthly") -> pd.DataFrame:
        rows = {"monthly": self.monthly, "quarterly": self.quarterly, "yearly": self.yearly}[freq]
        return pd.DataFrame([asdict(r) for r in rows])


def _roll_up(rows: List[PlanningRow], label: str) -> PlanningRow:
    return PlanningRow(
        label=label,
        users=max([0] + [r.users for r in rows]),
        revenue=sum(r.revenue for r in rows),
        costs=sum(r.costs for r in rows),
        profit=sum(r.profit for r in rows),
    )


def run_planning_projection(
    assumptions: PlanningAssumptions,
    years: int = PLANNING_YEARS,
) -> PlanningProjection:
    a = assumptions
    fixed_costs = a.fixed_monthly_costs
    growth_factor = 1 + a.monthly_growth_rate / 100
    multiplier = (1 + a.markup_on_ai_costs / 100) * (1 + a.service_fee / 100)

    monthly: List[PlanningRow] = []
    users = 0
    for year in range(1, years + 1):
        for month in range(1, 13):
            label = f"Month {month}" if year == 1 else f"Y{year}M{month}"

            if year == 1 and month == 1:
                new_users = math.floor(a.initial_users)
            else:
                new_users = math.floor(users * (growth_factor - 1))
            users += new_users
            paid_users = math.floor(users * (a.conversion_rate / 100))

            initial_revenue = new_users * a.avg_initial_credit_purchase
            recurring_revenue = paid_users * a.avg_monthly_credit_purchase
            base_revenue = initial_revenue + recurring_revenue
            revenue = base_revenue * multiplier

            ai_cost = base_revenue * (a.ai_provider_cost_percentage / 100)
            costs = ai_cost + fixed_costs

            monthly.append(
                PlanningRow(
                    label=label,
                    users=users,
                    revenue=round_half_up(revenue),
                    costs=round_half_up(costs),
                    profit=round_half_up(revenue - costs),
                )
            )

    quarterly: List[PlanningRow] = []
    yearly: List[PlanningRow] = []
    for year in range(1, years + 1):
        start = (year - 1) * 12
        for q in range(4):
            quarterly.append(_roll_up(monthly[start + q * 3:start + q * 3 + 3], f"Year {year} Q{q + 1}"))
        yearly.append(_roll_up(monthly[start:start + 12], f"Year {year}"))

    return PlanningProjection(monthly=monthly, quarterly=quarterly, yearly=yearly)
