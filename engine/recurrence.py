"""
Monthly recurrence — advances the simulated business by one month.

The running state (current users, current cash) is an explicit value that
is passed in and returned, so a projection is a plain fold over month
indices:

    state = SimulationState.initial(capital)
    for m in range(horizon):
        step = advance_month(assumptions, state, m)
        state = step.state

Full precision is kept in the carried state; rounding happens only when the
snapshot is emitted, so rounding error never accumulates month over month.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from core.schema import BusinessAssumptions
from core.utils import month_label, round_half_up, round_to

from .snapshot import (
    CashPosition,
    CostBreakdown,
    DerivedMetrics,
    Period,
    RevenueBreakdown,
    Snapshot,
    UserCounts,
)

# Sentinels for undefined ratios
NEVER = 999                 # payback never reached / runway unbounded
UNDEFINED_NET_MARGIN = -100
MAX_LIFETIME_MONTHS = 60    # average user lifetime when churn is zero


@dataclass(frozen=True)
class SimulationState:
    users: float
    cash: float

    @classmethod
    def initial(cls, initial_capital: float) -> "SimulationState":
        # month 0 onboards the initial cohort, so the business starts empty
        return cls(users=0, cash=float(initial_capital))


@dataclass(frozen=True)
class MonthStep:
    snapshot: Snapshot
    state: SimulationState
    profit: float           # unrounded monthly profit (revenue - costs)


def team_cost(
    users: float,
    base: float,
    trigger_users: float,
    increase_pct: float,
) -> float:
    """
    Step-function team cost: +increase_pct of base for every full multiple
    of trigger_users reached.  999 users -> base, 1000 -> 1.2x, 2500 -> 1.4x
    (with a 1000-user trigger and 20% increase).
    """
    if users <= 0 or trigger_users <= 0:
        return base
    steps = math.floor(users / trigger_users)
    return base * (1 + steps * (increase_pct / 100))


def average_user_lifetime(churn_rate: float) -> float:
    """Average retained lifetime in months; capped when churn is zero."""
    return 1 / (churn_rate / 100) if churn_rate > 0 else MAX_LIFETIME_MONTHS


def price_multiplier(a: BusinessAssumptions) -> float:
    """Markup on provider cost compounded with the service fee."""
    return (1 + a.markup_on_ai_costs / 100) * (1 + a.service_fee / 100)


def lifetime_value(a: BusinessAssumptions, paying_users: float) -> float:
    if paying_users <= 0:
        return 0.0
    return a.avg_monthly_credit_purchase * average_user_lifetime(a.churn_rate) * price_multiplier(a)


def runway_months(cash: float, burn: float) -> int:
    return max(0, math.floor(cash / burn)) if burn > 0 else NEVER


def advance_month(
    a: BusinessAssumptions,
    state: SimulationState,
    month: int,
    *,
    date=None,
) -> MonthStep:
    """Compute month `month` from the carried state; returns the snapshot and next state."""
    users = state.users

    # --- Users ---
    growth_factor = 1 + a.monthly_growth_rate / 100
    if month == 0:
        new_users = a.initial_users
    else:
        new_users = math.floor(users * (growth_factor - 1))
    churned = math.floor(users * (a.churn_rate / 100))
    users = users + new_users - churned
    paying = math.floor(users * (a.conversion_rate / 100))

    # --- Revenue ---
    # conversion is applied to first purchases here as well as to paying users
    initial_revenue = new_users * a.avg_initial_credit_purchase * (a.conversion_rate / 100)
    recurring_revenue = paying * a.avg_monthly_credit_purchase
    base_revenue = initial_revenue + recurring_revenue
    multiplier = price_multiplier(a)
    revenue = base_revenue * multiplier

    # --- Costs ---
    # provider cost is a share of base (pre-markup) revenue
    ai_cost = base_revenue * (a.ai_provider_cost_percentage / 100)
    infra_cost = a.infrastructure_costs_base + users * a.infrastructure_costs_per_user
    staff_cost = team_cost(
        users, a.team_costs_base, a.team_growth_trigger_users, a.team_cost_increase_percentage
    )
    marketing_cost = a.marketing_budget_base + revenue * (a.marketing_budget_percentage_of_revenue / 100)
    acquisition_cost = new_users * a.user_acquisition_cost
    total_cost = ai_cost + infra_cost + staff_cost + marketing_cost + acquisition_cost

    profit = revenue - total_cost
    cash = state.cash + profit

    # --- Unit economics ---
    gross_margin = (revenue - ai_cost) / revenue * 100 if revenue > 0 else 0.0
    net_margin = profit / revenue * 100 if revenue > 0 else UNDEFINED_NET_MARGIN
    cac = a.user_acquisition_cost
    ltv = lifetime_value(a, paying)
    ltv_cac = ltv / cac if cac > 0 else 0.0
    net_per_paying = (revenue - ai_cost) / paying if paying > 0 else 0.0
    payback = cac / net_per_paying if net_per_paying > 0 else NEVER

    burn = -profit if profit < 0 else 0.0
    runway = runway_months(cash, burn)

    snapshot = Snapshot(
        period=Period(
            index=month,
            year=month // 12 + 1,
            month=month % 12 + 1,
            label=month_label(month),
            date=date,
        ),
        users=UserCounts(
            total=math.floor(users),
            paying=paying,
            new=math.floor(new_users),
            churned=churned,
        ),
        revenue=RevenueBreakdown(
            initial_purchases=round_half_up(initial_revenue),
            recurring_purchases=round_half_up(recurring_revenue),
            total=round_half_up(revenue),
            mrr=round_half_up(recurring_revenue * multiplier),
        ),
        costs=CostBreakdown(
            ai_provider=round_half_up(ai_cost),
            infrastructure=round_half_up(infra_cost),
            team=round_half_up(staff_cost),
            marketing=round_half_up(marketing_cost),
            user_acquisition=round_half_up(acquisition_cost),
            total=round_half_up(total_cost),
        ),
        metrics=DerivedMetrics(
            gross_margin_pct=round_half_up(gross_margin),
            net_margin_pct=round_half_up(net_margin),
            cac=cac,
            ltv=round_half_up(ltv),
            ltv_cac_ratio=round_to(ltv_cac, 2),
            payback_period_months=round_to(payback, 1),
            runway_months=runway,
        ),
        cash=CashPosition(
            burn=round_half_up(burn),
            balance=round_half_up(cash),
            profit=round_half_up(profit),
        ),
    )
    return MonthStep(snapshot=snapshot, state=SimulationState(users=users, cash=cash), profit=profit)
