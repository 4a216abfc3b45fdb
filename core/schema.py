"""
Business assumption schemas — the inputs consumed by the projection engines.

All rates are percentages stored as plain numbers (30 means 30%).
Nothing here is validated; see inputs/validators.py for caller-side checks.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, Tuple


@dataclass(frozen=True)
class BusinessAssumptions:
    """Assumptions for the executive model (engine.recurrence)."""

    # User growth
    initial_users: float = 50
    monthly_growth_rate: float = 30.0
    churn_rate: float = 5.0
    user_acquisition_cost: float = 100.0

    # Revenue model
    avg_initial_credit_purchase: float = 50.0
    avg_monthly_credit_purchase: float = 75.0
    conversion_rate: float = 15.0
    markup_on_ai_costs: float = 30.0
    service_fee: float = 5.0

    # Costs
    ai_provider_cost_percentage: float = 70.0
    infrastructure_costs_base: float = 1_000.0
    infrastructure_costs_per_user: float = 0.25
    team_costs_base: float = 15_000.0
    team_growth_trigger_users: float = 1_000
    team_cost_increase_percentage: float = 20.0
    marketing_budget_base: float = 3_500.0
    marketing_budget_percentage_of_revenue: float = 10.0

    # Market sizing (informational; the recurrence does not read these)
    total_addressable_market: float = 500_000
    market_share_goal: float = 5.0
    time_to_reach_goal_years: float = 5.0

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def to_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in self.field_names()}


@dataclass(frozen=True)
class PlanningAssumptions:
    """
    Assumptions for the simpler planning-form model (engine.planning).

    Fixed costs are flat monthly amounts; there is no churn, acquisition
    spend or team step function in this variant.
    """

    initial_users: float = 50
    monthly_growth_rate: float = 30.0
    conversion_rate: float = 15.0
    avg_initial_credit_purchase: float = 50.0
    avg_monthly_credit_purchase: float = 75.0
    markup_on_ai_costs: float = 30.0
    service_fee: float = 5.0
    ai_provider_cost_percentage: float = 70.0
    infrastructure_costs: float = 1_000.0
    team_costs: float = 15_000.0
    marketing_costs: float = 3_500.0

    @property
    def fixed_monthly_costs(self) -> float:
        return self.infrastructure_costs + self.team_costs + self.marketing_costs


# Field groups as presented by assumption forms and reports.
ASSUMPTION_GROUPS: Dict[str, Tuple[str, ...]] = {
    "User Growth": (
        "initial_users",
        "monthly_growth_rate",
        "churn_rate",
        "user_acquisition_cost",
    ),
    "Revenue Model": (
        "avg_initial_credit_purchase",
        "avg_monthly_credit_purchase",
        "conversion_rate",
        "markup_on_ai_costs",
        "service_fee",
    ),
    "Costs": (
        "ai_provider_cost_percentage",
        "infrastructure_costs_base",
        "infrastructure_costs_per_user",
        "team_costs_base",
        "team_growth_trigger_users",
        "team_cost_increase_percentage",
        "marketing_budget_base",
        "marketing_budget_percentage_of_revenue",
    ),
    "Market Sizing": (
        "total_addressable_market",
        "market_share_goal",
        "time_to_reach_goal_years",
    ),
}

# Fields expressed as percentages (0-100 is the sensible range).
PERCENTAGE_FIELDS: Tuple[str, ...] = (
    "monthly_growth_rate",
    "churn_rate",
    "conversion_rate",
    "markup_on_ai_costs",
    "service_fee",
    "ai_provider_cost_percentage",
    "team_cost_increase_percentage",
    "marketing_budget_percentage_of_revenue",
    "market_share_goal",
)


def default_business_assumptions() -> BusinessAssumptions:
    """Defaults for a credit-based AI aggregator targeting freelancers and agencies."""
    return BusinessAssumptions()


def default_planning_assumptions() -> PlanningAssumptions:
    return PlanningAssumptions()
