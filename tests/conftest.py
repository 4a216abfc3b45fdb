from __future__ import annotations

import pytest

from core.schema import BusinessAssumptions, PlanningAssumptions, default_business_assumptions
from engine.runner import run_projection


@pytest.fixture
def assumptions() -> BusinessAssumptions:
    return default_business_assumptions()


@pytest.fixture
def steady_assumptions() -> BusinessAssumptions:
    """
    1,000 users onboarded in month 0, then no growth or churn: a large
    acquisition loss in month 0 and a constant profit afterwards.
    """
    return BusinessAssumptions(
        initial_users=1000,
        monthly_growth_rate=0,
        churn_rate=0,
        user_acquisition_cost=100,
        avg_initial_credit_purchase=0,
        avg_monthly_credit_purchase=100,
        conversion_rate=50,
        markup_on_ai_costs=30,
        service_fee=5,
        ai_provider_cost_percentage=70,
        infrastructure_costs_base=0,
        infrastructure_costs_per_user=0,
        team_costs_base=15_000,
        team_growth_trigger_users=1_000_000,
        team_cost_increase_percentage=20,
        marketing_budget_base=0,
        marketing_budget_percentage_of_revenue=0,
    )


@pytest.fixture
def planning_assumptions() -> PlanningAssumptions:
    return PlanningAssumptions(
        initial_users=50,
        monthly_growth_rate=30,
        conversion_rate=15,
        avg_initial_credit_purchase=50,
        avg_monthly_credit_purchase=75,
        markup_on_ai_costs=30,
        service_fee=5,
        ai_provider_cost_percentage=70,
        infrastructure_costs=1000,
        team_costs=15000,
        marketing_costs=3500,
    )


@pytest.fixture
def projection(assumptions):
    return run_projection(assumptions, 500_000, 5)


@pytest.fixture
def steady_projection(steady_assumptions):
    return run_projection(steady_assumptions, 50_000, 1)
