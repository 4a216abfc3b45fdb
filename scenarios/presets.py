"""
Stock scenario variations used by the investor view.
"""

from __future__ import annotations

from typing import Tuple

from .base import ScenarioVariation

BASE_CASE_NAME = "Base Case"
BASE_CASE_DESCRIPTION = "Expected business trajectory with current assumptions"

CONSERVATIVE_GROWTH = ScenarioVariation(
    name="Conservative Growth",
    description="Lower growth rate and higher acquisition costs",
    changes={
        "monthly_growth_rate": 15,
        "user_acquisition_cost": 150,
        "churn_rate": 7,
    },
)

AGGRESSIVE_GROWTH = ScenarioVariation(
    name="Aggressive Growth",
    description="Higher growth rate with increased marketing spend",
    changes={
        "monthly_growth_rate": 40,
        "marketing_budget_base": 7_000,
        "marketing_budget_percentage_of_revenue": 15,
        "user_acquisition_cost": 130,
    },
)

HIGHER_MONETIZATION = ScenarioVariation(
    name="Higher Monetization",
    description="Higher average purchase amounts with improved conversion",
    changes={
        "avg_initial_credit_purchase": 75,
        "avg_monthly_credit_purchase": 100,
        "conversion_rate": 20,
    },
)

MARKET_PRESSURE = ScenarioVariation(
    name="Market Pressure",
    description="Competitive pressure requiring lower margins",
    changes={
        "markup_on_ai_costs": 20,
        "service_fee": 3,
        "user_acquisition_cost": 120,
    },
)

DEFAULT_VARIATIONS: Tuple[ScenarioVariation, ...] = (
    CONSERVATIVE_GROWTH,
    AGGRESSIVE_GROWTH,
    HIGHER_MONETIZATION,
    MARKET_PRESSURE,
)
