"""
Scenario comparison — run the base case and each variation independently,
then line up a fixed set of headline metrics side by side.

Every scenario is its own run of recurrence -> aggregation -> summary.
Nothing is shared between runs except the (immutable) base assumptions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple

import pandas as pd

from core.config import DEFAULT_INITIAL_CAPITAL, DEFAULT_PROJECTION_YEARS, DEFAULT_SCENARIO_YEARS
from core.schema import BusinessAssumptions, default_business_assumptions
from engine.runner import ProjectionResult, run_projection
from executive.metrics import KeyMetricValue
from executive.summary import ExecutiveSummary, generate_executive_summary

from .base import ScenarioVariation
from .presets import BASE_CASE_DESCRIPTION, BASE_CASE_NAME, DEFAULT_VARIATIONS

logger = logging.getLogger(__name__)

BASE_KEY = "base"

COMPARISON_METRICS: Tuple[str, ...] = (
    "Total Users (End of Projection)",
    "Final Year Revenue",
    "Annual Recurring Revenue (Final)",
    "Break Even Month",
    "LTV/CAC Ratio (Final)",
    "Net Margin (Final)",
    "Total Investment Required",
)


@dataclass(frozen=True)
class ScenarioResult:
    name: str
    description: str
    assumptions: BusinessAssumptions
    projection: ProjectionResult
    summary: ExecutiveSummary


@dataclass
class ScenarioSet:
    """Scenarios keyed by slug (base case under "base") plus the comparison table."""
    scenarios: Dict[str, ScenarioResult] = field(default_factory=dict)
    comparison: Dict[str, Dict[str, KeyMetricValue]] = field(default_factory=dict)

    @property
    def base(self) -> ScenarioResult:
        return self.scenarios[BASE_KEY]

    def comparison_frame(self) -> pd.DataFrame:
        """Rows = headline metrics, columns = scenario names."""
        return pd.DataFrame.from_dict(self.comparison, orient="index")


def run_scenario(
    name: str,
    description: str,
    assumptions: BusinessAssumptions,
    initial_capital: float,
    projection_years: int,
) -> ScenarioResult:
    projection = run_projection(assumptions, initial_capital, projection_years)
    return ScenarioResult(
        name=name,
        description=description,
        assumptions=assumptions,
        projection=projection,
        summary=generate_executive_summary(projection),
    )


def build_comparison(scenarios: Dict[str, ScenarioResult]) -> Dict[str, Dict[str, KeyMetricValue]]:
    return {
        metric: {s.name: s.summary.key_metrics[metric] for s in scenarios.values()}
        for metric in COMPARISON_METRICS
    }


def run_scenario_comparison(
    base_assumptions: BusinessAssumptions,
    variations: Iterable[ScenarioVariation],
    initial_capital: float = DEFAULT_INITIAL_CAPITAL,
    projection_years: int = DEFAULT_SCENARIO_YEARS,
) -> ScenarioSet:
    """
    Run the base case plus every variation and build the comparison table.

    A variation whose slug collides with an earlier scenario replaces it.
    """
    scenarios: Dict[str, ScenarioResult] = {
        BASE_KEY: run_scenario(
            BASE_CASE_NAME, BASE_CASE_DESCRIPTION, base_assumptions, initial_capital, projection_years
        )
    }

    for variation in variations:
        if variation.key in scenarios:
            logger.warning("Scenario %r replaces an earlier scenario with key %r", variation.name, variation.key)
        scenarios[variation.key] = run_scenario(
            variation.name,
            variation.description,
            variation.apply(base_assumptions),
            initial_capital,
            projection_years,
        )
        logger.debug("Scenario %r: break-even=%s", variation.name, scenarios[variation.key].projection.break_even_month)

    return ScenarioSet(scenarios=scenarios, comparison=build_comparison(scenarios))


@dataclass(frozen=True)
class ExampleModel:
    base_model: ProjectionResult
    executive_summary: ExecutiveSummary
    scenarios: ScenarioSet


def build_example_model(
    assumptions: Optional[BusinessAssumptions] = None,
    initial_capital: float = DEFAULT_INITIAL_CAPITAL,
    projection_years: int = DEFAULT_PROJECTION_YEARS,
) -> ExampleModel:
    """Default 5-year model, its summary, and the stock scenarios over the same horizon."""
    base = assumptions or default_business_assumptions()
    model = run_projection(base, initial_capital, projection_years)
    return ExampleModel(
        base_model=model,
        executive_summary=generate_executive_summary(model),
        scenarios=run_scenario_comparison(base, DEFAULT_VARIATIONS, initial_capital, projection_years),
    )
