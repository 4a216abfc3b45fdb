from __future__ import annotations

import dataclasses

import pytest

from core.schema import BusinessAssumptions
from engine.runner import run_projection
from scenarios import (
    COMPARISON_METRICS,
    DEFAULT_VARIATIONS,
    ScenarioVariation,
    build_example_model,
    run_scenario_comparison,
    slugify,
)


@pytest.fixture
def scenario_set(assumptions):
    return run_scenario_comparison(assumptions, DEFAULT_VARIATIONS, 500_000, 3)


def test_slugify():
    assert slugify("Conservative Growth") == "conservative_growth"
    assert slugify("Market   Pressure\tCase") == "market_pressure_case"


def test_keys_are_base_plus_slugs(scenario_set):
    assert list(scenario_set.scenarios) == [
        "base",
        "conservative_growth",
        "aggressive_growth",
        "higher_monetization",
        "market_pressure",
    ]
    assert scenario_set.base.name == "Base Case"
    assert len(scenario_set.base.projection.monthly) == 36


def test_comparison_table_shape(scenario_set):
    assert tuple(scenario_set.comparison) == COMPARISON_METRICS
    names = [s.name for s in scenario_set.scenarios.values()]
    for metric, row in scenario_set.comparison.items():
        assert list(row) == names
        for s in scenario_set.scenarios.values():
            assert row[s.name] == s.summary.key_metrics[metric]

    df = scenario_set.comparison_frame()
    assert df.shape == (7, 5)
    assert list(df.columns) == names


def test_variation_applies_only_its_changes(assumptions, scenario_set):
    conservative = scenario_set.scenarios["conservative_growth"].assumptions
    assert conservative.monthly_growth_rate == 15
    assert conservative.user_acquisition_cost == 150
    assert conservative.churn_rate == 7
    assert conservative.service_fee == assumptions.service_fee
    assert conservative.team_costs_base == assumptions.team_costs_base


def test_base_case_matches_standalone_run(assumptions, scenario_set):
    assert scenario_set.base.projection == run_projection(assumptions, 500_000, 3)


def test_variations_do_not_share_state(assumptions):
    changes = {"monthly_growth_rate": 10}
    variation = ScenarioVariation(name="Slow", changes=changes)
    changes["monthly_growth_rate"] = 90

    result = run_scenario_comparison(assumptions, [variation], 500_000, 1)
    assert result.scenarios["slow"].assumptions.monthly_growth_rate == 10
    assert result.base.assumptions == assumptions


def test_base_assumptions_untouched(assumptions):
    before = dataclasses.asdict(assumptions)
    run_scenario_comparison(assumptions, DEFAULT_VARIATIONS, 500_000, 1)
    assert dataclasses.asdict(assumptions) == before


def test_unknown_field_is_rejected(assumptions):
    bad = ScenarioVariation(name="Bad", changes={"monthly_growth": 10})
    with pytest.raises(ValueError, match="monthly_growth"):
        bad.apply(assumptions)


def test_slug_collision_keeps_later_scenario(assumptions):
    first = ScenarioVariation(name="Fast Case", changes={"monthly_growth_rate": 35})
    second = ScenarioVariation(name="fast  case", changes={"monthly_growth_rate": 45})
    result = run_scenario_comparison(assumptions, [first, second], 500_000, 1)

    assert list(result.scenarios) == ["base", "fast_case"]
    assert result.scenarios["fast_case"].assumptions.monthly_growth_rate == 45


def test_empty_variations_gives_base_only(assumptions):
    result = run_scenario_comparison(assumptions, [], 500_000, 1)
    assert list(result.scenarios) == ["base"]
    assert all(list(row) == ["Base Case"] for row in result.comparison.values())


def test_example_model():
    model = build_example_model()
    assert len(model.base_model.monthly) == 60
    assert len(model.scenarios.scenarios) == 5
    assert len(model.scenarios.base.projection.monthly) == 60
    assert model.executive_summary.key_metrics == model.scenarios.base.summary.key_metrics


def test_example_model_with_custom_assumptions():
    a = BusinessAssumptions(initial_users=500, monthly_growth_rate=10)
    model = build_example_model(a, 250_000, 2)
    assert model.base_model.monthly[0].users.total == 500
    assert model.base_model.initial_capital == 250_000
    assert len(model.scenarios.scenarios["market_pressure"].projection.monthly) == 24
