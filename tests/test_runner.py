from __future__ import annotations

import pandas as pd
import pytest

from core.schema import BusinessAssumptions
from engine.runner import iter_months, run_months, run_projection, total_investment_required


@pytest.mark.parametrize("years", [1, 3, 5])
def test_horizon_is_years_times_twelve(assumptions, years):
    result = run_projection(assumptions, 500_000, years)
    assert len(result.monthly) == years * 12
    assert result.horizon_months == years * 12
    assert len(result.quarterly) == years * 4
    assert len(result.yearly) == years


def test_projection_is_deterministic(assumptions):
    assert run_projection(assumptions, 500_000, 5) == run_projection(assumptions, 500_000, 5)


def test_run_months_matches_projection(assumptions, projection):
    assert run_months(assumptions, 500_000, 60) == projection.monthly
    assert len(run_months(assumptions, 500_000, 7)) == 7


def test_labels_follow_year_and_month(projection):
    assert projection.monthly[0].period.label == "Y1M1"
    assert projection.monthly[11].period.label == "Y1M12"
    assert projection.monthly[12].period.label == "Y2M1"
    assert projection.monthly[12].period.year == 2


def test_break_even_is_first_positive_profit(steady_assumptions, steady_projection):
    profits = [step.profit for step in iter_months(steady_assumptions, 50_000, 12)]
    k = steady_projection.break_even_month

    assert k == 1
    assert profits[k] > 0
    assert all(p <= 0 for p in profits[:k])
    assert steady_projection.break_even_label == "Year 1, Month 2"


def test_break_even_none_when_never_profitable(projection):
    # 30% monthly growth keeps acquisition spend ahead of revenue
    profits = [s.cash.profit for s in projection.monthly]
    if projection.break_even_month is None:
        assert all(p <= 0 for p in profits)
        assert projection.break_even_label is None
    else:
        k = projection.break_even_month
        assert all(p <= 0 for p in profits[:k])


def test_peak_burn_is_largest_loss(steady_projection):
    assert steady_projection.peak_burn.month == 0
    assert steady_projection.peak_burn.amount == 81750


def test_total_investment_adds_cash_trough(steady_projection):
    # 50,000 capital - 81,750 loss in month 0 -> trough of -31,750
    assert steady_projection.monthly[0].cash.balance == -31750
    assert steady_projection.total_investment_required == 81750


def test_total_investment_is_capital_when_cash_stays_positive(steady_assumptions):
    result = run_projection(steady_assumptions, 1_000_000, 1)
    assert result.total_investment_required == 1_000_000


def test_total_investment_helper_uses_initial_capital_floor(steady_projection):
    assert total_investment_required(steady_projection.monthly, 50_000) == 81750
    assert total_investment_required([], 50_000) == 50_000


def test_zero_growth_is_flat():
    a = BusinessAssumptions(initial_users=200, monthly_growth_rate=0, churn_rate=0)
    result = run_projection(a, 500_000, 2)
    assert {s.users.total for s in result.monthly} == {200}
    assert {s.users.new for s in result.monthly[1:]} == {0}


def test_invalid_horizon_raises(assumptions):
    with pytest.raises(ValueError):
        run_projection(assumptions, 500_000, 0)


def test_start_date_assigns_month_starts(assumptions):
    result = run_projection(assumptions, 500_000, 1, start_date=pd.Timestamp("2025-01-15"))
    assert result.monthly[0].period.date == pd.Timestamp("2025-01-01")
    assert result.monthly[11].period.date == pd.Timestamp("2025-12-01")
    assert result.quarterly[1].period.date == pd.Timestamp("2025-04-01")


def test_chart_series_sampled_every_third_month(projection):
    series = projection.chart_series
    assert set(series) == {"user_growth", "revenue", "costs", "margins", "runway", "ltv_cac"}
    assert len(series["revenue"]) == 20
    assert series["user_growth"][1] == {"label": "Y1M4", "value": projection.monthly[3].users.total}
    assert set(series["margins"][0]) == {"label", "gross", "net"}


def test_to_dataframe(projection):
    df = projection.to_dataframe("quarterly")
    assert len(df) == 20
    assert {"period", "revenue_total", "cost_total", "cash_balance"} <= set(df.columns)
    assert df["period"].iloc[0] == "Y1Q1"
    with pytest.raises(ValueError):
        projection.to_dataframe("weekly")
