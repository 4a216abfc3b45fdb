from __future__ import annotations

import pytest

from engine.aggregator import aggregate_snapshots, quarterly, yearly
from engine.runner import run_months


def test_quarter_sums_flows_and_takes_last_balances(projection):
    for q, agg in enumerate(projection.quarterly):
        months = projection.monthly[q * 3:q * 3 + 3]
        last = months[-1]

        assert agg.revenue.total == sum(m.revenue.total for m in months)
        assert agg.revenue.initial_purchases == sum(m.revenue.initial_purchases for m in months)
        assert agg.costs.total == sum(m.costs.total for m in months)
        assert agg.costs.team == sum(m.costs.team for m in months)
        assert agg.users.new == sum(m.users.new for m in months)
        assert agg.users.churned == sum(m.users.churned for m in months)

        assert agg.users.total == last.users.total
        assert agg.users.paying == last.users.paying
        assert agg.cash.balance == last.cash.balance
        assert agg.revenue.mrr == last.revenue.mrr
        assert agg.metrics.ltv == last.metrics.ltv
        assert agg.metrics.ltv_cac_ratio == last.metrics.ltv_cac_ratio
        assert agg.metrics.payback_period_months == last.metrics.payback_period_months
        assert agg.metrics.runway_months == last.metrics.runway_months


def test_margins_and_burn_are_averaged(projection):
    year = projection.yearly[0]
    months = projection.monthly[:12]
    assert year.metrics.gross_margin_pct == pytest.approx(sum(m.metrics.gross_margin_pct for m in months) / 12)
    assert year.metrics.net_margin_pct == pytest.approx(sum(m.metrics.net_margin_pct for m in months) / 12)
    assert year.cash.burn == pytest.approx(sum(m.cash.burn for m in months) / 12)


def test_labels(projection):
    assert [q.period.label for q in projection.quarterly[:5]] == ["Y1Q1", "Y1Q2", "Y1Q3", "Y1Q4", "Y2Q1"]
    assert [y.period.label for y in projection.yearly] == [f"Year {i}" for i in range(1, 6)]
    assert projection.yearly[2].period.year == 3
    assert projection.yearly[2].period.month == 0


def test_partial_trailing_period_is_kept(assumptions):
    months = run_months(assumptions, 500_000, 7)
    quarters = quarterly(months)
    assert len(quarters) == 3
    assert quarters[-1].revenue.total == months[6].revenue.total
    assert quarters[-1].users.total == months[6].users.total

    years = yearly(months)
    assert len(years) == 1
    assert years[0].cash.balance == months[-1].cash.balance


def test_yearly_matches_sum_of_quarters(projection):
    for y, year in enumerate(projection.yearly):
        quarters = projection.quarterly[y * 4:y * 4 + 4]
        assert year.revenue.total == sum(q.revenue.total for q in quarters)
        assert year.users.total == quarters[-1].users.total


def test_custom_period_length(assumptions):
    months = run_months(assumptions, 500_000, 12)
    halves = aggregate_snapshots(months, 6)
    assert [h.period.label for h in halves] == ["P1", "P2"]


def test_empty_and_invalid_input(assumptions):
    assert aggregate_snapshots([], 3) == []
    with pytest.raises(ValueError):
        aggregate_snapshots(run_months(assumptions, 500_000, 3), 0)
