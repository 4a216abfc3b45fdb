"""
Headline metrics computed from a completed projection.

Raw numbers live in HeadlineMetrics; format_key_metrics() turns them into the
ordered label -> display value mapping shown on executive dashboards and in
scenario comparison tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Union

from core.utils import format_currency, format_pct, safe_div
from engine.runner import ProjectionResult

BEYOND_PROJECTION = "Beyond projection period"

KeyMetricValue = Union[str, int]


@dataclass(frozen=True)
class HeadlineMetrics:
    total_users: int
    paying_users: int
    first_year_revenue: float
    final_year_revenue: float
    final_mrr: float
    final_arr: float
    total_investment: float
    break_even_month: Optional[int]
    ltv_cac_ratio: float
    gross_margin_pct: float
    net_margin_pct: float
    payback_period_months: float
    rule_of_40: float
    capital_efficiency: float
    months_negative_margin: int


def user_growth_pct(result: ProjectionResult) -> float:
    """Month-over-month total-user growth of the final month, in percent."""
    if len(result.monthly) < 2:
        return 0.0
    prev = result.monthly[-2].users.total
    final = result.monthly[-1].users.total
    return safe_div(final - prev, prev) * 100


def compute_headline_metrics(result: ProjectionResult) -> HeadlineMetrics:
    if not result.monthly:
        raise ValueError("Projection has no monthly snapshots.")

    final = result.monthly[-1]
    first_year = result.yearly[0]
    final_year = result.yearly[-1]

    final_mrr = final.revenue.mrr
    final_arr = final_mrr * 12

    # Rule of 40 only counts growth once there is recurring revenue
    growth = user_growth_pct(result) if final_mrr > 0 else 0.0
    rule_of_40 = final.metrics.net_margin_pct + growth

    return HeadlineMetrics(
        total_users=final.users.total,
        paying_users=final.users.paying,
        first_year_revenue=first_year.revenue.total,
        final_year_revenue=final_year.revenue.total,
        final_mrr=final_mrr,
        final_arr=final_arr,
        total_investment=result.total_investment_required,
        break_even_month=result.break_even_month,
        ltv_cac_ratio=final.metrics.ltv_cac_ratio,
        gross_margin_pct=final.metrics.gross_margin_pct,
        net_margin_pct=final.metrics.net_margin_pct,
        payback_period_months=final.metrics.payback_period_months,
        rule_of_40=rule_of_40,
        capital_efficiency=safe_div(result.total_investment_required, final_arr),
        months_negative_margin=sum(1 for s in result.monthly if s.metrics.net_margin_pct < 0),
    )


def format_key_metrics(h: HeadlineMetrics) -> Dict[str, KeyMetricValue]:
    return {
        "Total Users (End of Projection)": h.total_users,
        "Paying Users (End of Projection)": h.paying_users,
        "First Year Revenue": format_currency(h.first_year_revenue),
        "Final Year Revenue": format_currency(h.final_year_revenue),
        "Monthly Recurring Revenue (Final)": format_currency(h.final_mrr),
        "Annual Recurring Revenue (Final)": format_currency(h.final_arr),
        "Total Investment Required": format_currency(h.total_investment),
        "Break Even Month": (
            f"Month {h.break_even_month + 1}" if h.break_even_month is not None else BEYOND_PROJECTION
        ),
        "LTV/CAC Ratio (Final)": f"{h.ltv_cac_ratio:.2f}",
        "Gross Margin (Final)": format_pct(h.gross_margin_pct),
        "Net Margin (Final)": format_pct(h.net_margin_pct),
        "Rule of 40 Score (Final)": f"{h.rule_of_40:.1f}",
        "Capital Efficiency": f"{h.capital_efficiency:.2f}",
    }
