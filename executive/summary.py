"""
Executive summary — headline metrics, recommendations, risks and milestones.

Translates a completed projection into what a founder or board acts on:
  - key metrics: formatted headline numbers
  - recommendations: threshold rules on the final month, then standing advice
  - risks: standing risk register
  - milestones: first month each growth/profitability marker is reached
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from engine.runner import ProjectionResult
from engine.snapshot import Snapshot

from .metrics import HeadlineMetrics, KeyMetricValue, compute_headline_metrics, format_key_metrics

STRATEGIC_RECOMMENDATIONS: Tuple[str, ...] = (
    "Continually optimize AI model pricing to maximize value for users while maintaining healthy margins",
    "Consider strategic partnerships with AI providers to reduce cost structure",
    "Develop tiered service levels to appeal to different customer segments",
)

RISK_FACTORS: Tuple[str, ...] = (
    "AI provider pricing changes could impact margins significantly",
    "Emerging competitors could increase CAC and reduce growth rate",
    "Changes in AI regulations could require compliance investments",
    "Higher than projected churn would significantly impact unit economics",
    "Slower growth than projected would extend cash runway requirements",
    "Technical scaling challenges may require additional infrastructure investment",
)

# (condition on headline metrics, recommendation) evaluated in order
_RULES: Tuple[Tuple[Callable[[HeadlineMetrics], bool], str], ...] = (
    (
        lambda h: h.ltv_cac_ratio < 3,
        "Improve LTV/CAC ratio by reducing acquisition costs or increasing customer lifetime value",
    ),
    (
        lambda h: h.payback_period_months > 12,
        "Reduce customer payback period through improved monetization or reduced acquisition costs",
    ),
    (
        lambda h: h.gross_margin_pct < 50,
        "Increase gross margins by negotiating better terms with AI providers or adjusting pricing model",
    ),
    (
        lambda h: h.months_negative_margin > 24,
        "Extend fundraising runway to accommodate longer path to profitability",
    ),
    (
        lambda h: h.total_users < 1000,
        "Accelerate user growth strategies to achieve scale faster",
    ),
    (
        lambda h: h.net_margin_pct < 10,
        "Focus on operational efficiency to improve net margins",
    ),
    (
        lambda h: h.capital_efficiency > 1.5,
        "Improve capital efficiency by finding ways to generate more revenue with less investment",
    ),
)

# (first-crossing test on a monthly snapshot, description), in declaration order
_MILESTONE_SCANS: Tuple[Tuple[Callable[[Snapshot], bool], str], ...] = (
    (lambda s: s.users.total >= 100, "Reach 100 total users"),
    (lambda s: s.users.total >= 1000, "Reach 1,000 total users"),
    (lambda s: s.revenue.mrr >= 10_000, "Achieve $10K MRR"),
    (lambda s: s.revenue.mrr >= 100_000, "Achieve $100K MRR"),
)
_BREAK_EVEN_MILESTONE = "Reach break-even (positive cash flow)"
_LTV_CAC_MILESTONE = "Achieve 3:1 LTV:CAC ratio"


@dataclass(frozen=True)
class Milestone:
    month: int
    description: str


@dataclass
class ExecutiveSummary:
    """Structured executive output."""
    key_metrics: Dict[str, KeyMetricValue]
    recommendations: List[str] = field(default_factory=list)
    risks: List[str] = field(default_factory=list)
    milestones: List[Milestone] = field(default_factory=list)
    headline: Optional[HeadlineMetrics] = None

    def to_dataframe(self) -> pd.DataFrame:
        """Key metrics as a display-friendly two-column table."""
        return pd.DataFrame(
            [{"Metric": label, "Value": value} for label, value in self.key_metrics.items()]
        )

    def milestones_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [{"Month": m.month + 1, "Milestone": m.description} for m in self.milestones],
            columns=["Month", "Milestone"],
        )


def build_recommendations(h: HeadlineMetrics) -> List[str]:
    recs = [text for condition, text in _RULES if condition(h)]
    recs.extend(STRATEGIC_RECOMMENDATIONS)
    return recs


def _first_month(monthly: Sequence[Snapshot], test: Callable[[Snapshot], bool]) -> Optional[int]:
    for s in monthly:
        if test(s):
            return s.period.index
    return None


def detect_milestones(result: ProjectionResult) -> List[Milestone]:
    """
    First month each marker holds, sorted by month.

    Markers are scanned independently in a fixed order, so the list has to be
    re-sorted: break-even can land before 1,000 users, for example.  The sort
    is stable, so same-month markers keep their declaration order.
    """
    found: List[Milestone] = []
    for test, description in _MILESTONE_SCANS:
        month = _first_month(result.monthly, test)
        if month is not None:
            found.append(Milestone(month=month, description=description))

    if result.break_even_month is not None:
        found.append(Milestone(month=result.break_even_month, description=_BREAK_EVEN_MILESTONE))

    month = _first_month(result.monthly, lambda s: s.metrics.ltv_cac_ratio >= 3)
    if month is not None:
        found.append(Milestone(month=month, description=_LTV_CAC_MILESTONE))

    return sorted(found, key=lambda m: m.month)


def generate_executive_summary(result: ProjectionResult) -> ExecutiveSummary:
    """
    Generate the executive summary for a completed projection.

    Raises ValueError if the projection has no months.
    """
    headline = compute_headline_metrics(result)
    return ExecutiveSummary(
        key_metrics=format_key_metrics(headline),
        recommendations=build_recommendations(headline),
        risks=list(RISK_FACTORS),
        milestones=detect_milestones(result),
        headline=headline,
    )
