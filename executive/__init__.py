"""
Executive outputs — headline metrics, recommendations, risks, and milestones.
"""

from .metrics import HeadlineMetrics, compute_headline_metrics, format_key_metrics
from .summary import ExecutiveSummary, Milestone, generate_executive_summary

__all__ = [
    "HeadlineMetrics",
    "compute_headline_metrics",
    "format_key_metrics",
    "ExecutiveSummary",
    "Milestone",
    "generate_executive_summary",
]
