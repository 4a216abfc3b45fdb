"""
Table exports of already-computed projections: CSV and Excel workbooks.

Read-only consumers of ProjectionResult / ExecutiveSummary / ScenarioSet.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Union

import pandas as pd

from engine.runner import ProjectionResult
from engine.snapshot import Snapshot, snapshots_to_frame
from executive.summary import ExecutiveSummary
from scenarios.comparison import ScenarioSet

PathLike = Union[str, Path]


def write_snapshots_csv(snapshots: Sequence[Snapshot], path: Optional[PathLike] = None) -> str:
    """Write snapshots as CSV; returns the CSV text (and writes it to `path` if given)."""
    text = snapshots_to_frame(snapshots).to_csv(index=False)
    if path is not None:
        Path(path).write_text(text, encoding="utf-8")
    return text


def summary_frame(result: ProjectionResult, summary: ExecutiveSummary) -> pd.DataFrame:
    df = summary.to_dataframe()
    extra = pd.DataFrame([
        {"Metric": "Break Even Date", "Value": result.break_even_label or "—"},
        {"Metric": "Peak Burn Month", "Value": f"Month {result.peak_burn.month + 1}"},
        {"Metric": "Peak Burn Amount", "Value": result.peak_burn.amount},
    ])
    return pd.concat([df, extra], ignore_index=True)


def write_projection_excel(
    path: PathLike,
    result: ProjectionResult,
    summary: ExecutiveSummary,
    scenarios: Optional[ScenarioSet] = None,
) -> Path:
    """
    Write a workbook with Summary, Monthly, Quarterly, Yearly, Milestones and
    (optionally) Scenarios sheets.
    """
    out = Path(path)
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        summary_frame(result, summary).to_excel(writer, sheet_name="Summary", index=False)
        for freq in ("monthly", "quarterly", "yearly"):
            result.to_dataframe(freq).to_excel(writer, sheet_name=freq.title(), index=False)
        summary.milestones_frame().to_excel(writer, sheet_name="Milestones", index=False)
        if scenarios is not None:
            scenarios.comparison_frame().to_excel(writer, sheet_name="Scenarios")
    return out
