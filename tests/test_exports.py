from __future__ import annotations

import pandas as pd

from executive.summary import generate_executive_summary
from exports.writers import summary_frame, write_projection_excel, write_snapshots_csv
from scenarios import DEFAULT_VARIATIONS, run_scenario_comparison


def test_csv_text_and_file(steady_projection, tmp_path):
    path = tmp_path / "monthly.csv"
    text = write_snapshots_csv(steady_projection.monthly, path)

    assert path.read_text(encoding="utf-8") == text
    header = text.splitlines()[0].split(",")
    assert header[:4] == ["period", "index", "year", "month"]
    assert "cash_balance" in header
    assert len(text.splitlines()) == 13


def test_summary_frame_adds_cash_rows(steady_projection):
    summary = generate_executive_summary(steady_projection)
    df = summary_frame(steady_projection, summary)
    values = dict(zip(df["Metric"], df["Value"]))

    assert len(df) == 16
    assert values["Break Even Date"] == "Year 1, Month 2"
    assert values["Peak Burn Month"] == "Month 1"
    assert values["Peak Burn Amount"] == 81750


def test_excel_workbook_sheets(steady_assumptions, steady_projection, tmp_path):
    summary = generate_executive_summary(steady_projection)
    scenarios = run_scenario_comparison(steady_assumptions, DEFAULT_VARIATIONS, 50_000, 1)
    out = write_projection_excel(tmp_path / "model.xlsx", steady_projection, summary, scenarios)

    sheets = pd.read_excel(out, sheet_name=None)
    assert list(sheets) == ["Summary", "Monthly", "Quarterly", "Yearly", "Milestones", "Scenarios"]
    assert len(sheets["Monthly"]) == 12
    assert len(sheets["Quarterly"]) == 4
    assert len(sheets["Yearly"]) == 1
    assert sheets["Milestones"]["Month"].tolist() == [1, 1, 1, 1, 2]


def test_excel_without_scenarios(steady_projection, tmp_path):
    summary = generate_executive_summary(steady_projection)
    out = write_projection_excel(tmp_path / "model.xlsx", steady_projection, summary)
    assert "Scenarios" not in pd.read_excel(out, sheet_name=None)
