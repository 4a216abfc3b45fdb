"""
Command line front end: run the model and print the executive view.

    saas-model                         # default assumptions, stock scenarios
    saas-model model.json --excel out.xlsx
    saas-model --years 3 --capital 750000 --no-scenarios
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import pandas as pd

from core.config import ProjectionConfig
from core.schema import default_business_assumptions
from engine.runner import run_projection
from executive.summary import generate_executive_summary
from exports.writers import summary_frame, write_projection_excel, write_snapshots_csv
from inputs.loader import load_model_file
from inputs.validators import validate_assumptions
from scenarios.comparison import run_scenario_comparison
from scenarios.presets import DEFAULT_VARIATIONS

logger = logging.getLogger("saas_model")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="saas-model", description="Credit SaaS financial projection")
    p.add_argument("model", nargs="?", help="JSON model file (assumptions, capital, years, scenarios)")
    p.add_argument("--capital", type=float, help="initial capital (overrides the model file)")
    p.add_argument("--years", type=int, help="projection years (overrides the model file)")
    p.add_argument("--no-scenarios", action="store_true", help="skip the scenario comparison")
    p.add_argument("--csv", help="write monthly snapshots to this CSV file")
    p.add_argument("--excel", help="write a workbook with all views to this .xlsx file")
    p.add_argument("--log-level", default="WARNING", help="logging level (default: WARNING)")
    return p


def _print_section(title: str, lines: List[str]) -> None:
    print(f"\n== {title} ==")
    for line in lines:
        print(f"  - {line}")


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.model:
        try:
            model = load_model_file(args.model)
        except (OSError, ValueError) as exc:  # includes pydantic ValidationError and bad JSON
            print(f"Invalid model file {args.model}:\n{exc}", file=sys.stderr)
            return 2
        assumptions = model.assumptions.to_assumptions()
        config = model.to_config()
        variations = [v.to_variation() for v in model.scenarios] or list(DEFAULT_VARIATIONS)
    else:
        assumptions = default_business_assumptions()
        config = ProjectionConfig()
        variations = list(DEFAULT_VARIATIONS)

    capital = args.capital if args.capital is not None else config.initial_capital
    years = args.years if args.years is not None else config.projection_years

    check = validate_assumptions(assumptions)
    if not check.is_valid:
        print(check.summary(), file=sys.stderr)
        return 2
    for warning in check.warnings:
        logger.warning(warning)

    logger.info("Running %d-year projection with %.0f initial capital", years, capital)
    result = run_projection(assumptions, capital, years, start_date=config.start_date)
    summary = generate_executive_summary(result)

    with pd.option_context("display.max_columns", None, "display.width", 160):
        print("== Key Metrics ==")
        print(summary_frame(result, summary).to_string(index=False))
        _print_section("Recommendations", summary.recommendations)
        _print_section("Risks", summary.risks)
        _print_section("Milestones", [f"Month {m.month + 1}: {m.description}" for m in summary.milestones])

        scenario_set = None
        if not args.no_scenarios:
            scenario_set = run_scenario_comparison(assumptions, variations, capital, years)
            print("\n== Scenario Comparison ==")
            print(scenario_set.comparison_frame().to_string())

    if args.csv:
        write_snapshots_csv(result.monthly, args.csv)
        logger.info("Wrote monthly snapshots to %s", args.csv)
    if args.excel:
        write_projection_excel(args.excel, result, summary, scenario_set)
        logger.info("Wrote workbook to %s", args.excel)
    return 0


if __name__ == "__main__":
    sys.exit(main())
