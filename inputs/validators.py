"""
Sanity checks for business assumptions before they enter the engine.

The engine itself accepts anything numeric and lets the arithmetic flow
through; callers that need guarantees run these checks first:
- Negative inputs (blocking)
- Percentages outside 0-100
- Inputs that make the projection degenerate
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from core.schema import PERCENTAGE_FIELDS, BusinessAssumptions


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for a set of assumptions."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def validate_assumptions(a: BusinessAssumptions) -> ValidationResult:
    """
    Run all checks on a set of business assumptions.
    Returns a ValidationResult with errors (blocking) and warnings (informational).
    """
    result = ValidationResult()

    # --- Sign ---
    for name, value in a.to_dict().items():
        if value < 0:
            result.errors.append(f"{name} is negative ({value}).")

    # --- Percentages ---
    for name in PERCENTAGE_FIELDS:
        value = getattr(a, name)
        if value > 100:
            result.warnings.append(f"{name} = {value} exceeds 100% — check units.")

    if a.churn_rate > 100:
        result.errors.append("churn_rate above 100% removes more users than exist.")

    # --- Degenerate shapes ---
    if a.initial_users == 0:
        result.warnings.append("initial_users is 0 — the projection will stay empty.")
    if a.team_growth_trigger_users <= 0:
        result.warnings.append("team_growth_trigger_users <= 0 — team cost will never step up.")
    if a.churn_rate > 0 and a.churn_rate >= a.monthly_growth_rate:
        result.warnings.append(
            f"churn_rate ({a.churn_rate}%) >= monthly_growth_rate ({a.monthly_growth_rate}%) — "
            f"the user base will not grow after month 1."
        )
    if a.user_acquisition_cost == 0:
        result.warnings.append("user_acquisition_cost is 0 — LTV/CAC will report 0.")

    return result
