"""
Load a model definition (assumptions, capital, horizon, scenarios) from JSON.

Field names are accepted in snake_case or in the camelCase used by the web
front end (e.g. "monthlyGrowthRate").  Structural problems raise
pydantic.ValidationError; business-level checks live in validators.py.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from core.config import ProjectionConfig
from core.schema import BusinessAssumptions
from scenarios.base import ScenarioVariation

_DEFAULTS = BusinessAssumptions()


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class AssumptionsModel(_CamelModel):
    initial_users: float = Field(_DEFAULTS.initial_users, ge=0)
    monthly_growth_rate: float = Field(_DEFAULTS.monthly_growth_rate, ge=0)
    churn_rate: float = Field(_DEFAULTS.churn_rate, ge=0)
    user_acquisition_cost: float = Field(_DEFAULTS.user_acquisition_cost, ge=0)

    avg_initial_credit_purchase: float = Field(_DEFAULTS.avg_initial_credit_purchase, ge=0)
    avg_monthly_credit_purchase: float = Field(_DEFAULTS.avg_monthly_credit_purchase, ge=0)
    conversion_rate: float = Field(_DEFAULTS.conversion_rate, ge=0)
    # the front end spells this "markupOnAICosts"
    markup_on_ai_costs: float = Field(_DEFAULTS.markup_on_ai_costs, ge=0, alias="markupOnAICosts")
    service_fee: float = Field(_DEFAULTS.service_fee, ge=0)

    ai_provider_cost_percentage: float = Field(_DEFAULTS.ai_provider_cost_percentage, ge=0)
    infrastructure_costs_base: float = Field(_DEFAULTS.infrastructure_costs_base, ge=0)
    infrastructure_costs_per_user: float = Field(_DEFAULTS.infrastructure_costs_per_user, ge=0)
    team_costs_base: float = Field(_DEFAULTS.team_costs_base, ge=0)
    team_growth_trigger_users: float = Field(_DEFAULTS.team_growth_trigger_users, ge=0)
    team_cost_increase_percentage: float = Field(_DEFAULTS.team_cost_increase_percentage, ge=0)
    marketing_budget_base: float = Field(_DEFAULTS.marketing_budget_base, ge=0)
    marketing_budget_percentage_of_revenue: float = Field(
        _DEFAULTS.marketing_budget_percentage_of_revenue, ge=0
    )

    total_addressable_market: float = Field(_DEFAULTS.total_addressable_market, ge=0)
    market_share_goal: float = Field(_DEFAULTS.market_share_goal, ge=0)
    time_to_reach_goal_years: float = Field(_DEFAULTS.time_to_reach_goal_years, ge=0)

    def to_assumptions(self) -> BusinessAssumptions:
        return BusinessAssumptions(**self.model_dump())


class VariationModel(_CamelModel):
    name: str = Field(min_length=1)
    description: str = ""
    changes: Dict[str, float] = Field(default_factory=dict, alias="metricChanges")

    @field_validator("changes")
    @classmethod
    def _known_fields(cls, changes: Dict[str, float]) -> Dict[str, float]:
        out: Dict[str, float] = {}
        for key, value in changes.items():
            name = _resolve_field_name(key)
            if name is None:
                raise ValueError(f"unknown assumption {key!r}")
            out[name] = value
        return out

    def to_variation(self) -> ScenarioVariation:
        return ScenarioVariation(name=self.name, description=self.description, changes=self.changes)


class ModelFile(_CamelModel):
    assumptions: AssumptionsModel = Field(default_factory=AssumptionsModel)
    initial_capital: float = Field(500_000.0, ge=0)
    projection_years: int = Field(5, ge=1, le=50)
    start_date: Optional[str] = None
    scenarios: List[VariationModel] = Field(default_factory=list)

    def to_config(self) -> ProjectionConfig:
        return ProjectionConfig(
            initial_capital=self.initial_capital,
            projection_years=self.projection_years,
            start_date=pd.Timestamp(self.start_date) if self.start_date else None,
        )


def _resolve_field_name(key: str) -> Optional[str]:
    for name, info in AssumptionsModel.model_fields.items():
        if key in (name, info.alias):
            return name
    return None


def parse_model(data: dict) -> ModelFile:
    return ModelFile.model_validate(data)


def load_model_file(path: Union[str, Path]) -> ModelFile:
    with open(path, "r", encoding="utf-8") as fh:
        return parse_model(json.load(fh))
