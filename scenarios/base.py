"""
Scenario variations — a named partial override of the base assumptions.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping

from core.schema import BusinessAssumptions


def slugify(name: str) -> str:
    """Scenario key: lowercase, whitespace runs replaced by underscores."""
    return re.sub(r"\s+", "_", name.lower())


@dataclass(frozen=True)
class ScenarioVariation:
    """
    A named what-if case.  `changes` holds only the fields that differ from
    the base assumptions; it is copied on construction, so later edits to the
    caller's dict do not leak into this scenario.
    """

    name: str
    description: str = ""
    changes: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "changes", MappingProxyType(dict(self.changes)))

    @property
    def key(self) -> str:
        return slugify(self.name)

    def apply(self, base: BusinessAssumptions) -> BusinessAssumptions:
        unknown = sorted(set(self.changes) - set(BusinessAssumptions.field_names()))
        if unknown:
            raise ValueError(f"Scenario {self.name!r} overrides unknown assumptions: {unknown}")
        return replace(base, **self.changes)
