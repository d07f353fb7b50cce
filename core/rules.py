from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Tuple

from pydantic import BaseModel, Field

from core.utils import is_blank, parse_iso_date


class RuleResult(BaseModel):
    field: str
    key: str
    context: Dict[str, Any] = Field(default_factory=dict)


@dataclass(frozen=True)
class DateAfter:
    """``later`` must be strictly after ``earlier``; reported on ``later``."""

    earlier: str
    later: str
    key: str

    def evaluate(self, values: Mapping[str, Any]) -> List[RuleResult]:
        start = parse_iso_date(values.get(self.earlier))
        end = parse_iso_date(values.get(self.later))
        if start is None or end is None or end > start:
            return []
        return [
            RuleResult(
                field=self.later,
                key=self.key,
                context={"earlier": str(start), "later": str(end)},
            )
        ]


@dataclass(frozen=True)
class RequiredWhen:
    """When ``toggle`` equals ``value``, each dependent field must be filled.

    ``dependents`` pairs a field name with the translation key reported on it.
    """

    toggle: str
    value: str
    dependents: Tuple[Tuple[str, str], ...]

    def evaluate(self, values: Mapping[str, Any]) -> List[RuleResult]:
        if values.get(self.toggle) != self.value:
            return []
        return [
            RuleResult(field=name, key=key, context={"toggle": self.toggle})
            for name, key in self.dependents
            if is_blank(values.get(name))
        ]

    def inactive(self, values: Mapping[str, Any]) -> Tuple[str, ...]:
        """Dependents that are ignored because the toggle is not at ``value``."""
        if values.get(self.toggle) == self.value:
            return ()
        return tuple(name for name, _ in self.dependents)


def evaluate_rules(rules, values: Mapping[str, Any]) -> List[RuleResult]:
    """Evaluate cross-field rules; the first failure per field wins."""
    res: List[RuleResult] = []
    seen = set()
    for rule in rules:
        for result in rule.evaluate(values):
            if result.field in seen:
                continue
            seen.add(result.field)
            res.append(result)
    return res
