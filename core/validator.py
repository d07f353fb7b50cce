"""Run a step's field and cross-field rules over raw form input."""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from core.rules import RequiredWhen, evaluate_rules
from core.schema import INVALID_VALUE, RULE_ERROR
from core.steps import StepDefinition

logger = logging.getLogger(__name__)


class ValidationOutcome(BaseModel):
    """Parsed values on success, translation keys per field otherwise.

    ``errors`` maps a field path (``emergencyContact.name`` for grouped
    inputs) to a translation key.
    """

    values: Optional[Dict[str, Any]] = None
    errors: Dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.values is not None and not self.errors


def _error_key(error: Mapping[str, Any]) -> str:
    if error.get("type") == RULE_ERROR:
        return (error.get("ctx") or {}).get("key", INVALID_VALUE)
    return INVALID_VALUE


def validate_step(step: StepDefinition, raw: Mapping[str, Any]) -> ValidationOutcome:
    """Validate ``raw`` against ``step``.

    Field-level rules run first; cross-field rules only see input whose
    fields all passed, so a field never carries more than one message.
    """
    data = dict(raw)
    # whatever sits behind a toggle answered "no" is reset, never format-checked
    for rule in step.rules:
        if isinstance(rule, RequiredWhen):
            for name in rule.inactive(data):
                data.pop(name, None)
    try:
        parsed = step.model.model_validate(data)
    except ValidationError as exc:
        errors: Dict[str, str] = {}
        for error in exc.errors():
            path = ".".join(str(part) for part in error["loc"])
            errors.setdefault(path, _error_key(error))
        logger.debug("Validation failed on %s: %s", step.route, sorted(errors))
        return ValidationOutcome(errors=errors)

    values = parsed.model_dump()
    failures = evaluate_rules(step.rules, values)
    if failures:
        return ValidationOutcome(errors={f.field: f.key for f in failures})
    return ValidationOutcome(values=values)
