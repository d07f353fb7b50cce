"""Declarative per-field rules and the pydantic models built from them.

Every wizard step declares its inputs as a tuple of :class:`FieldSpec`.
:func:`build_model` turns that tuple into a pydantic model whose validators
apply the field-level rules in order and stop at the first failure for each
field. Error messages are translation keys carried in the error context.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from functools import partial
from typing import Annotated, Any, Dict, Optional, Tuple, Type, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, create_model
from pydantic_core import PydanticCustomError

from core.utils import coerce_number, is_blank, parse_iso_date

TEXT = "text"
TEXTAREA = "textarea"
PASSWORD = "password"
DATE = "date"
NUMBER = "number"
EMAIL = "email"
TEL = "tel"
SELECT = "select"
RADIO = "radio"
GROUP = "group"

CHOICE_KINDS = (SELECT, RADIO)

EMAIL_REGEX = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
PHONE_REGEX = r"^[0-9+\-]+$"

INVALID_DATE = "common.errors.invalidDate"
INVALID_NUMBER = "common.errors.invalidNumber"
INVALID_VALUE = "common.errors.invalid"

RULE_ERROR = "field_rule"


@dataclass(frozen=True)
class FieldSpec:
    """One input of a step.

    ``required``/``invalid``/``too_short`` are full translation keys. A field
    without ``required`` is optional: blank input passes, but a non-blank
    value still has to be well formed.
    """

    name: str
    kind: str = TEXT
    required: Optional[str] = None
    invalid: Optional[str] = None
    options: Tuple[str, ...] = ()
    pattern: Optional[str] = None
    min_length: int = 0
    too_short: Optional[str] = None
    min_value: Optional[float] = None
    default: Any = None
    children: Tuple["FieldSpec", ...] = ()

    @property
    def is_required(self) -> bool:
        return self.required is not None

    def empty_value(self) -> Any:
        """Value used when the draft has nothing stored for this field."""
        if self.default is not None:
            return self.default
        if self.kind == NUMBER:
            return 0
        if self.kind == GROUP:
            return {child.name: child.empty_value() for child in self.children}
        return ""


def rule_error(key: str) -> PydanticCustomError:
    return PydanticCustomError(RULE_ERROR, "{key}", {"key": key})


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _check_text(spec: FieldSpec, value: Any) -> Any:
    value = _to_text(value)
    if not isinstance(value, str):
        raise rule_error(spec.invalid or spec.required or INVALID_VALUE)
    if is_blank(value):
        if spec.required:
            raise rule_error(spec.required)
        return value
    if spec.kind == DATE and parse_iso_date(value) is None:
        raise rule_error(spec.invalid or INVALID_DATE)
    if spec.kind == EMAIL and not EMAIL_REGEX.match(value.strip()):
        raise rule_error(spec.invalid or INVALID_VALUE)
    if spec.pattern and not re.match(spec.pattern, value):
        raise rule_error(spec.invalid or INVALID_VALUE)
    if spec.kind in CHOICE_KINDS and spec.options and value not in spec.options:
        raise rule_error(spec.invalid or spec.required or INVALID_VALUE)
    if spec.min_length and len(value) < spec.min_length:
        raise rule_error(spec.too_short or spec.required or INVALID_VALUE)
    return value


def _check_number(spec: FieldSpec, value: Any) -> Union[int, float]:
    try:
        number = coerce_number(value)
    except (TypeError, ValueError):
        raise rule_error(spec.invalid or spec.required or INVALID_NUMBER) from None
    if spec.min_value is not None and number < spec.min_value:
        raise rule_error(spec.required or spec.invalid or INVALID_NUMBER)
    return number


def _check_group(value: Any) -> Any:
    if value is None:
        return {}
    return value


def _annotation(spec: FieldSpec):
    if spec.kind == GROUP:
        return Annotated[build_model(spec.children, spec.name), BeforeValidator(_check_group)]
    if spec.kind == NUMBER:
        return Annotated[Union[int, float], BeforeValidator(partial(_check_number, spec))]
    if spec.kind in CHOICE_KINDS and not spec.options:
        raise ValueError(f"choice field {spec.name!r} needs options")
    return Annotated[str, BeforeValidator(partial(_check_text, spec))]


class StepModel(BaseModel):
    model_config = ConfigDict(extra="ignore", validate_default=True)


def build_model(fields: Tuple[FieldSpec, ...], name: str = "Step") -> Type[StepModel]:
    """Create the pydantic model validating ``fields``."""
    definitions: Dict[str, Any] = {}
    for spec in fields:
        definitions[spec.name] = (_annotation(spec), spec.empty_value())
    model_name = "".join(part.capitalize() for part in re.split(r"[^a-zA-Z0-9]+", name) if part)
    return create_model(model_name or "Step", __base__=StepModel, **definitions)
