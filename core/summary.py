"""Review data for the confirmation pages (table, CSV)."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping

import pandas as pd

from core.i18n import Translator
from core.schema import CHOICE_KINDS, GROUP, FieldSpec
from core.steps import FORM, StepDefinition
from core.utils import is_blank

COLUMNS = ["section", "field", "value"]


def field_label(tr: Translator, step: StepDefinition, name: str) -> str:
    return tr(f"{step.namespace}.fields.{name}")


def group_label(tr: Translator, step: StepDefinition, name: str) -> str:
    return tr(f"{step.namespace}.groups.{name}")


def option_label(tr: Translator, step: StepDefinition, field: str, value: Any) -> str:
    """Localized caption of a choice value; yes/no fall back to ``common.options``."""
    for key in (f"{step.namespace}.options.{field}.{value}", f"common.options.{value}"):
        if tr.has(key):
            return tr(key)
    return str(value)


def display_value(tr: Translator, step: StepDefinition, spec: FieldSpec, value: Any) -> str:
    if value is None or (isinstance(value, str) and is_blank(value)):
        return tr("common.notEntered")
    if spec.kind in CHOICE_KINDS:
        return option_label(tr, step, spec.name, value)
    return str(value)


def _step_rows(tr: Translator, step: StepDefinition, draft: Mapping[str, Any]) -> List[Dict[str, str]]:
    section = tr(f"{step.namespace}.title")
    rows: List[Dict[str, str]] = []
    for spec in step.fields:
        value = draft.get(spec.name)
        if spec.kind == GROUP:
            group = value if isinstance(value, dict) else {}
            title = group_label(tr, step, spec.name)
            for child in spec.children:
                rows.append(
                    {
                        "section": section,
                        "field": f"{title} / {field_label(tr, step, child.name)}",
                        "value": display_value(tr, step, child, group.get(child.name)),
                    }
                )
            continue
        rows.append(
            {
                "section": section,
                "field": field_label(tr, step, spec.name),
                "value": display_value(tr, step, spec, value),
            }
        )
    for slot in step.files:
        name = draft.get(slot.draft_key)
        rows.append(
            {
                "section": section,
                "field": tr(slot.label),
                "value": name or tr("common.notUploaded"),
            }
        )
    return rows


def review_rows(steps, draft: Mapping[str, Any], tr: Translator) -> List[Dict[str, str]]:
    """One row per field and file slot of the form steps in ``steps``."""
    rows: List[Dict[str, str]] = []
    for step in steps:
        if step.kind != FORM:
            continue
        rows.extend(_step_rows(tr, step, draft))
    return rows


def summary_frame(steps, draft: Mapping[str, Any], tr: Translator) -> pd.DataFrame:
    df = pd.DataFrame(review_rows(steps, draft, tr), columns=COLUMNS)
    return df.rename(columns={c: tr(f"confirm.columns.{c}") for c in COLUMNS})


def summary_csv(df: pd.DataFrame) -> bytes:
    # BOM so spreadsheet apps detect UTF-8 for Japanese/Chinese text
    return df.to_csv(index=False).encode("utf-8-sig")
