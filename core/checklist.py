"""Document checklist helpers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping

from core.steps import FileInput, StepDefinition


@dataclass(frozen=True)
class ChecklistItem:
    slot: FileInput
    required: bool
    file_name: str

    @property
    def uploaded(self) -> bool:
        return bool(self.file_name)

    @property
    def missing(self) -> bool:
        return self.required and not self.uploaded

    @property
    def shown(self) -> bool:
        """Optional slots stay hidden on the upload page until they hold a file."""
        return self.required or self.uploaded


def build_document_checklist(step: StepDefinition, draft: Mapping[str, Any]) -> List[ChecklistItem]:
    """Return one item per file slot of ``step`` evaluated against ``draft``."""
    items: List[ChecklistItem] = []
    for slot in step.files:
        name = draft.get(slot.draft_key) or ""
        items.append(ChecklistItem(slot=slot, required=slot.is_required(draft), file_name=str(name)))
    return items


def missing_documents(step: StepDefinition, draft: Mapping[str, Any]) -> List[FileInput]:
    return [item.slot for item in build_document_checklist(step, draft) if item.missing]


def all_required_uploaded(step: StepDefinition, draft: Mapping[str, Any]) -> bool:
    return not missing_documents(step, draft)
