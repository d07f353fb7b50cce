"""Page controllers: hydrate from the draft, validate, merge, navigate.

One :class:`StepController` drives every form page from its
:class:`~core.steps.StepDefinition`. The documents and confirmation pages
of the flows get their own small controllers.
"""
from __future__ import annotations

import copy
import logging
import time
from typing import Any, Callable, Dict, List, Optional

from core import config
from core.checklist import ChecklistItem, build_document_checklist, missing_documents
from core.i18n import Translator
from core.navigation import Navigator
from core.schema import GROUP
from core.state import DraftStore
from core.steps import COMPLETE_ROUTE, FileInput, StepDefinition
from core.validator import validate_step
from visa_intake.models import Draft, FileRef, StepState

logger = logging.getLogger(__name__)


def _delay_for(step: StepDefinition) -> float:
    if not step.delay_setting:
        return 0.0
    return float(getattr(config, step.delay_setting, 0) or 0)


def _slot(step: StepDefinition, name: str) -> FileInput:
    for slot in step.files:
        if slot.name == name:
            return slot
    raise KeyError(name)


class StepController:
    """Pristine -> Editing -> Submitting -> Advanced (or back to Editing)."""

    def __init__(
        self,
        step: StepDefinition,
        store: DraftStore,
        navigator: Navigator,
        translator: Optional[Translator] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.step = step
        self.store = store
        self.navigator = navigator
        self.translator = translator or Translator(navigator.locale)
        self.sleep = sleep
        self.hydrate()

    def hydrate(self) -> None:
        """Load this step's fields from the draft; absent fields get defaults."""
        draft = self.store.load() if self.step.persist else {}
        values: Dict[str, Any] = {}
        for spec in self.step.fields:
            stored = draft.get(spec.name)
            if spec.kind == GROUP:
                group = spec.empty_value()
                if isinstance(stored, dict):
                    group.update({k: v for k, v in stored.items() if k in group})
                values[spec.name] = group
            else:
                values[spec.name] = spec.empty_value() if stored is None else stored
        self.values = values
        self.baseline = copy.deepcopy(values)
        self.hydrated_files: Dict[str, Optional[str]] = {
            slot.name: draft.get(slot.draft_key) for slot in self.step.files
        }
        self.picked: Dict[str, Optional[FileRef]] = {}
        self.errors: Dict[str, str] = {}
        self.file_error: Optional[str] = None
        self.submitted: Optional[Draft] = None
        self.state = StepState.PRISTINE

    def _touch(self) -> None:
        dirty = self.values != self.baseline or any(self.picked.values())
        self.state = StepState.EDITING if dirty else StepState.PRISTINE

    def edit(self, name: str, value: Any) -> None:
        """Set a field; ``group.child`` addresses an input inside a group."""
        if "." in name:
            group, child = name.split(".", 1)
            self.values[group] = {**self.values[group], child: value}
        else:
            self.values[name] = value
        self._touch()

    def set_file(self, slot_name: str, file: Optional[FileRef]) -> None:
        """Record the picker result for a slot; ``None`` means it was cleared."""
        _slot(self.step, slot_name)
        self.picked[slot_name] = file
        self._touch()

    def file_name(self, slot_name: str) -> Optional[str]:
        picked = self.picked.get(slot_name)
        if picked is not None:
            return picked.name
        return self.hydrated_files.get(slot_name)

    def preview(self, slot_name: str) -> Optional[FileRef]:
        """The newly picked file when it can be previewed as an image."""
        picked = self.picked.get(slot_name)
        if picked is not None and picked.is_image:
            return picked
        return None

    def _check_files(self, values: Dict[str, Any]) -> Optional[str]:
        missing = [
            slot
            for slot in self.step.files
            if slot.is_required(values) and not self.file_name(slot.name)
        ]
        if not missing:
            return None
        if self.step.files_error:
            sep = self.translator("common.listSeparator")
            names = sep.join(self.translator(slot.error) for slot in missing)
            return self.translator(self.step.files_error, files=names)
        return self.translator(missing[0].error)

    def submit(self) -> bool:
        """Validate, merge and navigate. Returns ``True`` when the page advanced."""
        self.state = StepState.SUBMITTING
        outcome = validate_step(self.step, self.values)
        if not outcome.ok:
            self.errors = {path: self.translator(key) for path, key in outcome.errors.items()}
            self.file_error = None
            self.state = StepState.EDITING
            return False
        self.errors = {}
        self.file_error = self._check_files(outcome.values)
        if self.file_error:
            self.state = StepState.EDITING
            return False

        partial: Draft = dict(outcome.values)
        for slot in self.step.files:
            partial[slot.draft_key] = self.file_name(slot.name)
        if self.step.persist:
            self.store.merge(partial, source=self.step.route)
        self.submitted = partial

        delay = _delay_for(self.step)
        if delay > 0:
            self.sleep(delay)
        self.navigator.push(self.step.next_route)
        self.state = StepState.ADVANCED
        return True

    def back(self) -> str:
        """Leave the page without saving."""
        return self.navigator.back()


class DocumentsController:
    """Upload page: every pick is merged into the draft straight away."""

    def __init__(self, step: StepDefinition, store: DraftStore, navigator: Navigator) -> None:
        self.step = step
        self.store = store
        self.navigator = navigator

    def checklist(self) -> List[ChecklistItem]:
        return build_document_checklist(self.step, self.store.load())

    def set_file(self, slot_name: str, file: Optional[FileRef]) -> None:
        slot = _slot(self.step, slot_name)
        self.store.merge({slot.draft_key: file.name if file else None}, source=self.step.route)

    def can_continue(self) -> bool:
        return not missing_documents(self.step, self.store.load())

    def next(self) -> bool:
        if not self.can_continue():
            return False
        self.navigator.push(self.step.next_route)
        return True

    def back(self) -> str:
        return self.navigator.back()


class ConfirmController:
    """Read-only review with the final (simulated) submission."""

    def __init__(
        self,
        step: StepDefinition,
        store: DraftStore,
        navigator: Navigator,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.step = step
        self.store = store
        self.navigator = navigator
        self.sleep = sleep

    @property
    def draft(self) -> Draft:
        return self.store.load()

    def checklist(self) -> List[ChecklistItem]:
        return build_document_checklist(self.step, self.draft)

    def missing(self) -> List[FileInput]:
        return missing_documents(self.step, self.draft)

    def can_submit(self) -> bool:
        return not self.missing()

    def submit(self) -> bool:
        draft = self.draft
        if self.missing():
            logger.warning("Submission blocked on %s: documents missing", self.step.route)
            return False
        logger.info("Submitting application from %s (%d fields)", self.step.route, len(draft))
        logger.debug("Submitted fields: %s", ", ".join(sorted(draft)))
        delay = _delay_for(self.step)
        if delay > 0:
            self.sleep(delay)
        if config.CLEAR_DRAFT_ON_COMPLETE:
            self.store.clear()
        self.navigator.push(COMPLETE_ROUTE)
        return True

    def back(self) -> str:
        return self.navigator.back()
