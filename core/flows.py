"""The two application flows and the select-type entry point."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from core import steps
from core.navigation import Navigator
from core.state import DraftStore
from core.steps import COMPLETE_ROUTE, SELECT_TYPE, StepDefinition
from core.validator import ValidationOutcome, validate_step
from visa_intake.models import ApplicationType

logger = logging.getLogger(__name__)

APPLICATION_TYPE_KEY = "applicationType"


class UnknownFlowError(ValueError):
    """Raised for an application type other than ``new`` or ``renewal``."""


@dataclass(frozen=True)
class Flow:
    name: ApplicationType
    steps: Tuple[StepDefinition, ...]
    terminal: str = COMPLETE_ROUTE

    @property
    def first_route(self) -> str:
        return self.steps[0].route

    @property
    def routes(self) -> Tuple[str, ...]:
        return tuple(step.route for step in self.steps)

    def __contains__(self, route: str) -> bool:
        return route in self.routes


NEW_FLOW = Flow(
    "new",
    (
        steps.NEW_STEP1,
        steps.NEW_STEP2,
        steps.NEW_STEP3,
        steps.NEW_STEP4,
        steps.NEW_STEP5,
        steps.NEW_STEP6,
        steps.NEW_STEP7,
        steps.NEW_STEP8,
        steps.NEW_STEP9,
        steps.NEW_STEP10,
        steps.NEW_CONFIRM,
    ),
)

RENEWAL_FLOW = Flow(
    "renewal",
    (
        steps.RENEWAL_STEP1,
        steps.RENEWAL_STEP1B,
        steps.RENEWAL_STEP2,
        steps.RENEWAL_STEP3,
        steps.RENEWAL_STEP4,
        steps.RENEWAL_STEP5,
        steps.RENEWAL_STEP6,
    ),
)

FLOWS: Dict[str, Flow] = {flow.name: flow for flow in (NEW_FLOW, RENEWAL_FLOW)}


def get_flow(name: Any) -> Flow:
    try:
        return FLOWS[name]
    except (KeyError, TypeError):
        raise UnknownFlowError(f"Unknown application type: {name!r}") from None


def flow_for_route(route: str) -> Optional[Flow]:
    for flow in FLOWS.values():
        if route in flow:
            return flow
    return None


def progress(step: StepDefinition) -> float:
    """Percentage shown by the step indicator, clamped to 0..100."""
    if step.total <= 0:
        return 0.0
    pct = (step.position - 1) / step.total * 100
    return max(0.0, min(100.0, pct))


class FlowSelector:
    """Chooses a flow from the select-type page."""

    def __init__(self, store: DraftStore, navigator: Navigator) -> None:
        self.store = store
        self.navigator = navigator

    def select_flow(self, application_type: Any) -> Flow:
        flow = get_flow(application_type)
        current = self.store.load().get(APPLICATION_TYPE_KEY)
        if current and current != flow.name:
            logger.info("Switching from %s to %s; clearing draft", current, flow.name)
            self.store.clear()
        if current != flow.name:
            self.store.merge({APPLICATION_TYPE_KEY: flow.name}, source=SELECT_TYPE.route)
        self.navigator.push(flow.first_route)
        return flow

    def submit(self, raw: Mapping[str, Any]) -> ValidationOutcome:
        outcome = validate_step(SELECT_TYPE, raw)
        if outcome.ok:
            self.select_flow(outcome.values[APPLICATION_TYPE_KEY])
        return outcome
