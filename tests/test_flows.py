import pytest

from core.flows import (
    FLOWS,
    FlowSelector,
    UnknownFlowError,
    flow_for_route,
    get_flow,
    progress,
)
from core.steps import NEW_CONFIRM, NEW_STEP1, NEW_STEP10, RENEWAL_STEP6, StepDefinition


def test_select_new_flow(store, nav):
    flow = FlowSelector(store, nav).select_flow("new")
    assert flow is FLOWS["new"]
    assert nav.path == "/new/step1"
    assert store.load() == {"applicationType": "new"}


def test_select_renewal_flow(store, nav):
    FlowSelector(store, nav).select_flow("renewal")
    assert nav.path == "/renewal/step1"


def test_unknown_flow(store, nav):
    with pytest.raises(UnknownFlowError):
        FlowSelector(store, nav).select_flow("tourist")
    with pytest.raises(ValueError):
        get_flow(None)
    assert nav.path == "/"


def test_switching_flow_clears_draft(store, nav):
    selector = FlowSelector(store, nav)
    selector.select_flow("new")
    store.merge({"nameRomaji": "Nguyen Van An", "address": "Hanoi"})
    selector.select_flow("renewal")
    assert store.load() == {"applicationType": "renewal"}


def test_reselecting_same_flow_keeps_draft(store, nav):
    selector = FlowSelector(store, nav)
    selector.select_flow("new")
    store.merge({"nameRomaji": "Nguyen Van An"})
    selector.select_flow("new")
    assert store.load()["nameRomaji"] == "Nguyen Van An"


def test_submit_validates_choice(store, nav):
    selector = FlowSelector(store, nav)
    out = selector.submit({"applicationType": ""})
    assert out.errors == {"applicationType": "selectType.errors.selectType"}
    assert nav.path == "/"
    assert selector.submit({"applicationType": "renewal"}).ok
    assert nav.path == "/renewal/step1"


def test_progress():
    assert progress(NEW_STEP1) == 0
    assert progress(NEW_STEP10) == pytest.approx(90)
    assert progress(NEW_CONFIRM) == pytest.approx(10 / 11 * 100)
    assert progress(RENEWAL_STEP6) == pytest.approx(6 / 7 * 100)
    assert progress(StepDefinition(route="/x", namespace="x", position=20, total=10)) == 100
    assert progress(StepDefinition(route="/y", namespace="y")) == 0


def test_flow_for_route():
    assert flow_for_route("/renewal/step1b").name == "renewal"
    assert flow_for_route("/new/confirm").name == "new"
    assert flow_for_route("/login") is None
