import pytest

from core.controller import StepController
from core.flows import FLOWS
from core.schema import GROUP, NUMBER
from core.steps import FORM, STEPS, UnknownStepError, get_step

from sample_data import fill

FORM_STEPS = [step for flow in FLOWS.values() for step in flow.steps if step.kind == FORM]


def _blank_cases():
    for step in FORM_STEPS:
        for spec in step.fields:
            if spec.kind == GROUP:
                for child in spec.children:
                    if child.is_required:
                        yield step.route, f"{spec.name}.{child.name}", "", child.required
            elif spec.kind == NUMBER:
                if spec.is_required and (spec.min_value or 0) > 0:
                    yield step.route, spec.name, 0, spec.required
            elif spec.is_required:
                yield step.route, spec.name, "", spec.required


@pytest.mark.parametrize("route", [step.route for step in FORM_STEPS])
def test_valid_input_merges_declared_keys_and_advances(route, store, nav, tr):
    step = get_step(route)
    nav.push(route)
    ctl = StepController(step, store, nav, tr)
    fill(ctl)
    assert ctl.submit(), ctl.errors or ctl.file_error
    assert nav.path == step.next_route
    assert set(ctl.submitted) == set(step.draft_keys)
    draft = store.load()
    for key in step.draft_keys:
        assert draft[key] == ctl.submitted[key]


@pytest.mark.parametrize("route,path,blank,key", list(_blank_cases()))
def test_blank_required_field_blocks(route, path, blank, key, store, nav, tr):
    step = get_step(route)
    nav.push(route)
    ctl = StepController(step, store, nav, tr)
    fill(ctl)
    ctl.edit(path, blank)
    assert not ctl.submit()
    assert ctl.errors == {path: tr(key)}
    assert nav.path == route
    assert store.load() == {}


def test_flows_chain_next_routes():
    for flow in FLOWS.values():
        routes = flow.routes + (flow.terminal,)
        for step, following in zip(flow.steps, routes[1:]):
            assert step.next_route == following


def test_progress_positions():
    new = [step.position for step in FLOWS["new"].steps]
    assert new == list(range(1, 12))
    renewal = [(step.position, step.total) for step in FLOWS["renewal"].steps]
    assert renewal == [(i, 7) for i in range(1, 8)]


def test_unknown_step():
    with pytest.raises(UnknownStepError):
        get_step("/new/step11")
    assert "/new/step11" not in STEPS
