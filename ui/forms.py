"""Generic form page rendered from a step definition."""
from datetime import date
from typing import Any

import streamlit as st

from core.controller import StepController
from core.schema import (
    DATE,
    EMAIL,
    GROUP,
    NUMBER,
    PASSWORD,
    RADIO,
    SELECT,
    TEXTAREA,
    FieldSpec,
)
from core.steps import StepDefinition
from core.summary import field_label, group_label, option_label
from core.utils import parse_iso_date
from ui.components import (
    get_navigator,
    get_store,
    render_file_input,
    render_step_indicator,
    required_mark,
    session_translator,
)

MIN_DATE = date(1900, 1, 1)
MAX_DATE = date(2100, 12, 31)


def get_controller(step: StepDefinition) -> StepController:
    """Reuse the controller while the route is unchanged; hydrate a new one otherwise."""
    ctl = st.session_state.get("step_controller")
    if ctl is None or ctl.step.route != step.route:
        ctl = StepController(step, get_store(), get_navigator(), session_translator())
        st.session_state["step_controller"] = ctl
    ctl.translator = session_translator()
    return ctl


def _render_input(step: StepDefinition, spec: FieldSpec, label: str, value: Any, key: str) -> Any:
    tr = session_translator()
    label = required_mark(label, spec.is_required, tr)
    if spec.kind == NUMBER:
        return st.number_input(label, value=float(value or 0), step=1.0, format="%g", key=key)
    if spec.kind == DATE:
        picked = st.date_input(
            label,
            value=parse_iso_date(value),
            min_value=MIN_DATE,
            max_value=MAX_DATE,
            key=key,
        )
        return picked.isoformat() if picked else ""
    if spec.kind == SELECT:
        options = [""] + list(spec.options)
        return st.selectbox(
            label,
            options,
            index=options.index(value) if value in options else 0,
            format_func=lambda v: tr("common.selectPlaceholder") if v == "" else option_label(tr, step, spec.name, v),
            key=key,
        )
    if spec.kind == RADIO:
        options = list(spec.options)
        picked = st.radio(
            label,
            options,
            index=options.index(value) if value in options else None,
            format_func=lambda v: option_label(tr, step, spec.name, v),
            horizontal=True,
            key=key,
        )
        return picked or ""
    if spec.kind == TEXTAREA:
        text = st.text_area(label, value=str(value or ""), key=key)
        if spec.min_length:
            st.caption(tr(f"{step.namespace}.hints.charCount", count=len(text)))
        return text
    kind = "password" if spec.kind == PASSWORD else "default"
    placeholder = "name@example.com" if spec.kind == EMAIL else None
    return st.text_input(label, value=str(value or ""), type=kind, placeholder=placeholder, key=key)


def _show_error(ctl: StepController, path: str) -> None:
    msg = ctl.errors.get(path)
    if msg:
        st.error(msg)


def render_step_page(step: StepDefinition) -> None:
    """Render a form step: inputs, file slots, inline errors and navigation."""
    ctl = get_controller(step)
    tr = ctl.translator
    st.header(tr(f"{step.namespace}.title"))
    render_step_indicator(step, tr)
    if tr.has(f"{step.namespace}.description"):
        st.caption(tr(f"{step.namespace}.description"))

    prefix = step.route.strip("/").replace("/", "_")
    edits = {}
    picks = {}
    with st.form(key=f"form_{prefix}"):
        for spec in step.fields:
            if spec.kind == GROUP:
                st.subheader(group_label(tr, step, spec.name))
                for child in spec.children:
                    path = f"{spec.name}.{child.name}"
                    edits[path] = _render_input(
                        step,
                        child,
                        field_label(tr, step, child.name),
                        ctl.values[spec.name].get(child.name),
                        key=f"{prefix}_{spec.name}_{child.name}",
                    )
                    _show_error(ctl, path)
                continue
            edits[spec.name] = _render_input(
                step,
                spec,
                field_label(tr, step, spec.name),
                ctl.values.get(spec.name),
                key=f"{prefix}_{spec.name}",
            )
            _show_error(ctl, spec.name)
        for slot in step.files:
            required = slot.is_required({**ctl.values, **edits})
            picks[slot.name] = render_file_input(
                slot,
                tr,
                key=f"{prefix}_file_{slot.name}",
                required=required,
                saved_name=ctl.hydrated_files.get(slot.name),
            )
        if ctl.file_error:
            st.error(ctl.file_error)
        label = tr(f"{step.namespace}.submit") if tr.has(f"{step.namespace}.submit") else tr("common.next")
        submitted = st.form_submit_button(label, type="primary")

    if step.position:
        if st.button(tr("common.back"), key=f"back_{prefix}"):
            ctl.back()
            st.rerun()

    if submitted:
        for name, value in edits.items():
            ctl.edit(name, value)
        for name, ref in picks.items():
            ctl.set_file(name, ref)
        if step.delay_setting:
            busy = f"{step.namespace}.loggingIn"
            with st.spinner(tr(busy) if tr.has(busy) else tr("common.submitting")):
                ctl.submit()
        else:
            ctl.submit()
        st.rerun()
