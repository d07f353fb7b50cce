"""Session-bound helpers shared by every page."""
from typing import Optional

import streamlit as st

from core.audit import AuditLog
from core.flows import progress
from core.i18n import Translator
from core.navigation import Navigator
from core.state import DraftStore, FileSlot
from core.steps import FileInput, StepDefinition
from visa_intake.models import FileRef


def get_navigator() -> Navigator:
    return Navigator(st.session_state)


def session_translator() -> Translator:
    """Translate a key based on current language preference."""
    return Translator(get_navigator().locale)


def get_audit_log() -> AuditLog:
    if "audit_log" not in st.session_state:
        st.session_state["audit_log"] = AuditLog()
    return st.session_state["audit_log"]


def get_store() -> DraftStore:
    if "draft_store" not in st.session_state:
        st.session_state["draft_store"] = DraftStore(FileSlot(), audit=get_audit_log())
    return st.session_state["draft_store"]


def render_step_indicator(step: StepDefinition, tr: Translator) -> None:
    if not step.total:
        return
    st.progress(int(progress(step)))
    st.caption(tr("common.stepOf", current=step.position, total=step.total))


def required_mark(label: str, required: bool, tr: Translator) -> str:
    return f"{label} *" if required else f"{label} ({tr('common.optional')})"


def to_file_ref(uploaded) -> Optional[FileRef]:
    if uploaded is None:
        return None
    return FileRef(name=uploaded.name, handle=uploaded)


def render_file_input(
    slot: FileInput,
    tr: Translator,
    key: str,
    required: bool,
    saved_name: Optional[str] = None,
    on_change=None,
    args=(),
) -> Optional[FileRef]:
    """File picker with an image preview and the previously saved name."""
    uploaded = st.file_uploader(
        required_mark(tr(slot.label), required, tr),
        type=list(slot.accept),
        key=key,
        on_change=on_change,
        args=args,
    )
    ref = to_file_ref(uploaded)
    if ref is not None and ref.is_image:
        st.image(ref.handle, width=240)
    elif ref is None and saved_name:
        st.caption(tr("common.currentFile", name=saved_name))
    return ref
