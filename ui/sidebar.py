import pandas as pd
import streamlit as st

from ui.components import get_audit_log, get_navigator, session_translator


def render_change_log_sidebar():
    """Sidebar with the draft change log and the current route."""
    tr = session_translator()
    nav = get_navigator()
    st.sidebar.caption(nav.href())
    st.sidebar.header(tr("debug.changeLog"))
    entries = get_audit_log().as_dict()
    if not entries:
        st.sidebar.caption(tr("debug.empty"))
        return
    df = pd.DataFrame(entries)
    df["old"] = df["old"].map(lambda v: "" if v is None else str(v))
    df["new"] = df["new"].map(lambda v: "" if v is None else str(v))
    st.sidebar.dataframe(df[["timestamp", "source", "field", "old", "new"]], hide_index=True)
