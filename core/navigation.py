"""Route history and locale for the single-page wizard.

State lives in a mutable mapping (``st.session_state`` in the app, a plain
dict in tests) so it survives Streamlit reruns.
"""
from __future__ import annotations

import logging
from typing import List, MutableMapping, Optional

from core import config
from core.i18n import normalize_locale

logger = logging.getLogger(__name__)

HISTORY_KEY = "route_history"
LOCALE_KEY = "lang"


class Navigator:
    def __init__(self, state: MutableMapping, home: str = "/") -> None:
        self.state = state
        self.home = home
        if not state.get(HISTORY_KEY):
            state[HISTORY_KEY] = [home]
        if LOCALE_KEY not in state:
            state[LOCALE_KEY] = config.DEFAULT_LOCALE

    @property
    def history(self) -> List[str]:
        return self.state[HISTORY_KEY]

    @property
    def path(self) -> str:
        return self.history[-1]

    @property
    def locale(self) -> str:
        return normalize_locale(self.state.get(LOCALE_KEY))

    def set_locale(self, lang: str) -> None:
        self.state[LOCALE_KEY] = normalize_locale(lang)

    def push(self, path: str) -> None:
        logger.info("Navigate %s -> %s", self.path, path)
        self.state[HISTORY_KEY] = self.history + [path]

    def back(self) -> str:
        """Return to the previous route (stays home when there is none)."""
        history = self.history
        if len(history) > 1:
            history = history[:-1]
        else:
            history = [self.home]
        self.state[HISTORY_KEY] = history
        return history[-1]

    def replace(self, path: str, locale: Optional[str] = None) -> None:
        """Swap the current route in place, optionally switching the locale."""
        if locale is not None:
            self.set_locale(locale)
        self.state[HISTORY_KEY] = self.history[:-1] + [path]

    def reset(self, path: Optional[str] = None) -> None:
        """Start a fresh history at ``path`` (home by default)."""
        self.state[HISTORY_KEY] = [path or self.home]

    def href(self, path: Optional[str] = None) -> str:
        return f"/{self.locale}{path or self.path}"
