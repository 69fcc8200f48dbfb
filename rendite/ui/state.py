"""Session state management for the Streamlit app.

Provides a centralized interface for the calculator's session state:
current inputs, display level, and hydration from a share link.
"""

from __future__ import annotations

from typing import Any, TypeVar

import streamlit as st

from rendite.application.services.share_link import QUERY_PARAM, decode_share_state
from rendite.core.exceptions import ShareLinkError
from rendite.core.logging import get_logger
from rendite.core.settings import get_settings
from rendite.domain.models.parameters import ParameterSet, demo_data, zero_state

T = TypeVar("T")

log = get_logger(__name__)


def get_state(key: str, default: T) -> T:
    """Get a value from session state, storing the default if absent."""
    if key not in st.session_state:
        st.session_state[key] = default
    return st.session_state[key]


def set_state(key: str, value: Any) -> None:
    """Set a value in session state."""
    st.session_state[key] = value


class SessionManager:
    """Manages all session state for the calculator."""

    PARAMS_KEY = "params"
    LEVEL_KEY = "level"
    NOTICE_KEY = "notice"

    @classmethod
    def initialize(cls) -> None:
        """Initialize state once per session, hydrating from a share link."""
        if cls.PARAMS_KEY in st.session_state:
            return

        set_state(cls.PARAMS_KEY, zero_state())
        set_state(cls.LEVEL_KEY, get_settings().default_level)

        token = st.query_params.get(QUERY_PARAM)
        if not token:
            return
        try:
            params, level = decode_share_state(token)
        except ShareLinkError as e:
            log.warning("share_link_rejected", error=str(e))
            cls.notify("error", "Share-Link konnte nicht geladen werden.")
            return

        set_state(cls.PARAMS_KEY, params)
        set_state(cls.LEVEL_KEY, level)
        cls.notify("success", "Kalkulation aus Share-Link geladen!")

    @classmethod
    def get_params(cls) -> ParameterSet:
        return get_state(cls.PARAMS_KEY, zero_state())

    @classmethod
    def set_params(cls, params: ParameterSet) -> None:
        set_state(cls.PARAMS_KEY, params)

    @classmethod
    def get_level(cls) -> str:
        return get_state(cls.LEVEL_KEY, get_settings().default_level)

    @classmethod
    def set_level(cls, level: str) -> None:
        set_state(cls.LEVEL_KEY, level)

    @classmethod
    def _clear_widgets(cls) -> None:
        """Forget input widget values so they re-read the new params."""
        for key in [k for k in st.session_state.keys() if str(k).startswith("in_")]:
            del st.session_state[key]

    @classmethod
    def reset(cls) -> None:
        """Back to the zero state; drops any share token from the URL."""
        cls._clear_widgets()
        set_state(cls.PARAMS_KEY, zero_state())
        set_state(cls.LEVEL_KEY, "simple")
        st.query_params.clear()
        cls.notify("info", "Rechner zurückgesetzt.")

    @classmethod
    def load_demo(cls) -> None:
        cls._clear_widgets()
        set_state(cls.PARAMS_KEY, demo_data())
        cls.notify("success", "Beispieldaten geladen!")

    @classmethod
    def notify(cls, kind: str, message: str) -> None:
        """Queue a message shown on the next render."""
        set_state(cls.NOTICE_KEY, (kind, message))

    @classmethod
    def pop_notice(cls) -> tuple[str, str] | None:
        return st.session_state.pop(cls.NOTICE_KEY, None)
