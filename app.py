"""Main Application Entry Point.

Run with ``streamlit run app.py``.
"""

import os
import sys

import streamlit as st

# Add project root to path if not present (for running from root)
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from rendite.core.logging import configure_logging
from rendite.ui.pages.main import render_main_page


def main() -> None:
    """Main application entry point."""
    st.set_page_config(
        page_title="Rendite-Kalkulator",
        page_icon="🏢",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    configure_logging()
    render_main_page()


if __name__ == "__main__":
    main()
