"""Streamlit entry point for the carbon project dashboard.

This script configures logging, sets up the session state and provides
a preset gallery.  Inputs, results and saved scenarios live on the pages
under the `pages/` directory.
"""

import logging

import streamlit as st

from carbon_engine.params import ProjectConfig
from carbon_engine.scenarios import InMemoryScenarioStore
from carbon_engine.utils import load_preset

st.set_page_config(page_title="Carbon Project Dashboard", layout="wide")

PRESETS = [
    "forestry_pine",
    "livestock_dairy",
    "renewable_solar",
    "construction_office",
]


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    # --- SESSION SETUP ------------------------------------------------------
    if "config" not in st.session_state:
        st.session_state.config = ProjectConfig()
    if "store" not in st.session_state:
        st.session_state.store = InMemoryScenarioStore()
    st.session_state.setdefault("project_id", "default")

    # --- SIDEBAR: PRESETS ---------------------------------------------------
    st.sidebar.header("Load Preset Project")
    preset_choice = st.sidebar.selectbox("Preset", ["Default"] + PRESETS)
    if st.sidebar.button("Load preset"):
        if preset_choice == "Default":
            st.session_state.config = ProjectConfig()
        else:
            st.session_state.config = load_preset(preset_choice)
        st.sidebar.success(f"Loaded {preset_choice}")

    st.sidebar.markdown(
        """
        **Next step:**
        Go to **Project Inputs** (page menu) to configure the project,
        then open **Results** for the cash flow and financial metrics.
        """
    )

    # --- MAIN PAGE ----------------------------------------------------------
    st.title("Carbon Project Dashboard")
    config: ProjectConfig = st.session_state.config
    st.subheader(f"Active project: {config.name}")

    col1, col2, col3 = st.columns(3)
    col1.metric("Project type", config.params.project_type)
    col2.metric("Horizon", f"{config.project_years} years")
    col3.metric("Discount rate", f"{config.discount_rate:g}%")

    st.markdown(
        """
        This dashboard estimates the carbon impact and the economics of
        a project:

        - **Credit projects** (forestry, soil, blue carbon, REDD+,
          renewable energy and livestock methane reduction) sell carbon
          credits.  Results include yearly cash flows, NPV, IRR, ROI and
          the break-even year.
        - **Green construction** compares a low-carbon building with a
          standard one and reports embodied and operational savings with
          a simple payback period.

        Every change on the inputs page recomputes the results; the same
        inputs always give the same numbers.
        """
    )


if __name__ == "__main__":
    main()
