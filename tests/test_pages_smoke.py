"""Smoke tests for the Streamlit front end.

Page files have emoji names and are not importable as modules, so they
are compiled to catch syntax errors, and the inputs page is run headless
with Streamlit's AppTest.  The plot builders are exercised directly on
real results.  No Streamlit server is started.
"""

from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from carbon_engine.aggregate import calculate_config
from carbon_engine.params import ConstructionParams, LivestockParams, ProjectConfig, SoilParams
from carbon_engine.utils import load_preset
from carbon_engine import plots

ROOT = Path(__file__).resolve().parent.parent
PAGES = sorted((ROOT / "pages").glob("*.py"))
INPUTS_PAGE = ROOT / "pages" / "1_🌳_Project_Inputs.py"


@pytest.mark.parametrize("path", [ROOT / "app.py"] + PAGES, ids=lambda p: p.name)
def test_page_compiles(path):
    compile(path.read_text(encoding="utf-8"), str(path), "exec")


def test_credit_figures():
    res = calculate_config(ProjectConfig(params=LivestockParams(herd_size=10, use_additives=True, additive_efficiency=30)))
    for fig in (plots.fig_cashflow(res), plots.fig_npv(res), plots.fig_sequestration(res), plots.fig_cost_breakdown(res)):
        assert fig.layout.template is not None
    fig = plots.fig_livestock_intensity(res.livestock_metrics)
    assert list(fig.data[0].y) == pytest.approx([2500, 1750])


def test_construction_figures():
    res = calculate_config(ProjectConfig(params=ConstructionParams(solar_capacity_kw=20)))
    donut = plots.fig_construction_breakdown(res)
    assert list(donut.data[0].labels) == ["Embodied Carbon", "Operational Carbon", "Remaining Carbon"]
    assert len(plots.fig_construction_emissions(res).data) == 4


def _run_inputs_page(config):
    at = AppTest.from_file(str(INPUTS_PAGE), default_timeout=30)
    at.session_state["config"] = config
    at.run()
    assert not at.exception
    return at.session_state["config"]


@pytest.mark.parametrize("preset", ["livestock_dairy", "construction_office", "renewable_solar"])
def test_inputs_page_keeps_loaded_values(preset):
    cfg = load_preset(preset)
    assert _run_inputs_page(cfg).params == cfg.params


def test_inputs_page_keeps_fields_without_widgets():
    cfg = load_preset("construction_office")
    cfg = cfg.model_copy(update={"params": cfg.params.model_copy(update={"use_blending": True})})
    assert _run_inputs_page(cfg).params.use_blending


def test_inputs_page_accepts_long_horizons():
    cfg = ProjectConfig(params=SoilParams(), project_years=150, discount_rate=40)
    saved = _run_inputs_page(cfg)
    assert saved.project_years == 150 and saved.discount_rate == 40
