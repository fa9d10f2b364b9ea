"""Tests for input validation, presets and utility helpers."""

import math

import pytest
from pydantic import ValidationError

from carbon_engine.params import CustomTypeEntry, ProjectConfig, SoilParams
from carbon_engine.utils import config_hash, convert_value, load_preset, safe_div


def test_custom_type_validation():
    with pytest.raises(ValidationError):
        CustomTypeEntry(id="x", name="   ", sequestration_rate=1)
    with pytest.raises(ValidationError):
        CustomTypeEntry(id="x", name="X", sequestration_rate=-1)
    with pytest.raises(ValidationError):
        CustomTypeEntry(id="x", name="X", sequestration_rate="fast")
    assert CustomTypeEntry(id="x", name="  Teak ", sequestration_rate="4.5").name == "Teak"


def test_project_type_discriminator():
    cfg = ProjectConfig.model_validate({"params": {"project_type": "soil", "project_size": 12}})
    assert isinstance(cfg.params, SoilParams)
    with pytest.raises(ValidationError):
        ProjectConfig.model_validate({"params": {"project_type": "asteroid"}})


def test_negative_size_rejected():
    with pytest.raises(ValidationError):
        SoilParams(project_size=-1)


def test_config_hash_is_stable():
    a = ProjectConfig(name="A")
    assert config_hash(a) == config_hash(ProjectConfig(name="A"))
    assert config_hash(a) != config_hash(ProjectConfig(name="B"))


def test_convert_value():
    assert math.isclose(convert_value(2000, "kg", "tonnes", "mass"), 2.0)
    assert math.isclose(convert_value(1, "yds3", "m3", "volume"), 0.764555)
    assert convert_value(5, None, "m3", "volume") == 5
    assert convert_value(5, "bushel", "m3", "volume") == 5


def test_safe_div():
    assert safe_div(1, 0) == 0
    assert safe_div(1, 4) == 0.25


def test_load_presets():
    for name in ["forestry_pine", "livestock_dairy", "renewable_solar", "construction_office"]:
        cfg = load_preset(name)
        assert cfg != ProjectConfig(), name


def test_missing_preset_falls_back_to_default(tmp_path):
    assert load_preset("does_not_exist") == ProjectConfig()
    (tmp_path / "broken.json").write_text("{not json")
    assert load_preset("broken", presets_dir=tmp_path) == ProjectConfig()
