# MIT License
from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from pydantic import ValidationError

from .params import ProjectConfig

logger = logging.getLogger(__name__)

PRESETS_DIR = Path(__file__).resolve().parent.parent / "presets"

# factors to convert one unit into another, per unit type
UNIT_CONVERSIONS: Dict[str, Dict[str, Dict[str, float]]] = {
    "mass": {
        "kg": {"lbs": 2.20462, "tonnes": 0.001},
        "lbs": {"kg": 0.453592, "tonnes": 0.000453592},
        "tonnes": {"kg": 1000.0, "lbs": 2204.62},
    },
    "volume": {
        "m3": {"ft3": 35.3147, "yds3": 1.30795},
        "ft3": {"m3": 0.0283168, "yds3": 0.037037},
        "yds3": {"m3": 0.764555, "ft3": 27.0},
    },
    "area": {
        "m2": {"ft2": 10.7639, "sqyd": 1.19599},
        "ft2": {"m2": 0.092903, "sqyd": 0.111111},
        "sqyd": {"m2": 0.836127, "ft2": 9.0},
    },
    "length": {
        "m": {"ft": 3.28084, "inch": 39.3701},
        "ft": {"m": 0.3048, "inch": 12.0},
        "inch": {"m": 0.0254, "ft": 0.0833333},
    },
    "energy": {
        "kWh": {"MJ": 3.6, "BTU": 3412.14},
        "MJ": {"kWh": 0.277778, "BTU": 947.817},
        "BTU": {"kWh": 0.000293071, "MJ": 0.00105506},
    },
}


def config_hash(config: ProjectConfig) -> str:
    """Compute a stable hash for a ProjectConfig.

    Serialises the config to JSON (with sorted keys) and computes a
    SHA256 hash.  Used by front ends to identify unique inputs for
    caching.

    Parameters
    ----------
    config:
        ProjectConfig instance.

    Returns
    -------
    str
        Hexadecimal string representation of the hash.
    """
    cfg_json = config.model_dump(mode="json", exclude_none=True)
    # ensure deterministic key ordering
    payload = json.dumps(cfg_json, sort_keys=True).encode("utf-8")
    return hashlib.sha256(payload).hexdigest()


def convert_value(value: float, from_unit: Optional[str], to_unit: str, unit_type: str) -> float:
    """Convert ``value`` between two units of the same type.

    Unknown units leave the value unchanged.
    """
    if not from_unit or from_unit == to_unit:
        return value
    factor = UNIT_CONVERSIONS.get(unit_type, {}).get(from_unit, {}).get(to_unit)
    if factor is None:
        logger.info("No conversion from %s to %s (%s), value kept", from_unit, to_unit, unit_type)
        return value
    return value * factor


def safe_div(num: float, den: float) -> float:
    """Divide, returning 0.0 when the denominator is zero."""
    return num / den if den else 0.0


def kg_to_tonnes(kg: float) -> float:
    """Convert kilograms to metric tonnes."""
    return kg / 1000.0


def load_preset(name: str, presets_dir: Union[str, Path, None] = None) -> ProjectConfig:
    """Load a preset ProjectConfig from the presets folder.

    If the file does not exist or is malformed, returns the default
    ProjectConfig.
    """
    path = Path(presets_dir or PRESETS_DIR) / f"{name}.json"
    try:
        return ProjectConfig.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as exc:
        logger.warning("Could not load preset %s (%s), using defaults", name, exc)
        return ProjectConfig()
