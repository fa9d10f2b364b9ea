# MIT License
"""Named scenarios and the store they are saved in.

A :class:`Scenario` bundles a complete :class:`ProjectConfig` with the
results last computed for it.  Stores are keyed by project id and
scenario id.  The engine only depends on the :class:`ScenarioStore`
protocol; :class:`InMemoryScenarioStore` backs the Streamlit app and the
tests.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Protocol, Union

from pydantic import BaseModel, Field

from .params import ProjectConfig
from .results import ConstructionResults, Results

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ScenarioNotFoundError(KeyError):
    """Raised when a project has no scenario with the requested id."""


class Scenario(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    project_id: str
    name: str = Field(..., min_length=1)
    description: str = ""
    config: ProjectConfig = Field(default_factory=ProjectConfig)
    results: Optional[Union[Results, ConstructionResults]] = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)


class ScenarioStore(Protocol):
    def save(self, project_id: str, scenario: Scenario) -> Scenario: ...

    def list(self, project_id: str) -> List[Scenario]: ...

    def get(self, project_id: str, scenario_id: str) -> Scenario: ...

    def update(self, project_id: str, scenario_id: str, scenario: Scenario) -> Scenario: ...

    def delete(self, project_id: str, scenario_id: str) -> None: ...

    def duplicate(self, project_id: str, scenario_id: str, name: Optional[str] = None) -> Scenario: ...


class InMemoryScenarioStore:
    """Dictionary backed :class:`ScenarioStore`.

    Scenarios are stored as JSON strings, so callers never share mutable
    objects with the store and everything saved is known to round-trip.
    """

    def __init__(self) -> None:
        self._data: Dict[str, Dict[str, str]] = {}

    def _put(self, scenario: Scenario) -> Scenario:
        self._data.setdefault(scenario.project_id, {})[scenario.id] = scenario.model_dump_json()
        return scenario

    def save(self, project_id: str, scenario: Scenario) -> Scenario:
        now = _now()
        stored = scenario.model_copy(update={"project_id": project_id, "created_at": now, "updated_at": now})
        logger.info("Saving scenario %s (%s) for project %s", stored.id, stored.name, project_id)
        return self._put(stored)

    def list(self, project_id: str) -> List[Scenario]:
        scenarios = [Scenario.model_validate_json(raw) for raw in self._data.get(project_id, {}).values()]
        return sorted(scenarios, key=lambda s: s.created_at)

    def get(self, project_id: str, scenario_id: str) -> Scenario:
        try:
            raw = self._data[project_id][scenario_id]
        except KeyError:
            raise ScenarioNotFoundError(f"{project_id}/{scenario_id}") from None
        return Scenario.model_validate_json(raw)

    def update(self, project_id: str, scenario_id: str, scenario: Scenario) -> Scenario:
        current = self.get(project_id, scenario_id)
        stored = scenario.model_copy(update={
            "id": scenario_id,
            "project_id": project_id,
            "created_at": current.created_at,
            "updated_at": _now(),
        })
        return self._put(stored)

    def delete(self, project_id: str, scenario_id: str) -> None:
        self.get(project_id, scenario_id)
        del self._data[project_id][scenario_id]
        logger.info("Deleted scenario %s for project %s", scenario_id, project_id)

    def duplicate(self, project_id: str, scenario_id: str, name: Optional[str] = None) -> Scenario:
        source = self.get(project_id, scenario_id)
        copy = source.model_copy(update={
            "id": uuid.uuid4().hex,
            "name": name or f"{source.name} (Copy)",
        })
        return self.save(project_id, copy)
