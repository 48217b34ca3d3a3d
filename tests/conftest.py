"""Test fixtures for cortex-scoring-engine.

Provides reusable context profiles, pulse answer maps and an in-memory
repository satisfying ``IAssessmentRepository`` for service tests.
"""

import copy
import uuid
from typing import Any

import pytest

from cortex_scoring_engine.core.models import ContextProfile


# ---------------------------------------------------------------------------
# Context profiles
# ---------------------------------------------------------------------------


@pytest.fixture()
def neutral_profile() -> ContextProfile:
    """Profile at which no gate or content tag fires."""
    return ContextProfile()


@pytest.fixture()
def regulated_profile() -> ContextProfile:
    """Heavily regulated, safety-critical organisation."""
    return ContextProfile(regulatory_intensity=4, safety_criticality=4)


@pytest.fixture()
def demanding_profile() -> ContextProfile:
    """Profile that crosses every threshold."""
    return ContextProfile(
        regulatory_intensity=3,
        data_sensitivity=3,
        safety_criticality=3,
        brand_exposure=3,
        clock_speed=3,
        latency_edge=3,
        scale_throughput=3,
        data_advantage=3,
        build_readiness=1,
        finops_priority=3,
        procurement_constraints=True,
        edge_operations=True,
    )


@pytest.fixture()
def raw_profile() -> dict[str, Any]:
    """A raw intake payload as it arrives from a JSON request body."""
    return {
        "regulatory_intensity": 3,
        "data_sensitivity": 2,
        "safety_criticality": 1,
        "brand_exposure": 2,
        "clock_speed": 3,
        "latency_edge": 1,
        "scale_throughput": 2,
        "data_advantage": 3,
        "build_readiness": 1,
        "finops_priority": 2,
        "procurement_constraints": False,
        "edge_operations": False,
        "labels": ["Financial Services"],
        "functional_focus": ["Ops"],
    }


# ---------------------------------------------------------------------------
# Pulse answers
# ---------------------------------------------------------------------------


@pytest.fixture()
def mixed_answers() -> dict[str, float | bool | None]:
    """Answers covering every pillar with a spread of values."""
    return {
        "C1": 1, "C2": 0.5, "C3": 0.25,
        "O1": 0, "O2": 0, "O3": 0.25,
        "R1": 1, "R2": 1, "R3": 1,
        "T1": 0.5, "T2": 0.5,
        "E1": True, "E2": 0,
        "X1": 0.25,
    }


# ---------------------------------------------------------------------------
# In-memory repository
# ---------------------------------------------------------------------------


class InMemoryAssessmentRepository:
    """Dict-backed implementation of ``IAssessmentRepository``."""

    def __init__(self) -> None:
        self.records: dict[str, dict[str, Any]] = {}

    async def create(self, user_id: str, context_profile: dict[str, Any]) -> dict[str, Any]:
        assessment_id = str(uuid.uuid4())
        self.records[assessment_id] = {
            "id": assessment_id,
            "user_id": user_id,
            "context_profile": context_profile,
            "pulse_responses": None,
            "pillar_scores": None,
            "triggered_gates": None,
            "priority_moves": None,
            "content_tags": None,
            "context_guidance": None,
            "completed_at": None,
        }
        return copy.deepcopy(self.records[assessment_id])

    async def get_by_id(
        self, assessment_id: str, user_id: str | None = None
    ) -> dict[str, Any] | None:
        record = self.records.get(assessment_id)
        if record is None or (user_id is not None and record["user_id"] != user_id):
            return None
        return copy.deepcopy(record)

    async def update(
        self,
        assessment_id: str,
        fields: dict[str, Any],
        user_id: str | None = None,
    ) -> dict[str, Any] | None:
        if await self.get_by_id(assessment_id, user_id) is None:
            return None
        self.records[assessment_id].update(copy.deepcopy(fields))
        return copy.deepcopy(self.records[assessment_id])


@pytest.fixture()
def repository() -> InMemoryAssessmentRepository:
    """Fresh in-memory repository."""
    return InMemoryAssessmentRepository()
