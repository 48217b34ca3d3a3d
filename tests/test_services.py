"""Unit tests for the assessment service workflow."""

from datetime import datetime
from typing import Any

import pytest

from cortex_scoring_engine.core.errors import ValidationError
from cortex_scoring_engine.core.interfaces import IAssessmentRepository
from cortex_scoring_engine.core.services import (
    AssessmentNotFoundError,
    AssessmentService,
    PulseResponsesMissingError,
)
from cortex_scoring_engine.core.services.assessment_service import ANONYMOUS_USER_ID


@pytest.fixture()
def assessment_service(repository: IAssessmentRepository) -> AssessmentService:
    return AssessmentService(repository=repository)


def test_in_memory_repository_satisfies_protocol(repository: IAssessmentRepository) -> None:
    assert isinstance(repository, IAssessmentRepository)


class TestCreateAssessment:
    """Tests for AssessmentService.create_assessment."""

    @pytest.mark.asyncio()
    async def test_create_assessment_success(
        self,
        assessment_service: AssessmentService,
        raw_profile: dict[str, Any],
    ) -> None:
        """Stores the validated profile for the given user."""
        assessment = await assessment_service.create_assessment(raw_profile, user_id="user-1")
        assert assessment["user_id"] == "user-1"
        assert assessment["context_profile"]["regulatory_intensity"] == 3
        assert assessment["context_profile"]["labels"] == ["Financial Services"]
        assert assessment["completed_at"] is None

    @pytest.mark.asyncio()
    async def test_create_assessment_anonymous(
        self,
        assessment_service: AssessmentService,
        raw_profile: dict[str, Any],
    ) -> None:
        assessment = await assessment_service.create_assessment(raw_profile)
        assert assessment["user_id"] == ANONYMOUS_USER_ID

    @pytest.mark.asyncio()
    async def test_create_assessment_invalid_profile(
        self,
        assessment_service: AssessmentService,
        repository: IAssessmentRepository,
        raw_profile: dict[str, Any],
    ) -> None:
        """A malformed profile is rejected before anything is stored."""
        raw_profile["scale_throughput"] = 7
        with pytest.raises(ValidationError):
            await assessment_service.create_assessment(raw_profile)
        assert repository.records == {}


class TestUpdatePulseResponses:
    """Tests for AssessmentService.update_pulse_responses."""

    @pytest.mark.asyncio()
    async def test_scores_are_refreshed(
        self,
        assessment_service: AssessmentService,
        raw_profile: dict[str, Any],
    ) -> None:
        created = await assessment_service.create_assessment(raw_profile)
        updated = await assessment_service.update_pulse_responses(
            created["id"], {"C1": 1, "C2": 0.5, "O1": 0}
        )
        assert updated is not None
        assert updated["pulse_responses"] == {"C1": 1, "C2": 0.5, "O1": 0}
        assert updated["pillar_scores"] == {"C": 1.5, "O": 0.0}

    @pytest.mark.asyncio()
    async def test_new_answers_merge_over_old(
        self,
        assessment_service: AssessmentService,
        raw_profile: dict[str, Any],
    ) -> None:
        """Later answers override the same question and keep the others."""
        created = await assessment_service.create_assessment(raw_profile)
        await assessment_service.update_pulse_responses(created["id"], {"C1": 0, "R1": 1})
        updated = await assessment_service.update_pulse_responses(created["id"], {"C1": 1})
        assert updated is not None
        assert updated["pulse_responses"] == {"C1": 1, "R1": 1}
        assert updated["pillar_scores"] == {"C": 1.0, "R": 1.0}

    @pytest.mark.asyncio()
    async def test_unknown_assessment_returns_none(
        self,
        assessment_service: AssessmentService,
    ) -> None:
        assert await assessment_service.update_pulse_responses("missing", {"C1": 1}) is None

    @pytest.mark.asyncio()
    async def test_other_users_assessment_returns_none(
        self,
        assessment_service: AssessmentService,
        raw_profile: dict[str, Any],
    ) -> None:
        created = await assessment_service.create_assessment(raw_profile, user_id="owner")
        result = await assessment_service.update_pulse_responses(
            created["id"], {"C1": 1}, user_id="intruder"
        )
        assert result is None

    @pytest.mark.asyncio()
    async def test_invalid_answer_rejected(
        self,
        assessment_service: AssessmentService,
        repository: IAssessmentRepository,
        raw_profile: dict[str, Any],
    ) -> None:
        created = await assessment_service.create_assessment(raw_profile)
        with pytest.raises(ValidationError) as exc_info:
            await assessment_service.update_pulse_responses(created["id"], {"C1": 0.3})
        assert exc_info.value.field == "C1"
        assert repository.records[created["id"]]["pulse_responses"] is None


class TestCompleteAssessment:
    """Tests for AssessmentService.complete_assessment."""

    @pytest.mark.asyncio()
    async def test_complete_assessment_success(
        self,
        assessment_service: AssessmentService,
        raw_profile: dict[str, Any],
        mixed_answers: dict,
    ) -> None:
        """Stores every result field and stamps the completion time."""
        created = await assessment_service.create_assessment(raw_profile)
        await assessment_service.update_pulse_responses(created["id"], mixed_answers)

        completed = await assessment_service.complete_assessment(created["id"])

        assert completed["pillar_scores"]["R"] == 3.0
        assert [gate["id"] for gate in completed["triggered_gates"]] == [
            "require_hitl",
            "assurance_cadence",
            "build_readiness",
        ]
        assert completed["content_tags"] == [
            "regulated",
            "data_advantage",
            "low_readiness",
            "ops_first",
            "financial_services",
        ]
        assert completed["priority_moves"]["total_evaluated"] == 9
        assert set(completed["context_guidance"]["smart_guides"]) == set("CORTEX")
        assert datetime.fromisoformat(completed["completed_at"]).tzinfo is not None

    @pytest.mark.asyncio()
    async def test_complete_unknown_assessment(
        self,
        assessment_service: AssessmentService,
    ) -> None:
        with pytest.raises(AssessmentNotFoundError):
            await assessment_service.complete_assessment("missing")

    @pytest.mark.asyncio()
    async def test_complete_without_responses(
        self,
        assessment_service: AssessmentService,
        raw_profile: dict[str, Any],
    ) -> None:
        """Completion requires at least one recorded pulse answer."""
        created = await assessment_service.create_assessment(raw_profile)
        with pytest.raises(PulseResponsesMissingError):
            await assessment_service.complete_assessment(created["id"])

    @pytest.mark.asyncio()
    async def test_complete_respects_user_filter(
        self,
        assessment_service: AssessmentService,
        raw_profile: dict[str, Any],
    ) -> None:
        created = await assessment_service.create_assessment(raw_profile, user_id="owner")
        await assessment_service.update_pulse_responses(created["id"], {"C1": 1}, user_id="owner")
        with pytest.raises(AssessmentNotFoundError):
            await assessment_service.complete_assessment(created["id"], user_id="intruder")
        completed = await assessment_service.complete_assessment(created["id"], user_id="owner")
        assert completed["pillar_scores"] == {"C": 1.0}
