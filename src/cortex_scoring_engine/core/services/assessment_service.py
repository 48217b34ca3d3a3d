"""Service layer orchestrating the CORTEX assessment workflow.

Implements the assessment flow around the pure scoring engine:
    1. create_assessment()      - validates and stores the context profile
    2. update_pulse_responses() - merges answers and refreshes pillar scores
    3. complete_assessment()    - runs the engine and stores the full result

All persistence goes through the repository interface. No framework or
database imports belong here.
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from cortex_scoring_engine.core.engine import AssessmentEngine
from cortex_scoring_engine.core.interfaces import IAssessmentRepository
from cortex_scoring_engine.core.models import ContextProfile
from cortex_scoring_engine.core.scoring import score_pillars
from cortex_scoring_engine.core.validation import validate_context_profile, validate_pulse_answers
from cortex_scoring_engine.observability import get_logger

logger = get_logger(__name__)

ANONYMOUS_USER_ID = "anonymous"


class AssessmentNotFoundError(Exception):
    """Raised when the requested assessment does not exist or is not visible."""


class PulseResponsesMissingError(Exception):
    """Raised when completing an assessment that has no pulse responses."""


class AssessmentService:
    """Orchestrates assessment creation, pulse scoring and completion.

    Depends on a repository injected at construction time and contains no
    framework-specific code.
    """

    def __init__(
        self,
        repository: IAssessmentRepository,
        engine: AssessmentEngine | None = None,
    ) -> None:
        """Initialise the service.

        Args:
            repository: Any object satisfying ``IAssessmentRepository``.
            engine: Scoring engine; a default-configured one is built if omitted.
        """
        self._repository = repository
        self._engine = engine or AssessmentEngine()

    async def create_assessment(
        self,
        context_profile: Mapping[str, Any],
        user_id: str | None = None,
    ) -> dict[str, Any]:
        """Validate a context profile and persist a new assessment.

        Args:
            context_profile: Raw context profile from the intake flow.
            user_id: Owning user; anonymous when omitted.

        Returns:
            The stored assessment record.

        Raises:
            ValidationError: If the profile is malformed.
        """
        profile = validate_context_profile(context_profile)
        assessment = await self._repository.create(
            user_id=user_id or ANONYMOUS_USER_ID,
            context_profile=profile.to_dict(),
        )
        logger.info(
            "Assessment created",
            assessment_id=assessment.get("id"),
            operation="create_assessment",
        )
        return assessment

    async def update_pulse_responses(
        self,
        assessment_id: str,
        pulse_responses: Mapping[str, Any],
        user_id: str | None = None,
    ) -> dict[str, Any] | None:
        """Merge new pulse answers into an assessment and rescore its pillars.

        New answers override earlier answers to the same question; earlier
        answers to other questions are kept.

        Args:
            assessment_id: Assessment to update.
            pulse_responses: Newly submitted answers.
            user_id: Optional owner filter.

        Returns:
            The updated record, or None if the assessment was not found.

        Raises:
            ValidationError: If any answer is malformed.
        """
        validated = validate_pulse_answers(pulse_responses)

        existing = await self._repository.get_by_id(assessment_id, user_id)
        if existing is None:
            logger.warning(
                "Cannot update pulse - assessment not found or access denied",
                assessment_id=assessment_id,
                has_user_filter=user_id is not None,
            )
            return None

        merged = {**(existing.get("pulse_responses") or {}), **validated}
        pillar_scores = score_pillars(merged)

        assessment = await self._repository.update(
            assessment_id,
            {"pulse_responses": merged, "pillar_scores": pillar_scores},
            user_id,
        )
        if assessment is None:
            logger.warning(
                "Cannot update pulse - assessment disappeared during update",
                assessment_id=assessment_id,
            )
            return None

        logger.info(
            "Pulse responses updated",
            assessment_id=assessment_id,
            new_response_count=len(validated),
            total_response_count=len(merged),
            pillar_scores=pillar_scores,
            operation="update_pulse",
        )
        return assessment

    async def complete_assessment(
        self,
        assessment_id: str,
        user_id: str | None = None,
    ) -> dict[str, Any]:
        """Run the scoring engine and store the completed result.

        Args:
            assessment_id: Assessment to complete.
            user_id: Optional owner filter.

        Returns:
            The updated record including the result fields and completed_at.

        Raises:
            AssessmentNotFoundError: If the assessment does not exist.
            PulseResponsesMissingError: If no pulse answers were recorded.
        """
        assessment = await self._repository.get_by_id(assessment_id, user_id)
        if assessment is None:
            raise AssessmentNotFoundError(f"Assessment {assessment_id!r} not found")

        pulse_responses = assessment.get("pulse_responses")
        if not pulse_responses:
            raise PulseResponsesMissingError(
                f"Assessment {assessment_id!r} must have pulse responses before completion"
            )

        profile = ContextProfile.from_mapping(assessment["context_profile"])
        result = self._engine.evaluate(profile, pulse_responses)
        completed_at = datetime.now(timezone.utc).isoformat()

        fields = result.to_dict()
        fields["completed_at"] = completed_at

        completed = await self._repository.update(assessment_id, fields, user_id)
        if completed is None:
            raise AssessmentNotFoundError(
                f"Assessment {assessment_id!r} disappeared before completion was saved"
            )

        logger.info(
            "Assessment completed",
            assessment_id=assessment_id,
            gate_count=len(result.triggered_gates),
            completed_at=completed_at,
            operation="complete_assessment",
        )
        return completed
