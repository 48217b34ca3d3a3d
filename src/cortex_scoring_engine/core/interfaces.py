"""Abstract interfaces (Protocol classes) for engine collaborators.

The scoring engine never performs I/O. Persistence is supplied by the host
application through the repository interface below and injected into
``AssessmentService``. Records cross this boundary as plain dicts with the
keys: id, user_id, context_profile, pulse_responses, pillar_scores,
triggered_gates, priority_moves, content_tags, context_guidance, completed_at.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IAssessmentRepository(Protocol):
    """Repository interface for assessment persistence."""

    async def create(
        self,
        user_id: str,
        context_profile: dict[str, Any],
    ) -> dict[str, Any]:
        """Persist a new assessment with empty result fields and return it."""
        ...

    async def get_by_id(
        self,
        assessment_id: str,
        user_id: str | None = None,
    ) -> dict[str, Any] | None:
        """Return the assessment, or None if missing or not visible to the user."""
        ...

    async def update(
        self,
        assessment_id: str,
        fields: dict[str, Any],
        user_id: str | None = None,
    ) -> dict[str, Any] | None:
        """Apply field updates and return the updated record, or None if missing."""
        ...
