"""Optional input validation for engine callers.

The engine assumes validated input. Callers that receive profiles or answers
from untrusted sources run them through these helpers first. Pydantic does
the field checking; the first violation is re-raised as the engine's
``ValidationError`` so callers handle one error type.
"""

from collections.abc import Mapping
from typing import Annotated, Any

import pydantic
from pydantic import BaseModel, ConfigDict, Field, RootModel, StrictBool, StrictFloat, StrictInt

from cortex_scoring_engine.core.errors import ValidationError, ValidationErrorKind
from cortex_scoring_engine.core.models import ContextProfile
from cortex_scoring_engine.core.pillars import ALLOWED_ANSWER_VALUES, QUESTION_ID_PATTERN
from cortex_scoring_engine.core.thresholds import CONTEXT_SCALE_MAX, CONTEXT_SCALE_MIN

ScaleValue = Annotated[int, Field(strict=True, ge=CONTEXT_SCALE_MIN, le=CONTEXT_SCALE_MAX)]


class ContextProfileInput(BaseModel):
    """Schema for an incoming context profile. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    regulatory_intensity: ScaleValue
    data_sensitivity: ScaleValue
    safety_criticality: ScaleValue
    brand_exposure: ScaleValue
    clock_speed: ScaleValue
    latency_edge: ScaleValue
    scale_throughput: ScaleValue
    data_advantage: ScaleValue
    build_readiness: ScaleValue
    finops_priority: ScaleValue
    procurement_constraints: StrictBool
    edge_operations: StrictBool
    labels: list[str] = Field(default_factory=list)
    functional_focus: list[str] = Field(default_factory=list)


class PulseAnswersInput(RootModel[dict[str, StrictBool | StrictInt | StrictFloat | None]]):
    """Schema for a pulse answer map keyed by question id.

    Only value types are checked here; question ids and the allowed answer
    set are checked by ``validate_pulse_answers`` so the failing id can be
    reported.
    """


def _first_error_field(exc: pydantic.ValidationError, fallback: str) -> tuple[str, str]:
    error = exc.errors()[0]
    location = [str(part) for part in error.get("loc", ()) if part != "root"]
    return (location[0] if location else fallback), error.get("msg", "invalid value")


def validate_context_profile(data: Mapping[str, Any]) -> ContextProfile:
    """Validate raw profile data and build a ContextProfile.

    Args:
        data: Raw profile mapping, e.g. a decoded JSON request body.

    Returns:
        The validated, immutable ContextProfile.

    Raises:
        ValidationError: kind ``invalid-profile-field`` for the first bad field.
    """
    try:
        parsed = ContextProfileInput.model_validate(dict(data))
    except pydantic.ValidationError as exc:
        field, detail = _first_error_field(exc, "context_profile")
        raise ValidationError(ValidationErrorKind.INVALID_PROFILE_FIELD, field, detail) from exc
    return ContextProfile.from_mapping(parsed.model_dump())


def validate_pulse_answers(data: Mapping[str, Any]) -> dict[str, bool | float | None]:
    """Validate a pulse answer map.

    Args:
        data: Raw answers keyed by question id.

    Returns:
        A new dict of validated answers.

    Raises:
        ValidationError: kind ``invalid-answer-value`` for the first bad entry.
    """
    try:
        parsed = PulseAnswersInput.model_validate(dict(data))
    except pydantic.ValidationError as exc:
        field, detail = _first_error_field(exc, "pulse_responses")
        raise ValidationError(ValidationErrorKind.INVALID_ANSWER_VALUE, field, detail) from exc

    answers = dict(parsed.root)
    for question_id, value in answers.items():
        if not QUESTION_ID_PATTERN.fullmatch(question_id):
            raise ValidationError(
                ValidationErrorKind.INVALID_ANSWER_VALUE, question_id, "unknown question id"
            )
        if isinstance(value, bool) or value is None:
            continue
        if value not in ALLOWED_ANSWER_VALUES:
            raise ValidationError(
                ValidationErrorKind.INVALID_ANSWER_VALUE,
                question_id,
                f"answer must be one of 0, 0.25, 0.5, 1; got {value!r}",
            )
    return answers
