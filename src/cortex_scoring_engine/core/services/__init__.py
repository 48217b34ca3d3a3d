"""Services package for the CORTEX scoring engine."""

from cortex_scoring_engine.core.services.assessment_service import (
    AssessmentNotFoundError,
    AssessmentService,
    PulseResponsesMissingError,
)

__all__ = [
    "AssessmentService",
    "AssessmentNotFoundError",
    "PulseResponsesMissingError",
]
