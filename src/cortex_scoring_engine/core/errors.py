"""Error types for the CORTEX scoring engine.

The scoring components are total over validated input and raise nothing.
Input validation, when a caller opts into it, reports any violation as a
single ``ValidationError`` so the whole call is rejected.
"""

from enum import Enum


class ValidationErrorKind(str, Enum):
    """Category of an input validation failure."""

    INVALID_PROFILE_FIELD = "invalid-profile-field"
    INVALID_ANSWER_VALUE = "invalid-answer-value"


class ValidationError(ValueError):
    """Raised when a context profile or pulse answer map is malformed.

    Attributes:
        kind: Which input was malformed.
        field: The offending profile field or question id.
        detail: Human-readable description of the violation.
    """

    def __init__(self, kind: ValidationErrorKind, field: str, detail: str) -> None:
        super().__init__(f"{kind.value}: {field}: {detail}")
        self.kind = kind
        self.field = field
        self.detail = detail

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "field": self.field, "detail": self.detail}
