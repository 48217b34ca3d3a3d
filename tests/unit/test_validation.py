"""Unit tests for optional input validation."""

from typing import Any

import pytest

from cortex_scoring_engine.core.errors import ValidationError, ValidationErrorKind
from cortex_scoring_engine.core.models import ContextProfile
from cortex_scoring_engine.core.validation import validate_context_profile, validate_pulse_answers


class TestValidateContextProfile:
    """Tests for validate_context_profile."""

    def test_valid_profile(self, raw_profile: dict[str, Any]) -> None:
        profile = validate_context_profile(raw_profile)
        assert isinstance(profile, ContextProfile)
        assert profile.regulatory_intensity == 3
        assert profile.labels == ("Financial Services",)
        assert profile.functional_focus == ("Ops",)

    def test_unknown_keys_are_ignored(self, raw_profile: dict[str, Any]) -> None:
        raw_profile["company_size"] = "large"
        assert validate_context_profile(raw_profile).data_advantage == 3

    def test_labels_default_to_empty(self, raw_profile: dict[str, Any]) -> None:
        del raw_profile["labels"]
        del raw_profile["functional_focus"]
        profile = validate_context_profile(raw_profile)
        assert profile.labels == ()
        assert profile.functional_focus == ()

    @pytest.mark.parametrize("value", [-1, 5])
    def test_out_of_range_scale_value(self, raw_profile: dict[str, Any], value: int) -> None:
        raw_profile["latency_edge"] = value
        with pytest.raises(ValidationError) as exc_info:
            validate_context_profile(raw_profile)
        assert exc_info.value.kind is ValidationErrorKind.INVALID_PROFILE_FIELD
        assert exc_info.value.field == "latency_edge"

    def test_missing_field(self, raw_profile: dict[str, Any]) -> None:
        del raw_profile["build_readiness"]
        with pytest.raises(ValidationError) as exc_info:
            validate_context_profile(raw_profile)
        assert exc_info.value.field == "build_readiness"

    @pytest.mark.parametrize("value", [2.0, True, "2"])
    def test_scale_values_must_be_integers(self, raw_profile: dict[str, Any], value: Any) -> None:
        raw_profile["clock_speed"] = value
        with pytest.raises(ValidationError) as exc_info:
            validate_context_profile(raw_profile)
        assert exc_info.value.field == "clock_speed"

    def test_flags_must_be_booleans(self, raw_profile: dict[str, Any]) -> None:
        raw_profile["edge_operations"] = 1
        with pytest.raises(ValidationError) as exc_info:
            validate_context_profile(raw_profile)
        assert exc_info.value.field == "edge_operations"

    def test_error_is_a_value_error(self, raw_profile: dict[str, Any]) -> None:
        raw_profile["data_sensitivity"] = 9
        with pytest.raises(ValueError):
            validate_context_profile(raw_profile)


class TestValidatePulseAnswers:
    """Tests for validate_pulse_answers."""

    def test_accepts_allowed_values(self) -> None:
        answers = {"C1": 1, "C2": 0.25, "O1": 0, "O2": 0.5, "R1": True, "R2": None, "R3": False}
        assert validate_pulse_answers(answers) == answers

    def test_empty_map_is_valid(self) -> None:
        assert validate_pulse_answers({}) == {}

    def test_returns_new_dict(self) -> None:
        answers = {"T1": 0.5}
        assert validate_pulse_answers(answers) is not answers

    @pytest.mark.parametrize("question_id", ["Z1", "C4", "c1", "C10", "C1\n", " C1"])
    def test_unknown_question_id(self, question_id: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_pulse_answers({question_id: 1})
        assert exc_info.value.kind is ValidationErrorKind.INVALID_ANSWER_VALUE
        assert exc_info.value.field == question_id
        assert exc_info.value.detail == "unknown question id"

    @pytest.mark.parametrize("value", [0.3, 2, -0.25])
    def test_value_outside_answer_set(self, value: float) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_pulse_answers({"E1": 1, "E2": value})
        assert exc_info.value.field == "E2"
        assert exc_info.value.detail.startswith("answer must be one of 0, 0.25, 0.5, 1")

    def test_string_answer_names_question(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_pulse_answers({"C1": "yes"})
        assert exc_info.value.kind is ValidationErrorKind.INVALID_ANSWER_VALUE
        assert exc_info.value.field == "C1"

    def test_error_serializes(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_pulse_answers({"X9": 1})
        assert exc_info.value.to_dict() == {
            "kind": "invalid-answer-value",
            "field": "X9",
            "detail": "unknown question id",
        }
