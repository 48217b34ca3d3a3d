"""Unit tests for pillar scoring.

Tests cover:
- Unanswered pillars are omitted, never scored as 0
- Scores are the exact sum of answered values
- Legacy booleans: True counts 1, False / None mean not answered
- Non-numeric answers count as answered with value 0
- Output follows canonical pillar order
"""

import pytest

from cortex_scoring_engine.core.pillars import ALL_QUESTION_IDS, PILLAR_CODES
from cortex_scoring_engine.core.scoring import answer_value, is_answered, score_pillars


class TestPillarOmission:
    """A pillar with no answered question never appears in the scores."""

    def test_empty_answers_produce_empty_scores(self) -> None:
        assert score_pillars({}) == {}

    def test_only_clarity_answered(self) -> None:
        """C1-C3 all Yes produces {C: 3} and nothing else."""
        scores = score_pillars({"C1": 1, "C2": 1, "C3": 1})
        assert scores == {"C": 3}

    def test_answered_no_is_present_as_zero(self) -> None:
        """An explicit No (0) is an answer, unlike an absent question."""
        scores = score_pillars({"O1": 0})
        assert scores == {"O": 0}
        assert "C" not in scores

    def test_false_and_none_mean_not_answered(self) -> None:
        scores = score_pillars({"R1": False, "R2": None, "T1": 0.5})
        assert "R" not in scores
        assert scores == {"T": 0.5}


class TestPillarSums:
    """Scores equal the sum of the answered values."""

    def test_partial_pillar_sums_present_answers(self) -> None:
        scores = score_pillars({"X1": 0.25, "X3": 0.5})
        assert scores["X"] == pytest.approx(0.75)

    def test_legacy_true_counts_as_one(self) -> None:
        scores = score_pillars({"E1": True, "E2": 0.5})
        assert scores["E"] == pytest.approx(1.5)

    def test_non_numeric_answer_counts_as_zero(self) -> None:
        """Malformed values are treated as zero rather than raising."""
        scores = score_pillars({"C1": "yes", "C2": 1})
        assert scores == {"C": 1}

    def test_unknown_question_ids_are_ignored(self) -> None:
        scores = score_pillars({"Z1": 1, "C4": 1, "C1": 0.25})
        assert scores == {"C": 0.25}

    @pytest.mark.parametrize("value", [0, 0.25, 0.5, 1])
    def test_all_questions_same_value(self, value: float) -> None:
        answers = {question_id: value for question_id in ALL_QUESTION_IDS}
        scores = score_pillars(answers)
        assert set(scores) == set(PILLAR_CODES)
        for score in scores.values():
            assert score == pytest.approx(value * 3)
            assert 0.0 <= score <= 3.0

    def test_mixed_answers(self, mixed_answers: dict) -> None:
        scores = score_pillars(mixed_answers)
        assert scores == pytest.approx(
            {"C": 1.75, "O": 0.25, "R": 3.0, "T": 1.0, "E": 1.0, "X": 0.25}
        )


class TestOrderingAndPurity:
    """Tests for key order and input immutability."""

    def test_keys_follow_canonical_pillar_order(self) -> None:
        answers = {"X1": 1, "C1": 1, "R1": 1, "O1": 1}
        assert list(score_pillars(answers)) == ["C", "O", "R", "X"]

    def test_input_is_not_mutated(self, mixed_answers: dict) -> None:
        snapshot = dict(mixed_answers)
        score_pillars(mixed_answers)
        assert mixed_answers == snapshot

    def test_repeated_calls_are_identical(self, mixed_answers: dict) -> None:
        assert score_pillars(mixed_answers) == score_pillars(mixed_answers)


class TestAnswerHelpers:
    """Tests for is_answered and answer_value."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(True, True), (0, True), (0.5, True), ("x", True), (False, False), (None, False)],
    )
    def test_is_answered(self, raw: object, expected: bool) -> None:
        assert is_answered(raw) is expected

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(True, 1.0), (1, 1.0), (0.25, 0.25), (0, 0.0), ("maybe", 0.0), ([1], 0.0)],
    )
    def test_answer_value(self, raw: object, expected: float) -> None:
        assert answer_value(raw) == expected
