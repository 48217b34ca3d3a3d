"""Pillar scoring for the CORTEX pulse check.

Each pillar score is the plain sum of its three pulse answers, so scores lie
in 0-3. A pillar with no answered question is omitted from the result rather
than scored as zero: "not answered yet" and "answered No" are different
states and downstream components treat them differently.

Answer handling:
    number         counted as-is (0, 0.25, 0.5 or 1 after validation)
    True           legacy Yes, counted as 1
    False / None   legacy not-answered, same as absent
    anything else  answered, counted as 0

This module is independent of persistence so that it can be unit-tested
without any infrastructure.
"""

from typing import Any

from cortex_scoring_engine.core.models import PillarScores, PulseAnswers
from cortex_scoring_engine.core.pillars import PILLARS
from cortex_scoring_engine.observability import get_logger

logger = get_logger(__name__)


def is_answered(raw_value: Any) -> bool:
    """Return True if a raw pulse value counts as an answer."""
    return raw_value is not None and raw_value is not False


def answer_value(raw_value: Any) -> float:
    """Numeric contribution of an answered pulse value.

    Args:
        raw_value: The stored answer. Must satisfy ``is_answered``.

    Returns:
        The numeric value, 1.0 for legacy True, 0.0 for anything non-numeric.
    """
    if raw_value is True:
        return 1.0
    if isinstance(raw_value, (int, float)) and not isinstance(raw_value, bool):
        return float(raw_value)
    return 0.0


def score_pillars(answers: PulseAnswers) -> PillarScores:
    """Reduce pulse answers to per-pillar scores.

    Args:
        answers: Mapping of question id (e.g., 'C1') to answer value.

    Returns:
        Mapping of pillar code to summed score, in canonical pillar order,
        containing only pillars with at least one answered question.
    """
    scores: PillarScores = {}

    for pillar in PILLARS:
        answered = [
            answers[question_id]
            for question_id in pillar.question_ids
            if is_answered(answers.get(question_id))
        ]
        if not answered:
            continue
        scores[pillar.code] = sum(answer_value(value) for value in answered)

    logger.debug(
        "Pillar scores computed",
        answer_count=len(answers),
        scored_pillars=list(scores),
        pillar_scores=scores,
    )
    return scores
