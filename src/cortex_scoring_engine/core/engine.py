"""Assessment engine facade.

Runs the six scoring components in dependency order and merges their outputs
into one AssessmentResult::

    score_pillars ─┬─ evaluate_gates
                   ├─ generate_content_tags ─ synthesize_guidance
                   ├─ rank_priority_moves
                   └─ recommend_guides

The facade holds no state besides its output sizing, so a single instance can
be shared across threads and requests.
"""

import dataclasses

from cortex_scoring_engine.core.gates import evaluate_gates
from cortex_scoring_engine.core.guidance import synthesize_guidance
from cortex_scoring_engine.core.guides import recommend_guides
from cortex_scoring_engine.core.models import AssessmentResult, ContextProfile, PulseAnswers
from cortex_scoring_engine.core.priority_moves import rank_priority_moves
from cortex_scoring_engine.core.scoring import score_pillars
from cortex_scoring_engine.core.tagging import generate_content_tags
from cortex_scoring_engine.observability import get_logger
from cortex_scoring_engine.settings import Settings

logger = get_logger(__name__)


class AssessmentEngine:
    """Deterministic scoring, gating and recommendation pipeline.

    Args:
        settings: Service settings; only the output limits are read. Defaults
            to a fresh ``Settings()``.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or Settings()
        self._move_limit = settings.priority_moves_limit
        self._guide_limit = settings.guides_per_pillar

    def evaluate(self, profile: ContextProfile, answers: PulseAnswers) -> AssessmentResult:
        """Run the full pipeline for one assessment.

        Args:
            profile: Validated context profile.
            answers: Validated pulse answers.

        Returns:
            AssessmentResult with ``completed_at`` left unset; stamping the
            completion time is the caller's concern.
        """
        pillar_scores = score_pillars(answers)
        triggered_gates = evaluate_gates(profile, pillar_scores)
        content_tags = generate_content_tags(profile)
        priority_moves = rank_priority_moves(profile, pillar_scores, limit=self._move_limit)
        smart_guides = recommend_guides(pillar_scores, profile, answers, limit=self._guide_limit)
        guidance = dataclasses.replace(
            synthesize_guidance(pillar_scores, content_tags),
            smart_guides=smart_guides,
        )

        logger.info(
            "Assessment evaluated",
            scored_pillars=list(pillar_scores),
            gate_count=len(triggered_gates),
            content_tag_count=len(content_tags),
            top_move=priority_moves.moves[0].id if priority_moves.moves else None,
        )

        return AssessmentResult(
            pillar_scores=pillar_scores,
            triggered_gates=triggered_gates,
            priority_moves=priority_moves,
            content_tags=content_tags,
            context_guidance=guidance,
        )
