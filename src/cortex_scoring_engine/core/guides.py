"""Smart implementation-guide recommendation.

For each pillar, every applicable guide in the library is scored on four
signals and the top five are returned in tiers::

    score = base_relevance
          + 0.40 * (3 - pillar_score)     # gap: weak pillars dominate
          + 0.35 * context_boost          # guide tags vs. profile thresholds
          + 0.25 * pulse_boost            # targeted questions answered No/Started
          + urgency_modifier              # critical +0.10, high +0.05

Reasons are collected alongside each contribution so the UI can show why a
guide was picked. Pillars are independent, so a guide applicable to several
pillars may appear under each with a different score.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from cortex_scoring_engine.core.models import (
    ContextProfile,
    GuideRecommendation,
    PillarScores,
    PulseAnswers,
)
from cortex_scoring_engine.core.pillars import PILLAR_CODES
from cortex_scoring_engine.core.thresholds import (
    HIGH_CONTEXT_THRESHOLD,
    LOW_READINESS_THRESHOLD,
    PILLAR_SCORE_MAX,
)
from cortex_scoring_engine.observability import get_logger

logger = get_logger(__name__)

GAP_WEIGHT: float = 0.40
CONTEXT_WEIGHT: float = 0.35
PULSE_WEIGHT: float = 0.25

# Weighted gap boost must exceed this before a "weak domain" reason is shown
GAP_REASON_THRESHOLD: float = 0.3

URGENCY_MODIFIERS: Mapping[str, float] = MappingProxyType({"critical": 0.10, "high": 0.05})
CRITICAL_PRIORITY_REASON = "critical priority"

DEFAULT_GUIDE_LIMIT: int = 5

TIER_PRIMARY = "primary"
TIER_SECONDARY = "secondary"
TIER_ADDITIONAL = "additional"


@dataclass(frozen=True)
class GuideCatalogEntry:
    """A guide in the implementation library.

    Attributes:
        id: Guide identifier.
        title: Guide title.
        pillars: Pillar codes the guide applies to; None means every pillar.
        tags: Tags matched against the context rules.
        targets_pulse_questions: Pulse question ids this guide addresses.
        base_relevance: Base score before boosts.
        difficulty: beginner | intermediate | advanced.
        time_to_implement: 1-day | 1-week | 1-month | 3-months.
        urgency: critical | high | medium | low.
    """

    id: str
    title: str
    pillars: tuple[str, ...] | None
    tags: tuple[str, ...] = ()
    targets_pulse_questions: tuple[str, ...] = ()
    base_relevance: float = 0.5
    difficulty: str = "intermediate"
    time_to_implement: str = "1-month"
    urgency: str = "medium"

    def applies_to(self, pillar: str) -> bool:
        return self.pillars is None or pillar in self.pillars


@dataclass(frozen=True)
class GuideContextRule:
    tag: str
    applies: Callable[[ContextProfile], bool]
    increment: float
    reason: str


GUIDE_CONTEXT_RULES: tuple[GuideContextRule, ...] = (
    GuideContextRule(
        tag="regulatory",
        applies=lambda p: (
            p.regulatory_intensity >= HIGH_CONTEXT_THRESHOLD
            or p.safety_criticality >= HIGH_CONTEXT_THRESHOLD
        ),
        increment=0.25,
        reason="critical for regulatory compliance",
    ),
    GuideContextRule(
        tag="data_governance",
        applies=lambda p: p.data_sensitivity >= HIGH_CONTEXT_THRESHOLD,
        increment=0.20,
        reason="essential for data protection",
    ),
    GuideContextRule(
        tag="foundational",
        applies=lambda p: p.build_readiness <= LOW_READINESS_THRESHOLD,
        increment=0.25,
        reason="builds foundational capabilities",
    ),
    GuideContextRule(
        tag="scale",
        applies=lambda p: p.scale_throughput >= HIGH_CONTEXT_THRESHOLD,
        increment=0.20,
        reason="supports high-scale operations",
    ),
    GuideContextRule(
        tag="edge",
        applies=lambda p: p.edge_operations,
        increment=0.20,
        reason="enables edge deployment",
    ),
)

# Answer value -> (increment, reason template); 1 ("Yes") earns nothing
PULSE_INCREMENTS: Mapping[float, tuple[float, str | None]] = MappingProxyType({
    0.0: (0.25, 'directly addresses "{question_id}" gap'),
    0.25: (0.15, 'builds on "{question_id}" progress'),
    0.5: (0.05, None),
})


GUIDE_CATALOG: tuple[GuideCatalogEntry, ...] = (
    # Critical gate guides
    GuideCatalogEntry(
        id="gate.hitl",
        title="Human-in-the-Loop Framework",
        pillars=("O", "R"),
        tags=("regulatory", "safety", "oversight"),
        targets_pulse_questions=("O1", "R2"),
        base_relevance=0.75,
        difficulty="intermediate",
        time_to_implement="1-week",
        urgency="critical",
    ),
    GuideCatalogEntry(
        id="gate.assurance",
        title="AI Assurance Cadence",
        pillars=("R", "O"),
        tags=("regulatory", "monitoring", "compliance"),
        targets_pulse_questions=("R1", "R3"),
        base_relevance=0.70,
        difficulty="advanced",
        time_to_implement="1-month",
        urgency="high",
    ),
    # Clarity & Command
    GuideCatalogEntry(
        id="pillar.C.deep",
        title="Clarity & Command Deep Dive",
        pillars=("C",),
        tags=("leadership", "strategy", "foundational"),
        targets_pulse_questions=("C1", "C2", "C3"),
        base_relevance=0.65,
        difficulty="beginner",
        time_to_implement="1-week",
        urgency="high",
    ),
    # Operations & Data
    GuideCatalogEntry(
        id="pillar.O.deep",
        title="Operations & Data Engine Room",
        pillars=("O",),
        tags=("data", "operations", "mlops", "scale"),
        targets_pulse_questions=("O1", "O2", "O3"),
        base_relevance=0.68,
        difficulty="intermediate",
        time_to_implement="1-month",
        urgency="high",
    ),
    GuideCatalogEntry(
        id="pillar.O.data_quality",
        title="Data Quality Gates",
        pillars=("O",),
        tags=("data_governance", "scale"),
        targets_pulse_questions=("O2",),
        base_relevance=0.72,
        difficulty="intermediate",
        time_to_implement="1-month",
        urgency="critical",
    ),
    # Risk & Trust
    GuideCatalogEntry(
        id="pillar.R.deep",
        title="Risk & Trust Foundation",
        pillars=("R",),
        tags=("regulatory", "safety", "compliance"),
        targets_pulse_questions=("R1", "R2", "R3"),
        base_relevance=0.70,
        difficulty="intermediate",
        time_to_implement="1-month",
        urgency="high",
    ),
    GuideCatalogEntry(
        id="pillar.R.bias_testing",
        title="Bias Testing Framework",
        pillars=("R",),
        tags=("regulatory", "compliance"),
        targets_pulse_questions=("R2",),
        base_relevance=0.60,
        difficulty="advanced",
        time_to_implement="1-month",
        urgency="medium",
    ),
    # Talent & Culture
    GuideCatalogEntry(
        id="pillar.T.deep",
        title="Talent & Culture Transformation",
        pillars=("T",),
        tags=("foundational", "leadership"),
        targets_pulse_questions=("T1", "T2", "T3"),
        base_relevance=0.62,
        difficulty="beginner",
        time_to_implement="3-months",
        urgency="medium",
    ),
    GuideCatalogEntry(
        id="pillar.T.change_management",
        title="AI Change Management",
        pillars=("T",),
        tags=("leadership",),
        targets_pulse_questions=("T2", "T3"),
        base_relevance=0.58,
        difficulty="intermediate",
        time_to_implement="3-months",
        urgency="medium",
    ),
    # Ecosystem & Infrastructure
    GuideCatalogEntry(
        id="pillar.E.deep",
        title="Ecosystem & Infrastructure Setup",
        pillars=("E",),
        tags=("scale", "edge", "infrastructure"),
        targets_pulse_questions=("E1", "E2", "E3"),
        base_relevance=0.65,
        difficulty="advanced",
        time_to_implement="3-months",
        urgency="medium",
    ),
    GuideCatalogEntry(
        id="pillar.E.cost_optimization",
        title="Cost Optimization Framework",
        pillars=("E",),
        tags=("scale", "cost_control"),
        targets_pulse_questions=("E3",),
        base_relevance=0.63,
        difficulty="intermediate",
        time_to_implement="1-month",
        urgency="high",
    ),
    # Experimentation & Evolution
    GuideCatalogEntry(
        id="pillar.X.deep",
        title="Experimentation Framework",
        pillars=("X",),
        tags=("agility", "innovation"),
        targets_pulse_questions=("X1", "X2", "X3"),
        base_relevance=0.60,
        difficulty="beginner",
        time_to_implement="1-week",
        urgency="medium",
    ),
    GuideCatalogEntry(
        id="pillar.X.pilot_management",
        title="Pilot Management Process",
        pillars=("X",),
        tags=("agility",),
        targets_pulse_questions=("X2",),
        base_relevance=0.58,
        difficulty="intermediate",
        time_to_implement="1-month",
        urgency="medium",
    ),
    # Cross-pillar guides
    GuideCatalogEntry(
        id="gate.data_governance",
        title="Data Governance Framework",
        pillars=("O", "R"),
        tags=("data_governance", "regulatory"),
        targets_pulse_questions=("O2", "R1"),
        base_relevance=0.72,
        difficulty="advanced",
        time_to_implement="3-months",
        urgency="critical",
    ),
    GuideCatalogEntry(
        id="gate.model_monitoring",
        title="Model Monitoring Setup",
        pillars=("O", "R"),
        tags=("monitoring", "scale", "safety"),
        targets_pulse_questions=("O1", "R1"),
        base_relevance=0.68,
        difficulty="intermediate",
        time_to_implement="1-month",
        urgency="high",
    ),
    GuideCatalogEntry(
        id="gate.roi_measurement",
        title="ROI Measurement Framework",
        pillars=("C", "E"),
        tags=("cost_control", "leadership"),
        targets_pulse_questions=("C3",),
        base_relevance=0.65,
        difficulty="intermediate",
        time_to_implement="1-month",
        urgency="high",
    ),
)


def tier_for_index(index: int) -> str:
    """Map a 0-based rank position to its tier."""
    if index == 0:
        return TIER_PRIMARY
    if index <= 2:
        return TIER_SECONDARY
    return TIER_ADDITIONAL


def _pulse_boost(
    guide: GuideCatalogEntry,
    answers: PulseAnswers,
    reasons: list[str],
) -> float:
    boost = 0.0
    for question_id in guide.targets_pulse_questions:
        raw_value = answers.get(question_id)
        # Legacy booleans and unanswered questions never match an answer value
        if isinstance(raw_value, bool) or not isinstance(raw_value, (int, float)):
            continue
        increment, reason = PULSE_INCREMENTS.get(float(raw_value), (0.0, None))
        boost += increment
        if reason is not None:
            reasons.append(reason.format(question_id=question_id))
    return boost


def score_guide(
    guide: GuideCatalogEntry,
    pillar: str,
    pillar_score: float,
    profile: ContextProfile,
    answers: PulseAnswers,
) -> tuple[float, list[str]]:
    """Score one guide for one pillar.

    Returns:
        Tuple of (score, reasons). Reasons appear in the order the
        contributions were added.
    """
    reasons: list[str] = []
    score = guide.base_relevance

    gap_boost = (PILLAR_SCORE_MAX - pillar_score) * GAP_WEIGHT
    score += gap_boost
    if gap_boost > GAP_REASON_THRESHOLD:
        reasons.append(f"addresses weak {pillar} domain ({pillar_score:.1f}/3)")

    context_boost = 0.0
    for rule in GUIDE_CONTEXT_RULES:
        if rule.tag in guide.tags and rule.applies(profile):
            context_boost += rule.increment
            reasons.append(rule.reason)
    score += context_boost * CONTEXT_WEIGHT

    score += _pulse_boost(guide, answers, reasons) * PULSE_WEIGHT

    score += URGENCY_MODIFIERS.get(guide.urgency, 0.0)
    if guide.urgency == "critical":
        reasons.append(CRITICAL_PRIORITY_REASON)

    return score, reasons


def recommend_guides_for_pillar(
    pillar: str,
    pillar_scores: PillarScores,
    profile: ContextProfile,
    answers: PulseAnswers,
    catalog: tuple[GuideCatalogEntry, ...] = GUIDE_CATALOG,
    limit: int = DEFAULT_GUIDE_LIMIT,
) -> list[GuideRecommendation]:
    """Rank the guides applicable to one pillar.

    Args:
        pillar: Pillar code (e.g., 'R').
        pillar_scores: Scores from ``score_pillars``; unscored counts as 0.
        profile: Validated context profile.
        answers: Raw pulse answers.
        catalog: Guide library in declaration order.
        limit: Number of guides to return.

    Returns:
        Up to ``limit`` guides, highest score first, tiered by position.
    """
    pillar_score = pillar_scores.get(pillar, 0.0)
    scored: list[tuple[float, list[str], GuideCatalogEntry]] = []

    for guide in catalog:
        if not guide.applies_to(pillar):
            continue
        score, reasons = score_guide(guide, pillar, pillar_score, profile, answers)
        scored.append((score, reasons, guide))

    ranked = sorted(scored, key=lambda entry: entry[0], reverse=True)[:limit]

    return [
        GuideRecommendation(
            id=guide.id,
            title=guide.title,
            tier=tier_for_index(index),
            score=score,
            reasons=reasons,
            difficulty=guide.difficulty,
            time_to_implement=guide.time_to_implement,
            urgency=guide.urgency,
        )
        for index, (score, reasons, guide) in enumerate(ranked)
    ]


def recommend_guides(
    pillar_scores: PillarScores,
    profile: ContextProfile,
    answers: PulseAnswers,
    catalog: tuple[GuideCatalogEntry, ...] = GUIDE_CATALOG,
    limit: int = DEFAULT_GUIDE_LIMIT,
) -> dict[str, list[GuideRecommendation]]:
    """Rank guides for every pillar, in canonical pillar order."""
    smart_guides = {
        pillar: recommend_guides_for_pillar(
            pillar, pillar_scores, profile, answers, catalog=catalog, limit=limit
        )
        for pillar in PILLAR_CODES
    }
    logger.debug(
        "Smart guides recommended",
        primary_guides={
            pillar: guides[0].id for pillar, guides in smart_guides.items() if guides
        },
    )
    return smart_guides
