"""Context guidance synthesis.

Turns content tags and weak pillars into DECIDE evaluation weights, focus
notes, recommendations and risk mitigations. The rule set is additive and
authored so that no two rules write conflicting values.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from cortex_scoring_engine.core.models import ContextGuidance, PillarScores
from cortex_scoring_engine.core.pillars import PILLAR_CODES
from cortex_scoring_engine.core.thresholds import WEAK_PILLAR_THRESHOLD
from cortex_scoring_engine.observability import get_logger

logger = get_logger(__name__)

DECIDE_DIMENSIONS: tuple[str, ...] = (
    "Differentiation",
    "Economics",
    "Compliance",
    "Implementation",
    "Data",
    "Evolution",
)

BASELINE_WEIGHT: int = 2


@dataclass(frozen=True)
class WeightRule:
    """Applies when any of ``when_any`` is among the content tags.

    Attributes:
        when_any: Content tags that activate the rule.
        weights: DECIDE weight overrides.
        focus: Focus note appended when active.
        recommendation: Optional recommendation appended when active.
    """

    when_any: tuple[str, ...]
    weights: tuple[tuple[str, int], ...]
    focus: str
    recommendation: str | None = None


WEIGHT_RULES: tuple[WeightRule, ...] = (
    WeightRule(
        when_any=("regulated", "high_safety"),
        weights=(("Compliance", 3),),
        focus="Regulatory compliance is critical - prioritize governance and controls",
    ),
    WeightRule(
        when_any=("hyperscale", "edge"),
        weights=(("Economics", 3), ("Evolution", 3)),
        focus="Scale and performance optimization are key success factors",
    ),
    WeightRule(
        when_any=("data_advantage",),
        weights=(("Differentiation", 3), ("Data", 3)),
        focus="Leverage your proprietary data as a competitive advantage",
    ),
    WeightRule(
        when_any=("low_readiness",),
        weights=(("Implementation", 1),),
        focus="Focus on building foundational capabilities before scaling",
        recommendation="Consider Buy → RAG → Light Fine-tuning progression",
    ),
)

WEAK_PILLAR_RECOMMENDATIONS: Mapping[str, str] = MappingProxyType({
    "C": "Establish clear AI strategy and governance structure",
    "O": "Implement operational monitoring and human oversight",
    "R": "Strengthen risk management and compliance controls",
    "T": "Invest in AI skills development and change management",
    "E": "Build robust AI infrastructure and ecosystem capabilities",
    "X": "Create systematic approach to AI experimentation and learning",
})

RISK_MITIGATIONS: tuple[tuple[str, str], ...] = (
    ("regulated", "Implement comprehensive audit trails and documentation"),
    ("high_safety", "Establish rigorous testing and validation procedures"),
    ("edge", "Plan for offline scenarios and network connectivity issues"),
)


def synthesize_guidance(
    pillar_scores: PillarScores,
    content_tags: list[str],
) -> ContextGuidance:
    """Build context guidance from pillar scores and content tags.

    Args:
        pillar_scores: Scores from ``score_pillars``. Unscored pillars are
            not treated as weak.
        content_tags: Tags from ``generate_content_tags``.

    Returns:
        ContextGuidance with an empty ``smart_guides`` map.
    """
    tags = set(content_tags)
    weights = {dimension: BASELINE_WEIGHT for dimension in DECIDE_DIMENSIONS}
    key_focus: list[str] = []
    recommendations: list[str] = []

    for rule in WEIGHT_RULES:
        if tags.isdisjoint(rule.when_any):
            continue
        weights.update(rule.weights)
        key_focus.append(rule.focus)
        if rule.recommendation is not None:
            recommendations.append(rule.recommendation)

    weak_pillars = [
        code
        for code in PILLAR_CODES
        if code in pillar_scores and pillar_scores[code] < WEAK_PILLAR_THRESHOLD
    ]
    recommendations.extend(WEAK_PILLAR_RECOMMENDATIONS[code] for code in weak_pillars)

    risk_mitigations = [text for tag, text in RISK_MITIGATIONS if tag in tags]

    logger.debug(
        "Context guidance synthesized",
        decide_weights=weights,
        weak_pillars=weak_pillars,
        recommendation_count=len(recommendations),
    )
    return ContextGuidance(
        decide_weights=weights,
        key_focus=key_focus,
        recommendations=recommendations,
        risk_mitigations=risk_mitigations,
    )
