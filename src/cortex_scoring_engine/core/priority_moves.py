"""Priority move ranking.

Scores a fixed catalog of candidate moves and returns the top of the ranking
with an explanation for every score::

    gap_boost     = 0.02 * (3 - pillar_score)    # unscored pillar counts as 0
    profile_boost = sum of increments of the boost rules the move's tags match
    priority      = base_score + gap_boost + profile_boost

Moves are sorted by priority, highest first. ``sorted`` is stable, so ties
keep catalog declaration order and the ranking is reproducible.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from cortex_scoring_engine.core.models import (
    ContextProfile,
    PillarScores,
    PlaybookRef,
    PriorityMove,
    PriorityMoveExplain,
    PriorityMoveRanking,
)
from cortex_scoring_engine.core.thresholds import (
    HIGH_CONTEXT_THRESHOLD,
    LOW_READINESS_THRESHOLD,
    PILLAR_SCORE_MAX,
)
from cortex_scoring_engine.observability import get_logger

logger = get_logger(__name__)

GAP_BOOST_PER_POINT: float = 0.02
DEFAULT_MOVE_LIMIT: int = 6

FOUNDATIONAL_RATIONALE = (
    "This foundational capability will strengthen your AI readiness across multiple domains."
)


@dataclass(frozen=True)
class MoveTemplate:
    """A candidate move in the priority catalog.

    Attributes:
        id: Stable move identifier.
        pillar: Pillar code the move strengthens.
        title: Action-oriented title.
        description: What the move involves.
        base_score: Hand-authored base priority in 0-1.
        tags: Context tags matched against the profile boost rules.
        playbook: Supporting templates and guides.
    """

    id: str
    pillar: str
    title: str
    description: str
    base_score: float
    tags: tuple[str, ...]
    playbook: tuple[PlaybookRef, ...]


@dataclass(frozen=True)
class ProfileBoostRule:
    """Adds ``increment`` once to any move carrying one of ``tags`` when ``applies``."""

    tags: tuple[str, ...]
    applies: Callable[[ContextProfile], bool]
    increment: float


PROFILE_BOOST_RULES: tuple[ProfileBoostRule, ...] = (
    ProfileBoostRule(
        tags=("regulatory", "safety"),
        applies=lambda p: (
            p.regulatory_intensity >= HIGH_CONTEXT_THRESHOLD
            or p.safety_criticality >= HIGH_CONTEXT_THRESHOLD
        ),
        increment=0.08,
    ),
    ProfileBoostRule(
        tags=("data_governance",),
        applies=lambda p: p.data_sensitivity >= HIGH_CONTEXT_THRESHOLD,
        increment=0.06,
    ),
    ProfileBoostRule(
        tags=("brand_risk",),
        applies=lambda p: p.brand_exposure >= HIGH_CONTEXT_THRESHOLD,
        increment=0.05,
    ),
    ProfileBoostRule(
        tags=("agility",),
        applies=lambda p: p.clock_speed >= HIGH_CONTEXT_THRESHOLD,
        increment=0.07,
    ),
    ProfileBoostRule(
        tags=("edge",),
        applies=lambda p: p.latency_edge >= HIGH_CONTEXT_THRESHOLD,
        increment=0.06,
    ),
    ProfileBoostRule(
        tags=("scale",),
        applies=lambda p: p.scale_throughput >= HIGH_CONTEXT_THRESHOLD,
        increment=0.06,
    ),
    ProfileBoostRule(
        tags=("data_advantage",),
        applies=lambda p: p.data_advantage >= HIGH_CONTEXT_THRESHOLD,
        increment=0.07,
    ),
    ProfileBoostRule(
        tags=("readiness_building",),
        applies=lambda p: p.build_readiness <= LOW_READINESS_THRESHOLD,
        increment=0.07,
    ),
    ProfileBoostRule(
        tags=("cost_control",),
        applies=lambda p: p.finops_priority >= HIGH_CONTEXT_THRESHOLD,
        increment=0.05,
    ),
)

# Phrase per triggering tag, in the order they appear in a rationale
RATIONALE_PHRASES: Mapping[str, str] = MappingProxyType({
    "regulatory": "your high regulatory requirements",
    "safety": "your safety-critical applications",
    "brand_risk": "your high brand exposure",
    "data_governance": "your sensitive data requirements",
    "edge": "your edge/latency needs",
    "scale": "your high-scale environment",
    "data_advantage": "your strong data assets",
    "readiness_building": "your current readiness gaps",
    "cost_control": "your cost management priorities",
    "agility": "your need for competitive speed",
})


def _guide(label: str) -> PlaybookRef:
    return PlaybookRef(type="guide", label=label)


def _template(label: str) -> PlaybookRef:
    return PlaybookRef(type="template", label=label)


def _checklist(label: str) -> PlaybookRef:
    return PlaybookRef(type="checklist", label=label)


MOVE_CATALOG: tuple[MoveTemplate, ...] = (
    # Risk & Trust
    MoveTemplate(
        id="incident_runbook",
        pillar="R",
        title="Publish AI incident response runbook",
        description=(
            "Create a documented process for handling AI system failures, model drift, or "
            "unexpected outputs that could impact users or brand reputation."
        ),
        base_score=0.70,
        tags=("regulatory", "brand_risk"),
        playbook=(_template("Incident Response Template"), _guide("Tabletop Exercise Guide")),
    ),
    MoveTemplate(
        id="privacy_controls",
        pillar="R",
        title="Implement privacy and data governance controls",
        description=(
            "Establish policies and technical controls for handling sensitive data in AI "
            "systems, including data minimization, consent management, and audit trails."
        ),
        base_score=0.65,
        tags=("data_governance", "regulatory"),
        playbook=(_checklist("Privacy Assessment Checklist"), _template("Data Governance Policy")),
    ),
    # Operations
    MoveTemplate(
        id="monitoring_dashboard",
        pillar="O",
        title="Deploy AI monitoring and observability dashboard",
        description=(
            "Set up real-time monitoring for model performance, latency, accuracy drift, and "
            "resource utilization across your AI systems."
        ),
        base_score=0.60,
        tags=("scale", "edge"),
        playbook=(_guide("Metrics Selection Guide"), _template("Dashboard Template")),
    ),
    MoveTemplate(
        id="human_oversight",
        pillar="O",
        title="Establish human oversight protocols",
        description=(
            "Define when and how humans review AI decisions, especially for high-stakes "
            "applications or regulated environments."
        ),
        base_score=0.68,
        tags=("safety", "regulatory"),
        playbook=(
            PlaybookRef(type="framework", label="Human-in-Loop Framework"),
            _guide("Escalation Procedures"),
        ),
    ),
    # Clarity & Command
    MoveTemplate(
        id="ai_governance",
        pillar="C",
        title="Establish AI governance framework",
        description=(
            "Create clear decision rights, approval processes, and accountability structures "
            "for AI initiatives across the organization."
        ),
        base_score=0.72,
        tags=("regulatory", "readiness_building"),
        playbook=(_template("Governance Charter"), _guide("Stakeholder Mapping")),
    ),
    # Talent & Culture
    MoveTemplate(
        id="skills_development",
        pillar="T",
        title="Launch AI skills development program",
        description=(
            "Build internal AI literacy and capabilities through structured training, "
            "hands-on projects, and knowledge sharing."
        ),
        base_score=0.63,
        tags=("readiness_building",),
        playbook=(_guide("Skills Assessment Tool"), _template("Training Curriculum")),
    ),
    # Ecosystem & Infrastructure
    MoveTemplate(
        id="mlops_platform",
        pillar="E",
        title="Deploy MLOps platform and tooling",
        description=(
            "Implement infrastructure for versioning models, automating deployments, and "
            "managing the ML lifecycle at scale."
        ),
        base_score=0.66,
        tags=("scale", "readiness_building", "cost_control"),
        playbook=(_guide("Tool Selection Guide"), _checklist("Platform Readiness")),
    ),
    MoveTemplate(
        id="edge_deployment",
        pillar="E",
        title="Implement edge AI deployment capabilities",
        description=(
            "Enable AI models to run on edge devices for lower latency, offline operation, "
            "or data residency requirements."
        ),
        base_score=0.64,
        tags=("edge", "agility"),
        playbook=(_guide("Edge Architecture Patterns"), _template("Deployment Checklist")),
    ),
    # Experimentation & Evolution
    MoveTemplate(
        id="rapid_prototyping",
        pillar="X",
        title="Set up rapid AI prototyping environment",
        description=(
            "Create a sandbox environment where teams can quickly test AI concepts with "
            "production-like data and infrastructure."
        ),
        base_score=0.61,
        tags=("agility", "data_advantage"),
        playbook=(_template("Sandbox Setup Guide"), _guide("Experiment Tracking")),
    ),
)


def compute_gap_boost(pillar_score: float) -> float:
    """Linear boost for weak pillars: 0.06 for an unscored pillar, 0 at the maximum."""
    return GAP_BOOST_PER_POINT * (PILLAR_SCORE_MAX - pillar_score)


def compute_profile_boost(
    profile: ContextProfile,
    tags: tuple[str, ...],
    rules: tuple[ProfileBoostRule, ...] = PROFILE_BOOST_RULES,
) -> tuple[float, list[str]]:
    """Sum the boost rules matched by a move's tags.

    Args:
        profile: Validated context profile.
        tags: The move's tags.
        rules: Boost rules to apply.

    Returns:
        Tuple of (profile_boost, triggering tags in the move's tag order).
    """
    active_rules = [rule for rule in rules if rule.applies(profile)]
    boost = 0.0
    for rule in active_rules:
        if any(tag in rule.tags for tag in tags):
            boost += rule.increment

    triggering = [
        tag for tag in tags if any(tag in rule.tags for rule in active_rules)
    ]
    return boost, triggering


def build_rationale(triggering_dimensions: list[str]) -> str:
    """One-line prose naming the contextual drivers behind a move's boost."""
    reasons = [
        phrase
        for tag, phrase in RATIONALE_PHRASES.items()
        if tag in triggering_dimensions
    ]
    if not reasons:
        return FOUNDATIONAL_RATIONALE
    return f"Prioritized based on {', '.join(reasons)}."


def rank_priority_moves(
    profile: ContextProfile,
    pillar_scores: PillarScores,
    catalog: tuple[MoveTemplate, ...] = MOVE_CATALOG,
    limit: int = DEFAULT_MOVE_LIMIT,
) -> PriorityMoveRanking:
    """Score, sort and rank the priority move catalog.

    Args:
        profile: Validated context profile.
        pillar_scores: Scores from ``score_pillars``; missing pillars count as 0.
        catalog: Candidate moves in declaration order.
        limit: Number of top-ranked moves to return.

    Returns:
        PriorityMoveRanking with the top ``limit`` moves (ranks 1..N) and the
        number of moves evaluated.
    """
    scored: list[tuple[float, MoveTemplate, PriorityMoveExplain]] = []

    for template in catalog:
        pillar_score = pillar_scores.get(template.pillar, 0.0)
        gap_boost = compute_gap_boost(pillar_score)
        profile_boost, triggering = compute_profile_boost(profile, template.tags)
        priority = template.base_score + gap_boost + profile_boost
        explain = PriorityMoveExplain(
            gap_boost=gap_boost,
            profile_boost=profile_boost,
            pillar_score=pillar_score,
            triggering_dimensions=triggering,
        )
        scored.append((priority, template, explain))

    ranked = sorted(scored, key=lambda entry: entry[0], reverse=True)

    moves = [
        PriorityMove(
            id=template.id,
            pillar=template.pillar,
            title=template.title,
            description=template.description,
            playbook=list(template.playbook),
            base_score=template.base_score,
            tags=list(template.tags),
            priority=priority,
            rank=index + 1,
            explain=explain,
            rationale=build_rationale(explain.triggering_dimensions),
        )
        for index, (priority, template, explain) in enumerate(ranked[:limit])
    ]

    logger.debug(
        "Priority moves ranked",
        total_evaluated=len(catalog),
        returned=len(moves),
        top_move=moves[0].id if moves else None,
    )
    return PriorityMoveRanking(moves=moves, total_evaluated=len(catalog))
