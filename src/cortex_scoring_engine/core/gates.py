"""Context gate evaluation.

A gate is a policy or readiness condition that must be addressed before an
organisation scales its AI work. Eight gates are defined as declarative
records; each carries a trigger that returns the profile fields which crossed
its threshold (an empty dict means the gate does not fire).

Gates are evaluated and emitted in the fixed order of ``GATE_DEFINITIONS``.
UIs render gates in list order, so the order is part of the output contract.
"""

from collections.abc import Callable
from dataclasses import dataclass

from cortex_scoring_engine.core.models import ContextProfile, Gate, PillarScores
from cortex_scoring_engine.core.scale import format_scale_value, humanize_field
from cortex_scoring_engine.core.thresholds import (
    ASSURANCE_CADENCE_THRESHOLD,
    DATA_RESIDENCY_THRESHOLD,
    HIGH_CONTEXT_THRESHOLD,
    LOW_READINESS_THRESHOLD,
)
from cortex_scoring_engine.observability import get_logger

logger = get_logger(__name__)

GateTrigger = Callable[[ContextProfile], dict[str, int | bool]]

GATE_STATUS_UNMET = "unmet"


@dataclass(frozen=True)
class GateDefinition:
    """Static definition of a single gate.

    Attributes:
        id: Stable gate identifier.
        pillar: Pillar code the gate belongs to.
        title: Short display title.
        reason: Plain-language explanation of why the gate matters.
        actions: Suggested actions to satisfy the gate.
        trigger: Returns the triggering profile fields, empty if not fired.
    """

    id: str
    pillar: str
    title: str
    reason: str
    actions: tuple[str, ...]
    trigger: GateTrigger


def _at_least(field: str, threshold: int) -> GateTrigger:
    def trigger(profile: ContextProfile) -> dict[str, int | bool]:
        value = getattr(profile, field)
        return {field: value} if value >= threshold else {}

    return trigger


def _at_most(field: str, threshold: int) -> GateTrigger:
    def trigger(profile: ContextProfile) -> dict[str, int | bool]:
        value = getattr(profile, field)
        return {field: value} if value <= threshold else {}

    return trigger


def _flag(field: str) -> GateTrigger:
    def trigger(profile: ContextProfile) -> dict[str, int | bool]:
        value = getattr(profile, field)
        return {field: value} if value else {}

    return trigger


def _human_review_trigger(profile: ContextProfile) -> dict[str, int | bool]:
    # Either field alone fires the gate; explain only the ones that crossed
    explain: dict[str, int | bool] = {}
    if profile.regulatory_intensity >= HIGH_CONTEXT_THRESHOLD:
        explain["regulatory_intensity"] = profile.regulatory_intensity
    if profile.safety_criticality >= HIGH_CONTEXT_THRESHOLD:
        explain["safety_criticality"] = profile.safety_criticality
    return explain


GATE_DEFINITIONS: tuple[GateDefinition, ...] = (
    GateDefinition(
        id="require_hitl",
        pillar="O",
        title="Human Review Required",
        reason=(
            "Your AI can't fly solo when mistakes could hurt people or break regulations. "
            "Keep a human in charge of high-stakes decisions to protect your customers and "
            "your reputation. Start with manual approval for critical actions, then gradually "
            "automate the safe stuff."
        ),
        actions=(
            "Set up human approval for risky AI decisions",
            "Define which decisions need oversight",
            "Create escalation rules",
        ),
        trigger=_human_review_trigger,
    ),
    GateDefinition(
        id="assurance_cadence",
        pillar="R",
        title="Regular AI Check-ups Needed",
        reason=(
            "Regulators are watching your industry closely. Monthly checks catch AI bias and "
            "drift before they become headlines. Annual audits prove you're doing things right. "
            "Think of it like financial auditing: boring but essential for trust."
        ),
        actions=(
            "Schedule monthly AI performance reviews",
            "Plan annual compliance audits",
            "Document all review findings",
        ),
        trigger=_at_least("regulatory_intensity", ASSURANCE_CADENCE_THRESHOLD),
    ),
    GateDefinition(
        id="data_residency",
        pillar="R",
        title="Lock Down Sensitive Data",
        reason=(
            "You handle sensitive data that can't leave your control. Keep it in your region, "
            "delete it quickly, and never let AI models memorize it. This is what keeps you out "
            "of breach notifications and regulatory fines."
        ),
        actions=(
            "Keep data in your region only",
            "Auto-delete after 30 days",
            "Block data from leaving your systems",
        ),
        trigger=_at_least("data_sensitivity", DATA_RESIDENCY_THRESHOLD),
    ),
    GateDefinition(
        id="latency_fallback",
        pillar="O",
        title="Speed Matters: Build Backup Plans",
        reason=(
            "Your users won't wait. When AI is slow or offline, you need instant fallbacks. "
            "Set a 200ms speed limit and have simpler backup models ready. Better to give a "
            "good-enough answer fast than a perfect answer never."
        ),
        actions=(
            "Set 200ms response time target",
            "Build faster backup models",
            "Test what happens when AI fails",
        ),
        trigger=_at_least("latency_edge", HIGH_CONTEXT_THRESHOLD),
    ),
    GateDefinition(
        id="scale_hardening",
        pillar="O",
        title="Prepare for the Flood",
        reason=(
            "You're expecting massive traffic. AI at scale breaks differently: costs explode "
            "and systems crash. Test with 10x your expected load, set spending limits, and have "
            "multiple providers ready. Success shouldn't kill your business."
        ),
        actions=(
            "Stress test with 10x expected traffic",
            "Set cost limits and rate caps",
            "Line up backup AI providers",
        ),
        trigger=_at_least("scale_throughput", HIGH_CONTEXT_THRESHOLD),
    ),
    GateDefinition(
        id="build_readiness",
        pillar="T",
        title="Buy First, Build Later",
        reason=(
            "You're not ready to build custom AI yet, and that's okay. Start with off-the-shelf "
            "AI tools to learn what works. Building too early wastes money and talent. Get some "
            "wins with existing solutions first, then consider custom work."
        ),
        actions=(
            "Start with vendor AI solutions",
            "Build internal AI expertise gradually",
            "Focus on using AI, not building it",
        ),
        trigger=_at_most("build_readiness", LOW_READINESS_THRESHOLD),
    ),
    GateDefinition(
        id="procurement_compliance",
        pillar="C",
        title="Navigate Procurement Rules",
        reason=(
            "Your procurement process has rules; follow them or face delays. AI purchases "
            "trigger new questions about fairness, transparency, and vendor lock-in. Start the "
            "paperwork early and involve procurement from day one. Budget 3-6 extra months."
        ),
        actions=(
            "Start procurement process early",
            "Document AI fairness requirements",
            "Add 3-6 months to timeline",
        ),
        trigger=_flag("procurement_constraints"),
    ),
    GateDefinition(
        id="edge_ops",
        pillar="E",
        title="AI at the Edge Needs Special Care",
        reason=(
            "Your AI runs in factories, vehicles, or remote sites. It must work offline, survive "
            "harsh conditions, and update without breaking operations. Design for intermittent "
            "connectivity and train field teams before deployment."
        ),
        actions=(
            "Design AI to work offline",
            "Plan safe remote updates",
            "Train field teams on AI tools",
        ),
        trigger=_flag("edge_operations"),
    ),
)


def describe_trigger(explain: dict[str, int | bool]) -> str:
    """Render triggering fields as a sentence, e.g. 'Triggered by data sensitivity: PII/Trade Secrets (3/4).'"""
    parts: list[str] = []
    for field, value in explain.items():
        if isinstance(value, bool):
            parts.append(humanize_field(field))
        else:
            parts.append(f"{humanize_field(field)}: {format_scale_value(field, value)}")
    return f"Triggered by {' and '.join(parts)}."


def evaluate_gates(
    profile: ContextProfile,
    pillar_scores: PillarScores,
    definitions: tuple[GateDefinition, ...] = GATE_DEFINITIONS,
) -> list[Gate]:
    """Evaluate all gate predicates against a context profile.

    Predicates are independent: zero to eight gates may fire. None of the
    canonical predicates reads a pillar score; ``pillar_scores`` is part of
    the evaluator contract so gate definitions may use it, and is logged
    alongside the fired gates.

    Args:
        profile: Validated context profile.
        pillar_scores: Scores from ``score_pillars``.
        definitions: Gate definitions, in emission order.

    Returns:
        Fired gates in definition order.
    """
    gates: list[Gate] = []

    for definition in definitions:
        explain = definition.trigger(profile)
        if not explain:
            continue
        gates.append(
            Gate(
                id=definition.id,
                pillar=definition.pillar,
                title=definition.title,
                reason=f"{definition.reason} {describe_trigger(explain)}",
                explain=explain,
                status=GATE_STATUS_UNMET,
                actions=list(definition.actions),
            )
        )

    logger.debug(
        "Context gates evaluated",
        gate_ids=[gate.id for gate in gates],
        gated_pillar_scores={
            gate.pillar: pillar_scores.get(gate.pillar) for gate in gates
        },
    )
    return gates
