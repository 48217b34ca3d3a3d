"""Engine input and output records.

Inputs (ContextProfile) and outputs (Gate, PriorityMove, GuideRecommendation,
ContextGuidance, AssessmentResult) are frozen dataclasses. Every evaluation
builds fresh instances; nothing here is mutated after construction. Each
output record exposes ``to_dict()`` returning plain JSON-serialisable data so
callers can persist, cache, or transmit results without touching the engine.
"""

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

PulseAnswers = Mapping[str, float | bool | None]
PillarScores = dict[str, float]

CONTEXT_SCALE_FIELDS: tuple[str, ...] = (
    "regulatory_intensity",
    "data_sensitivity",
    "safety_criticality",
    "brand_exposure",
    "clock_speed",
    "latency_edge",
    "scale_throughput",
    "data_advantage",
    "build_readiness",
    "finops_priority",
)

CONTEXT_FLAG_FIELDS: tuple[str, ...] = (
    "procurement_constraints",
    "edge_operations",
)


@dataclass(frozen=True)
class ContextProfile:
    """Organisational situation captured by the intake flow.

    Ordinal fields are integers on the closed 0-4 scale. Defaults are the
    neutral values at which no gate or content tag fires.

    Attributes:
        regulatory_intensity: How heavily regulated the organisation is.
        data_sensitivity: Sensitivity of data handled by AI systems.
        safety_criticality: Potential for harm from AI mistakes.
        brand_exposure: Reputational risk from visible AI failures.
        clock_speed: Pace of competitive change.
        latency_edge: Latency requirements, up to offline/edge.
        scale_throughput: Expected traffic and scale.
        data_advantage: Strength of proprietary data assets.
        build_readiness: Capacity to build custom AI.
        finops_priority: Strictness of AI cost management.
        procurement_constraints: Whether formal procurement rules apply.
        edge_operations: Whether AI runs at remote/field sites.
        labels: Free-text sector or industry labels.
        functional_focus: Functional areas the organisation focuses on.
    """

    regulatory_intensity: int = 0
    data_sensitivity: int = 0
    safety_criticality: int = 0
    brand_exposure: int = 0
    clock_speed: int = 0
    latency_edge: int = 0
    scale_throughput: int = 0
    data_advantage: int = 0
    build_readiness: int = 2
    finops_priority: int = 0
    procurement_constraints: bool = False
    edge_operations: bool = False
    labels: tuple[str, ...] = ()
    functional_focus: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ContextProfile":
        """Build a profile from a plain mapping, ignoring unknown keys.

        No range checking happens here; use
        ``core.validation.validate_context_profile`` for untrusted input.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        values: dict[str, Any] = {k: v for k, v in data.items() if k in known and v is not None}
        for list_field in ("labels", "functional_focus"):
            if list_field in values:
                values[list_field] = tuple(values[list_field])
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        data = dataclasses.asdict(self)
        data["labels"] = list(self.labels)
        data["functional_focus"] = list(self.functional_focus)
        return data


@dataclass(frozen=True)
class Gate:
    """A triggered policy or readiness gate.

    Attributes:
        id: Stable gate identifier (e.g., 'require_hitl').
        pillar: Pillar code the gate belongs to.
        title: Short display title.
        reason: Explanation including the triggering value(s).
        explain: Exactly the profile fields that triggered the gate.
        status: Gate status; freshly evaluated gates are always 'unmet'.
        actions: Suggested actions to satisfy the gate.
    """

    id: str
    pillar: str
    title: str
    reason: str
    explain: dict[str, int | bool]
    status: str
    actions: list[str]

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class PlaybookRef:
    """Reference to a template, guide, checklist or framework."""

    type: str
    label: str
    url: str = "#"


@dataclass(frozen=True)
class PriorityMoveExplain:
    gap_boost: float
    profile_boost: float
    pillar_score: float
    triggering_dimensions: list[str]


@dataclass(frozen=True)
class PriorityMove:
    """A catalog move enriched with its computed priority and rank."""

    id: str
    pillar: str
    title: str
    description: str
    playbook: list[PlaybookRef]
    base_score: float
    tags: list[str]
    priority: float
    rank: int
    explain: PriorityMoveExplain
    rationale: str

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class PriorityMoveRanking:
    """Top-N priority moves plus the size of the evaluated catalog."""

    moves: list[PriorityMove]
    total_evaluated: int

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class GuideRecommendation:
    """A ranked implementation guide for one pillar.

    Attributes:
        id: Guide identifier.
        title: Guide title.
        tier: 'primary', 'secondary' or 'additional'.
        score: Computed relevance score.
        reasons: Human-readable reasons behind the score.
        difficulty: beginner | intermediate | advanced.
        time_to_implement: Rough implementation time bucket.
        urgency: critical | high | medium | low.
    """

    id: str
    title: str
    tier: str
    score: float
    reasons: list[str]
    difficulty: str
    time_to_implement: str
    urgency: str

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class ContextGuidance:
    """DECIDE weights, focus notes, recommendations and risk mitigations.

    ``smart_guides`` is empty when produced by the synthesizer alone and is
    filled in by the engine facade.
    """

    decide_weights: dict[str, int]
    key_focus: list[str]
    recommendations: list[str]
    risk_mitigations: list[str]
    smart_guides: dict[str, list[GuideRecommendation]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class AssessmentResult:
    """Everything the engine derives for one assessment."""

    pillar_scores: PillarScores
    triggered_gates: list[Gate]
    priority_moves: PriorityMoveRanking
    content_tags: list[str]
    context_guidance: ContextGuidance
    completed_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)
