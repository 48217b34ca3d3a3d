"""Content tag generation.

Content tags are the shared situation vocabulary used to route guidance and
content. Nine threshold rules are followed by a functional-focus tag and one
normalised tag per free-text sector label.

Tags are returned in rule order and are not de-duplicated; consumers treat
the list as a multiset. No two rules emit the same string.
"""

import re
from collections.abc import Callable

from cortex_scoring_engine.core.models import ContextProfile
from cortex_scoring_engine.core.thresholds import HIGH_CONTEXT_THRESHOLD, LOW_READINESS_THRESHOLD
from cortex_scoring_engine.observability import get_logger

logger = get_logger(__name__)

TAG_RULES: tuple[tuple[str, Callable[[ContextProfile], bool]], ...] = (
    ("regulated", lambda p: p.regulatory_intensity >= HIGH_CONTEXT_THRESHOLD),
    ("high_safety", lambda p: p.safety_criticality >= HIGH_CONTEXT_THRESHOLD),
    ("high_sensitivity", lambda p: p.data_sensitivity >= HIGH_CONTEXT_THRESHOLD),
    ("edge", lambda p: p.edge_operations or p.latency_edge >= HIGH_CONTEXT_THRESHOLD),
    ("hyperscale", lambda p: p.scale_throughput >= HIGH_CONTEXT_THRESHOLD),
    ("data_advantage", lambda p: p.data_advantage >= HIGH_CONTEXT_THRESHOLD),
    ("low_readiness", lambda p: p.build_readiness <= LOW_READINESS_THRESHOLD),
    ("finops_strict", lambda p: p.finops_priority >= HIGH_CONTEXT_THRESHOLD),
    ("public_procurement", lambda p: p.procurement_constraints),
)

OPS_FOCUS = "Ops"
OPS_FIRST_TAG = "ops_first"

_WHITESPACE = re.compile(r"\s+")


def normalize_label(label: str) -> str:
    """Lower-case a free-text label and replace whitespace runs with underscores."""
    return _WHITESPACE.sub("_", label.lower())


def generate_content_tags(profile: ContextProfile) -> list[str]:
    """Derive content tags from a context profile.

    Args:
        profile: Validated context profile.

    Returns:
        Tags in rule order, then 'ops_first', then normalised labels.
    """
    tags = [tag for tag, applies in TAG_RULES if applies(profile)]

    if OPS_FOCUS in profile.functional_focus:
        tags.append(OPS_FIRST_TAG)

    tags.extend(normalize_label(label) for label in profile.labels)

    logger.debug("Content tags generated", tags=tags)
    return tags
