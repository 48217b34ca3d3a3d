"""Human-readable labels for the 0-4 context profile scale."""

from collections.abc import Mapping
from types import MappingProxyType

from cortex_scoring_engine.core.thresholds import CONTEXT_SCALE_MAX, CONTEXT_SCALE_MIN

CONTEXT_FIELD_LABELS: Mapping[str, tuple[str, str, str, str, str]] = MappingProxyType({
    "regulatory_intensity": ("None", "Guidance", "Some Rules", "Audited", "Heavily Regulated"),
    "data_sensitivity": ("Public", "Internal", "Confidential", "PII/Trade Secrets", "PHI/PCI + Regional"),
    "safety_criticality": ("Low Harm", "Inconvenience", "Costly Mistakes", "Serious Impact", "Physical Safety"),
    "brand_exposure": ("Tolerant", "Minor Risk", "Meaningful Risk", "Major Risk", "Existential Risk"),
    "clock_speed": ("Annual", "Quarterly", "Monthly", "Weekly", "Frontier Pace"),
    "latency_edge": ("Seconds OK", "<1s", "<500ms", "<200ms", "Offline/Edge"),
    "scale_throughput": ("Small Internal", "Department", "Enterprise", "High-Traffic", "Hyperscale"),
    "data_advantage": ("None", "Small", "Moderate", "Strong", "Large & Clear"),
    "build_readiness": ("None", "Early Pilots", "Basics in Place", "Mature CoE", "Industrialized"),
    "finops_priority": ("Low", "Med-Low", "Medium", "High", "Strict Budgets"),
})

GENERIC_SCALE_LABELS: tuple[str, str, str, str, str] = (
    "Very Low",
    "Low",
    "Medium",
    "High",
    "Very High",
)


def format_scale_value(field: str, value: int, show_numeric: bool = True) -> str:
    """Format a context value with its field-specific label.

    Unknown fields fall back to generic labels. Values are clamped to 0-4.

    Args:
        field: Context profile field name (e.g., 'scale_throughput').
        value: Scale value 0-4.
        show_numeric: Whether to append the "(n/4)" indicator.

    Returns:
        Formatted string such as "Enterprise (2/4)" or "Enterprise".
    """
    clamped = max(CONTEXT_SCALE_MIN, min(CONTEXT_SCALE_MAX, round(value)))
    labels = CONTEXT_FIELD_LABELS.get(field, GENERIC_SCALE_LABELS)
    label = labels[clamped]
    return f"{label} ({clamped}/{CONTEXT_SCALE_MAX})" if show_numeric else label


def humanize_field(field: str) -> str:
    """Turn a snake_case profile field into lower-case prose."""
    return field.replace("_", " ")
