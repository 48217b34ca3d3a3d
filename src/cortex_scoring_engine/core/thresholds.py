"""Single-sourced scoring thresholds.

Every threshold read by the gate evaluator, content tagger, priority move
ranker, guidance synthesizer and guide recommender lives here. Components
import these names instead of repeating literals.

An older route handler compared the assurance-cadence and data-residency
gates against 4. The canonical value is 3 for both.
"""

# Context profile ordinal scale (inclusive)
CONTEXT_SCALE_MIN: int = 0
CONTEXT_SCALE_MAX: int = 4

# A context field at or above this value counts as "high"
HIGH_CONTEXT_THRESHOLD: int = 3

# build_readiness at or below this value counts as "low readiness"
LOW_READINESS_THRESHOLD: int = 1

ASSURANCE_CADENCE_THRESHOLD: int = HIGH_CONTEXT_THRESHOLD
DATA_RESIDENCY_THRESHOLD: int = HIGH_CONTEXT_THRESHOLD

# Pillar scores are the sum of three answers in [0, 1]
PILLAR_SCORE_MAX: float = 3.0

# Scored pillars strictly below this value are considered weak
WEAK_PILLAR_THRESHOLD: float = 2.0
