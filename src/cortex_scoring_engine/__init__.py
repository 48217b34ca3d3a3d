"""CORTEX scoring engine.

Deterministic scoring, gating and recommendation for the CORTEX AI-maturity
self-assessment: pillar scores, context gates, content tags, ranked priority
moves, context guidance and per-pillar implementation guides.
"""

__version__ = "0.1.0"
