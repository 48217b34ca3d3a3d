"""CORTEX pillar and pulse-question definitions.

The pulse check asks three questions per pillar. Question ids follow the
pattern ``<PillarCode><1..3>`` so the full set is 18 ids.

Pillars:
    C: Clarity & Command
    O: Operations & Data
    R: Risk, Trust & Security
    T: Talent & Culture
    E: Ecosystem & Infrastructure
    X: Experimentation & Evolution
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class Pillar:
    """A single maturity pillar.

    Attributes:
        code: Single-letter pillar code (e.g., 'C').
        name: Human-readable pillar name.
        question_ids: The three pulse question ids belonging to this pillar.
    """

    code: str
    name: str
    question_ids: tuple[str, str, str]


def _pillar(code: str, name: str) -> Pillar:
    return Pillar(code=code, name=name, question_ids=(f"{code}1", f"{code}2", f"{code}3"))


PILLARS: tuple[Pillar, ...] = (
    _pillar("C", "Clarity & Command"),
    _pillar("O", "Operations & Data"),
    _pillar("R", "Risk, Trust & Security"),
    _pillar("T", "Talent & Culture"),
    _pillar("E", "Ecosystem & Infrastructure"),
    _pillar("X", "Experimentation & Evolution"),
)

# Canonical pillar order; every per-pillar output iterates in this order
PILLAR_CODES: tuple[str, ...] = tuple(p.code for p in PILLARS)

PILLARS_BY_CODE: Mapping[str, Pillar] = MappingProxyType({p.code: p for p in PILLARS})

ALL_QUESTION_IDS: tuple[str, ...] = tuple(
    question_id for p in PILLARS for question_id in p.question_ids
)

QUESTION_ID_PATTERN = re.compile(r"[CORTEX][1-3]")

# Answer values offered by the pulse check: No / Started / Mostly / Yes
ALLOWED_ANSWER_VALUES: frozenset[float] = frozenset({0.0, 0.25, 0.5, 1.0})
