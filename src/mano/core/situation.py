"""
Situational classifier: what kind of management concern is this turn about?

The tie-break policy is the order of SITUATION_RULES. An utterance that
matches several categories resolves to the first rule that fires.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, List, Optional, Tuple

from ..content.vocabulary import (
    INTERPERSONAL_TERMS,
    PERFORMANCE_TERMS,
    SELF_REFLECTION_TERMS,
    SITUATION_GUIDANCE,
    STRATEGIC_TERMS,
    TACTICAL_TERMS,
    compile_terms,
)
from .models import FragmentOrigin, GuidanceFragment


class SituationTag(str, Enum):
    SELF_REFLECTION = "self_reflection"
    INTERPERSONAL = "interpersonal"
    PERFORMANCE = "performance"
    STRATEGIC = "strategic"
    TACTICAL = "tactical"


Predicate = Callable[[str], bool]


def _matches(terms) -> Predicate:
    pattern = compile_terms(terms)
    return lambda text: pattern.search(text) is not None


# Highest priority first
SITUATION_RULES: List[Tuple[SituationTag, Predicate]] = [
    (SituationTag.SELF_REFLECTION, _matches(SELF_REFLECTION_TERMS)),
    (SituationTag.INTERPERSONAL, _matches(INTERPERSONAL_TERMS)),
    (SituationTag.PERFORMANCE, _matches(PERFORMANCE_TERMS)),
    (SituationTag.STRATEGIC, _matches(STRATEGIC_TERMS)),
    (SituationTag.TACTICAL, _matches(TACTICAL_TERMS)),
]


def classify(
    utterance: str,
    rules: Optional[List[Tuple[SituationTag, Predicate]]] = None,
) -> Optional[SituationTag]:
    """Return the first matching situation, or None when nothing fires."""
    for tag, predicate in (rules if rules is not None else SITUATION_RULES):
        if predicate(utterance or ""):
            return tag
    return None


def situation_guidance(tag: Optional[SituationTag]) -> GuidanceFragment:
    if tag is None:
        return GuidanceFragment(FragmentOrigin.SITUATION, "")
    return GuidanceFragment(FragmentOrigin.SITUATION, SITUATION_GUIDANCE[tag.value])
