"""
Response-length policy: how long should the assistant's answer be?
"""

from __future__ import annotations

from typing import Sequence

from ..content.vocabulary import (
    EXPLANATORY_TERMS,
    LENGTH_DIRECTIVES,
    QUICK_QUESTION_TERMS,
    compile_terms,
)
from .config import DEFAULT_THRESHOLDS, Thresholds
from .models import ExperienceLevel, FragmentOrigin, GuidanceFragment, Turn

_QUICK_QUESTION = compile_terms(QUICK_QUESTION_TERMS)
_EXPLANATORY = compile_terms(EXPLANATORY_TERMS)


def length_guidance(
    utterance: str,
    experience_level: ExperienceLevel = ExperienceLevel.UNKNOWN,
    history: Sequence[Turn] = (),
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> str:
    """Return exactly one verbosity directive for the response-length slot."""
    text = utterance or ""
    is_complex = (
        len(text) > thresholds.complex_query_min_chars
        or _EXPLANATORY.search(text) is not None
    )
    is_quick = (
        len(text) < thresholds.quick_question_max_chars
        and _QUICK_QUESTION.search(text) is not None
    )

    if is_quick:
        return LENGTH_DIRECTIVES["quick"]
    if experience_level == ExperienceLevel.NEW and is_complex:
        return LENGTH_DIRECTIVES["teaching"]
    if is_complex:
        return LENGTH_DIRECTIVES["context"]
    return LENGTH_DIRECTIVES["concise"]


def length_fragment(directive: str) -> GuidanceFragment:
    return GuidanceFragment(FragmentOrigin.LENGTH, directive)
