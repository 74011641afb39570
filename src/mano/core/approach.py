"""
Coaching approach selector: Socratic questioning or direct advice?

Rules are evaluated in order and the first one that applies wins:
urgency always overrides, early exploratory turns get Socratic questions,
explicit advice requests get direct guidance, exploration gets guided
discovery, and anything else gets a balanced mix.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from ..content.vocabulary import (
    ADVICE_SEEKING_TERMS,
    APPROACH_GUIDANCE,
    EXPLORATION_TERMS,
    URGENCY_TERMS,
    compile_terms,
)
from .config import DEFAULT_THRESHOLDS, Thresholds
from .models import ExperienceLevel, FragmentOrigin, GuidanceFragment, Turn


class ApproachTag(str, Enum):
    URGENT = "urgent"
    SOCRATIC_EARLY = "socratic_early"
    DIRECT_ADVICE = "direct_advice"
    EXPLORATORY = "exploratory"
    BALANCED = "balanced"


_URGENCY = compile_terms(URGENCY_TERMS)
_ADVICE_SEEKING = compile_terms(ADVICE_SEEKING_TERMS)
_EXPLORATION = compile_terms(EXPLORATION_TERMS)


def select_approach(
    utterance: str,
    history: Sequence[Turn],
    experience_level: ExperienceLevel = ExperienceLevel.UNKNOWN,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> ApproachTag:
    """
    Pick the coaching stance for this turn.

    experience_level is accepted so callers pass the full decision context;
    the current rules do not branch on it.
    """
    text = utterance or ""
    is_urgent = _URGENCY.search(text) is not None
    is_seeking_advice = _ADVICE_SEEKING.search(text) is not None
    is_exploring = _EXPLORATION.search(text) is not None
    message_count = len(list(history or [])[-thresholds.history_window:])

    if is_urgent:
        return ApproachTag.URGENT
    if message_count < thresholds.socratic_history_limit and not is_seeking_advice and is_exploring:
        return ApproachTag.SOCRATIC_EARLY
    if is_seeking_advice:
        return ApproachTag.DIRECT_ADVICE
    if is_exploring:
        return ApproachTag.EXPLORATORY
    return ApproachTag.BALANCED


def approach_guidance(tag: ApproachTag) -> GuidanceFragment:
    return GuidanceFragment(FragmentOrigin.APPROACH, APPROACH_GUIDANCE[tag.value])
