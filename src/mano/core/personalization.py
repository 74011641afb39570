"""
Personalization resolver: turns stored preferences into prompt guidance.

Personalization is an enhancement. Missing preferences contribute nothing;
a stored but unrecognised value gets the "unknown" sentence rather than
raising.
"""

from __future__ import annotations

from typing import List, Optional

from ..content.templates import DEFAULT_USER_LINE
from ..content.vocabulary import EXPERIENCE_GUIDANCE, TONE_GUIDANCE
from .models import FragmentOrigin, GuidanceFragment, UserPreferences

COACHING_CONTEXT_HEADER = "COACHING CONTEXT:"


def resolve_personalization(preferences: Optional[UserPreferences]) -> GuidanceFragment:
    """Experience and tone guidance for each stored preference; empty when neither is stored."""
    if preferences is None:
        return GuidanceFragment(FragmentOrigin.PERSONALIZATION, "")

    lines: List[str] = []
    if preferences.experience_level is not None:
        lines.append(f"- Experience Level: {EXPERIENCE_GUIDANCE[preferences.experience_level.value]}")
    if preferences.tone_preference is not None:
        lines.append(f"- Tone Preference: {TONE_GUIDANCE[preferences.tone_preference.value]}")

    if not lines:
        return GuidanceFragment(FragmentOrigin.PERSONALIZATION, "")
    return GuidanceFragment(
        FragmentOrigin.PERSONALIZATION,
        "\n".join([COACHING_CONTEXT_HEADER] + lines),
    )


def describe_user(
    preferences: Optional[UserPreferences],
    default_line: str = DEFAULT_USER_LINE,
) -> GuidanceFragment:
    """The "who am I talking to" line at the top of the user context."""
    if preferences is None or not preferences.call_name:
        return GuidanceFragment(FragmentOrigin.IDENTITY, default_line)

    line = f"You are speaking with {preferences.call_name}"
    if preferences.job_role:
        line += f", {preferences.job_role}"
    if preferences.company:
        line += f" at {preferences.company}"
    return GuidanceFragment(FragmentOrigin.IDENTITY, line + ".")
