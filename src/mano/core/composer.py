"""
Prompt composer: merges guidance fragments, context and history into the
system prompt handed to the completion provider.

Composition is pure and deterministic. Substitution is a single pass over
the base template, so text inserted from history or context is never
re-scanned for placeholders. A template placeholder left without a value
is a programming error and raises PromptCompositionError; such a prompt
must never reach the provider.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Sequence

from ..content.templates import DEFAULT_TEMPLATES, PromptTemplates
from ..content.vocabulary import LENGTH_DIRECTIVES
from .config import DEFAULT_THRESHOLDS, Thresholds
from .models import (
    FRAGMENT_ORDER,
    ContextBundle,
    DialogueMode,
    FragmentOrigin,
    GuidanceFragment,
    PersonaSubstitutions,
    Turn,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{([a-z_]+)\}")

DEFAULT_SUBJECT = "this person"


class PromptCompositionError(Exception):
    """Raised when a composed prompt would still contain template placeholders."""

    def __init__(self, mode: DialogueMode, unresolved: Sequence[str]):
        self.mode = mode
        self.unresolved = list(unresolved)
        names = ", ".join("{" + name + "}" for name in self.unresolved)
        super().__init__(f"Unresolved placeholders in {mode.value} template: {names}")


def select_template(mode: DialogueMode, templates: PromptTemplates) -> str:
    if mode == DialogueMode.PERSON_FOCUSED:
        return templates.person
    if mode == DialogueMode.SELF_REFLECTION:
        return templates.self_reflection
    return templates.general


def find_placeholders(text: str) -> List[str]:
    """Placeholder names in order of first appearance."""
    seen: List[str] = []
    for name in PLACEHOLDER_PATTERN.findall(text):
        if name not in seen:
            seen.append(name)
    return seen


def format_history(
    history: Sequence[Turn],
    templates: PromptTemplates = DEFAULT_TEMPLATES,
    window: int = DEFAULT_THRESHOLDS.history_window,
) -> str:
    """Speaker-tagged transcript of the most recent turns."""
    recent = list(history or [])[-window:]
    if not recent:
        return templates.no_history
    lines = []
    for turn in recent:
        speaker = templates.user_speaker if turn.is_user else templates.assistant_speaker
        lines.append(f"{speaker}: {turn.content}")
    return "\n".join(lines)


def build_user_context(
    fragments: Sequence[GuidanceFragment],
    templates: PromptTemplates = DEFAULT_TEMPLATES,
) -> str:
    """Concatenate non-length fragments in the fixed origin order."""
    blocks: List[str] = []
    has_identity = any(
        f.origin == FragmentOrigin.IDENTITY and not f.is_empty for f in fragments
    )
    if not has_identity:
        blocks.append(templates.default_user_line)
    for origin in FRAGMENT_ORDER:
        for fragment in fragments:
            if fragment.origin == origin and not fragment.is_empty:
                blocks.append(fragment.text.strip())
    return "\n\n".join(blocks)


def build_management_context(
    mode: DialogueMode,
    context: Optional[ContextBundle],
    profile_context: Optional[str],
    subject: str,
    templates: PromptTemplates = DEFAULT_TEMPLATES,
) -> str:
    """Base context, plus the profile addendum under its header when present."""
    if context is not None and context.exists:
        text = context.text
    elif mode == DialogueMode.GENERAL_STRATEGIC:
        text = templates.no_team_context
    else:
        text = ""

    if profile_context and profile_context.strip():
        addendum = "\n".join([
            templates.profile_context_header.format(subject=subject),
            profile_context.strip(),
            "",
            templates.profile_context_footer.format(subject=subject),
        ])
        text = f"{text}\n\n{addendum}" if text else addendum
    return text


def _length_directive(fragments: Sequence[GuidanceFragment], mode: DialogueMode) -> str:
    directives = [f for f in fragments if f.origin == FragmentOrigin.LENGTH]
    if len(directives) > 1:
        raise PromptCompositionError(mode, ["response_length (multiple directives)"])
    if not directives or directives[0].is_empty:
        return LENGTH_DIRECTIVES["concise"]
    return directives[0].text.strip()


def compose(
    mode: DialogueMode,
    templates: PromptTemplates,
    fragments: Sequence[GuidanceFragment],
    context: Optional[ContextBundle] = None,
    history: Sequence[Turn] = (),
    persona: Optional[PersonaSubstitutions] = None,
    profile_context: Optional[str] = None,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> str:
    """
    Compose the system prompt for one turn.

    Args:
        mode: Selects the base template; person substitutions apply only
            in PERSON_FOCUSED mode
        templates: Immutable template configuration
        fragments: Guidance from the classifier, selector, resolver and
            length policy (at most one LENGTH fragment)
        context: Pre-formatted team context, inserted verbatim
        history: Conversation so far; only the most recent turns are used
        persona: Who the conversation is about
        profile_context: Optional profile addendum, appended to the context
            under a fixed header

    Returns:
        The system prompt, free of template placeholders

    Raises:
        PromptCompositionError: a template placeholder has no value
    """
    template = select_template(mode, templates)
    subject = persona.name if persona is not None else DEFAULT_SUBJECT

    values: Dict[str, str] = {"user_context": build_user_context(fragments, templates)}
    if mode == DialogueMode.PERSON_FOCUSED:
        values["name"] = subject
        values["role"] = (persona.role if persona is not None else None) or templates.default_role
        values["relationship_type"] = persona.relationship_type if persona is not None else "team member"
    values["management_context"] = build_management_context(
        mode, context, profile_context, subject, templates
    )
    values["conversation_history"] = format_history(history, templates, thresholds.history_window)
    values["response_length"] = _length_directive(fragments, mode)

    unresolved = [name for name in find_placeholders(template) if name not in values]
    if unresolved:
        logger.error(f"[Composer] Refusing to compose {mode.value} prompt, unresolved: {unresolved}")
        raise PromptCompositionError(mode, unresolved)

    prompt = PLACEHOLDER_PATTERN.sub(lambda m: values[m.group(1)], template)
    logger.debug(f"[Composer] Composed {mode.value} prompt ({len(prompt)} chars)")
    return prompt
