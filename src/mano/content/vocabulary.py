"""
Keyword vocabularies and guidance sentences for Mano's coaching heuristics.

Matching is keyword-based and deliberately approximate: false positives
and negatives are accepted. Bump VOCABULARY_VERSION whenever a list or a
sentence changes so prompt changes can be traced in analytics.

Phrases are plain text. When compiled, spaces and hyphens between words
match any single space/hyphen (or nothing), and apostrophes match both
straight and curly quotes.
"""

from __future__ import annotations

import re
from typing import Dict, Pattern, Sequence

VOCABULARY_VERSION = "2025.10.1"

# =============================================================================
# SITUATION CATEGORIES
# =============================================================================

SELF_REFLECTION_TERMS = (
    "i feel", "my own", "myself", "my leadership", "my approach",
    "i'm worried", "i'm concerned", "should i",
)

INTERPERSONAL_TERMS = (
    "conflict", "relationship", "trust", "communication", "feedback",
    "difficult conversation", "tension", "upset", "frustrated", "angry",
)

PERFORMANCE_TERMS = (
    "performance", "underperforming", "pip", "performance review",
    "not meeting expectations", "struggling",
)

STRATEGIC_TERMS = (
    "vision", "strategy", "direction", "roadmap", "long term",
    "organization", "culture", "transformation", "goals",
)

TACTICAL_TERMS = (
    "meeting", "deadline", "task", "project plan", "schedule", "agenda",
    "1:1", "one on one",
)

SITUATION_GUIDANCE: Dict[str, str] = {
    "self_reflection": (
        "SITUATION TYPE: Self-reflection - Use coaching questions to deepen self-awareness. "
        "Help them see patterns in their behavior. Celebrate growth areas while acknowledging "
        "challenges. Guide them to their own insights."
    ),
    "interpersonal": (
        "SITUATION TYPE: Interpersonal challenge - Explore multiple perspectives. Ask about the "
        "other person's motivations and context. Consider what might be driving their behavior. "
        "Guide toward empathetic problem-solving."
    ),
    "performance": (
        "SITUATION TYPE: Performance management - Balance support and accountability. Help them "
        "identify root causes. Discuss both documentation needs and coaching approaches. Be "
        "direct but compassionate."
    ),
    "strategic": (
        "SITUATION TYPE: Strategic thinking - Ask about goals, stakeholders, and tradeoffs. "
        "Connect to team context and organizational impact. Encourage systems thinking and "
        "long-term planning."
    ),
    "tactical": (
        "SITUATION TYPE: Tactical execution - Provide concrete frameworks and next steps. Focus "
        "on action over exploration. Be practical and specific."
    ),
}

# =============================================================================
# COACHING APPROACH
# =============================================================================

URGENCY_TERMS = ("urgent", "asap", "today", "right now", "immediately", "emergency")

ADVICE_SEEKING_TERMS = (
    "how do i", "what should i", "give me", "tell me", "help me",
    "recommend", "suggest",
)

EXPLORATION_TERMS = (
    "thinking about", "wondering", "not sure", "considering", "debating",
    "torn between",
)

APPROACH_GUIDANCE: Dict[str, str] = {
    "urgent": (
        "COACHING APPROACH: Urgent situation - Provide direct, actionable guidance immediately. "
        "You can explore nuances after addressing the immediate need."
    ),
    "socratic_early": (
        "COACHING APPROACH: Use Socratic questioning to help the manager articulate their "
        "thinking. Ask 1-2 clarifying questions before offering advice. Help them discover "
        "insights through reflection. What are they already considering? What assumptions "
        "might they examine?"
    ),
    "direct_advice": (
        "COACHING APPROACH: The manager is seeking direct guidance. Provide actionable advice "
        "while still encouraging their critical thinking with one brief follow-up question."
    ),
    "exploratory": (
        "COACHING APPROACH: The manager is thinking through a problem. Guide discovery with "
        "questions that surface assumptions, stakeholder perspectives, and potential approaches. "
        "Ask what they've already considered."
    ),
    "balanced": (
        "COACHING APPROACH: Balance inquiry and advice. Use questions to deepen understanding "
        "when helpful, then provide targeted recommendations."
    ),
}

# =============================================================================
# PERSONALIZATION
# =============================================================================

EXPERIENCE_GUIDANCE: Dict[str, str] = {
    "new": (
        "(New manager - provide foundational context, explain management concepts when "
        "relevant, be extra supportive)"
    ),
    "experienced": (
        "(Experienced manager - assume management fundamentals, focus on nuanced situations "
        "and deeper insights)"
    ),
    "veteran": (
        "(Veteran manager - skip basics, engage with complex organizational dynamics and "
        "strategic thinking)"
    ),
    "unknown": "(Management experience level unknown - adapt to their questions)",
}

TONE_GUIDANCE: Dict[str, str] = {
    "direct": (
        "(User prefers DIRECT tone - be concise and straightforward, prioritize actionable "
        "advice, minimize pleasantries)"
    ),
    "warm": (
        "(User prefers WARM tone - be encouraging and supportive, acknowledge emotions and "
        "challenges, celebrate wins)"
    ),
    "conversational": (
        "(User prefers CONVERSATIONAL tone - be casual and friendly like a peer advisor, use "
        "natural language)"
    ),
    "analytical": (
        "(User prefers ANALYTICAL tone - be structured and data-driven, use frameworks and "
        "logical reasoning)"
    ),
    "unknown": "(Tone preference unknown - use balanced conversational style)",
}

# =============================================================================
# RESPONSE LENGTH
# =============================================================================

QUICK_QUESTION_TERMS = ("should i", "can i", "what about", "quick question")

EXPLANATORY_TERMS = ("how", "why", "explain", "tell me about", "help me understand")

LENGTH_DIRECTIVES: Dict[str, str] = {
    "quick": "1-2 sentences, direct answer",
    "teaching": "3-5 sentences with brief context/explanation to support learning",
    "context": "3-4 sentences with key context",
    "concise": "2-3 sentences, concise and actionable",
}

# =============================================================================
# SUGGESTION TYPES (checked against the first item of a group, lowercased)
# =============================================================================

SCHEDULE_KEYWORDS = ("meeting", "1:1", "schedule")
NOTES_KEYWORDS = ("note", "remember")
INSIGHTS_KEYWORDS = ("insight", "observation")


def _phrase_pattern(phrase: str) -> str:
    words = re.split(r"[\s\-]+", phrase.strip())
    parts = []
    for word in words:
        parts.append(re.escape(word).replace("'", "['’]"))
    return r"[\s\-]?".join(parts)


def compile_terms(terms: Sequence[str]) -> Pattern[str]:
    """Compile phrases into one case-insensitive, word-bounded alternation."""
    alternation = "|".join(_phrase_pattern(t) for t in terms)
    return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)
