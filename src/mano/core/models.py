"""
Data model for the Mano dialogue-shaping engine.

Everything here is request-scoped: built per turn from what the
orchestrator, profile store and message store hand us, then discarded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class DialogueMode(str, Enum):
    """Which conversational context governs template choice."""
    PERSON_FOCUSED = "person_focused"
    SELF_REFLECTION = "self_reflection"
    GENERAL_STRATEGIC = "general_strategic"

    @classmethod
    def for_subject(cls, subject_name: Optional[str], is_self: bool = False) -> "DialogueMode":
        """Pick the mode from conversation subject metadata."""
        if not subject_name or subject_name == GENERAL_SUBJECT:
            return cls.GENERAL_STRATEGIC
        if is_self:
            return cls.SELF_REFLECTION
        return cls.PERSON_FOCUSED


GENERAL_SUBJECT = "General"


class ExperienceLevel(str, Enum):
    NEW = "new"
    EXPERIENCED = "experienced"
    VETERAN = "veteran"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ExperienceLevel"]:
        """None when nothing is stored, UNKNOWN when the stored value is unrecognised."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        if not text:
            return None
        try:
            return cls(text)
        except ValueError:
            return cls.UNKNOWN


class TonePreference(str, Enum):
    DIRECT = "direct"
    WARM = "warm"
    CONVERSATIONAL = "conversational"
    ANALYTICAL = "analytical"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["TonePreference"]:
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        if not text:
            return None
        try:
            return cls(text)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class UserPreferences:
    """Stored coaching preferences for the manager. Any field may be missing.

    None means the profile holds no value; UNKNOWN means it holds one we
    do not recognise.
    """
    experience_level: Optional[ExperienceLevel] = None
    tone_preference: Optional[TonePreference] = None
    call_name: Optional[str] = None
    job_role: Optional[str] = None
    company: Optional[str] = None

    @classmethod
    def from_record(cls, record: Optional[Dict[str, Any]]) -> "UserPreferences":
        """Build from a raw profile-store row, tolerating absent or odd values."""
        record = record or {}
        return cls(
            experience_level=ExperienceLevel.parse(record.get("experience_level")),
            tone_preference=TonePreference.parse(record.get("tone_preference")),
            call_name=record.get("call_name") or None,
            job_role=record.get("job_role") or None,
            company=record.get("company") or None,
        )


USER_ROLE = "user"
ASSISTANT_ROLE = "assistant"


@dataclass(frozen=True)
class Turn:
    """One message of conversation history."""
    role: str
    content: str

    @property
    def is_user(self) -> bool:
        return self.role == USER_ROLE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Turn":
        """Accepts {"role", "content"} or message-store rows with {"is_user", "content"}."""
        if "role" in data:
            role = data["role"]
        else:
            role = USER_ROLE if data.get("is_user") else ASSISTANT_ROLE
        return cls(role=role, content=str(data.get("content") or ""))


@dataclass(frozen=True)
class ContextBundle:
    """Pre-formatted background text from the context builder."""
    text: str = ""
    exists: bool = False

    @classmethod
    def of(cls, text: Optional[str]) -> "ContextBundle":
        text = text or ""
        return cls(text=text, exists=bool(text.strip()))


@dataclass(frozen=True)
class PersonaSubstitutions:
    """The team member a person-focused conversation is about."""
    name: str
    role: Optional[str] = None
    relationship_type: str = "direct_report"


class FragmentOrigin(str, Enum):
    IDENTITY = "identity"
    PERSONALIZATION = "personalization"
    SITUATION = "situation"
    APPROACH = "approach"
    LENGTH = "length"


# Concatenation order inside the user-context block
FRAGMENT_ORDER = (
    FragmentOrigin.IDENTITY,
    FragmentOrigin.PERSONALIZATION,
    FragmentOrigin.SITUATION,
    FragmentOrigin.APPROACH,
)


@dataclass(frozen=True)
class GuidanceFragment:
    """Text produced by one sub-decision, tagged with where it came from."""
    origin: FragmentOrigin
    text: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()


class SuggestionType(str, Enum):
    ACTION_ITEMS = "action_items"
    SCHEDULE = "schedule"
    NOTES = "notes"
    INSIGHTS = "insights"


@dataclass
class SuggestionGroup:
    """A cluster of list items mined from a reply, ready for user review."""
    id: str
    type: SuggestionType
    title: str
    body_markdown: str
    preview_text: str
    items: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "content": self.body_markdown,
            "preview": self.preview_text,
            "items": list(self.items),
        }
