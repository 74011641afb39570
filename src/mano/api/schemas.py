"""
Pydantic request/response models for the Mano engine API.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


# =============================================================================
# REQUEST MODELS
# =============================================================================

class HistoryMessage(BaseModel):
    """One prior message of the conversation."""
    role: str = Field("user", description="user or assistant")
    content: str = ""


class PreferencesData(BaseModel):
    """Profile-store preferences; any field may be missing."""
    experience_level: Optional[str] = None
    tone_preference: Optional[str] = None
    call_name: Optional[str] = None
    job_role: Optional[str] = None
    company: Optional[str] = None


class ComposeRequest(BaseModel):
    """Request to compose the system prompt for one turn."""
    utterance: str = Field(..., description="The manager's current message")
    subject_name: Optional[str] = Field(None, description="Person discussed; 'General' or empty for general chat")
    is_self: bool = Field(False, description="Conversation is the manager's self-reflection")
    person_role: Optional[str] = None
    relationship_type: str = "direct_report"
    preferences: Optional[PreferencesData] = None
    history: List[HistoryMessage] = Field(default_factory=list)
    context: Optional[str] = Field(None, description="Pre-formatted team context")
    profile_context: Optional[str] = Field(None, description="Profile addendum for the subject")


class ExtractRequest(BaseModel):
    """Request to mine suggestions out of an assistant reply."""
    reply: str
    subject_name: str = "your team"


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class ComposeResponse(BaseModel):
    prompt: str
    mode: str
    situation: Optional[str] = None
    approach: str
    length_directive: str


class SuggestionData(BaseModel):
    """A suggestion group offered back for save-to-profile."""
    id: str
    type: str
    title: str
    content: str
    preview: str
    items: List[str] = Field(default_factory=list)


class ExtractResponse(BaseModel):
    suggestions: List[SuggestionData]
