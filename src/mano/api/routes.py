"""
REST API routes for the Mano engine.

Thin adapter over the pure core: no auth, no completion call.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException

from ..content.vocabulary import VOCABULARY_VERSION
from ..core.composer import PromptCompositionError
from ..core.models import (
    ContextBundle,
    DialogueMode,
    PersonaSubstitutions,
    Turn,
    UserPreferences,
)
from ..core.pipeline import CoachingPipeline, TurnRequest
from ..core.suggestions import extract
from ..observability.analytics import AnalyticsClient
from .schemas import (
    ComposeRequest,
    ComposeResponse,
    ExtractRequest,
    ExtractResponse,
    SuggestionData,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

# Global pipeline (created on first use)
pipeline: Optional[CoachingPipeline] = None


def get_pipeline() -> CoachingPipeline:
    global pipeline
    if pipeline is None:
        analytics = AnalyticsClient()
        pipeline = CoachingPipeline(reporter=analytics if analytics.is_enabled else None)
    return pipeline


def to_turn_request(request: ComposeRequest) -> TurnRequest:
    mode = DialogueMode.for_subject(request.subject_name, request.is_self)
    persona = None
    if mode != DialogueMode.GENERAL_STRATEGIC and request.subject_name:
        persona = PersonaSubstitutions(
            name=request.subject_name,
            role=request.person_role,
            relationship_type=request.relationship_type,
        )
    preferences = None
    if request.preferences is not None:
        preferences = UserPreferences.from_record(request.preferences.model_dump())
    return TurnRequest(
        utterance=request.utterance,
        mode=mode,
        preferences=preferences,
        history=[Turn(role=m.role, content=m.content) for m in request.history],
        context=ContextBundle.of(request.context),
        persona=persona,
        profile_context=request.profile_context,
    )


@router.get("/status")
async def status():
    """Engine version and whether analytics reporting is on."""
    return {
        "vocabulary_version": VOCABULARY_VERSION,
        "analytics_enabled": get_pipeline().reporter is not None,
    }


@router.post("/prompt", response_model=ComposeResponse)
async def compose_prompt(request: ComposeRequest):
    """Compose the system prompt for one turn."""
    turn = to_turn_request(request)
    try:
        prepared = get_pipeline().prepare(turn)
    except PromptCompositionError as e:
        logger.error(f"[API] Prompt composition failed: {e}")
        raise HTTPException(500, "Internal error composing prompt")

    return ComposeResponse(
        prompt=prepared.prompt,
        mode=turn.mode.value,
        situation=prepared.situation.value if prepared.situation else None,
        approach=prepared.approach.value,
        length_directive=prepared.length_directive,
    )


@router.post("/suggestions", response_model=ExtractResponse)
async def extract_suggestions(request: ExtractRequest):
    """Mine profile suggestions out of an assistant reply."""
    groups = extract(request.reply, request.subject_name, get_pipeline().thresholds)
    return ExtractResponse(
        suggestions=[SuggestionData(**group.to_dict()) for group in groups]
    )
