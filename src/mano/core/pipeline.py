"""
CoachingPipeline: one chat turn through Mano's dialogue-shaping engine.

    classify → select approach → personalize → length policy
        → compose prompt → [completion provider] → extract suggestions

Everything before and after the provider call is synchronous and pure.
The provider is an external collaborator: the pipeline composes fully
before calling it and resumes only once the whole reply is available
(streamed chunks are joined first). Provider errors propagate without
retries, and the turn's trace is dropped.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from concurrent.futures import Executor
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from ..content.templates import DEFAULT_TEMPLATES, PromptTemplates
from ..content.vocabulary import VOCABULARY_VERSION
from ..observability import performance as perf
from ..observability.performance import PerformanceTracker, Reporter
from .approach import ApproachTag, approach_guidance, select_approach
from .composer import compose
from .config import DEFAULT_THRESHOLDS, Thresholds
from .length_policy import length_fragment, length_guidance
from .models import (
    ContextBundle,
    DialogueMode,
    ExperienceLevel,
    GuidanceFragment,
    PersonaSubstitutions,
    SuggestionGroup,
    Turn,
    UserPreferences,
)
from .personalization import describe_user, resolve_personalization
from .situation import SituationTag, classify, situation_guidance
from .suggestions import extract

logger = logging.getLogger(__name__)

RawReply = Union[str, Iterable[str]]
CompletionProvider = Callable[[str, List[Dict[str, str]]], RawReply]


@dataclass
class TurnRequest:
    """Everything the orchestrator knows about the incoming turn."""
    utterance: str
    mode: DialogueMode
    preferences: Optional[UserPreferences] = None
    history: Sequence[Turn] = ()
    context: Optional[ContextBundle] = None
    persona: Optional[PersonaSubstitutions] = None
    profile_context: Optional[str] = None
    user_id: str = "anonymous"
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])

    @property
    def subject_name(self) -> str:
        if self.persona is not None:
            return self.persona.name
        return "yourself" if self.mode == DialogueMode.SELF_REFLECTION else "your team"


@dataclass
class PreparedTurn:
    """The composed prompt and the decisions behind it."""
    request: TurnRequest
    prompt: str
    situation: Optional[SituationTag]
    approach: ApproachTag
    length_directive: str
    fragments: List[GuidanceFragment]
    tracker: PerformanceTracker

    def messages(self, window: int = DEFAULT_THRESHOLDS.history_window) -> List[Dict[str, str]]:
        """Chat messages for the provider: recent history plus the new turn."""
        messages = [
            {"role": turn.role, "content": turn.content}
            for turn in list(self.request.history)[-window:]
        ]
        messages.append({"role": "user", "content": self.request.utterance})
        return messages

    def decisions(self) -> Dict[str, Any]:
        return {
            "mode": self.request.mode.value,
            "situation": self.situation.value if self.situation else None,
            "approach": self.approach.value,
            "length_directive": self.length_directive,
            "vocabulary_version": VOCABULARY_VERSION,
        }


@dataclass
class TurnResult:
    reply: str
    suggestions: List[SuggestionGroup]
    report: Dict[str, Any]


def reassemble(reply: RawReply) -> str:
    """Join a streamed reply into full text; plain strings pass through."""
    if isinstance(reply, str):
        return reply
    return "".join(chunk for chunk in reply if chunk)


class CoachingPipeline:
    """
    Request-scoped orchestration of the decision functions.

    Holds only immutable configuration, so one instance can serve any
    number of concurrent turns. Trace reports go to the reporter on
    ``executor`` (a shared worker pool by default), off the reply path.
    """

    def __init__(
        self,
        templates: PromptTemplates = DEFAULT_TEMPLATES,
        thresholds: Thresholds = DEFAULT_THRESHOLDS,
        reporter: Optional[Reporter] = None,
        executor: Optional[Executor] = None,
    ):
        self.templates = templates
        self.thresholds = thresholds
        self.reporter = reporter
        self.executor = executor

    def new_tracker(self, request: TurnRequest) -> PerformanceTracker:
        return PerformanceTracker(
            user_id=request.user_id,
            request_id=request.request_id,
            reporter=self.reporter,
            executor=self.executor,
        )

    def prepare(
        self,
        request: TurnRequest,
        tracker: Optional[PerformanceTracker] = None,
    ) -> PreparedTurn:
        """Run the decision functions and compose the system prompt."""
        tracker = tracker or self.new_tracker(request)
        prefs = request.preferences
        experience = (prefs.experience_level if prefs is not None else None) or ExperienceLevel.UNKNOWN
        history = list(request.history or [])

        situation = classify(request.utterance)
        approach = select_approach(request.utterance, history, experience, self.thresholds)
        directive = length_guidance(request.utterance, experience, history, self.thresholds)
        fragments = [
            describe_user(prefs, self.templates.default_user_line),
            resolve_personalization(prefs),
            situation_guidance(situation),
            approach_guidance(approach),
            length_fragment(directive),
        ]
        tracker.record(perf.CONTEXT_COMPLETE)

        tracker.record(perf.COMPOSITION_START)
        prompt = compose(
            request.mode,
            self.templates,
            fragments,
            context=request.context,
            history=history,
            persona=request.persona,
            profile_context=request.profile_context,
            thresholds=self.thresholds,
        )
        tracker.record(perf.COMPOSITION_COMPLETE)

        logger.info(
            f"[Pipeline] {request.request_id}: mode={request.mode.value} "
            f"situation={situation.value if situation else 'none'} approach={approach.value} "
            f"history_len={len(history)} prompt_len={len(prompt)}"
        )
        return PreparedTurn(
            request=request,
            prompt=prompt,
            situation=situation,
            approach=approach,
            length_directive=directive,
            fragments=fragments,
            tracker=tracker,
        )

    def complete(
        self,
        prepared: PreparedTurn,
        reply: RawReply,
        extra: Optional[Dict[str, Any]] = None,
    ) -> TurnResult:
        """Extract suggestions from the full reply and finish the trace."""
        tracker = prepared.tracker
        text = reassemble(reply)

        tracker.record(perf.EXTRACTION_START)
        suggestions = extract(text, prepared.request.subject_name, self.thresholds)
        tracker.record(perf.EXTRACTION_COMPLETE)

        report = tracker.finish({
            **prepared.decisions(),
            "reply_length": len(text),
            "suggestion_count": len(suggestions),
            **(extra or {}),
        })
        return TurnResult(reply=text, suggestions=suggestions, report=report)

    def run(self, request: TurnRequest, provider: CompletionProvider) -> TurnResult:
        """Full turn: prepare, call the provider, then complete."""
        prepared = self.prepare(request)
        tracker = prepared.tracker

        tracker.record(perf.COMPLETION_START)
        try:
            raw = reassemble(provider(prepared.prompt, prepared.messages(self.thresholds.history_window)))
        except Exception as e:
            logger.warning(f"[Pipeline] {request.request_id}: completion provider failed: {e}")
            raise
        tracker.record(perf.COMPLETION_COMPLETE)

        return self.complete(prepared, raw)
