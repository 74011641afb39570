"""
Suggestion extractor: mines list items out of an assistant reply and
offers them back as profile suggestions (action items, schedule, notes,
insights) the manager can choose to save.

Extraction never raises. A reply without list items yields no suggestions.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Sequence

from ..content.vocabulary import INSIGHTS_KEYWORDS, NOTES_KEYWORDS, SCHEDULE_KEYWORDS
from .config import DEFAULT_THRESHOLDS, Thresholds
from .models import SuggestionGroup, SuggestionType

logger = logging.getLogger(__name__)

# "- item", "• item", "12. item" at the start of a line (indentation allowed)
LIST_ITEM_PATTERN = re.compile(r"^[ \t]*(?:[-•]|\d+\.)[ \t]+(.*?)[ \t]*$", re.MULTILINE)
# A marker with nothing after it
BARE_MARKER_PATTERN = re.compile(r"^[ \t]*(?:[-•]|\d+\.)[ \t]*$")

# Checked in priority order against the first item of a group
TYPE_RULES = (
    (SuggestionType.SCHEDULE, SCHEDULE_KEYWORDS),
    (SuggestionType.NOTES, NOTES_KEYWORDS),
    (SuggestionType.INSIGHTS, INSIGHTS_KEYWORDS),
)

TITLES = {
    SuggestionType.ACTION_ITEMS: "Add Action Items",
    SuggestionType.SCHEDULE: "Add to Schedule",
    SuggestionType.NOTES: "Add Notes",
    SuggestionType.INSIGHTS: "Add Insights",
}

HEADINGS = {
    SuggestionType.ACTION_ITEMS: "## Action Items for {subject}",
    SuggestionType.SCHEDULE: "## Schedule for {subject}",
    SuggestionType.NOTES: "## Notes about {subject}",
    SuggestionType.INSIGHTS: "## Insights about {subject}",
}


@dataclass(frozen=True)
class ListItem:
    """One list line found in a reply."""
    offset: int
    end: int
    text: str


def find_list_items(reply_text: str) -> List[ListItem]:
    """Bullet and numbered items in document order, markers stripped.

    Items with nothing left after the marker (a bare "- ") are dropped.
    """
    items = []
    for match in LIST_ITEM_PATTERN.finditer(reply_text or ""):
        text = match.group(1).strip()
        if not text:
            continue
        items.append(ListItem(offset=match.start(), end=match.end(), text=text))
    return items


def _has_prose_between(reply_text: str, previous: ListItem, current: ListItem) -> bool:
    """True when a blank line and then an unindented prose line separate two items.

    A single explanatory line right under an item does not split the list,
    and dropped bare markers count as neither blank nor prose.
    """
    # The first piece is the (empty) tail of the previous item's line
    lines = reply_text[previous.end:current.offset].split("\n")[1:]
    seen_blank = False
    for line in lines:
        if not line.strip():
            seen_blank = True
        elif BARE_MARKER_PATTERN.match(line):
            continue
        elif seen_blank and not line[:1].isspace():
            return True
    return False


def group_items(
    reply_text: str,
    items: Sequence[ListItem],
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> List[List[ListItem]]:
    """Greedy proximity grouping; every item lands in exactly one group."""
    groups: List[List[ListItem]] = []
    current: List[ListItem] = []
    for item in items:
        if current:
            previous = current[-1]
            too_far = item.offset - previous.offset >= thresholds.grouping_proximity_chars
            interrupted = thresholds.split_groups_on_prose and _has_prose_between(
                reply_text, previous, item
            )
            if too_far or interrupted:
                groups.append(current)
                current = []
        current.append(item)
    if current:
        groups.append(current)
    return groups


def classify_group(items: Sequence[str]) -> SuggestionType:
    """Type a group by keywords in its first item, defaulting to action items."""
    first = items[0].lower() if items else ""
    for suggestion_type, keywords in TYPE_RULES:
        if any(keyword in first for keyword in keywords):
            return suggestion_type
    return SuggestionType.ACTION_ITEMS


def make_preview(items: Sequence[str], max_chars: int = DEFAULT_THRESHOLDS.preview_max_chars) -> str:
    if len(items) == 1:
        text = items[0]
        return text[:max_chars] + ("..." if len(text) > max_chars else "")
    return f"{len(items)} items"


def build_suggestion(
    items: Sequence[str],
    subject_name: str,
    index: int,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> SuggestionGroup:
    suggestion_type = classify_group(items)
    heading = HEADINGS[suggestion_type].format(subject=subject_name)
    checklist = "\n".join(f"- [ ] {item}" for item in items)
    return SuggestionGroup(
        id=f"{suggestion_type.value}_{index}",
        type=suggestion_type,
        title=TITLES[suggestion_type],
        body_markdown=f"{heading}\n\n{checklist}",
        preview_text=make_preview(items, thresholds.preview_max_chars),
        items=list(items),
    )


def extract(
    reply_text: str,
    subject_name: str,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> List[SuggestionGroup]:
    """Turn the list items of a reply into typed, reviewable suggestion groups."""
    items = find_list_items(reply_text)
    if not items:
        logger.debug("[Suggestions] No list items in reply")
        return []

    groups = group_items(reply_text, items, thresholds)
    suggestions = [
        build_suggestion([item.text for item in group], subject_name, index, thresholds)
        for index, group in enumerate(groups)
    ]
    logger.info(
        f"[Suggestions] {len(items)} list items -> {len(suggestions)} groups "
        f"({', '.join(s.id for s in suggestions)})"
    )
    return suggestions
