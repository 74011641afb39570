"""Tests for core/suggestions.py — profile suggestion extraction."""

import pytest

from mano.core.config import Thresholds
from mano.core.models import SuggestionType
from mano.core.suggestions import (
    classify_group,
    extract,
    find_list_items,
    make_preview,
)

SCENARIO_REPLY = (
    "Here's what I'd suggest:\n"
    "- Set up weekly 1:1s\n"
    "- Clarify priorities in writing\n"
    "\n"
    "Separately, some notes:\n"
    "- Remember she prefers async updates"
)

LONG_PROSE = (
    "That said, none of this works unless the team understands why the change is "
    "happening, so spend some time on the narrative before you roll anything out, "
    "and make sure the people most affected hear it from you directly rather than "
    "through the grapevine or a calendar invite."
)


class TestExtract:
    def test_two_groups_with_types(self):
        groups = extract(SCENARIO_REPLY, "Maya")
        assert len(groups) == 2

        first, second = groups
        assert first.type == SuggestionType.SCHEDULE
        assert first.items == ["Set up weekly 1:1s", "Clarify priorities in writing"]
        assert first.preview_text == "2 items"
        assert first.id == "schedule_0"

        assert second.type == SuggestionType.NOTES
        assert second.items == ["Remember she prefers async updates"]
        assert second.preview_text == "Remember she prefers async updates"
        assert second.id == "notes_1"

    def test_body_markdown(self):
        first = extract(SCENARIO_REPLY, "Maya")[0]
        assert first.title == "Add to Schedule"
        assert first.body_markdown == (
            "## Schedule for Maya\n\n"
            "- [ ] Set up weekly 1:1s\n"
            "- [ ] Clarify priorities in writing"
        )

    def test_prose_only_is_empty(self):
        assert extract("Sounds like a tough week. What's weighing on you most?", "Bob") == []
        assert extract("", "Bob") == []

    def test_lists_far_apart_are_split(self):
        assert len(LONG_PROSE) > 200
        reply = f"- Draft the announcement\n- Share it with leads\n\n{LONG_PROSE}\n\n- Book a retro"
        groups = extract(reply, "Bob")
        assert [g.items for g in groups] == [
            ["Draft the announcement", "Share it with leads"],
            ["Book a retro"],
        ]

    def test_nearby_bullets_grouped(self):
        first = "- " + "a" * 47
        reply = f"{first}\n- second item"
        assert reply.index("- second") == 50
        groups = extract(reply, "Bob")
        assert len(groups) == 1
        assert len(groups[0].items) == 2

    def test_proximity_threshold_alone(self):
        """With prose splitting off, only distance closes a group."""
        distance_only = Thresholds(split_groups_on_prose=False)
        near = "- Draft the announcement\nShort aside.\n- Book a retro"
        far = f"- Draft the announcement\n{LONG_PROSE}\n- Book a retro"
        assert len(extract(near, "Bob", distance_only)) == 1
        assert len(extract(far, "Bob", distance_only)) == 2

    def test_completeness_no_duplicates(self):
        reply = (
            "Plan:\n1. Talk to Sam\n2. Write it down\n\n"
            f"{LONG_PROSE}\n"
            "• Observation: morale dips on Fridays\n"
            "- Note the pattern\n"
            "\n"
            "Also:\n"
            "- Meeting with HR on Monday"
        )
        detected = [item.text for item in find_list_items(reply)]
        groups = extract(reply, "Sam")
        grouped = [item for g in groups for item in g.items]
        assert grouped == detected
        assert len(grouped) == len(set(grouped)) == 5
        assert [g.type for g in groups] == [
            SuggestionType.ACTION_ITEMS,
            SuggestionType.INSIGHTS,
            SuggestionType.SCHEDULE,
        ]
        assert [g.id for g in groups] == ["action_items_0", "insights_1", "schedule_2"]

    def test_numbered_and_bullets_in_document_order(self):
        reply = "1. First\n- Second\n2. Third"
        assert [i.text for i in find_list_items(reply)] == ["First", "Second", "Third"]

    def test_indented_items(self):
        reply = "Steps:\n  - Ask for context\n  - Agree on a date"
        assert [i.text for i in find_list_items(reply)] == ["Ask for context", "Agree on a date"]

    def test_bare_marker_dropped(self):
        groups = extract("- \n- Real item", "Bob")
        assert len(groups) == 1
        assert groups[0].items == ["Real item"]

    def test_bare_marker_does_not_split_group(self):
        groups = extract("- Ask Sam first\n- \n- Then tell the team", "Sam")
        assert [g.items for g in groups] == [["Ask Sam first", "Then tell the team"]]

    def test_explanation_under_item_keeps_list_together(self):
        reply = "1. Talk to Sam\nThis builds trust.\n2. Write it down"
        groups = extract(reply, "Sam")
        assert [g.items for g in groups] == [["Talk to Sam", "Write it down"]]

    def test_blank_line_then_prose_splits(self):
        reply = "- Talk to Sam\n\nThen, later on:\n- Write it down"
        assert len(extract(reply, "Sam")) == 2

    def test_horizontal_rule_is_not_an_item(self):
        assert find_list_items("Intro\n---\nOutro") == []

    def test_lone_item(self):
        groups = extract("Try this:\n- Ask Bob what support he needs", "Bob")
        assert len(groups) == 1
        assert groups[0].type == SuggestionType.ACTION_ITEMS
        assert groups[0].title == "Add Action Items"
        assert groups[0].body_markdown.startswith("## Action Items for Bob")

    def test_to_dict(self):
        data = extract(SCENARIO_REPLY, "Maya")[1].to_dict()
        assert data["type"] == "notes"
        assert data["content"].startswith("## Notes about Maya")
        assert data["preview"] == "Remember she prefers async updates"


class TestClassifyGroup:
    @pytest.mark.parametrize("first, expected", [
        ("Schedule a note-taking session", SuggestionType.SCHEDULE),
        ("Key insight: remember the context", SuggestionType.NOTES),
        ("One observation about the team", SuggestionType.INSIGHTS),
        ("Send the recap email", SuggestionType.ACTION_ITEMS),
    ])
    def test_priority(self, first, expected):
        assert classify_group([first, "anything else"]) == expected

    def test_only_first_item_counts(self):
        assert classify_group(["Send the recap", "Set up a meeting"]) == SuggestionType.ACTION_ITEMS


class TestPreview:
    def test_truncates_long_single_item(self):
        text = "x" * 60
        assert make_preview([text]) == "x" * 50 + "..."

    def test_exact_length_not_ellipsized(self):
        assert make_preview(["y" * 50]) == "y" * 50

    def test_multiple_items(self):
        assert make_preview(["a", "b", "c"]) == "3 items"
