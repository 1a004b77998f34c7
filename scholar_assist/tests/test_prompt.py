"""Tests for prompt assembly and locally synthesized replies."""

import pytest

from scholar_assist.rag.prompt import (
    NO_RESOURCES,
    NO_SCHOLARSHIPS,
    ClubFacts,
    PromptContext,
    apology_message,
    build_messages,
    build_system_prompt,
    detect_intent,
    format_resources,
    format_scholarships,
    synthesize_answer,
)
from scholar_assist.schemas.facts import ResourceRecord, ScholarshipRecord

CLUB = ClubFacts(name="Test Scholars", meeting_schedule="every Friday at noon", contact_link="https://example.com/club")

SCHOLARSHIP = ScholarshipRecord(
    name="Toshiba ExploraVision",
    deadline="January 31, 2026",
    amount="$10,000",
    description="Science competition for K-12 students",
    eligibility="Team of 2-4 students",
    link="https://www.exploravision.org/",
)
RESOURCE = ResourceRecord(title="Founders Worksheet", type="worksheet", link="https://example.com/worksheet")


def _context(query="Tell me about scholarships", knowledge="", scholarships=(SCHOLARSHIP,), resources=(RESOURCE,)):
    return PromptContext(
        query=query,
        scholarships=tuple(scholarships),
        resources=tuple(resources),
        knowledge=knowledge,
        club=CLUB,
    )


class TestFormatting:
    def test_scholarship_block(self):
        assert format_scholarships([SCHOLARSHIP]) == (
            "Toshiba ExploraVision\n"
            "Deadline: January 31, 2026\n"
            "Amount: $10,000\n"
            "Description: Science competition for K-12 students\n"
            "Eligibility: Team of 2-4 students\n"
            "More Information: https://www.exploravision.org/"
        )

    def test_missing_fields_are_labelled(self):
        text = format_scholarships([ScholarshipRecord(name="Mystery Grant")])
        assert "Deadline: Not specified" in text
        assert "More Information: Not available" in text

    def test_records_separated_by_blank_line(self):
        text = format_resources([RESOURCE, RESOURCE])
        assert text == (
            "Founders Worksheet (worksheet): https://example.com/worksheet\n\n"
            "Founders Worksheet (worksheet): https://example.com/worksheet"
        )

    def test_empty_lists(self):
        assert format_scholarships([]) == NO_SCHOLARSHIPS
        assert format_resources([]) == NO_RESOURCES


class TestSystemPrompt:
    def test_includes_facts_and_directives(self):
        prompt = build_system_prompt(_context(knowledge="Workshops are monthly."))

        assert prompt.startswith("You are an AI assistant for Test Scholars")
        assert "Toshiba ExploraVision" in prompt
        assert "Founders Worksheet (worksheet)" in prompt
        assert "Here is additional relevant information from our knowledge base:\nWorkshops are monthly." in prompt
        assert "every Friday at noon" in prompt
        assert "**bold**" in prompt
        assert "[Link Text](URL)" in prompt

    def test_knowledge_section_omitted_when_empty(self):
        prompt = build_system_prompt(_context(knowledge=""))
        assert "knowledge base" not in prompt

    def test_empty_collections_use_placeholders(self):
        prompt = build_system_prompt(_context(scholarships=(), resources=()))
        assert NO_SCHOLARSHIPS in prompt
        assert NO_RESOURCES in prompt

    def test_build_messages_keeps_history_order(self):
        history = [
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "hello"},
            {"role": "user", "content": "deadlines?"},
        ]
        messages = build_messages("SYSTEM", history)
        assert messages == [{"role": "system", "content": "SYSTEM"}] + history


class TestIntentDetection:
    @pytest.mark.parametrize(
        "query, intent",
        [
            ("When is the next meeting?", "meeting"),
            ("Is there anything on Wednesday", "meeting"),
            ("Which scholarships does the club recommend?", "general"),
            ("Can I see the schedule of sessions?", "general"),
            ("Can you review my essay?", "essay"),
            ("Tips for writing applications", "essay"),
            ("What scholarships are available?", "general"),
            ("hi", "general"),
        ],
    )
    def test_detect_intent(self, query, intent):
        assert detect_intent(query) == intent


class TestSynthesizeAnswer:
    def test_meeting_answer_uses_schedule(self):
        answer = synthesize_answer(_context(query="When do you meet?"))

        assert answer.startswith("Scholarship information sessions are held every Friday at noon.")
        assert "Toshiba ExploraVision" in answer
        assert "https://example.com/club" in answer

    def test_general_answer_lists_scholarships_and_resources(self):
        answer = synthesize_answer(_context(knowledge="Apply early."))

        assert "**From our knowledge base:**\n\nApply early." in answer
        assert (
            "1. **Toshiba ExploraVision** - **Deadline:** January 31, 2026 - **Amount:** $10,000"
            " - **More Information:** [Toshiba ExploraVision](https://www.exploravision.org/)"
        ) in answer
        assert "- [Founders Worksheet](https://example.com/worksheet) (worksheet)" in answer

    def test_club_question_keeps_scholarship_listing(self):
        """A query naming the club is still answered with the gathered scholarships."""
        fraser = ScholarshipRecord(name="Fraser Essay Contest")
        answer = synthesize_answer(
            _context(query="Which scholarships does the club recommend for me?", scholarships=(fraser,), resources=())
        )

        assert answer.startswith("Here is what I can share from the Test Scholars records right now.")
        assert "1. **Fraser Essay Contest**" in answer

    def test_essay_answer(self):
        answer = synthesize_answer(_context(query="essay help please"))
        assert answer.startswith("Strong scholarship essays")

    def test_answer_is_never_empty(self):
        answer = synthesize_answer(_context(query="", scholarships=(), resources=()))
        assert answer.strip()


def test_apology_mentions_contact_and_schedule():
    message = apology_message(CLUB)
    assert "every Friday at noon" in message
    assert "[Test Scholars](https://example.com/club)" in message
