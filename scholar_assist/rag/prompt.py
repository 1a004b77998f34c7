"""
Prompt assembly and locally synthesized replies for the chat pipeline.

Everything here is pure formatting: records and retrieved knowledge go in,
text comes out.
"""

from dataclasses import dataclass

from ..core.config import Settings
from ..core.text import extract_keywords
from ..schemas.facts import ResourceRecord, ScholarshipRecord

NO_SCHOLARSHIPS = "No scholarships available at this time."
NO_RESOURCES = "No resources available at this time."

FORMATTING_INSTRUCTIONS = """IMPORTANT FORMATTING INSTRUCTIONS:
1. When you want to emphasize text, use **bold** format.
2. When listing scholarships, format them as numbered list items with the following structure:
   1. **Scholarship Name** - **Deadline:** Date - **Amount:** Amount - **Why it might be a good fit:** Explanation - **More Information:** [Link Text](URL)
3. Make sure all links are properly formatted as markdown links: [Link Text](URL)"""


@dataclass(frozen=True)
class ClubFacts:
    name: str
    meeting_schedule: str
    contact_link: str

    @classmethod
    def from_settings(cls, settings: Settings) -> "ClubFacts":
        return cls(
            name=settings.CLUB_NAME,
            meeting_schedule=settings.MEETING_SCHEDULE,
            contact_link=settings.CONTACT_LINK,
        )


@dataclass(frozen=True)
class PromptContext:
    """Per-request facts that the system instruction is built from."""

    query: str
    scholarships: tuple[ScholarshipRecord, ...]
    resources: tuple[ResourceRecord, ...]
    knowledge: str
    club: ClubFacts

    @property
    def scholarships_text(self) -> str:
        return format_scholarships(self.scholarships)

    @property
    def resources_text(self) -> str:
        return format_resources(self.resources)


@dataclass(frozen=True)
class IntentTemplate:
    triggers: tuple[str, ...]
    template: str


# Checked in order; the first template whose trigger appears in a query keyword wins.
INTENT_TEMPLATES: dict[str, IntentTemplate] = {
    "meeting": IntentTemplate(
        triggers=("meet", "wednesday"),
        template="Scholarship information sessions are held {meeting_schedule}. Everyone is welcome!",
    ),
    "essay": IntentTemplate(
        triggers=("essay", "writ", "prompt"),
        template=(
            "Strong scholarship essays answer the prompt directly, tell a specific story about you, "
            "and are proofread before submission. Bring a draft to one of our sessions {meeting_schedule} "
            "for feedback."
        ),
    ),
    "general": IntentTemplate(
        triggers=(),
        template="Here is what I can share from the {club_name} records right now.",
    ),
}


def format_scholarship(record: ScholarshipRecord) -> str:
    return (
        f"{record.name}\n"
        f"Deadline: {record.deadline or 'Not specified'}\n"
        f"Amount: {record.amount or 'Not specified'}\n"
        f"Description: {record.description or 'Not specified'}\n"
        f"Eligibility: {record.eligibility or 'Not specified'}\n"
        f"More Information: {record.link or 'Not available'}"
    )


def format_scholarships(records) -> str:
    if not records:
        return NO_SCHOLARSHIPS
    return "\n\n".join(format_scholarship(record) for record in records)


def format_resource(record: ResourceRecord) -> str:
    return f"{record.title} ({record.type}): {record.link}"


def format_resources(records) -> str:
    if not records:
        return NO_RESOURCES
    return "\n\n".join(format_resource(record) for record in records)


def build_system_prompt(context: PromptContext) -> str:
    """
    Build the system instruction sent ahead of the conversation.

    Args:
        context: Facts gathered for this request

    Returns:
        The instruction text
    """
    knowledge_block = (
        f"Here is additional relevant information from our knowledge base:\n{context.knowledge}"
        if context.knowledge
        else ""
    )

    sections = [
        f"You are an AI assistant for {context.club.name}, designed to help students with scholarship information.\n"
        "Always be helpful, accurate, and concise. "
        "Format your responses with markdown headings and lists when appropriate.",
        f"Here is information about available scholarships:\n{context.scholarships_text}",
        f"Here are available resources:\n{context.resources_text}",
        knowledge_block,
        f"When asked about meetings, inform users that scholarship information sessions are held "
        f"{context.club.meeting_schedule}.",
        "When recommending scholarships, always explain why they might be a good fit for the student.",
        "Always answer all parts of multi-part questions.",
        FORMATTING_INSTRUCTIONS,
    ]
    return "\n\n".join(section for section in sections if section).strip()


def build_messages(system_prompt: str, history: list[dict]) -> list[dict]:
    """Place the system instruction before the caller's conversation."""
    return [{"role": "system", "content": system_prompt}] + [
        {"role": message["role"], "content": message["content"]} for message in history
    ]


def detect_intent(query: str) -> str:
    """
    Pick the intent template for a query using its retrieval keywords.

    Returns:
        A key of INTENT_TEMPLATES; "general" when nothing matches
    """
    keywords = extract_keywords(query)
    for intent, entry in INTENT_TEMPLATES.items():
        if any(trigger in keyword for trigger in entry.triggers for keyword in keywords):
            return intent
    return "general"


def synthesize_answer(context: PromptContext) -> str:
    """
    Compose a reply from already gathered facts when the completion provider fails.

    The reply opens with the intent template for the query, then lists the
    scholarships, resources and knowledge base excerpts that were gathered.
    """
    club = context.club
    intent = detect_intent(context.query)
    opening = INTENT_TEMPLATES[intent].template.format(
        meeting_schedule=club.meeting_schedule,
        club_name=club.name,
    )

    parts = [opening]

    if context.knowledge:
        parts.append(f"**From our knowledge base:**\n\n{context.knowledge}")

    if context.scholarships:
        lines = []
        for position, record in enumerate(context.scholarships, start=1):
            line = f"{position}. **{record.name}**"
            if record.deadline:
                line += f" - **Deadline:** {record.deadline}"
            if record.amount:
                line += f" - **Amount:** {record.amount}"
            if record.link:
                line += f" - **More Information:** [{record.name}]({record.link})"
            lines.append(line)
        parts.append("**Current scholarships:**\n\n" + "\n".join(lines))

    if context.resources:
        lines = [f"- [{record.title}]({record.link}) ({record.type})" for record in context.resources]
        parts.append("**Helpful resources:**\n\n" + "\n".join(lines))

    parts.append(
        f"Our AI assistant is temporarily limited, so this answer was put together from our records. "
        f"For anything else, contact us at [{club.name}]({club.contact_link})."
    )
    return "\n\n".join(parts)


def apology_message(club: ClubFacts) -> str:
    """Static reply used when not even the local facts are available."""
    return (
        "I'm sorry, I'm having trouble answering right now. "
        f"Please try again in a moment, join our scholarship information sessions {club.meeting_schedule}, "
        f"or reach out to us at [{club.name}]({club.contact_link})."
    )
