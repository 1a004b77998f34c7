import logging
from dataclasses import dataclass

from scholar_assist.core.config import Settings
from scholar_assist.core.errors import ConfigurationError, InvalidInputError, UpstreamUnavailableError
from scholar_assist.rag.completion import CompletionClient
from scholar_assist.rag.graph import SOURCE_STATIC, ChatPipeline
from scholar_assist.rag.prompt import ClubFacts, apology_message
from scholar_assist.schemas.chat import ChatMessage, CompletionStatusResponse
from scholar_assist.services.facts_service import FactsService
from scholar_assist.services.knowledge_store import KnowledgeStore

logger = logging.getLogger(__name__)


@dataclass
class ChatReply:
    content: str
    source: str


class ChatService:
    """
    Service for answering chat requests using the LangGraph chat pipeline.

    Apart from input validation, every failure is turned into a usable reply.
    """

    def __init__(self, store: KnowledgeStore, facts: FactsService, client: CompletionClient, settings: Settings):
        self.client = client
        self.require_provider = settings.CHAT_REQUIRE_COMPLETION_PROVIDER
        self.club = ClubFacts.from_settings(settings)
        pipeline = ChatPipeline(
            store=store,
            facts=facts,
            client=client,
            club=self.club,
            match_count=settings.RETRIEVAL_MATCH_COUNT,
            candidate_limit=settings.RETRIEVAL_CANDIDATE_LIMIT,
        )
        self.compiled_graph = pipeline.build()

    async def respond(self, messages: list[ChatMessage]) -> ChatReply:
        """
        Produce the assistant's reply to a conversation.

        Args:
            messages: The whole conversation, oldest first

        Returns:
            ChatReply with the reply text and the tier that produced it

        Raises:
            InvalidInputError: If there are no messages
            ConfigurationError: If a completion provider is required but not configured
        """
        if not messages:
            raise InvalidInputError("Messages are required")

        if self.require_provider and not self.client.configured:
            raise ConfigurationError("Chat completion provider is not configured.")

        query = next((m.content for m in reversed(messages) if m.role == "user"), messages[-1].content)
        history = [{"role": m.role, "content": m.content} for m in messages]

        logger.info(f"Answering chat with {len(messages)} messages")

        try:
            final_state = await self.compiled_graph.ainvoke({"messages": history, "query": query})
        except Exception as e:
            logger.error(f"Chat pipeline failed: {e}", exc_info=True)
            return ChatReply(content=apology_message(self.club), source=SOURCE_STATIC)

        content = final_state.get("content") or apology_message(self.club)
        source = final_state.get("source", SOURCE_STATIC)

        logger.info(f"Chat reply produced by {source} tier")
        return ChatReply(content=content, source=source)


async def check_completion_provider(client: CompletionClient) -> CompletionStatusResponse:
    """Send a one-line test prompt to the completion provider and report the outcome."""
    key_length = len(client.api_key or "")
    if not client.configured:
        return CompletionStatusResponse(
            success=False,
            message="COMPLETION_API_KEY is not set",
            has_key=False,
            model=client.model,
        )

    try:
        reply = await client.complete([{"role": "user", "content": "Say 'Hello, this is a test!'"}], max_tokens=50)
    except UpstreamUnavailableError as e:
        logger.warning(f"Completion provider check failed: {e}")
        return CompletionStatusResponse(
            success=False,
            message="Completion provider call failed",
            has_key=True,
            key_length=key_length,
            model=client.model,
            error=str(e),
        )

    return CompletionStatusResponse(
        success=True,
        message="Completion provider is working correctly",
        has_key=True,
        key_length=key_length,
        model=client.model,
        test_response=reply,
    )
