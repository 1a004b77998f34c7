"""LangGraph orchestration for the chat pipeline.

This module implements the stateful graph that answers a chat request:
gather → assemble → complete, with two degraded exits. When the completion
provider fails the reply is synthesized from the gathered facts; when the
facts themselves cannot be gathered a static apology is returned.
"""

import logging
from typing import TypedDict

from langgraph.graph import END, StateGraph

from ..core.errors import UpstreamUnavailableError
from ..schemas.facts import ResourceRecord, ScholarshipRecord
from .completion import CompletionClient
from .prompt import ClubFacts, PromptContext, apology_message, build_messages, build_system_prompt, synthesize_answer
from .retriever import DEFAULT_CANDIDATE_LIMIT, DEFAULT_MATCH_COUNT, search_knowledge

logger = logging.getLogger(__name__)

SOURCE_COMPLETION = "completion"
SOURCE_FALLBACK = "fallback"
SOURCE_STATIC = "static"


class ChatState(TypedDict, total=False):
    """State dictionary that flows through the LangGraph nodes."""

    # Input
    messages: list[dict[str, str]]
    query: str

    # Intermediate state
    scholarships: list[ScholarshipRecord]
    resources: list[ResourceRecord]
    knowledge: str
    context: PromptContext
    outbound: list[dict[str, str]]
    error: str

    # Output
    content: str
    source: str


class ChatPipeline:
    """
    Nodes of the chat graph, bound to the collaborators of one request.

    Args:
        store: Knowledge store gateway used for retrieval
        facts: Service listing scholarships and resources
        client: Completion provider client
        club: Static club facts
        match_count: Number of knowledge chunks added to the prompt
        candidate_limit: Number of knowledge chunks scanned per query
    """

    def __init__(
        self,
        store,
        facts,
        client: CompletionClient,
        club: ClubFacts,
        match_count: int = DEFAULT_MATCH_COUNT,
        candidate_limit: int = DEFAULT_CANDIDATE_LIMIT,
    ):
        self.store = store
        self.facts = facts
        self.client = client
        self.club = club
        self.match_count = match_count
        self.candidate_limit = candidate_limit

    async def gather_node(self, state: ChatState) -> ChatState:
        """Fetch scholarships, resources and matching knowledge for the query."""
        try:
            scholarships = await self.facts.list_scholarships()
            resources = await self.facts.list_resources()
        except Exception as e:
            logger.error(f"Failed to fetch scholarships or resources: {e}", exc_info=True)
            return {**state, "error": f"facts unavailable: {e}"}

        # Retrieval degrades to "" on its own
        knowledge = await search_knowledge(
            self.store,
            state.get("query", ""),
            match_count=self.match_count,
            candidate_limit=self.candidate_limit,
        )

        logger.debug(
            f"Gathered {len(scholarships)} scholarships, {len(resources)} resources, "
            f"{len(knowledge)} characters of knowledge"
        )
        return {**state, "scholarships": scholarships, "resources": resources, "knowledge": knowledge}

    def assemble_node(self, state: ChatState) -> ChatState:
        """Build the prompt context and the outbound message list."""
        context = PromptContext(
            query=state.get("query", ""),
            scholarships=tuple(state.get("scholarships", [])),
            resources=tuple(state.get("resources", [])),
            knowledge=state.get("knowledge", ""),
            club=self.club,
        )
        outbound = build_messages(build_system_prompt(context), state.get("messages", []))
        return {**state, "context": context, "outbound": outbound}

    async def complete_node(self, state: ChatState) -> ChatState:
        """Ask the completion provider for the reply."""
        try:
            content = await self.client.complete(state["outbound"])
        except UpstreamUnavailableError as e:
            logger.warning(f"Completion provider unavailable, falling back to local answer: {e}")
            return {**state, "error": str(e)}
        except Exception as e:
            logger.error(f"Completion call failed unexpectedly, falling back to local answer: {e}", exc_info=True)
            return {**state, "error": f"completion failed: {e}"}

        return {**state, "content": content, "source": SOURCE_COMPLETION}

    def synthesize_node(self, state: ChatState) -> ChatState:
        """Compose a reply from the gathered facts."""
        try:
            content = synthesize_answer(state["context"])
        except Exception as e:
            logger.error(f"Local answer synthesis failed: {e}", exc_info=True)
            return {**state, "error": f"synthesis failed: {e}"}

        return {**state, "content": content, "source": SOURCE_FALLBACK}

    def apologize_node(self, state: ChatState) -> ChatState:
        """Return the static apology and contact details."""
        return {**state, "content": apology_message(self.club), "source": SOURCE_STATIC}

    @staticmethod
    def route_after_gather(state: ChatState) -> str:
        return "apologize" if state.get("error") else "assemble"

    @staticmethod
    def route_after_complete(state: ChatState) -> str:
        return "done" if state.get("source") == SOURCE_COMPLETION else "synthesize"

    @staticmethod
    def route_after_synthesize(state: ChatState) -> str:
        return "done" if state.get("source") == SOURCE_FALLBACK else "apologize"

    def build(self):
        """
        Build and compile the chat graph.

        Returns:
            Compiled LangGraph instance ready for execution
        """
        graph = StateGraph(ChatState)

        # Add nodes
        graph.add_node("gather", self.gather_node)
        graph.add_node("assemble", self.assemble_node)
        graph.add_node("complete", self.complete_node)
        graph.add_node("synthesize", self.synthesize_node)
        graph.add_node("apologize", self.apologize_node)

        # Set entry point
        graph.set_entry_point("gather")

        # Define the flow
        graph.add_conditional_edges("gather", self.route_after_gather, {"assemble": "assemble", "apologize": "apologize"})
        graph.add_edge("assemble", "complete")
        graph.add_conditional_edges("complete", self.route_after_complete, {"done": END, "synthesize": "synthesize"})
        graph.add_conditional_edges("synthesize", self.route_after_synthesize, {"done": END, "apologize": "apologize"})
        graph.add_edge("apologize", END)

        compiled_graph = graph.compile()

        logger.debug("Chat graph compiled successfully")

        return compiled_graph

