from fastapi import APIRouter, Depends, HTTPException

from scholar_assist.api.deps import get_chat_service, get_completion_client
from scholar_assist.core.errors import ConfigurationError, InvalidInputError
from scholar_assist.rag.completion import CompletionClient
from scholar_assist.schemas.chat import ChatRequest, ChatResponse, CompletionStatusResponse
from scholar_assist.services.chat_service import ChatService, check_completion_provider

router = APIRouter(prefix="/chat")


@router.post("", response_model=ChatResponse)
async def chat(payload: ChatRequest, service: ChatService = Depends(get_chat_service)) -> ChatResponse:
    """
    Answers the latest message of a conversation.

    The reply is grounded on the scholarships, resources and knowledge base.
    If the completion provider is unavailable the reply is built from those
    facts directly instead of failing.
    """
    try:
        reply = await service.respond(payload.messages)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except ConfigurationError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    return ChatResponse(content=reply.content)


@router.get("/status", response_model=CompletionStatusResponse, response_model_exclude_none=True)
async def completion_status(client: CompletionClient = Depends(get_completion_client)) -> CompletionStatusResponse:
    """Checks the completion provider configuration with a one-line test prompt."""
    return await check_completion_provider(client)
