from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


class KnowledgeAddRequest(BaseModel):
    content: str = Field("", description="Free text to split into knowledge chunks.")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Caller metadata merged into every chunk.")


class KnowledgeEntryOut(BaseModel):
    id: UUID
    content: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None


class ChunkError(BaseModel):
    chunk_index: int = Field(..., description="Position of the chunk that failed to persist.")
    error: str = Field(..., description="Reason reported by the store.")


class KnowledgeAddResponse(BaseModel):
    success: bool
    chunks_processed: int
    chunks_stored: int
    errors: list[ChunkError] | None = Field(None, description="Omitted when every chunk was stored.")
    stored_data: list[KnowledgeEntryOut] = Field(default_factory=list)


class KnowledgeMatch(BaseModel):
    id: str
    content: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    score: int


class KnowledgeSearchResponse(BaseModel):
    success: bool
    query: str
    keywords: list[str] = Field(default_factory=list)
    total_records: int = 0
    matching_records: int = 0
    matches: list[KnowledgeMatch] = Field(default_factory=list)
    error: str | None = None


class KnowledgeSample(BaseModel):
    id: UUID
    content_preview: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class KnowledgeStatusResponse(BaseModel):
    success: bool
    total_records: int = 0
    sample_data: list[KnowledgeSample] = Field(default_factory=list)
    error: str | None = None


class VerificationResponse(BaseModel):
    success: bool
    message: str
    error: str | None = None
