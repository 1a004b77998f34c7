from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ScholarshipRecord(BaseModel):
    """
    A scholarship as used in prompts and listings.

    Store rows may name the eligibility text `eligibility` or `requirements`;
    the two are resolved here so prompt code only ever reads `eligibility`.
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID | None = None
    name: str
    deadline: str | None = None
    amount: str | None = None
    description: str | None = None
    eligibility: str | None = None
    link: str | None = None
    category: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _resolve_eligibility(cls, data: Any) -> Any:
        if isinstance(data, dict):
            if not data.get("eligibility") and data.get("requirements"):
                return {**data, "eligibility": data["requirements"]}
            return data

        # ORM rows and other attribute objects
        requirements = getattr(data, "requirements", None)
        if requirements and not getattr(data, "eligibility", None):
            values = {name: getattr(data, name, None) for name in cls.model_fields}
            return {**values, "eligibility": requirements}
        return data


class ResourceRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID | None = None
    title: str
    type: str
    link: str
    description: str | None = None


class ScholarshipCreate(BaseModel):
    name: str = Field(..., min_length=1)
    deadline: str | None = None
    amount: str | None = None
    description: str | None = None
    eligibility: str | None = None
    link: str | None = None
    category: str | None = None


class ResourceCreate(BaseModel):
    title: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1, description="e.g. slides, worksheet, video, document")
    link: str = Field(..., min_length=1)
    description: str | None = None


class ScholarshipOut(ScholarshipRecord):
    created_at: datetime | None = None


class ResourceOut(ResourceRecord):
    created_at: datetime | None = None
