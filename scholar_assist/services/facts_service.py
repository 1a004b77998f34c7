import logging
from uuid import UUID

from scholar_assist.models import Resource, Scholarship
from scholar_assist.schemas.facts import ResourceCreate, ResourceRecord, ScholarshipCreate, ScholarshipRecord

logger = logging.getLogger(__name__)


class FactsService:
    """
    Read and maintain the scholarship and resource collections.

    Rows are turned into records here, once, so prompt building never has to
    guess at field names.
    """

    async def list_scholarships(self) -> list[ScholarshipRecord]:
        rows = await Scholarship.all().order_by("created_at")
        return [ScholarshipRecord.model_validate(row) for row in rows]

    async def list_resources(self) -> list[ResourceRecord]:
        rows = await Resource.all().order_by("created_at")
        return [ResourceRecord.model_validate(row) for row in rows]

    async def create_scholarship(self, payload: ScholarshipCreate) -> Scholarship:
        scholarship = await Scholarship.create(**payload.model_dump())
        logger.info(f"Created scholarship {scholarship.id}: {scholarship.name}")
        return scholarship

    async def create_resource(self, payload: ResourceCreate) -> Resource:
        resource = await Resource.create(**payload.model_dump())
        logger.info(f"Created resource {resource.id}: {resource.title}")
        return resource

    async def delete_scholarship(self, scholarship_id: UUID) -> bool:
        return await Scholarship.filter(id=scholarship_id).delete() > 0

    async def delete_resource(self, resource_id: UUID) -> bool:
        return await Resource.filter(id=resource_id).delete() > 0
