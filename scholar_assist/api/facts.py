from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from scholar_assist.api.deps import get_facts_service
from scholar_assist.schemas.facts import (
    ResourceCreate,
    ResourceOut,
    ResourceRecord,
    ScholarshipCreate,
    ScholarshipOut,
    ScholarshipRecord,
)
from scholar_assist.services.facts_service import FactsService

router = APIRouter()


@router.get("/scholarships", response_model=list[ScholarshipRecord])
async def list_scholarships(service: FactsService = Depends(get_facts_service)) -> list[ScholarshipRecord]:
    return await service.list_scholarships()


@router.post("/scholarships", status_code=201, response_model=ScholarshipOut)
async def create_scholarship(
    payload: ScholarshipCreate, service: FactsService = Depends(get_facts_service)
) -> ScholarshipOut:
    scholarship = await service.create_scholarship(payload)
    return ScholarshipOut.model_validate(scholarship)


@router.delete("/scholarships/{scholarship_id}", status_code=204)
async def delete_scholarship(scholarship_id: UUID, service: FactsService = Depends(get_facts_service)) -> None:
    if not await service.delete_scholarship(scholarship_id):
        raise HTTPException(status_code=404, detail="Scholarship not found")


@router.get("/resources", response_model=list[ResourceRecord])
async def list_resources(service: FactsService = Depends(get_facts_service)) -> list[ResourceRecord]:
    return await service.list_resources()


@router.post("/resources", status_code=201, response_model=ResourceOut)
async def create_resource(payload: ResourceCreate, service: FactsService = Depends(get_facts_service)) -> ResourceOut:
    resource = await service.create_resource(payload)
    return ResourceOut.model_validate(resource)


@router.delete("/resources/{resource_id}", status_code=204)
async def delete_resource(resource_id: UUID, service: FactsService = Depends(get_facts_service)) -> None:
    if not await service.delete_resource(resource_id):
        raise HTTPException(status_code=404, detail="Resource not found")
