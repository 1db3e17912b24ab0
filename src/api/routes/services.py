"""Service offering endpoints."""

from fastapi import APIRouter, Response
from starlette.status import HTTP_404_NOT_FOUND

from src.api.dependencies import Services
from src.domain.models import Service

router = APIRouter()


@router.get("", response_model=list[Service])
async def list_services(services: Services) -> list[Service]:
    return await services.list_all()


@router.get(
    "/{service_id}",
    response_model=Service,
    responses={HTTP_404_NOT_FOUND: {"description": "No service with this id"}},
)
async def get_service(service_id: str, services: Services) -> Service | Response:
    service = await services.get_by_id(service_id)
    if service is None:
        return Response(status_code=HTTP_404_NOT_FOUND)
    return service
