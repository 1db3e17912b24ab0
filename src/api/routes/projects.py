"""Portfolio project endpoints."""

from fastapi import APIRouter, Response
from starlette.status import HTTP_404_NOT_FOUND

from src.api.dependencies import Projects
from src.domain.models import Project

router = APIRouter()


@router.get("", response_model=list[Project])
async def list_projects(projects: Projects) -> list[Project]:
    """List every project."""
    return await projects.list_all()


# Registered before "/{project_id}" so "status" is never taken for an id
@router.get(
    "/status/{status}",
    response_model=list[Project],
    responses={400: {"description": "Unknown status token"}},
)
async def list_projects_by_status(status: str, projects: Projects) -> list[Project]:
    """List projects with the given status.

    The token must be ``COMPLETED``, ``UPCOMING`` or ``IN_PROGRESS``,
    matched exactly.
    """
    return await projects.list_by_status(status)


@router.get(
    "/{project_id}",
    response_model=Project,
    responses={HTTP_404_NOT_FOUND: {"description": "No project with this id"}},
)
async def get_project(project_id: str, projects: Projects) -> Project | Response:
    """Fetch one project, or answer 404 with an empty body."""
    project = await projects.get_by_id(project_id)
    if project is None:
        return Response(status_code=HTTP_404_NOT_FOUND)
    return project
