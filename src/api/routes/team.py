"""Team member endpoints."""

from fastapi import APIRouter, Response
from starlette.status import HTTP_404_NOT_FOUND

from src.api.dependencies import Team
from src.domain.models import TeamMember

router = APIRouter()


@router.get("", response_model=list[TeamMember])
async def list_team_members(team: Team) -> list[TeamMember]:
    return await team.list_all()


@router.get(
    "/{member_id}",
    response_model=TeamMember,
    responses={HTTP_404_NOT_FOUND: {"description": "No team member with this id"}},
)
async def get_team_member(member_id: str, team: Team) -> TeamMember | Response:
    member = await team.get_by_id(member_id)
    if member is None:
        return Response(status_code=HTTP_404_NOT_FOUND)
    return member
