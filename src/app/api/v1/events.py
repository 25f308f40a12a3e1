"""Tenant event endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.app.api.dependencies import CommunityServiceDep, MemberAccess, ModeratorAccess
from src.app.api.v1.params import CursorQuery, LimitQuery
from src.app.schemas.community import (
    EventCreate,
    EventDetail,
    EventRead,
    EventUpdate,
    RsvpRead,
    RsvpRequest,
)
from src.app.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/tenants/{tenant_id}/events", tags=["events"])

_EVENT_NOT_FOUND = {404: {"description": "Event not found"}}


@router.get("", response_model=PaginatedResponse[EventRead])
async def list_events(
    access: MemberAccess,
    community: CommunityServiceDep,
    cursor: CursorQuery = None,
    limit: LimitQuery = 50,
) -> PaginatedResponse[EventRead]:
    page = await community.list_events(access.tenant_id, cursor, limit)
    return PaginatedResponse.from_page(page, EventRead.model_validate)


@router.post(
    "",
    response_model=EventRead,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"description": "Thumbnail file not found in this tenant"}},
)
async def create_event(
    data: EventCreate, access: ModeratorAccess, community: CommunityServiceDep
) -> EventRead:
    """Create an event hosted by the caller."""
    event = await community.create_event(access.tenant_id, data, access.user_id)
    return EventRead.model_validate(event)


@router.get("/{event_id}", response_model=EventDetail, responses=_EVENT_NOT_FOUND)
async def get_event(
    event_id: UUID, access: MemberAccess, community: CommunityServiceDep
) -> EventDetail:
    """Event details with RSVP counts per status."""
    return await community.get_event(access.tenant_id, event_id)


@router.put("/{event_id}", response_model=EventRead, responses=_EVENT_NOT_FOUND)
async def update_event(
    event_id: UUID, data: EventUpdate, access: ModeratorAccess, community: CommunityServiceDep
) -> EventRead:
    event = await community.update_event(access.tenant_id, event_id, data)
    return EventRead.model_validate(event)


@router.delete(
    "/{event_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_EVENT_NOT_FOUND
)
async def delete_event(
    event_id: UUID, access: ModeratorAccess, community: CommunityServiceDep
) -> None:
    await community.delete_event(access.tenant_id, event_id)


@router.post("/{event_id}/rsvp", response_model=RsvpRead, responses=_EVENT_NOT_FOUND)
async def rsvp_event(
    event_id: UUID, data: RsvpRequest, access: MemberAccess, community: CommunityServiceDep
) -> RsvpRead:
    """Set the caller's RSVP. Repeating it updates the existing answer."""
    rsvp = await community.rsvp(access.tenant_id, event_id, access.user_id, data.status)
    return RsvpRead.model_validate(rsvp)
