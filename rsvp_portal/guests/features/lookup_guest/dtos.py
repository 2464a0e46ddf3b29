"""DTOs for lookup guest feature."""

from uuid import UUID

from pydantic import BaseModel

from rsvp_portal.guests.dtos import LookupStatus


class LookupGuestRequest(BaseModel):
    """Request body for a name lookup. Blank names are rejected by the endpoint."""

    first_name: str | None = None
    last_name: str | None = None


class GuestResponse(BaseModel):
    id: UUID
    first_name: str | None = None
    last_name: str | None = None
    attending: bool | None = None
    dietary_restrictions: str | None = None
    is_plus_one: bool


class GuestSuggestionResponse(BaseModel):
    id: UUID
    first_name: str | None = None
    last_name: str | None = None


class LookupGuestResponse(BaseModel):
    """
    Response for a name lookup.

    ``group_id`` and ``guests`` are only present for ``match``;
    ``matches`` only for ``suggestions``.
    """

    status: LookupStatus
    group_id: UUID | None = None
    guests: list[GuestResponse] | None = None
    matches: list[GuestSuggestionResponse] | None = None
