from fastapi import APIRouter, Depends

from rsvp_portal.errors import InvalidSubmissionError
from rsvp_portal.guests.dtos import LookupStatus
from rsvp_portal.guests.features.lookup_guest.dtos import (
    GuestResponse,
    GuestSuggestionResponse,
    LookupGuestRequest,
    LookupGuestResponse,
)
from rsvp_portal.guests.names import normalize_name
from rsvp_portal.guests.repository.read_models import (
    GuestLookupReadModel,
    SqlGuestLookupReadModel,
)
from rsvp_portal.guests.urls import LOOKUP_GUEST_URL

router = APIRouter()


def get_guest_lookup_read_model() -> GuestLookupReadModel:
    """Dependency to get guest lookup read model instance."""
    return SqlGuestLookupReadModel()


@router.post(
    LOOKUP_GUEST_URL,
    response_model=LookupGuestResponse,
    response_model_exclude_unset=True,
)
async def lookup_guest(
    request: LookupGuestRequest,
    read_model: GuestLookupReadModel = Depends(get_guest_lookup_read_model),
) -> LookupGuestResponse:
    """
    Find the invite group of a guest by first and last name.

    - ``match``: the group is open, all its guests are returned
    - ``locked``: the group already submitted, no guest data is returned
    - ``suggestions``: no exact match, guests whose names start with either input
    - ``none``: nothing similar either
    """
    first_name = normalize_name(request.first_name)
    last_name = normalize_name(request.last_name)

    if not first_name or not last_name:
        raise InvalidSubmissionError("First and last name are required.")

    result = await read_model.lookup(first_name, last_name)

    if result.status == LookupStatus.MATCH:
        return LookupGuestResponse(
            status=result.status,
            group_id=result.group_id,
            guests=[
                GuestResponse(
                    id=guest.id,
                    first_name=guest.first_name,
                    last_name=guest.last_name,
                    attending=guest.attending,
                    dietary_restrictions=guest.dietary_restrictions,
                    is_plus_one=guest.is_plus_one,
                )
                for guest in result.guests
            ],
        )

    if result.status == LookupStatus.SUGGESTIONS:
        return LookupGuestResponse(
            status=result.status,
            matches=[
                GuestSuggestionResponse(
                    id=match.id,
                    first_name=match.first_name,
                    last_name=match.last_name,
                )
                for match in result.matches
            ],
        )

    return LookupGuestResponse(status=result.status)
