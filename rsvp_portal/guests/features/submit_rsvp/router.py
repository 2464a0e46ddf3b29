from uuid import UUID

from fastapi import APIRouter, Depends

from rsvp_portal.errors import InvalidSubmissionError, InviteGroupNotFoundError
from rsvp_portal.guests.dtos import GuestAnswerDTO
from rsvp_portal.guests.features.submit_rsvp.dtos import SubmitRSVPRequest, SubmitRSVPResponse
from rsvp_portal.guests.repository.write_models import RSVPWriteModel, SqlRSVPWriteModel
from rsvp_portal.guests.urls import SUBMIT_RSVP_URL
from rsvp_portal.webhooks.notifier import get_webhook_notifier

router = APIRouter()


def get_rsvp_write_model() -> RSVPWriteModel:
    """Dependency to get RSVP write model instance."""
    return SqlRSVPWriteModel(webhook_notifier=get_webhook_notifier())


@router.post(SUBMIT_RSVP_URL, response_model=SubmitRSVPResponse)
async def submit_rsvp(
    request: SubmitRSVPRequest,
    write_model: RSVPWriteModel = Depends(get_rsvp_write_model),
) -> SubmitRSVPResponse:
    """
    Submit the answers of every guest in an invite group, once.

    The group is locked on success; any later submission gets a 409.
    Webhook delivery failures do not fail the request, they are listed
    in ``webhook_failures``.
    """
    raw_group_id = (request.group_id or "").strip()
    if not raw_group_id or not request.guests:
        raise InvalidSubmissionError("Group ID and guests are required.")

    try:
        group_id = UUID(raw_group_id)
    except ValueError:
        # Not a UUID, so it cannot name an existing group
        raise InviteGroupNotFoundError()

    answers = [
        GuestAnswerDTO(
            id=guest.id,
            attending=guest.attending,
            dietary=guest.dietary,
            first_name=guest.first_name,
            last_name=guest.last_name,
        )
        for guest in request.guests
    ]

    result = await write_model.submit_rsvp(group_id=group_id, answers=answers)

    return SubmitRSVPResponse(
        submission_id=result.submission_id,
        webhook_failures=result.webhook_failures,
    )
