"""DTOs for submit RSVP feature."""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel


class SubmittedGuest(BaseModel):
    """One guest's answer."""

    id: UUID
    attending: bool
    dietary: str | None = None
    # Names are only read for plus-ones that have none stored yet
    first_name: str | None = None
    last_name: str | None = None


class SubmitRSVPRequest(BaseModel):
    """Request body for submitting a group's RSVP. Presence is checked by the endpoint."""

    group_id: str | None = None
    guests: list[SubmittedGuest] | None = None


class SubmitRSVPResponse(BaseModel):
    status: Literal["success"] = "success"
    submission_id: UUID
    webhook_failures: list[str] = []
