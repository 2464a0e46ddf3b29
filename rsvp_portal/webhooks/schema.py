from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class RsvpWebhookPayload(BaseModel):
    """JSON body posted to the RSVP webhook, one per guest of a submission."""

    # Identifies the guest in failure messages; not sent
    guest_id: UUID = Field(exclude=True)

    submission_id: UUID
    group_id: UUID
    first_name: str | None = None
    last_name: str | None = None
    attending: bool
    dietary: str | None = None
    submitted_at: datetime
