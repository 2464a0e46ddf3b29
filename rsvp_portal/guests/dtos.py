from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from rsvp_portal.guests.repository.orm_models import Guest


class LookupStatus(str, Enum):
    MATCH = "match"
    SUGGESTIONS = "suggestions"
    NONE = "none"
    LOCKED = "locked"


@dataclass(frozen=True)
class GuestDTO:
    """DTO for a guest shown on the RSVP form."""

    id: UUID
    first_name: str | None
    last_name: str | None
    is_plus_one: bool = False
    attending: bool | None = None
    dietary_restrictions: str | None = None

    @classmethod
    def from_guest(cls, guest: "Guest") -> "GuestDTO":
        """Create GuestDTO from Guest ORM model."""
        return cls(
            id=guest.uuid,
            first_name=guest.first_name,
            last_name=guest.last_name,
            is_plus_one=guest.is_plus_one,
            attending=guest.attending,
            dietary_restrictions=guest.dietary_restrictions,
        )


@dataclass(frozen=True)
class GuestSuggestionDTO:
    """A guest whose name partially matched a lookup."""

    id: UUID
    first_name: str | None
    last_name: str | None


@dataclass(frozen=True)
class LookupResultDTO:
    """Outcome of a name lookup. Only the fields relevant to ``status`` are filled."""

    status: LookupStatus
    group_id: UUID | None = None
    guests: list[GuestDTO] = field(default_factory=list)
    matches: list[GuestSuggestionDTO] = field(default_factory=list)


@dataclass(frozen=True)
class GuestAnswerDTO:
    """One guest's answer within a submission."""

    id: UUID
    attending: bool
    dietary: str | None = None
    # Only used to name plus-ones that have no stored name yet
    first_name: str | None = None
    last_name: str | None = None


@dataclass(frozen=True)
class SubmissionResultDTO:
    submission_id: UUID
    webhook_failures: list[str] = field(default_factory=list)
