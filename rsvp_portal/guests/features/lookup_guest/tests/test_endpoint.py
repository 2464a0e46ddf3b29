from uuid import uuid4

import pytest

from rsvp_portal.errors import InviteGroupNotFoundError
from rsvp_portal.guests.dtos import (
    GuestDTO,
    GuestSuggestionDTO,
    LookupResultDTO,
    LookupStatus,
)
from rsvp_portal.guests.features.lookup_guest.router import get_guest_lookup_read_model
from rsvp_portal.guests.repository.read_models import GuestLookupReadModel
from rsvp_portal.guests.urls import LOOKUP_GUEST_URL


class InMemoryGuestLookupReadModel(GuestLookupReadModel):
    """In-memory read model for testing. Returns a canned result and records calls."""

    def __init__(self, result: LookupResultDTO | None = None, error: Exception | None = None):
        self._result = result or LookupResultDTO(status=LookupStatus.NONE)
        self._error = error
        self.calls: list[tuple[str, str]] = []

    async def lookup(self, first_name: str, last_name: str) -> LookupResultDTO:
        self.calls.append((first_name, last_name))
        if self._error:
            raise self._error
        return self._result


@pytest.mark.asyncio
async def test_lookup_match_returns_group_guests(client_factory):
    group_id = uuid4()
    guest_id = uuid4()
    plus_one_id = uuid4()
    read_model = InMemoryGuestLookupReadModel(
        LookupResultDTO(
            status=LookupStatus.MATCH,
            group_id=group_id,
            guests=[
                GuestDTO(id=guest_id, first_name="Jane", last_name="Doe"),
                GuestDTO(id=plus_one_id, first_name=None, last_name=None, is_plus_one=True),
            ],
        )
    )

    async with client_factory({get_guest_lookup_read_model: lambda: read_model}) as client:
        response = await client.post(
            LOOKUP_GUEST_URL, json={"first_name": "Jane", "last_name": "Doe"}
        )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "match"
    assert data["group_id"] == str(group_id)
    assert "matches" not in data
    assert data["guests"] == [
        {
            "id": str(guest_id),
            "first_name": "Jane",
            "last_name": "Doe",
            "attending": None,
            "dietary_restrictions": None,
            "is_plus_one": False,
        },
        {
            "id": str(plus_one_id),
            "first_name": None,
            "last_name": None,
            "attending": None,
            "dietary_restrictions": None,
            "is_plus_one": True,
        },
    ]


@pytest.mark.asyncio
async def test_lookup_normalizes_names_before_searching(client_factory):
    read_model = InMemoryGuestLookupReadModel()

    async with client_factory({get_guest_lookup_read_model: lambda: read_model}) as client:
        await client.post(LOOKUP_GUEST_URL, json={"first_name": "  JaNe ", "last_name": "DOE\t"})

    assert read_model.calls == [("jane", "doe")]


@pytest.mark.asyncio
async def test_lookup_locked_returns_no_guest_data(client_factory):
    read_model = InMemoryGuestLookupReadModel(LookupResultDTO(status=LookupStatus.LOCKED))

    async with client_factory({get_guest_lookup_read_model: lambda: read_model}) as client:
        response = await client.post(
            LOOKUP_GUEST_URL, json={"first_name": "Jane", "last_name": "Doe"}
        )

    assert response.status_code == 200
    assert response.json() == {"status": "locked"}


@pytest.mark.asyncio
async def test_lookup_suggestions(client_factory):
    suggestion_id = uuid4()
    read_model = InMemoryGuestLookupReadModel(
        LookupResultDTO(
            status=LookupStatus.SUGGESTIONS,
            matches=[GuestSuggestionDTO(id=suggestion_id, first_name="Janet", last_name="Doe")],
        )
    )

    async with client_factory({get_guest_lookup_read_model: lambda: read_model}) as client:
        response = await client.post(
            LOOKUP_GUEST_URL, json={"first_name": "Jan", "last_name": "Do"}
        )

    assert response.status_code == 200
    assert response.json() == {
        "status": "suggestions",
        "matches": [{"id": str(suggestion_id), "first_name": "Janet", "last_name": "Doe"}],
    }


@pytest.mark.asyncio
async def test_lookup_none(client_factory):
    read_model = InMemoryGuestLookupReadModel(LookupResultDTO(status=LookupStatus.NONE))

    async with client_factory({get_guest_lookup_read_model: lambda: read_model}) as client:
        response = await client.post(
            LOOKUP_GUEST_URL, json={"first_name": "Nobody", "last_name": "Here"}
        )

    assert response.status_code == 200
    assert response.json() == {"status": "none"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {},
        {"first_name": "Jane"},
        {"last_name": "Doe"},
        {"first_name": "   ", "last_name": "Doe"},
    ],
)
async def test_lookup_requires_both_names(client_factory, body):
    read_model = InMemoryGuestLookupReadModel()

    async with client_factory({get_guest_lookup_read_model: lambda: read_model}) as client:
        response = await client.post(LOOKUP_GUEST_URL, json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "First and last name are required."}
    assert read_model.calls == []


@pytest.mark.asyncio
async def test_lookup_malformed_body_is_bad_request(client_factory):
    read_model = InMemoryGuestLookupReadModel()

    async with client_factory({get_guest_lookup_read_model: lambda: read_model}) as client:
        response = await client.post(LOOKUP_GUEST_URL, json={"first_name": ["Jane"], "last_name": 3})

    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_lookup_missing_group_is_not_found(client_factory):
    read_model = InMemoryGuestLookupReadModel(error=InviteGroupNotFoundError())

    async with client_factory({get_guest_lookup_read_model: lambda: read_model}) as client:
        response = await client.post(
            LOOKUP_GUEST_URL, json={"first_name": "Jane", "last_name": "Doe"}
        )

    assert response.status_code == 404
    assert response.json() == {"error": "Invite group not found."}
