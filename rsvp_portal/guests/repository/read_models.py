import abc
from functools import partial
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from rsvp_portal.config.database import async_session_manager
from rsvp_portal.config.settings import settings
from rsvp_portal.errors import InviteGroupNotFoundError
from rsvp_portal.guests.dtos import GuestDTO, GuestSuggestionDTO, LookupResultDTO, LookupStatus
from rsvp_portal.guests.names import LIKE_ESCAPE_CHAR, escape_like
from rsvp_portal.guests.repository.orm_models import Guest, InviteGroup


class GuestLookupReadModel(abc.ABC):
    @abc.abstractmethod
    async def lookup(self, first_name: str, last_name: str) -> LookupResultDTO:
        """
        Resolve a normalized (first, last) name pair to an invite group.

        Falls back to prefix suggestions when no guest matches exactly.
        Raises InviteGroupNotFoundError if the matched guest's group is gone.
        """
        raise NotImplementedError


class SqlGuestLookupReadModel(GuestLookupReadModel):
    """SQL implementation of the guest lookup read model."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        suggestion_limit: int = settings.suggestion_limit,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.suggestion_limit = suggestion_limit

    async def lookup(self, first_name: str, last_name: str) -> LookupResultDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            matched_guest = await self._find_exact_match(session, first_name, last_name)

            if matched_guest is None:
                matches = await self._find_suggestions(session, [first_name, last_name])
                if not matches:
                    return LookupResultDTO(status=LookupStatus.NONE)
                return LookupResultDTO(status=LookupStatus.SUGGESTIONS, matches=matches)

            group = await session.get(InviteGroup, matched_guest.invite_group_id)
            if group is None:
                raise InviteGroupNotFoundError()

            # Locked groups reveal nothing about their guests
            if group.locked:
                return LookupResultDTO(status=LookupStatus.LOCKED)

            guests = await self._get_group_guests(session, group.uuid)
            return LookupResultDTO(
                status=LookupStatus.MATCH,
                group_id=group.uuid,
                guests=[GuestDTO.from_guest(guest) for guest in guests],
            )

    async def _find_exact_match(
        self, session, first_name: str, last_name: str
    ) -> Guest | None:
        """Case-insensitive exact match on both names."""
        stmt = (
            select(Guest)
            .where(Guest.first_name.ilike(escape_like(first_name), escape=LIKE_ESCAPE_CHAR))
            .where(Guest.last_name.ilike(escape_like(last_name), escape=LIKE_ESCAPE_CHAR))
            .order_by(Guest.created_at)
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def _get_group_guests(self, session, group_id: UUID) -> list[Guest]:
        """All guests of a group, plus-ones last, then alphabetically."""
        stmt = (
            select(Guest)
            .where(Guest.invite_group_id == group_id)
            .order_by(
                Guest.is_plus_one.asc(),
                Guest.first_name.asc().nulls_last(),
                Guest.last_name.asc().nulls_last(),
            )
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def _find_suggestions(self, session, tokens: list[str]) -> list[GuestSuggestionDTO]:
        """Guests whose first or last name starts with any of the tokens."""
        conditions = []
        for token in tokens:
            if not token:
                continue
            prefix = f"{escape_like(token)}%"
            conditions.append(Guest.first_name.ilike(prefix, escape=LIKE_ESCAPE_CHAR))
            conditions.append(Guest.last_name.ilike(prefix, escape=LIKE_ESCAPE_CHAR))

        if not conditions:
            return []

        stmt = (
            select(Guest)
            .where(or_(*conditions))
            .order_by(Guest.last_name.asc().nulls_last(), Guest.first_name.asc().nulls_last())
            .limit(self.suggestion_limit)
        )
        result = await session.execute(stmt)
        return [
            GuestSuggestionDTO(id=guest.uuid, first_name=guest.first_name, last_name=guest.last_name)
            for guest in result.scalars().all()
        ]
