"""RSVP submission write model - validates answers, writes them and locks the invite group."""

import logging
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from functools import partial
from uuid import UUID, uuid4

from sqlalchemy import false, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from rsvp_portal.config.database import async_session_manager
from rsvp_portal.errors import (
    InvalidSubmissionError,
    InviteGroupLockedError,
    InviteGroupNotFoundError,
)
from rsvp_portal.guests.dtos import GuestAnswerDTO, SubmissionResultDTO
from rsvp_portal.guests.names import clean_name
from rsvp_portal.guests.repository.orm_models import Guest, InviteGroup
from rsvp_portal.webhooks.notifier import RsvpWebhookNotifier
from rsvp_portal.webhooks.schema import RsvpWebhookPayload

logger = logging.getLogger(__name__)


class RSVPWriteModel(ABC):
    @abstractmethod
    async def submit_rsvp(
        self,
        group_id: UUID,
        answers: list[GuestAnswerDTO],
    ) -> SubmissionResultDTO:
        """
        Submit the RSVP answers of a whole invite group and lock it.

        Raises:
            InvalidSubmissionError: duplicate ids, ids not matching the group's
                guests, or an attending plus-one without a name
            InviteGroupNotFoundError: the group does not exist
            InviteGroupLockedError: the group was locked before or during the submission
        """
        raise NotImplementedError


class SqlRSVPWriteModel(RSVPWriteModel):
    """Write operations for RSVP. Returns DTOs, never ORM models."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        webhook_notifier: RsvpWebhookNotifier | None = None,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.webhook_notifier = webhook_notifier

    async def submit_rsvp(
        self,
        group_id: UUID,
        answers: list[GuestAnswerDTO],
    ) -> SubmissionResultDTO:
        answer_ids = [answer.id for answer in answers]
        if len(set(answer_ids)) != len(answer_ids):
            raise InvalidSubmissionError("Duplicate guest IDs are not allowed.")

        submission_id = uuid4()
        submitted_at = datetime.now(UTC)

        # Everything in this block is one transaction: a failure, including a
        # lost lock race, rolls back all guest writes.
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            group = await session.get(InviteGroup, group_id)
            if group is None:
                raise InviteGroupNotFoundError()
            if group.locked:
                raise InviteGroupLockedError()

            guests_by_id = await self._get_group_guests(session, group_id)
            if set(guests_by_id) != set(answer_ids):
                raise InvalidSubmissionError(
                    "One or more guests are invalid for this invite group."
                )

            for answer in answers:
                self._apply_answer(guests_by_id[answer.id], answer, submission_id)

            await session.flush()
            await self._lock_group(session, group_id)

            payloads = [
                self._webhook_payload(
                    guests_by_id[answer.id], answer, submission_id, group_id, submitted_at
                )
                for answer in answers
            ]

        logger.info(
            f"RSVP submission {submission_id} accepted for group {group_id} "
            f"({len(answers)} guests)"
        )

        webhook_failures: list[str] = []
        if self.webhook_notifier:
            webhook_failures = await self.webhook_notifier(payloads)

        return SubmissionResultDTO(
            submission_id=submission_id,
            webhook_failures=webhook_failures,
        )

    async def _get_group_guests(self, session, group_id: UUID) -> dict[UUID, Guest]:
        result = await session.execute(select(Guest).where(Guest.invite_group_id == group_id))
        return {guest.uuid: guest for guest in result.scalars().all()}

    def _apply_answer(self, guest: Guest, answer: GuestAnswerDTO, submission_id: UUID) -> None:
        """Copy one answer onto its guest row, naming unnamed plus-ones."""
        dietary = (answer.dietary or "").strip()

        guest.attending = answer.attending
        guest.dietary_restrictions = dietary if answer.attending and dietary else None
        guest.submission_id = submission_id

        if not guest.is_plus_one:
            return

        incoming_first = clean_name(answer.first_name)
        incoming_last = clean_name(answer.last_name)
        has_stored_names = bool(guest.first_name and guest.last_name)

        if answer.attending and not has_stored_names and not (incoming_first and incoming_last):
            raise InvalidSubmissionError("Attending plus ones must include first and last name.")

        if not guest.first_name and incoming_first:
            guest.first_name = incoming_first
        if not guest.last_name and incoming_last:
            guest.last_name = incoming_last

    async def _lock_group(self, session, group_id: UUID) -> None:
        """Flip ``locked`` false -> true; zero affected rows means another submission won."""
        stmt = (
            update(InviteGroup)
            .where(InviteGroup.uuid == group_id)
            .where(InviteGroup.locked == false())
            .values(locked=True)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        if result.rowcount == 0:
            logger.warning(f"Lock conflict for group {group_id}: already locked by another submission")
            raise InviteGroupLockedError()

    def _webhook_payload(
        self,
        guest: Guest,
        answer: GuestAnswerDTO,
        submission_id: UUID,
        group_id: UUID,
        submitted_at: datetime,
    ) -> RsvpWebhookPayload:
        return RsvpWebhookPayload(
            guest_id=guest.uuid,
            submission_id=submission_id,
            group_id=group_id,
            first_name=clean_name(answer.first_name) or guest.first_name,
            last_name=clean_name(answer.last_name) or guest.last_name,
            attending=answer.attending,
            dietary=guest.dietary_restrictions,
            submitted_at=submitted_at,
        )
