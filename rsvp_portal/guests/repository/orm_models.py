from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy_utils import UUIDType

from rsvp_portal.config.table_names import TableNames
from rsvp_portal.models.base import Base, TimeStamp


class InviteGroup(Base, TimeStamp):
    __tablename__ = TableNames.INVITE_GROUPS.value

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # Only ever flipped false -> true, by the conditional update in the submit write model
    locked: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )

    guests: Mapped[list["Guest"]] = relationship("Guest", back_populates="invite_group")

    def __repr__(self) -> str:
        return f"<InviteGroup {self.name or self.uuid} locked={self.locked}>"


class Guest(Base, TimeStamp):
    __tablename__ = TableNames.GUESTS.value

    invite_group_id: Mapped[UUID] = mapped_column(
        UUIDType(binary=False),
        ForeignKey(f"{TableNames.INVITE_GROUPS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    invite_group: Mapped["InviteGroup"] = relationship("InviteGroup", back_populates="guests")

    # Nullable until an unnamed plus-one is named at RSVP time
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)

    is_plus_one: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )

    # None until the group submits
    attending: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    dietary_restrictions: Mapped[str | None] = mapped_column(Text, nullable=True)
    submission_id: Mapped[UUID | None] = mapped_column(UUIDType(binary=False), nullable=True)

    @property
    def display_name(self) -> str:
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or "(unnamed plus-one)"

    def __repr__(self) -> str:
        return f"<Guest {self.display_name} group={self.invite_group_id}>"
