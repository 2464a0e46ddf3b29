from enum import Enum


class TableNames(str, Enum):
    INVITE_GROUPS = "invite_groups"
    GUESTS = "guests"
