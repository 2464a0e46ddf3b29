"""CLI commands for RSVP portal management."""

import asyncio
from uuid import UUID

import typer
from sqlalchemy import select

from rsvp_portal.config.database import async_session_manager
from rsvp_portal.guests.repository.orm_models import Guest, InviteGroup

app = typer.Typer(help="CLI commands for RSVP portal management")


def _parse_guest_name(value: str) -> tuple[str, str]:
    """Split "First Last" into its parts; everything after the first word is the last name."""
    parts = value.strip().split(maxsplit=1)
    if len(parts) != 2:
        raise typer.BadParameter(f"Expected 'First Last', got {value!r}")
    return parts[0], parts[1]


@app.command()
def create_group(
    guests: list[str] = typer.Option(
        [],
        "--guest",
        "-g",
        help="Guest name as 'First Last' (repeatable)",
    ),
    plus_ones: int = typer.Option(
        0,
        "--plus-ones",
        "-p",
        min=0,
        help="Number of unnamed plus-one slots",
    ),
    name: str = typer.Option(
        None,
        "--name",
        "-n",
        help="Optional group label, e.g. 'The Smiths'",
    ),
):
    """Create an invite group with named guests and unnamed plus-one slots."""
    guest_names = [_parse_guest_name(guest) for guest in guests]
    if not guest_names and not plus_ones:
        typer.secho("A group needs at least one guest or plus-one.", fg=typer.colors.RED)
        raise typer.Exit(1)

    async def _create_group():
        async with async_session_manager() as session:
            group = InviteGroup(name=name)
            session.add(group)
            await session.flush()  # Get the UUID

            for first_name, last_name in guest_names:
                session.add(
                    Guest(
                        invite_group_id=group.uuid,
                        first_name=first_name,
                        last_name=last_name,
                        is_plus_one=False,
                    )
                )
            for _ in range(plus_ones):
                session.add(Guest(invite_group_id=group.uuid, is_plus_one=True))

            return group.uuid

    group_id = asyncio.run(_create_group())

    typer.secho("Invite group created!", fg=typer.colors.GREEN)
    typer.secho(f"  Group ID: {group_id}", fg=typer.colors.CYAN)
    if name:
        typer.secho(f"  Group Name: {name}", fg=typer.colors.BLUE)
    for first_name, last_name in guest_names:
        typer.secho(f"  - {first_name} {last_name}", fg=typer.colors.BLUE)
    if plus_ones:
        typer.secho(f"  + {plus_ones} plus-one slot(s)", fg=typer.colors.MAGENTA)


@app.command()
def show_group(
    group_id: str = typer.Argument(
        ...,
        help="Invite group UUID",
    ),
):
    """Show an invite group's lock state and its guests' answers."""

    async def _show_group():
        async with async_session_manager() as session:
            group = await session.get(InviteGroup, UUID(group_id))
            if not group:
                raise ValueError(f"Invite group not found: {group_id}")

            stmt = (
                select(Guest)
                .where(Guest.invite_group_id == group.uuid)
                .order_by(Guest.is_plus_one, Guest.first_name)
            )
            result = await session.execute(stmt)
            return group, result.scalars().all()

    try:
        group, guests = asyncio.run(_show_group())
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho(f"Invite group: {group.name or group.uuid}", fg=typer.colors.GREEN)
    typer.secho(f"  Group ID: {group.uuid}", fg=typer.colors.CYAN)
    if group.locked:
        typer.secho("  Locked: RSVP submitted", fg=typer.colors.YELLOW)
    else:
        typer.secho("  Open: awaiting RSVP", fg=typer.colors.BLUE)

    typer.echo()
    typer.secho("Guests:", fg=typer.colors.GREEN)
    for guest in guests:
        if guest.attending is None:
            answer = "no answer"
        else:
            answer = "attending" if guest.attending else "not attending"
        plus_one_label = " (plus-one)" if guest.is_plus_one else ""
        dietary = f" - dietary: {guest.dietary_restrictions}" if guest.dietary_restrictions else ""
        typer.secho(
            f"  - {guest.display_name}{plus_one_label}: {answer}{dietary}",
            fg=typer.colors.BLUE,
        )


if __name__ == "__main__":
    app()
