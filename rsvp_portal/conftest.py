import contextlib
import os
import tempfile

# Point the app at a throwaway SQLite database before any rsvp_portal module builds its engine
os.environ["DATABASE_URL"] = (
    f"sqlite+aiosqlite:///{os.path.join(tempfile.gettempdir(), f'rsvp_portal_test_{os.getpid()}.db')}"
)
os.environ["RSVP_WEBHOOK_URL"] = ""
os.environ["SENTRY_DSN"] = ""

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from rsvp_portal.config.database import async_session_maker, engine  # noqa: E402
from rsvp_portal.guests.repository.orm_models import Guest, InviteGroup  # noqa: E402
from rsvp_portal.main import app  # noqa: E402
from rsvp_portal.models.base import BaseModel  # noqa: E402


@pytest_asyncio.fixture
async def db():
    """Create all tables for one test and drop them afterwards."""
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    yield

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.drop_all)
    # connections must not outlive the test's event loop
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db):
    async with async_session_maker() as session:
        yield session


@pytest.fixture
def client_factory():
    """
    Build an AsyncClient against the app with dependency overrides.

    Usage:
        async with client_factory({get_x: lambda: fake_x}) as client:
            ...
    """

    @contextlib.asynccontextmanager
    async def _factory(overrides: dict | None = None):
        app.dependency_overrides.update(overrides or {})
        transport = ASGITransport(app=app)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                yield client
        finally:
            app.dependency_overrides.clear()

    return _factory


@pytest_asyncio.fixture
async def client(client_factory):
    async with client_factory() as ac:
        yield ac


@pytest_asyncio.fixture
async def make_group(db):
    """
    Insert an invite group with its guests and return (group, guests).

    ``guests`` is a list of (first_name, last_name, is_plus_one) tuples.
    """

    async def _make_group(
        guests: list[tuple[str | None, str | None, bool]],
        name: str | None = None,
        locked: bool = False,
    ) -> tuple[InviteGroup, list[Guest]]:
        async with async_session_maker() as session:
            group = InviteGroup(name=name, locked=locked)
            session.add(group)
            await session.flush()

            rows = [
                Guest(
                    invite_group_id=group.uuid,
                    first_name=first_name,
                    last_name=last_name,
                    is_plus_one=is_plus_one,
                )
                for first_name, last_name, is_plus_one in guests
            ]
            session.add_all(rows)
            await session.commit()
            return group, rows

    return _make_group
