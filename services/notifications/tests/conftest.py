import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.database import get_db
from app.dependencies import get_recipient_scope
from app.main import app
from app.models.creation import Creation
from app.models.identity import User, UserProfile
from app.models.notification import Notification
from app.notifications import service
from app.notifications.types import RecipientScope
from shared.database.postgres import Base, get_async_engine, session_scope

RECIPIENT = RecipientScope(
    recipient_id=uuid.UUID("11111111-1111-1111-1111-111111111111"), role="user"
)
OTHER_RECIPIENT = RecipientScope(
    recipient_id=uuid.UUID("22222222-2222-2222-2222-222222222222"), role="creator"
)
ACTOR_ID = uuid.UUID("33333333-3333-3333-3333-333333333333")

# Fixed reference instant for tests that pass ``now`` explicitly.
NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def recipient() -> RecipientScope:
    return RECIPIENT


@pytest.fixture
def other_recipient() -> RecipientScope:
    return OTHER_RECIPIENT


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    engine = get_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'notifications.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_notification(
    db_session: AsyncSession,
) -> Callable[..., Awaitable[Notification]]:
    """Store a notification for RECIPIENT (override any field) and commit it."""

    async def _make(**fields) -> Notification:
        fields.setdefault("title", "Stored title")
        fields.setdefault("message", "Stored message")
        if "recipient_role" not in fields:
            fields.setdefault("recipient_id", RECIPIENT.recipient_id)
        notification = await service.create_notification(db=db_session, **fields)
        await db_session.commit()
        return notification

    return _make


@pytest_asyncio.fixture
async def actor(db_session: AsyncSession) -> User:
    user = User(user_id=ACTOR_ID, email="ada@example.com", display_name=None, user_name="ada")
    db_session.add(user)
    db_session.add(UserProfile(user_id=ACTOR_ID, display_name="Ada Lovelace", user_name=None))
    db_session.add(Creation(creation_id=42, title="Sunset over the bay"))
    await db_session.commit()
    return user


@pytest_asyncio.fixture
async def async_client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    async def _get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_scope(session_factory) as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_recipient_scope] = lambda: RECIPIENT
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
