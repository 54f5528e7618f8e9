"""Read-only access to actor and creation state used when resolving display text."""

from typing import Any, Protocol
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.creation import Creation
from app.models.identity import User, UserProfile


class DisplayLookups(Protocol):
    async def get_user(self, user_id: UUID) -> Any | None: ...

    async def get_profile(self, user_id: UUID) -> Any | None: ...

    async def get_creation(self, creation_id: int) -> Any | None: ...


class SqlDisplayLookups:
    """Lookups against the identity and creations tables.

    Results are memoized for the lifetime of the instance (one request), so an actor
    who appears on many rows is loaded once. Create a new instance per request.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db
        self._users: dict[UUID, User | None] = {}
        self._profiles: dict[UUID, UserProfile | None] = {}
        self._creations: dict[int, Creation | None] = {}

    async def get_user(self, user_id: UUID) -> User | None:
        if user_id not in self._users:
            self._users[user_id] = await self._db.scalar(
                select(User)
                .where(User.user_id == user_id)
                .execution_options(populate_existing=True)
            )
        return self._users[user_id]

    async def get_profile(self, user_id: UUID) -> UserProfile | None:
        if user_id not in self._profiles:
            self._profiles[user_id] = await self._db.scalar(
                select(UserProfile)
                .where(UserProfile.user_id == user_id)
                .execution_options(populate_existing=True)
            )
        return self._profiles[user_id]

    async def get_creation(self, creation_id: int) -> Creation | None:
        if creation_id not in self._creations:
            self._creations[creation_id] = await self._db.scalar(
                select(Creation)
                .where(Creation.creation_id == creation_id)
                .execution_options(populate_existing=True)
            )
        return self._creations[creation_id]
