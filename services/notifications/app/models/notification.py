import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, BigInteger, Index, Integer, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from shared.database.postgres import Base

# JSONB on Postgres, plain JSON on SQLite (tests, local runs).
_JSONPayload = JSONB().with_variant(JSON(), "sqlite")


class Notification(Base):
    __tablename__ = "notifications"

    # SQLite only auto-increments INTEGER PRIMARY KEY columns.
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer(), "sqlite"), primary_key=True, autoincrement=True
    )
    # Recipient user (identity reference); NULL for rows addressed to a whole role
    recipient_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(), nullable=True)
    recipient_role: Mapped[str | None] = mapped_column(String(32), nullable=True)
    # comment / comment_thread / tip, or NULL for legacy rows
    type: Mapped[str | None] = mapped_column(String(32), nullable=True)
    actor_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(), nullable=True)
    # {"creation_id": ...}
    target: Mapped[dict | None] = mapped_column(_JSONPayload, nullable=True)
    # {"amount": ..., "creation_title": ...}
    meta: Mapped[dict | None] = mapped_column(_JSONPayload, nullable=True)
    # Text authored at creation time; shown when live resolution is not possible
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")
    link: Mapped[str | None] = mapped_column(String(512), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    acknowledged_at: Mapped[datetime | None] = mapped_column(
        TIMESTAMP(timezone=True), nullable=True
    )

    __table_args__ = (
        Index("ix_notifications_recipient_created_at", "recipient_id", "created_at"),
        Index("ix_notifications_recipient_acknowledged_at", "recipient_id", "acknowledged_at"),
        Index("ix_notifications_role_created_at", "recipient_role", "created_at"),
    )
