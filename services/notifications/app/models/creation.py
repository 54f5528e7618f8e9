from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from shared.database.postgres import Base


class Creation(Base):
    """Read-only view of the creations table (owned by the creations service)."""

    __tablename__ = "creations"

    creation_id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer(), "sqlite"), primary_key=True
    )
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
