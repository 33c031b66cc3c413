"""wigs table."""

from typing import Optional

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from wigs.core.database import Base, TimestampMixin

GOAL_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500

# SQLite only autoincrements a column declared exactly INTEGER (already 64-bit there).
_ID_TYPE = BigInteger().with_variant(Integer, "sqlite")


class Wig(TimestampMixin, Base):
    __tablename__ = "wigs"

    id: Mapped[int] = mapped_column(_ID_TYPE, primary_key=True, autoincrement=True)
    goal: Mapped[str] = mapped_column(String(GOAL_MAX_LENGTH), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(DESCRIPTION_MAX_LENGTH))

    def __repr__(self) -> str:
        return f"Wig(id={self.id!r}, goal={self.goal!r})"
