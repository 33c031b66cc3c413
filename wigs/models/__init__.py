"""SQLAlchemy ORM models — one file per table."""

from wigs.models.wig import Wig

__all__ = ["Wig"]
