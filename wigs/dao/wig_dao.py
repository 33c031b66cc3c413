"""WigDAO — wigs table operations."""

from sqlalchemy.ext.asyncio import AsyncSession

from wigs.dao.base import BaseDAO
from wigs.models.wig import Wig


class WigDAO(BaseDAO[Wig]):
    model = Wig

    async def replace_fields(
        self,
        session: AsyncSession,
        pk: int,
        *,
        goal: str,
        description: str | None,
    ) -> Wig | None:
        """Full replace of the user-editable fields.

        Both columns are always written, so ``description=None`` clears
        the stored value.
        """
        return await self.replace(session, pk, goal=goal, description=description)
