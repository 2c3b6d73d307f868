from uuid import UUID

from sqlalchemy import ScalarResult, update

from app.models.app import App
from app.repos.base import BaseRepo


class AppRepo(BaseRepo[App]):
    """App repository."""

    def __init__(self) -> None:
        super().__init__(App)

    async def get_all(self) -> ScalarResult[App]:
        """Get every app, newest first."""
        return await self.execute(self.base_stmt.order_by(App.added_at.desc()))

    async def get_all_approved(self) -> ScalarResult[App]:
        """Get approved apps, newest first."""
        return await self.execute(self.base_stmt.where(App.approved.is_(True)).order_by(App.added_at.desc()))

    async def increment_clicks(self, id: UUID) -> int | None:
        """
        Increment the click counter in a single UPDATE statement.

        Returns the new count, or None when no app has the given id.
        """
        stmt = (
            update(App)
            .where(App.id == id)
            .values(clicks=App.clicks + 1)
            .returning(App.clicks)
            .execution_options(synchronize_session=False)
        )
        result = await self._db.session.execute(stmt)
        return result.scalar_one_or_none()
