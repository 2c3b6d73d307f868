from uuid import UUID

from sqlalchemy import ScalarResult, delete

from app.models.report import Report
from app.repos.base import BaseRepo


class ReportRepo(BaseRepo[Report]):
    """Repository for Report model operations."""

    def __init__(self) -> None:
        super().__init__(Report)

    async def get_all(self) -> ScalarResult[Report]:
        """Get every report, most recent first."""
        return await self.execute(self.base_stmt.order_by(Report.timestamp.desc()))

    async def delete_all_by_app(self, app_id: UUID) -> int:
        """Delete all reports for a specific app. Matching nothing is not an error."""
        result = await self._db.session.execute(
            delete(Report).where(Report.app_id == app_id).execution_options(synchronize_session=False)
        )
        await self.flush()
        return result.rowcount or 0
