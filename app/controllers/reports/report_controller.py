import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from app.exceptions import EntityNotFoundError, InvalidDataError, PersistenceError
from app.models.report import Report, ReportReason
from app.repos.app import AppRepo
from app.repos.report import ReportRepo
from app.utils.timestamps import epoch_millis


class ReportController:
    """Controller for abuse report operations."""

    def __init__(self, report_repo: ReportRepo, app_repo: AppRepo) -> None:
        self._logger = logging.getLogger(__name__)
        self._report_repo = report_repo
        self._app_repo = app_repo

    async def list_reports(self) -> list[Report]:
        return list((await self._report_repo.get_all()).all())

    async def create_report(self, app_id: UUID, app_name: str, reasons: list[ReportReason]) -> Report:
        """
        File a report against an app.

        Duplicate reasons are collapsed, keeping their first-seen order. The app name is
        stored as given and is not kept in sync with later renames.
        """
        labels = list(dict.fromkeys(reason.value for reason in reasons))
        if not labels:
            raise InvalidDataError("At least one reason is required")

        if await self._app_repo.get(app_id) is None:
            raise EntityNotFoundError("App not found", entity_id=app_id)

        report = Report(app_id=app_id, app_name=app_name, reasons=labels, timestamp=epoch_millis())
        try:
            await self._report_repo.add(report)
        except SQLAlchemyError as e:
            self._logger.exception(f"Failed to persist report; app_id: {app_id}")
            raise PersistenceError("Failed to add report", action="create_report") from e

        self._logger.info(f"Report filed; app_id: {app_id}, reasons: {labels}")
        return report

    async def delete_report(self, report_id: UUID) -> None:
        report = await self._report_repo.get(report_id)
        if report is None:
            raise EntityNotFoundError("Report not found", entity_id=report_id)
        await self._report_repo.delete(report)

    async def delete_reports_for_app(self, app_id: UUID) -> int:
        count = await self._report_repo.delete_all_by_app(app_id)
        self._logger.info(f"Reports removed for app; app_id: {app_id}, count: {count}")
        return count
