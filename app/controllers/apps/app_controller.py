import logging
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from app.exceptions import EntityNotFoundError, NoFieldsError, PersistenceError
from app.models.app import DEFAULT_TAGS, App, Category
from app.repos.app import AppRepo
from app.repos.report import ReportRepo
from app.utils.timestamps import epoch_millis

# Columns an admin may patch through update_app.
UPDATABLE_FIELDS = ("name", "description", "url", "category", "tags", "featured", "approved")


class AppController:
    """Controller for app listing operations."""

    def __init__(self, app_repo: AppRepo, report_repo: ReportRepo) -> None:
        self._logger = logging.getLogger(__name__)
        self._app_repo = app_repo
        self._report_repo = report_repo

    async def list_apps(self, include_unapproved: bool = False) -> list[App]:
        """List apps newest first. Unapproved apps are only included when explicitly requested."""
        if include_unapproved:
            result = await self._app_repo.get_all()
        else:
            result = await self._app_repo.get_all_approved()
        return list(result.all())

    async def get_app(self, app_id: UUID) -> App:
        app = await self._app_repo.get(app_id)
        if app is None:
            raise EntityNotFoundError("App not found", entity_id=app_id)
        return app

    async def create_app(self, name: str, description: str, url: str, category: Category) -> App:
        """Create a new, unapproved listing."""
        app = App(
            name=name,
            description=description,
            url=url,
            category=category,
            tags=list(DEFAULT_TAGS),
            added_at=epoch_millis(),
            clicks=0,
            featured=False,
            approved=False,
        )
        try:
            await self._app_repo.add(app)
        except SQLAlchemyError as e:
            self._logger.exception(f"Failed to persist app; name: {name}")
            raise PersistenceError("Failed to add app", action="create_app") from e

        self._logger.info(f"App submitted for review; id: {app.id}, name: {name}")
        return app

    async def update_app(self, app_id: UUID, fields: dict[str, Any]) -> App:
        """
        Apply a sparse patch to an app.

        Only keys in UPDATABLE_FIELDS are applied; anything absent is left untouched.
        Concurrent edits are last-writer-wins.
        """
        values = {key: value for key, value in fields.items() if key in UPDATABLE_FIELDS}
        if not values:
            raise NoFieldsError(entity_id=app_id)

        app = await self.get_app(app_id)
        try:
            await self._app_repo.update(app, values)
        except SQLAlchemyError as e:
            self._logger.exception(f"Failed to update app; id: {app_id}")
            raise PersistenceError("Failed to update app", action="update_app", entity_id=app_id) from e

        self._logger.info(f"App updated; id: {app_id}, fields: {sorted(values)}")
        return app

    async def set_approval(self, app_id: UUID, approved: bool) -> App:
        app = await self.get_app(app_id)
        await self._app_repo.update(app, {"approved": approved})
        self._logger.info(f"App approval changed; id: {app_id}, approved: {approved}")
        return app

    async def delete_app(self, app_id: UUID) -> None:
        """Delete an app together with every report filed against it, children first."""
        app = await self.get_app(app_id)
        deleted_reports = await self._report_repo.delete_all_by_app(app_id)
        await self._app_repo.delete(app)
        self._logger.info(f"App deleted; id: {app_id}, reports removed: {deleted_reports}")

    async def increment_clicks(self, app_id: UUID) -> int:
        clicks = await self._app_repo.increment_clicks(app_id)
        if clicks is None:
            raise EntityNotFoundError("App not found", entity_id=app_id)
        return clicks
