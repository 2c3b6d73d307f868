from enum import Enum
from uuid import UUID

from app.api.payloads import AppPayload, ReportPayload
from app.client.listing import SortOption, sort_apps
from app.client.view_controller import DirectoryViewController
from app.models.app import Category


class AdminTab(Enum):
    PENDING = "PENDING"
    MANAGE = "MANAGE"
    REPORTS = "REPORTS"


class AdminConsole:
    """Moderation view over the admin app cache and the reports queue."""

    def __init__(self, controller: DirectoryViewController) -> None:
        self._controller = controller
        self.active_tab = AdminTab.PENDING
        self.sort_by = SortOption.NEWEST

    @property
    def pending_apps(self) -> list[AppPayload]:
        """Submissions awaiting review, newest first."""
        pending = [app for app in self._controller.admin_apps if not app.approved]
        return sort_apps(pending, SortOption.NEWEST)

    @property
    def approved_apps(self) -> list[AppPayload]:
        return [app for app in self._controller.admin_apps if app.approved]

    @property
    def managed_apps(self) -> list[AppPayload]:
        """Approved apps in the order selected for the Manage tab."""
        return sort_apps(self.approved_apps, self.sort_by, self._controller.report_counts)

    @property
    def reports(self) -> list[ReportPayload]:
        return self._controller.reports

    def report_count(self, app_id: UUID) -> int:
        return self._controller.report_counts.get(app_id, 0)

    def select_tab(self, tab: AdminTab) -> None:
        self.active_tab = tab

    # --- Pending tab ---

    async def approve(self, app_id: UUID) -> AppPayload | None:
        return await self._controller.admin_set_approval(app_id, True)

    async def reject(self, app_id: UUID) -> bool:
        """Rejecting a submission deletes it."""
        return await self._controller.admin_delete_app(app_id)

    # --- Manage tab ---

    async def add_listing(self, name: str, description: str, url: str, category: Category) -> AppPayload | None:
        return await self._controller.admin_add_app(name, description, url, category)

    async def edit_listing(
        self, app_id: UUID, name: str, description: str, url: str, category: Category
    ) -> AppPayload | None:
        return await self._controller.admin_update_app(app_id, name, description, url, category)

    async def toggle_featured(self, app_id: UUID) -> None:
        await self._controller.admin_toggle_featured(app_id)

    async def delete_listing(self, app_id: UUID) -> bool:
        return await self._controller.admin_delete_app(app_id)

    # --- Reports tab ---

    async def dismiss(self, report_id: UUID) -> bool:
        return await self._controller.admin_dismiss_report(report_id)

    async def ban_app(self, report: ReportPayload) -> bool:
        """Delete the reported app, along with every report filed against it."""
        return await self._controller.admin_delete_app(report.app_id)
