import asyncio
import logging
import re
from collections import Counter
from collections.abc import Callable
from enum import Enum
from uuid import UUID

from app.api.payloads import AppPayload, ReportPayload
from app.client.admin_gate import AdminGate
from app.client.directory_client import DirectoryClient
from app.client.listing import ALL_CATEGORIES, CategoryFilter, SortOption, count_reports, filter_apps, sort_apps
from app.exceptions import DirectoryClientError
from app.models.app import Category

logger = logging.getLogger(__name__)

Notifier = Callable[[str], None]

LOAD_ERROR_MESSAGE = "Could not connect to the backend API. Please check your configuration."

_SCHEME_PATTERN = re.compile(r"^https?://", re.IGNORECASE)


class ViewState(Enum):
    HOME = "HOME"
    ADMIN_LOGIN = "ADMIN_LOGIN"
    ADMIN_DASHBOARD = "ADMIN_DASHBOARD"


def normalize_url(url: str) -> str:
    """Trim the URL and prepend https:// when no http(s) scheme was given."""
    url = url.strip()
    if not _SCHEME_PATTERN.match(url):
        url = f"https://{url}"
    return url


def _log_notice(message: str) -> None:
    logger.error(f"User notice: {message}")


def _replace(apps: list[AppPayload], app_id: UUID, updated: AppPayload) -> list[AppPayload]:
    return [updated if app.id == app_id else app for app in apps]


class DirectoryViewController:
    """
    In-memory view state of the directory and the actions users and admins can take on it.

    Two app caches are kept apart on purpose: ``apps`` backs the public directory and
    ``admin_apps`` (loaded on entering the admin dashboard) holds every listing including
    pending ones. Clicks and featured toggles update local state before the server answers;
    clicks are never rolled back, featured toggles are. Every other action only changes
    local state after the server call succeeds, and surfaces failures through ``notify``.

    Responses are applied in completion order. There is no per-entity sequencing, so a slow
    stale response can overwrite a fresher one.
    """

    def __init__(
        self,
        client: DirectoryClient,
        admin_gate: AdminGate | None = None,
        notify: Notifier | None = None,
    ) -> None:
        self._client = client
        self._admin_gate = admin_gate or AdminGate()
        self._notify = notify or _log_notice

        self.view = ViewState.HOME
        self.login_error = False
        self.is_loading = False
        self.load_error: str | None = None

        self.apps: list[AppPayload] = []
        self.admin_apps: list[AppPayload] = []
        self._reports: list[ReportPayload] = []
        self._report_counts: Counter[UUID] | None = None

        self.active_category: CategoryFilter = ALL_CATEGORIES
        self.search_term = ""
        self.sort_by = SortOption.FEATURED

    # --- Derived state ---

    @property
    def reports(self) -> list[ReportPayload]:
        return self._reports

    @reports.setter
    def reports(self, reports: list[ReportPayload]) -> None:
        self._reports = reports
        self._report_counts = None

    @property
    def report_counts(self) -> Counter[UUID]:
        """Reports per app id, recomputed after every change to ``reports``."""
        if self._report_counts is None:
            self._report_counts = count_reports(self._reports)
        return self._report_counts

    @property
    def visible_apps(self) -> list[AppPayload]:
        """The public directory: filtered by approval, category and search, then sorted."""
        return sort_apps(filter_apps(self.apps, self.active_category, self.search_term), self.sort_by)

    def reset_filters(self) -> None:
        self.active_category = ALL_CATEGORIES
        self.search_term = ""
        self.sort_by = SortOption.NEWEST

    # --- Loading ---

    async def load(self) -> None:
        """Fetch the public apps and the reports. Report failures degrade to an empty list."""
        self.is_loading = True
        self.load_error = None
        try:
            apps, reports = await asyncio.gather(self._client.get_apps(), self._fetch_reports())
        except DirectoryClientError as e:
            logger.error(f"Failed to load data: {e}")
            self.load_error = LOAD_ERROR_MESSAGE
        else:
            self.apps = apps
            self.reports = reports
        finally:
            self.is_loading = False

    async def _fetch_reports(self) -> list[ReportPayload]:
        try:
            return await self._client.get_reports()
        except DirectoryClientError as e:
            logger.warning(f"Error fetching reports, continuing without them: {e}")
            return []

    async def load_admin_apps(self) -> None:
        try:
            self.admin_apps = await self._client.get_all_apps()
        except DirectoryClientError as e:
            logger.error(f"Failed to load admin apps: {e}")

    # --- View transitions ---

    def open_admin_login(self) -> None:
        self.view = ViewState.ADMIN_LOGIN
        self.login_error = False

    async def login(self, password: str) -> bool:
        if not self._admin_gate.check(password):
            self.login_error = True
            return False

        self.login_error = False
        self.view = ViewState.ADMIN_DASHBOARD
        await self.load_admin_apps()
        return True

    async def exit_admin(self) -> None:
        self.view = ViewState.HOME
        await self.load()

    # --- Public actions ---

    async def click_app(self, app_id: UUID) -> None:
        """Count a click locally right away, then tell the server. Failures are only logged."""
        app = next((a for a in self.apps if a.id == app_id), None)
        if app is None:
            return

        self.apps = _replace(self.apps, app_id, app.model_copy(update={"clicks": app.clicks + 1}))
        try:
            await self._client.increment_clicks(app_id)
        except DirectoryClientError as e:
            logger.warning(f"Failed to increment clicks; app_id: {app_id}, error: {e}")

    async def submit_app(self, name: str, description: str, url: str, category: Category) -> AppPayload | None:
        """
        Submit a listing for review.

        The new app is unapproved, so it is not added to the public cache.
        """
        try:
            app = await self._client.create_app(name, description, normalize_url(url), category)
        except DirectoryClientError as e:
            logger.error(f"Error adding app: {e}")
            self._notify("Failed to submit. Please check your connection and try again.")
            return None

        self.reset_filters()
        return app

    async def report_app(self, app: AppPayload, reasons: list[str]) -> ReportPayload | None:
        try:
            report = await self._client.create_report(app, reasons)
        except DirectoryClientError as e:
            logger.error(f"Error adding report; app_id: {app.id}, error: {e}")
            self._notify("Failed to submit report.")
            return None

        self.reports = [report, *self.reports]
        return report

    # --- Admin actions ---

    def _find_app(self, app_id: UUID) -> AppPayload | None:
        return next((a for a in [*self.admin_apps, *self.apps] if a.id == app_id), None)

    async def admin_add_app(self, name: str, description: str, url: str, category: Category) -> AppPayload | None:
        """
        Create a listing that is approved straight away.

        Creation and approval are two calls. If approval fails the listing still exists on the
        server as a pending submission, so it is kept in ``admin_apps`` and returned unapproved.
        """
        try:
            created = await self._client.create_app(name, description, normalize_url(url), category)
        except DirectoryClientError as e:
            logger.error(f"Error adding app from admin console: {e}")
            self._notify(f"Add failed: {e.message}")
            return None

        self.admin_apps = [created, *self.admin_apps]
        try:
            approved = await self._client.set_approval(created.id, True)
        except DirectoryClientError as e:
            logger.error(f"Error approving added app; app_id: {created.id}, error: {e}")
            self._notify(f"The listing was added but could not be approved: {e.message}")
            return created

        self.admin_apps = _replace(self.admin_apps, created.id, approved)
        await self._refresh_public_apps()
        return approved

    async def admin_update_app(
        self, app_id: UUID, name: str, description: str, url: str, category: Category
    ) -> AppPayload | None:
        fields = {"name": name, "description": description, "url": url, "category": category}
        try:
            updated = await self._client.update_app(app_id, fields)
        except DirectoryClientError as e:
            logger.error(f"Error updating app; app_id: {app_id}, error: {e}")
            self._notify("Update failed")
            return None

        self.apps = _replace(self.apps, app_id, updated)
        self.admin_apps = _replace(self.admin_apps, app_id, updated)
        return updated

    async def admin_delete_app(self, app_id: UUID) -> bool:
        """Delete an app. Its reports are deleted first; the store's foreign key requires that order."""
        try:
            await self._client.delete_reports_for_app(app_id)
            await self._client.delete_app(app_id)
        except DirectoryClientError as e:
            logger.error(f"Delete error; app_id: {app_id}, error: {e}")
            self._notify(f"Delete failed: {e.message}")
            return False

        self.apps = [a for a in self.apps if a.id != app_id]
        self.admin_apps = [a for a in self.admin_apps if a.id != app_id]
        self.reports = [r for r in self.reports if r.app_id != app_id]
        return True

    async def admin_dismiss_report(self, report_id: UUID) -> bool:
        try:
            await self._client.delete_report(report_id)
        except DirectoryClientError as e:
            logger.error(f"Error dismissing report; report_id: {report_id}, error: {e}")
            self._notify("Dismiss failed")
            return False

        self.reports = [r for r in self.reports if r.id != report_id]
        return True

    async def admin_set_approval(self, app_id: UUID, approved: bool) -> AppPayload | None:
        """
        Approve or unapprove an app.

        Approving refreshes the public cache from the server so the listing shows up without a
        reload; unapproving drops it from the public cache immediately.
        """
        try:
            updated = await self._client.set_approval(app_id, approved)
        except DirectoryClientError as e:
            logger.error(f"Error approving app; app_id: {app_id}, error: {e}")
            self._notify("Failed to update approval status")
            return None

        self.admin_apps = _replace(self.admin_apps, app_id, updated)
        if approved:
            await self._refresh_public_apps()
        else:
            self.apps = [a for a in self.apps if a.id != app_id]
        return updated

    async def admin_toggle_featured(self, app_id: UUID) -> None:
        """Flip the featured flag locally, then persist it; the flag is reverted if the update fails."""
        app = self._find_app(app_id)
        if app is None:
            return

        previous = app.featured
        self._set_featured(app_id, not previous)
        try:
            await self._client.update_app(app_id, {"featured": not previous})
        except DirectoryClientError as e:
            logger.error(f"Error toggling featured; app_id: {app_id}, error: {e}")
            self._set_featured(app_id, previous)
            self._notify("Failed to update featured status")

    def _set_featured(self, app_id: UUID, featured: bool) -> None:
        self.apps = [a.model_copy(update={"featured": featured}) if a.id == app_id else a for a in self.apps]
        self.admin_apps = [
            a.model_copy(update={"featured": featured}) if a.id == app_id else a for a in self.admin_apps
        ]

    async def _refresh_public_apps(self) -> None:
        try:
            self.apps = await self._client.get_apps()
        except DirectoryClientError as e:
            logger.error(f"Error refreshing public apps: {e}")
            self._notify("The public listing could not be refreshed")
