"""
In-memory stand-in for DirectoryClient used by the view controller tests
"""

import uuid
from typing import Any
from uuid import UUID

from app.api.payloads import AppPayload, ReportPayload
from app.exceptions import ApiResponseError, NetworkError
from app.models.app import DEFAULT_TAGS, Category


class FakeDirectoryClient:
    """Mirrors the server semantics closely enough for view tests, and records every call."""

    def __init__(self) -> None:
        self.apps: dict[UUID, AppPayload] = {}
        self.reports: dict[UUID, ReportPayload] = {}
        self.calls: list[tuple[str, Any]] = []
        self.failing: set[str] = set()
        self._clock = 1_700_000_000_000

    def fail(self, *methods: str) -> None:
        self.failing.update(methods)

    def _record(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        if method in self.failing:
            raise NetworkError(f"{method} failed", action=method)

    def _tick(self) -> int:
        self._clock += 1
        return self._clock

    def _get(self, app_id: UUID) -> AppPayload:
        if app_id not in self.apps:
            raise ApiResponseError("App not found", status_code=404)
        return self.apps[app_id]

    def seed_app(self, name: str, **fields: Any) -> AppPayload:
        app = AppPayload(
            id=uuid.uuid4(),
            name=name,
            description=fields.pop("description", f"{name} description"),
            url=fields.pop("url", f"https://{name.lower()}.example"),
            category=fields.pop("category", Category.TOOLS),
            tags=fields.pop("tags", list(DEFAULT_TAGS)),
            added_at=fields.pop("added_at", self._tick()),
            **fields,
        )
        self.apps[app.id] = app
        return app

    def seed_report(self, app: AppPayload, reasons: list[str] | None = None) -> ReportPayload:
        report = ReportPayload(
            id=uuid.uuid4(),
            app_id=app.id,
            app_name=app.name,
            reasons=reasons or ["Spam or misleading"],
            timestamp=self._tick(),
        )
        self.reports[report.id] = report
        return report

    async def get_apps(self) -> list[AppPayload]:
        self._record("get_apps")
        return sorted((a for a in self.apps.values() if a.approved), key=lambda a: -a.added_at)

    async def get_all_apps(self) -> list[AppPayload]:
        self._record("get_all_apps")
        return sorted(self.apps.values(), key=lambda a: -a.added_at)

    async def create_app(self, name: str, description: str, url: str, category: Category) -> AppPayload:
        self._record("create_app", name, description, url, category)
        return self.seed_app(name, description=description, url=url, category=category)

    async def update_app(self, app_id: UUID, fields: dict[str, Any]) -> AppPayload:
        self._record("update_app", app_id, fields)
        updated = self._get(app_id).model_copy(update=fields)
        self.apps[app_id] = updated
        return updated

    async def delete_app(self, app_id: UUID) -> None:
        self._record("delete_app", app_id)
        self._get(app_id)
        if any(r.app_id == app_id for r in self.reports.values()):
            raise ApiResponseError("Reports still reference this app", status_code=409)
        del self.apps[app_id]

    async def increment_clicks(self, app_id: UUID) -> int:
        self._record("increment_clicks", app_id)
        app = self._get(app_id)
        self.apps[app_id] = app.model_copy(update={"clicks": app.clicks + 1})
        return app.clicks + 1

    async def set_approval(self, app_id: UUID, approved: bool) -> AppPayload:
        self._record("set_approval", app_id, approved)
        updated = self._get(app_id).model_copy(update={"approved": approved})
        self.apps[app_id] = updated
        return updated

    async def get_reports(self) -> list[ReportPayload]:
        self._record("get_reports")
        return sorted(self.reports.values(), key=lambda r: -r.timestamp)

    async def create_report(self, app: AppPayload, reasons: list[str]) -> ReportPayload:
        self._record("create_report", app.id, reasons)
        self._get(app.id)
        return self.seed_report(app, reasons)

    async def delete_report(self, report_id: UUID) -> None:
        self._record("delete_report", report_id)
        if self.reports.pop(report_id, None) is None:
            raise ApiResponseError("Report not found", status_code=404)

    async def delete_reports_for_app(self, app_id: UUID) -> None:
        self._record("delete_reports_for_app", app_id)
        self.reports = {k: r for k, r in self.reports.items() if r.app_id != app_id}

    def called(self, method: str) -> list[tuple[Any, ...]]:
        return [args for name, args in self.calls if name == method]
