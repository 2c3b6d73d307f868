import asyncio
import logging
from collections.abc import Callable
from http import HTTPStatus
from typing import Any, TypeVar
from uuid import UUID

import aiohttp
from pydantic import TypeAdapter, ValidationError

from app.api.payloads import AppPayload, ClicksResponse, ReportPayload
from app.exceptions import ApiResponseError, NetworkError, RequestTimeoutError
from app.models.app import Category
from settings import settings

T = TypeVar("T")

_APP_LIST = TypeAdapter(list[AppPayload])
_REPORT_LIST = TypeAdapter(list[ReportPayload])


class DirectoryClient:
    """
    Async HTTP client for the directory API.

    Every call is bounded by a single total timeout (30 seconds by default). Non-2xx statuses,
    malformed bodies, transport failures and timeouts are raised as DirectoryClientError
    subclasses; nothing is retried and in-flight requests are never cancelled.
    """

    def __init__(self, base_url: str | None = None, timeout: float | None = None, api_token: str | None = None):
        self._logger = logging.getLogger(__name__)
        self._base_url = (base_url or settings.client.api_url).rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout if timeout is not None else settings.client.timeout)
        self._api_token = api_token if api_token is not None else settings.admin.api_token
        self._http_session: aiohttp.ClientSession | None = None
        self._session_lock = asyncio.Lock()

    async def __aenter__(self) -> "DirectoryClient":
        await self.init_session()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close_session()

    async def init_session(self) -> None:
        """Initialize the HTTP session."""
        async with self._session_lock:
            if self._http_session is None:
                headers = {"Content-Type": "application/json"}
                if self._api_token:
                    headers["Authorization"] = f"Bearer {self._api_token}"
                self._http_session = aiohttp.ClientSession(timeout=self._timeout, headers=headers)

    async def close_session(self) -> None:
        """Close the HTTP session."""
        if self._http_session:
            await self._http_session.close()
            self._http_session = None

    async def _request(self, method: str, endpoint: str, json: Any = None) -> Any:
        await self.init_session()
        assert self._http_session is not None

        url = f"{self._base_url}{endpoint}"
        try:
            async with self._http_session.request(method, url, json=json) as response:
                if response.status >= 400:
                    message = await self._error_message(response)
                    raise ApiResponseError(message, status_code=response.status, action=f"{method} {endpoint}")
                if response.status == 204:
                    return None
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    self._logger.error(f"Response is not valid JSON; method: {method}, endpoint: {endpoint}")
                    raise ApiResponseError(
                        "Unexpected response from the directory API",
                        status_code=HTTPStatus.BAD_GATEWAY,
                        action=f"{method} {endpoint}",
                    ) from e
        except asyncio.TimeoutError as e:
            self._logger.error(f"Request timed out; method: {method}, endpoint: {endpoint}")
            raise RequestTimeoutError(action=f"{method} {endpoint}") from e
        except aiohttp.ClientError as e:
            self._logger.error(f"Request failed; method: {method}, endpoint: {endpoint}, error: {e}")
            raise NetworkError(f"Could not reach the directory API: {e}", action=f"{method} {endpoint}") from e

    @staticmethod
    async def _error_message(response: aiohttp.ClientResponse) -> str:
        try:
            body = await response.json(content_type=None)
        except (aiohttp.ContentTypeError, ValueError):
            body = None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return f"HTTP error! status: {response.status}"

    def _parse(self, validate: Callable[[Any], T], data: Any, action: str) -> T:
        """Validate a response body, reporting a shape mismatch as an unexpected response."""
        try:
            return validate(data)
        except ValidationError as e:
            self._logger.error(f"Unexpected response shape; action: {action}, errors: {e.error_count()}")
            raise ApiResponseError(
                "Unexpected response from the directory API", status_code=HTTPStatus.BAD_GATEWAY, action=action
            ) from e

    # --- Apps ---

    async def get_apps(self) -> list[AppPayload]:
        """Public listing; the server only returns approved apps."""
        data = await self._request("GET", "/api/apps")
        return self._parse(_APP_LIST.validate_python, data, "get_apps")

    async def get_all_apps(self) -> list[AppPayload]:
        data = await self._request("GET", "/api/apps/all")
        return self._parse(_APP_LIST.validate_python, data, "get_all_apps")

    async def create_app(self, name: str, description: str, url: str, category: Category) -> AppPayload:
        body = {"name": name, "description": description, "url": url, "category": category.value}
        data = await self._request("POST", "/api/apps", json=body)
        return self._parse(AppPayload.model_validate, data, "create_app")

    async def update_app(self, app_id: UUID, fields: dict[str, Any]) -> AppPayload:
        body = {key: value.value if isinstance(value, Category) else value for key, value in fields.items()}
        data = await self._request("PUT", f"/api/apps/{app_id}", json=body)
        return self._parse(AppPayload.model_validate, data, "update_app")

    async def delete_app(self, app_id: UUID) -> None:
        await self._request("DELETE", f"/api/apps/{app_id}")

    async def increment_clicks(self, app_id: UUID) -> int:
        data = await self._request("PATCH", f"/api/apps/{app_id}/clicks")
        return self._parse(ClicksResponse.model_validate, data, "increment_clicks").clicks

    async def set_approval(self, app_id: UUID, approved: bool) -> AppPayload:
        data = await self._request("PATCH", f"/api/apps/{app_id}/approve", json={"approved": approved})
        return self._parse(AppPayload.model_validate, data, "set_approval")

    # --- Reports ---

    async def get_reports(self) -> list[ReportPayload]:
        data = await self._request("GET", "/api/reports")
        return self._parse(_REPORT_LIST.validate_python, data, "get_reports")

    async def create_report(self, app: AppPayload, reasons: list[str]) -> ReportPayload:
        body = {"appId": str(app.id), "appName": app.name, "reasons": reasons}
        data = await self._request("POST", "/api/reports", json=body)
        return self._parse(ReportPayload.model_validate, data, "create_report")

    async def delete_report(self, report_id: UUID) -> None:
        await self._request("DELETE", f"/api/reports/{report_id}")

    async def delete_reports_for_app(self, app_id: UUID) -> None:
        await self._request("DELETE", f"/api/reports/app/{app_id}")
