"""
API payloads package for Pydantic response/request models.
"""

from .apps import AppPayload, ApproveAppRequest, ClicksResponse, CreateAppRequest, UpdateAppRequest
from .error import APIError
from .reports import CreateReportRequest, ReportPayload

__all__ = [
    "APIError",
    "AppPayload",
    "ApproveAppRequest",
    "ClicksResponse",
    "CreateAppRequest",
    "CreateReportRequest",
    "ReportPayload",
    "UpdateAppRequest",
]
