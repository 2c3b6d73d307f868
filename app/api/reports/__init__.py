"""
Reports API router - public report submission and admin triage.
"""

from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Path, Response, status

from app.api.middlewares.authentication import require_admin
from app.api.payloads import APIError, CreateReportRequest, ReportPayload
from app.api.utils.ids import parse_entity_id
from app.container import ApplicationContainer
from app.controllers.reports.report_controller import ReportController

router = APIRouter()


@router.get(
    "",
    response_model=list[ReportPayload],
    dependencies=[Depends(require_admin)],
    summary="List reports",
    description="Lists every report, most recent first",
)
@inject
async def list_reports(
    report_controller: ReportController = Depends(Provide[ApplicationContainer.controllers.report_controller]),
) -> list[ReportPayload]:
    reports = await report_controller.list_reports()
    return [ReportPayload.model_validate(report) for report in reports]


@router.post(
    "",
    response_model=ReportPayload,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": APIError, "description": "Missing or invalid reasons"},
        404: {"model": APIError, "description": "App not found"},
    },
    summary="Report an app",
)
@inject
async def create_report(
    body: CreateReportRequest,
    report_controller: ReportController = Depends(Provide[ApplicationContainer.controllers.report_controller]),
) -> ReportPayload:
    report = await report_controller.create_report(body.app_id, body.app_name, body.reasons)
    return ReportPayload.model_validate(report)


@router.delete(
    "/app/{app_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
    summary="Delete all reports for an app",
)
@inject
async def delete_reports_for_app(
    app_id: str = Path(..., description="App id"),
    report_controller: ReportController = Depends(Provide[ApplicationContainer.controllers.report_controller]),
) -> Response:
    try:
        app_uuid = UUID(app_id)
    except ValueError:
        # Not a valid id, so no report can reference it.
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    await report_controller.delete_reports_for_app(app_uuid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{report_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
    responses={404: {"model": APIError, "description": "Report not found"}},
    summary="Dismiss a report",
)
@inject
async def delete_report(
    report_id: str = Path(..., description="Report id"),
    report_controller: ReportController = Depends(Provide[ApplicationContainer.controllers.report_controller]),
) -> Response:
    await report_controller.delete_report(parse_entity_id(report_id, "Report"))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
