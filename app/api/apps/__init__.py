"""
Apps API router - public listing, submission and click tracking, plus admin moderation.
"""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Path, Response, status

from app.api.middlewares.authentication import require_admin
from app.api.payloads import (
    APIError,
    AppPayload,
    ApproveAppRequest,
    ClicksResponse,
    CreateAppRequest,
    UpdateAppRequest,
)
from app.api.utils.ids import parse_entity_id
from app.container import ApplicationContainer
from app.controllers.apps.app_controller import AppController

router = APIRouter()


@router.get(
    "",
    response_model=list[AppPayload],
    summary="List approved apps",
    description="Lists publicly visible (approved) apps, newest first",
)
@inject
async def list_approved_apps(
    app_controller: AppController = Depends(Provide[ApplicationContainer.controllers.app_controller]),
) -> list[AppPayload]:
    apps = await app_controller.list_apps()
    return [AppPayload.model_validate(app) for app in apps]


@router.get(
    "/all",
    response_model=list[AppPayload],
    dependencies=[Depends(require_admin)],
    summary="List all apps",
    description="Lists every app including unapproved submissions, newest first",
)
@inject
async def list_all_apps(
    app_controller: AppController = Depends(Provide[ApplicationContainer.controllers.app_controller]),
) -> list[AppPayload]:
    apps = await app_controller.list_apps(include_unapproved=True)
    return [AppPayload.model_validate(app) for app in apps]


@router.post(
    "",
    response_model=AppPayload,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": APIError, "description": "Missing required fields"}},
    summary="Submit an app",
    description="Creates a new listing awaiting admin approval",
)
@inject
async def create_app(
    body: CreateAppRequest,
    app_controller: AppController = Depends(Provide[ApplicationContainer.controllers.app_controller]),
) -> AppPayload:
    app = await app_controller.create_app(
        name=body.name, description=body.description, url=body.url, category=body.category
    )
    return AppPayload.model_validate(app)


@router.put(
    "/{app_id}",
    response_model=AppPayload,
    dependencies=[Depends(require_admin)],
    responses={
        400: {"model": APIError, "description": "No recognized fields to update"},
        404: {"model": APIError, "description": "App not found"},
    },
    summary="Update an app",
    description="Applies a sparse patch; omitted fields are left untouched",
)
@inject
async def update_app(
    body: UpdateAppRequest,
    app_id: str = Path(..., description="App id"),
    app_controller: AppController = Depends(Provide[ApplicationContainer.controllers.app_controller]),
) -> AppPayload:
    fields = body.model_dump(exclude_unset=True, exclude_none=True)
    app = await app_controller.update_app(parse_entity_id(app_id, "App"), fields)
    return AppPayload.model_validate(app)


@router.delete(
    "/{app_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
    responses={404: {"model": APIError, "description": "App not found"}},
    summary="Delete an app",
    description="Deletes an app and every report filed against it",
)
@inject
async def delete_app(
    app_id: str = Path(..., description="App id"),
    app_controller: AppController = Depends(Provide[ApplicationContainer.controllers.app_controller]),
) -> Response:
    await app_controller.delete_app(parse_entity_id(app_id, "App"))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{app_id}/clicks",
    response_model=ClicksResponse,
    responses={404: {"model": APIError, "description": "App not found"}},
    summary="Record a click",
    description="Atomically increments the app's click counter and returns the new count",
)
@inject
async def increment_clicks(
    app_id: str = Path(..., description="App id"),
    app_controller: AppController = Depends(Provide[ApplicationContainer.controllers.app_controller]),
) -> ClicksResponse:
    clicks = await app_controller.increment_clicks(parse_entity_id(app_id, "App"))
    return ClicksResponse(clicks=clicks)


@router.patch(
    "/{app_id}/approve",
    response_model=AppPayload,
    dependencies=[Depends(require_admin)],
    responses={
        400: {"model": APIError, "description": "approved must be a boolean"},
        404: {"model": APIError, "description": "App not found"},
    },
    summary="Approve or unapprove an app",
)
@inject
async def approve_app(
    body: ApproveAppRequest,
    app_id: str = Path(..., description="App id"),
    app_controller: AppController = Depends(Provide[ApplicationContainer.controllers.app_controller]),
) -> AppPayload:
    app = await app_controller.set_approval(parse_entity_id(app_id, "App"), body.approved)
    return AppPayload.model_validate(app)
