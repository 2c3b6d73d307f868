from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.report import ReportReason


class ReportPayload(BaseModel):
    """A user-filed report as exposed by the API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: UUID
    app_id: UUID
    app_name: str = Field(..., description="Name of the app when the report was filed")
    reasons: list[str]
    timestamp: int = Field(..., description="Creation time in epoch milliseconds")


class CreateReportRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    app_id: UUID
    app_name: str = Field(..., min_length=1)
    reasons: list[ReportReason] = Field(..., min_length=1)
