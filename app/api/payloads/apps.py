"""
Pydantic models for app listing endpoints. JSON keys are camelCase.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictBool
from pydantic.alias_generators import to_camel

from app.models.app import Category


class AppPayload(BaseModel):
    """A listed application as exposed by the API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: UUID
    name: str
    description: str
    url: str
    # Stored labels are not constrained, so an unknown one is relayed as a plain string.
    category: Category | str = Field(..., union_mode="left_to_right")
    tags: list[str] = Field(default_factory=list)
    added_at: int = Field(..., description="Creation time in epoch milliseconds")
    clicks: int = 0
    featured: bool = False
    approved: bool = False


class CreateAppRequest(BaseModel):
    """Public submission of a new listing."""

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    category: Category


class UpdateAppRequest(BaseModel):
    """Sparse patch; omitted and null fields are left untouched, unknown keys are ignored."""

    name: str | None = Field(None, min_length=1)
    description: str | None = Field(None, min_length=1)
    url: str | None = Field(None, min_length=1)
    category: Category | None = None
    tags: list[str] | None = None
    featured: StrictBool | None = None
    approved: StrictBool | None = None


class ApproveAppRequest(BaseModel):
    approved: StrictBool = Field(..., description="Whether the listing is publicly visible")


class ClicksResponse(BaseModel):
    clicks: int
