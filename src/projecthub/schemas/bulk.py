"""Bulk project operation schemas."""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from src.projecthub.models.enums import BulkAction
from src.projecthub.schemas.project import COMMENT_MAX_LENGTH

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BulkProjectRequest(BaseModel):
    """Body of ``PUT /projects/bulk``.

    Project ids are kept as strings: an id that is not a valid UUID fails as
    its own item instead of rejecting the whole batch.
    """

    model_config = _CAMEL

    project_ids: list[str] = Field(min_length=1)
    action: BulkAction
    status: str | None = None
    comment: str | None = Field(default=None, max_length=COMMENT_MAX_LENGTH)

    @model_validator(mode="after")
    def validate_status_for_update(self) -> "BulkProjectRequest":
        if self.action == BulkAction.UPDATE_STATUS and not self.status:
            raise ValueError("Status is required for updateStatus action")
        return self


class BulkItemSuccess(BaseModel):
    model_config = _CAMEL

    project_id: str
    action: str
    new_status: str | None = None


class BulkItemFailure(BaseModel):
    model_config = _CAMEL

    project_id: str
    error: str


class BulkResults(BaseModel):
    successful: list[BulkItemSuccess] = Field(default_factory=list)
    failed: list[BulkItemFailure] = Field(default_factory=list)


class BulkSummary(BaseModel):
    total: int
    successful: int
    failed: int


class BulkOperationResponse(BaseModel):
    """Each requested id appears in exactly one of the result lists."""

    results: BulkResults
    summary: BulkSummary
