"""Structured error envelope shared by every endpoint."""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """A single field-level or contextual error detail."""

    field: str | None = None
    message: str


class ErrorBody(BaseModel):
    code: str
    message: str
    details: list[ErrorDetail] = []
    request_id: str = Field(alias="requestId")

    model_config = {"populate_by_name": True}


class ErrorResponse(BaseModel):
    error: ErrorBody


# OpenAPI documentation for the error codes every authenticated route can return
COMMON_ERROR_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
    403: {"model": ErrorResponse, "description": "Permission denied or target outside scope"},
    404: {"model": ErrorResponse, "description": "Record not found"},
    422: {"model": ErrorResponse, "description": "Validation or business rule failure"},
}
