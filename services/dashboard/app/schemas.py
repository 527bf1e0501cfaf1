from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class SeedResponse(StrictModel):
    message: str


class ErrorDetail(StrictModel):
    message: str
    code: str
    # Underlying driver message; only set for connection construction failures.
    details: str | None = None


class ErrorResponse(StrictModel):
    error: ErrorDetail
