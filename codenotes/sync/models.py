"""Pydantic models for the deploy webhook responses."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SyncResult(BaseModel):
    """Successful index sync."""

    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    message: str = "Algolia index updated successfully"
    object_count: int = Field(default=0, ge=0, alias="objectCount")
    duration: str = Field(..., description="Elapsed time, e.g. '412ms'")


class SyncFailure(BaseModel):
    """Failed index sync; ``error`` carries the reason."""

    success: Literal[False] = False
    error: str
