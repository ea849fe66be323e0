"""Pydantic models for request and response bodies.

These models express the JSON envelope of the HTTP API.  Field names
follow the envelope existing clients already consume (``execTime`` is the
elapsed milliseconds rendered as a string).
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExecuteRequest(BaseModel):
    """Request body for ``POST /code/exec``."""

    language: str = Field(..., description="Language id, e.g. 'javascript' or 'typescript'.")
    code: str = Field(..., description="Source code to execute.")


class ExecuteResponse(BaseModel):
    """Response body for a snippet that ran to completion."""

    model_config = ConfigDict(populate_by_name=True)

    stdout: str
    stderr: str
    exec_time: str = Field(..., alias="execTime")
    outcome: str
    exit_code: Optional[int] = Field(default=None, alias="exitCode")


class CommandResponse(BaseModel):
    """Response body for the ``/cmdExec`` debug endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    stdout: str
    stderr: str
    exit_code: Optional[int] = Field(default=None, alias="exitCode")
    error: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    languages: List[str] = Field(default_factory=list)
