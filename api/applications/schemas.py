"""
Pydantic request models for job application endpoints.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, field_validator


class CreateApplicationRequest(BaseModel):
    company: str = Field(..., min_length=1)
    position: str = Field(..., min_length=1)
    status: str = Field(..., min_length=1)
    apply_date: date
    follow_up: date | None = None

    @field_validator("follow_up", mode="before")
    @classmethod
    def blank_follow_up_to_none(cls, value: Any) -> Any:
        # Empty date inputs arrive as "".
        return value or None


class ReplaceApplicationRequest(BaseModel):
    """
    Full replacement: every column is overwritten with what was sent,
    absent fields included (written as NULL).
    """

    company: str | None = None
    position: str | None = None
    status: str | None = None
    apply_date: date | None = None
    follow_up: date | None = None

    @field_validator("follow_up", mode="before")
    @classmethod
    def blank_follow_up_to_none(cls, value: Any) -> Any:
        return value or None
