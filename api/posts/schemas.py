"""
Pydantic request models for post and comment endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class CreatePostRequest(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    # Each tag is any JSON value; a falsy or absent value is stored as [].
    tags: list[Any] | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def falsy_tags_to_none(cls, value: Any) -> Any:
        return value or None


class CreateCommentRequest(BaseModel):
    post_id: int = Field(..., ge=1)
    text: str = Field(..., min_length=1)
