"""
Post and comment API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Query

from core import errors

from . import repository, schemas

router = APIRouter()

errors.register_required_message("POST", "/posts", "Title and content are required", ("title", "content"))
errors.register_required_message("POST", "/comments", "Post ID and text are required", ("post_id", "text"))


@router.get("/posts")
async def list_posts(tag: str | None = Query(default=None)) -> list[dict]:
    """
    Newest first; `tag` keeps only posts whose tags contain that value.
    """
    return await repository.list_posts(tag=tag)


@router.post("/posts", status_code=201)
async def create_post(request: schemas.CreatePostRequest) -> dict:
    return await repository.create_post(
        title=request.title,
        content=request.content,
        tags=request.tags,
    )


@router.post("/comments", status_code=201)
async def create_comment(request: schemas.CreateCommentRequest) -> dict:
    # The referenced post is not looked up; the comments.post_id foreign key decides.
    return await repository.create_comment(post_id=request.post_id, text=request.text)
