"""
Post and comment persistence (raw SQL).
"""

from __future__ import annotations

import json
from typing import Any

from core import db

_POST_COLUMNS = "p.id, p.title, p.content, p.tags, p.date"

LIST_POSTS_SQL = f"""
SELECT {_POST_COLUMNS},
       ARRAY(SELECT c.text FROM comments c WHERE c.post_id = p.id) AS comments
FROM posts p
ORDER BY p.date DESC
"""

# Tag filter: the JSON-encoded value must appear as an element of the tags array.
LIST_POSTS_BY_TAG_SQL = f"""
SELECT {_POST_COLUMNS},
       ARRAY(SELECT c.text FROM comments c WHERE c.post_id = p.id) AS comments
FROM posts p
WHERE p.tags @> jsonb_build_array($1::jsonb)
ORDER BY p.date DESC
"""

INSERT_POST_SQL = """
INSERT INTO posts (title, content, tags)
VALUES ($1, $2, $3::jsonb)
RETURNING id, title, content, tags, date
"""

INSERT_COMMENT_SQL = """
INSERT INTO comments (post_id, text)
VALUES ($1, $2)
RETURNING id, post_id, text
"""


def _json_arg(value: Any) -> str:
    """
    asyncpg does not encode Python values for json/jsonb parameters.
    We pass JSON as a string and cast to jsonb in SQL.
    """
    return json.dumps(value, ensure_ascii=True)


def _decode_post(row: dict[str, Any]) -> dict[str, Any]:
    # asyncpg returns jsonb columns as text.
    tags = row.get("tags")
    if isinstance(tags, str):
        row["tags"] = json.loads(tags)
    elif tags is None:
        row["tags"] = []
    if "comments" in row and row["comments"] is None:
        row["comments"] = []
    return row


async def list_posts(*, tag: str | None = None) -> list[dict[str, Any]]:
    """
    Newest posts first, each with the text of its comments.
    """
    if tag:
        rows = await db.fetch_all(LIST_POSTS_BY_TAG_SQL, _json_arg(tag))
    else:
        rows = await db.fetch_all(LIST_POSTS_SQL)
    return [_decode_post(row) for row in rows]


async def create_post(*, title: str, content: str, tags: list[Any] | None = None) -> dict[str, Any]:
    row = await db.fetch_one(INSERT_POST_SQL, title, content, _json_arg(tags or []))
    if row is None:
        raise db.StorageError("Failed to insert post.")
    return _decode_post(row)


async def create_comment(*, post_id: int, text: str) -> dict[str, Any]:
    row = await db.fetch_one(INSERT_COMMENT_SQL, post_id, text)
    if row is None:
        raise db.StorageError("Failed to insert comment.")
    return row
