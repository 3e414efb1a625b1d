from __future__ import annotations

import copy
import json
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from applications import repository as applications_repository
from core import db
from posts import repository as posts_repository


class FakeStore:
    """
    In-memory stand-in for the repository modules so route tests never need Postgres.

    Mirrors the SQL semantics: newest first, tag containment by JSON value,
    exact status match, full-row replace on update.
    """

    def __init__(self) -> None:
        self.posts: list[dict] = []
        self.comments: list[dict] = []
        self.applications: list[dict] = []
        self._ids = {"posts": 0, "comments": 0, "applications": 0}
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.fail_with: str | None = None

    def _next_id(self, table: str) -> int:
        self._ids[table] += 1
        return self._ids[table]

    def _check(self) -> None:
        if self.fail_with is not None:
            raise db.StorageError(self.fail_with)

    async def list_posts(self, *, tag=None):
        self._check()
        rows = self.posts
        if tag:
            wanted = json.loads(json.dumps(tag))
            rows = [p for p in rows if wanted in p["tags"]]
        out = []
        for post in sorted(rows, key=lambda p: p["date"], reverse=True):
            item = copy.deepcopy(post)
            item["comments"] = [c["text"] for c in self.comments if c["post_id"] == post["id"]]
            out.append(item)
        return out

    async def create_post(self, *, title, content, tags=None):
        self._check()
        self._clock += timedelta(minutes=1)
        row = {
            "id": self._next_id("posts"),
            "title": title,
            "content": content,
            "tags": copy.deepcopy(tags or []),
            "date": self._clock,
        }
        self.posts.append(row)
        return copy.deepcopy(row)

    async def create_comment(self, *, post_id, text):
        self._check()
        row = {"id": self._next_id("comments"), "post_id": post_id, "text": text}
        self.comments.append(row)
        return dict(row)

    async def list_applications(self, *, status=None):
        self._check()
        rows = [a for a in self.applications if not status or a["status"] == status]
        return [dict(a) for a in sorted(rows, key=lambda a: a["apply_date"], reverse=True)]

    async def create_application(self, *, company, position, status, apply_date, follow_up=None):
        self._check()
        row = {
            "id": self._next_id("applications"),
            "company": company,
            "position": position,
            "status": status,
            "apply_date": apply_date,
            "follow_up": follow_up,
        }
        self.applications.append(row)
        return dict(row)

    async def replace_application(self, application_id, *, company, position, status, apply_date, follow_up=None):
        self._check()
        for row in self.applications:
            if row["id"] == application_id:
                row.update(
                    company=company,
                    position=position,
                    status=status,
                    apply_date=apply_date,
                    follow_up=follow_up,
                )
                return dict(row)
        return None

    async def delete_application(self, application_id):
        self._check()
        before = len(self.applications)
        self.applications = [a for a in self.applications if a["id"] != application_id]
        return len(self.applications) < before


@pytest.fixture()
def store(monkeypatch):
    fake = FakeStore()
    for name in ("list_posts", "create_post", "create_comment"):
        monkeypatch.setattr(posts_repository, name, getattr(fake, name))
    for name in (
        "list_applications",
        "create_application",
        "replace_application",
        "delete_application",
    ):
        monkeypatch.setattr(applications_repository, name, getattr(fake, name))
    return fake


@pytest.fixture()
def client(store):
    import main

    # No context manager: the lifespan (and its real DB pool) is not started.
    return TestClient(main.app)
