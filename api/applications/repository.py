"""
Job application persistence (raw SQL).
"""

from __future__ import annotations

from datetime import date
from typing import Any

from core import db

_COLUMNS = "id, company, position, status, apply_date, follow_up"

LIST_APPLICATIONS_SQL = f"""
SELECT {_COLUMNS}
FROM applications
ORDER BY apply_date DESC
"""

LIST_APPLICATIONS_BY_STATUS_SQL = f"""
SELECT {_COLUMNS}
FROM applications
WHERE status = $1
ORDER BY apply_date DESC
"""

INSERT_APPLICATION_SQL = f"""
INSERT INTO applications (company, position, status, apply_date, follow_up)
VALUES ($1, $2, $3, $4, $5)
RETURNING {_COLUMNS}
"""

UPDATE_APPLICATION_SQL = f"""
UPDATE applications
SET company = $1,
    position = $2,
    status = $3,
    apply_date = $4,
    follow_up = $5
WHERE id = $6
RETURNING {_COLUMNS}
"""

DELETE_APPLICATION_SQL = "DELETE FROM applications WHERE id = $1"


def _affected_rows(status_tag: str) -> int:
    # asyncpg status tags look like "DELETE 1".
    try:
        return int((status_tag or "").rsplit(" ", 1)[-1])
    except ValueError:
        return 0


async def list_applications(*, status: str | None = None) -> list[dict[str, Any]]:
    if status:
        return await db.fetch_all(LIST_APPLICATIONS_BY_STATUS_SQL, status)
    return await db.fetch_all(LIST_APPLICATIONS_SQL)


async def create_application(
    *,
    company: str,
    position: str,
    status: str,
    apply_date: date,
    follow_up: date | None = None,
) -> dict[str, Any]:
    row = await db.fetch_one(
        INSERT_APPLICATION_SQL,
        company,
        position,
        status,
        apply_date,
        follow_up,
    )
    if row is None:
        raise db.StorageError("Failed to insert application.")
    return row


async def replace_application(
    application_id: int,
    *,
    company: str | None,
    position: str | None,
    status: str | None,
    apply_date: date | None,
    follow_up: date | None = None,
) -> dict[str, Any] | None:
    """
    Overwrite every column of one application.
    Returns the updated row, or None when no row has that id.
    """
    return await db.fetch_one(
        UPDATE_APPLICATION_SQL,
        company,
        position,
        status,
        apply_date,
        follow_up,
        application_id,
    )


async def delete_application(application_id: int) -> bool:
    status_tag = await db.execute(DELETE_APPLICATION_SQL, application_id)
    return _affected_rows(status_tag) > 0
