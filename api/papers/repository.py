"""
Paper and footnote persistence (raw SQL).

Tables are owned by the migrations, not by this service:
- papers(id serial, title, author, created_at, updated_at)
- footnotes(id serial, note, paper_id -> papers.id, created_at, updated_at)
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db


async def list_papers(pool: asyncpg.Pool) -> list[dict[str, Any]]:
    return await db.fetch_all(
        pool,
        """
        SELECT id, title, author, created_at, updated_at
        FROM papers
        ORDER BY id
        """,
    )


async def list_papers_by_id(pool: asyncpg.Pool, paper_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        pool,
        """
        SELECT id, title, author, created_at, updated_at
        FROM papers
        WHERE id = $1
        """,
        paper_id,
    )


async def list_footnotes(pool: asyncpg.Pool) -> list[dict[str, Any]]:
    return await db.fetch_all(
        pool,
        """
        SELECT id, note, paper_id, created_at, updated_at
        FROM footnotes
        ORDER BY id
        """,
    )


async def list_footnotes_for_paper(pool: asyncpg.Pool, paper_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        pool,
        """
        SELECT id, note, paper_id, created_at, updated_at
        FROM footnotes
        WHERE paper_id = $1
        ORDER BY id
        """,
        paper_id,
    )


async def insert_paper(pool: asyncpg.Pool, *, title: str, author: str) -> int:
    row = await db.fetch_one(
        pool,
        """
        INSERT INTO papers (title, author)
        VALUES ($1, $2)
        RETURNING id
        """,
        title,
        author,
    )
    if row is None or "id" not in row:
        raise RuntimeError("Failed to insert paper.")
    return int(row["id"])


async def insert_footnote(pool: asyncpg.Pool, *, note: str, paper_id: int) -> int:
    """
    Insert a footnote. A paper_id with no matching paper is rejected by the
    foreign key, not here.
    """
    row = await db.fetch_one(
        pool,
        """
        INSERT INTO footnotes (note, paper_id)
        VALUES ($1, $2)
        RETURNING id
        """,
        note,
        paper_id,
    )
    if row is None or "id" not in row:
        raise RuntimeError("Failed to insert footnote.")
    return int(row["id"])
