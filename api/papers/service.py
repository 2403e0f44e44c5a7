"""
Paper and footnote request handling.

Scope:
- required-field checks for create requests (first missing field wins)
- mapping empty lookups to 404
"""

from __future__ import annotations

import logging
from typing import Any

import asyncpg

from core.errors import MissingFieldError, NotFoundError

from . import repository, schemas

PAPER_FIELDS = ("title", "author")
PAPER_FORMAT = "{ title: <String>, author: <String> }"

FOOTNOTE_FIELDS = ("note", "paper_id")
FOOTNOTE_FORMAT = "{ note: <String>, paper_id: <Integer> }"

logger = logging.getLogger(__name__)


def require_fields(payload: dict[str, Any], fields: tuple[str, ...], *, expected_format: str) -> None:
    """
    Raise MissingFieldError for the first field that is absent or falsy.
    """
    for field in fields:
        if not payload.get(field):
            raise MissingFieldError(field, expected_format=expected_format)


def _as_payload(request: schemas.CreatePaperRequest | schemas.CreateFootnoteRequest | None) -> dict[str, Any]:
    return request.model_dump() if request is not None else {}


async def list_papers(pool: asyncpg.Pool) -> list[dict[str, Any]]:
    return await repository.list_papers(pool)


async def list_footnotes(pool: asyncpg.Pool) -> list[dict[str, Any]]:
    return await repository.list_footnotes(pool)


async def get_paper(pool: asyncpg.Pool, paper_id: int) -> list[dict[str, Any]]:
    rows = await repository.list_papers_by_id(pool, paper_id)
    if not rows:
        logger.info("Paper %s not found", paper_id)
        raise NotFoundError(f"Could not find paper with id {paper_id}")
    return rows


async def get_paper_footnotes(pool: asyncpg.Pool, paper_id: int) -> list[dict[str, Any]]:
    rows = await repository.list_footnotes_for_paper(pool, paper_id)
    if not rows:
        logger.info("No footnotes for paper %s", paper_id)
        raise NotFoundError(f"Could not find footnote associated with paper id {paper_id}")
    return rows


async def create_paper(pool: asyncpg.Pool, request: schemas.CreatePaperRequest | None) -> dict[str, int]:
    payload = _as_payload(request)
    require_fields(payload, PAPER_FIELDS, expected_format=PAPER_FORMAT)

    paper_id = await repository.insert_paper(
        pool,
        title=payload["title"],
        author=payload["author"],
    )
    logger.info("Created paper %d", paper_id)
    return {"id": paper_id}


async def create_footnote(pool: asyncpg.Pool, request: schemas.CreateFootnoteRequest | None) -> dict[str, int]:
    payload = _as_payload(request)
    require_fields(payload, FOOTNOTE_FIELDS, expected_format=FOOTNOTE_FORMAT)

    footnote_id = await repository.insert_footnote(
        pool,
        note=payload["note"],
        paper_id=payload["paper_id"],
    )
    logger.info("Created footnote %d for paper %d", footnote_id, payload["paper_id"])
    return {"id": footnote_id}
