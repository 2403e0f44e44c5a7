"""
Paper and footnote API endpoints.

`/papers/footnotes` routes are declared before `/papers/{paper_id}` so the
literal path is matched first. Create routes accept JSON or form bodies.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, Request, status

from core import db, payload as request_payload

from . import schemas, service

router = APIRouter(prefix="/api/v1/papers")

_STORAGE_ERROR = {500: {"model": schemas.ErrorResponse}}
_NOT_FOUND = {404: {"model": schemas.ErrorResponse}, **_STORAGE_ERROR}
_UNPROCESSABLE = {422: {"model": schemas.ErrorResponse}, **_STORAGE_ERROR}


async def paper_body(request: Request) -> schemas.CreatePaperRequest:
    return await request_payload.parse_body(request, schemas.CreatePaperRequest)


async def footnote_body(request: Request) -> schemas.CreateFootnoteRequest:
    return await request_payload.parse_body(request, schemas.CreateFootnoteRequest)


@router.get("", response_model=list[schemas.Paper], responses=_STORAGE_ERROR)
async def list_papers(pool: asyncpg.Pool = Depends(db.get_pool)) -> list[dict]:
    return await service.list_papers(pool)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.CreatedResponse,
    responses=_UNPROCESSABLE,
)
async def create_paper(
    payload: schemas.CreatePaperRequest = Depends(paper_body),
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    return await service.create_paper(pool, payload)


@router.get("/footnotes", response_model=list[schemas.Footnote], responses=_STORAGE_ERROR)
async def list_footnotes(pool: asyncpg.Pool = Depends(db.get_pool)) -> list[dict]:
    return await service.list_footnotes(pool)


@router.post(
    "/footnotes",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.CreatedResponse,
    responses=_UNPROCESSABLE,
)
async def create_footnote(
    payload: schemas.CreateFootnoteRequest = Depends(footnote_body),
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    """
    Add a footnote to a paper. Whether the paper exists is left to the
    database's foreign key.
    """
    return await service.create_footnote(pool, payload)


@router.get("/{paper_id}", response_model=list[schemas.Paper], responses=_NOT_FOUND)
async def get_paper(paper_id: int, pool: asyncpg.Pool = Depends(db.get_pool)) -> list[dict]:
    return await service.get_paper(pool, paper_id)


@router.get("/{paper_id}/footnotes", response_model=list[schemas.Footnote], responses=_NOT_FOUND)
async def get_paper_footnotes(paper_id: int, pool: asyncpg.Pool = Depends(db.get_pool)) -> list[dict]:
    return await service.get_paper_footnotes(pool, paper_id)
