"""
Pydantic schemas for paper and footnote endpoints.

Create requests keep every field optional: presence is checked by the service
so the 422 message can name the first missing field.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class CreatePaperRequest(BaseModel):
    title: str | None = None
    author: str | None = None


class CreateFootnoteRequest(BaseModel):
    note: str | None = None
    paper_id: int | None = None


class Paper(BaseModel):
    id: int
    title: str
    author: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Footnote(BaseModel):
    id: int
    note: str
    paper_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CreatedResponse(BaseModel):
    id: int


class ErrorResponse(BaseModel):
    error: str
