from __future__ import annotations

from pydantic import BaseModel


class JokeResponse(BaseModel):
    joke: str
    language: str


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "ok"
