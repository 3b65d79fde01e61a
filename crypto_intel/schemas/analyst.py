"""Request/response contracts for the AI analyst endpoint."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class AskRequest(BaseModel):
    """Canonical JSON body for POST /analyst/ask."""

    question: str = Field(..., description="Free-text question for the analyst")
    symbol: Optional[str] = Field(
        default=None,
        description="Chart symbol to ask about; defaults to the current selection.",
    )
    locale: Optional[str] = Field(
        default=None,
        description="Answer language (id|en); defaults to the dashboard locale.",
    )

    @field_validator("question")
    @classmethod
    def question_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("question must not be blank")
        return value


class AnalystState(BaseModel):
    question: str
    response: str
    pending: bool
