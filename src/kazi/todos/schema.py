"""Pydantic models for the todo table."""

from datetime import datetime

from pydantic import BaseModel


class Todo(BaseModel):
    """A row of the todo table."""

    id: int
    todo: str
    created_at: datetime
    updated_at: datetime
