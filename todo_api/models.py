from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field


# ---------- Stored Models ----------
class Todo(BaseModel):
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: Annotated[int, Field(gt=0)]
    title: str
    completed: bool = False
    created_at: Annotated[datetime, Field(alias="createdAt")]


# ---------- Request Models ----------
class TodoInput(BaseModel):
    # Checked by validate_title so that a missing or blank title maps to 400, not 422.
    title: Any = None


class TodoUpdate(BaseModel):
    # Type checked by the store after the id lookup, so an unknown id is always a 404.
    title: Any = None


# ---------- Response Models ----------
class Message(BaseModel):
    message: str


class ErrorMessage(BaseModel):
    error: str


class Health(BaseModel):
    status: str = "ok"
