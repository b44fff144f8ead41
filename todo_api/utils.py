import logging
import os
import re
import sys
from dataclasses import dataclass, field
from typing import Any

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv())

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3001
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

TITLE_REQUIRED = "Title is required"

LEADING_INT = re.compile(r"\s*([+-]?\d+)", re.ASCII)


@dataclass(frozen=True)
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [part.strip() for part in raw.split(",") if part.strip()]


def load_settings() -> Settings:
    return Settings(
        host=os.getenv("TODO_API_HOST") or DEFAULT_HOST,
        port=_env_int("TODO_API_PORT", DEFAULT_PORT),
        log_level=(os.getenv("TODO_API_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        cors_origins=_env_list("TODO_API_CORS_ORIGINS", ["*"]),
    )


def setup_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure the root logger with a single stderr handler.

    Calling it again replaces the handler instead of stacking duplicates.
    """
    root = logging.getLogger()
    root.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


# ---------- Validation ----------
@dataclass(frozen=True)
class Ok:
    value: str


@dataclass(frozen=True)
class Err:
    reason: str


def validate_title(title: Any) -> Ok | Err:
    if not isinstance(title, str):
        return Err(TITLE_REQUIRED)
    trimmed = title.strip()
    if not trimmed:
        return Err(TITLE_REQUIRED)
    return Ok(trimmed)


def parse_todo_id(raw: str) -> int | None:
    """Return the id named by a path segment, or None if it cannot name a todo.

    Like JavaScript's parseInt, only the leading digits count: "1.5" and "1abc" name todo 1.
    """
    match = LEADING_INT.match(raw)
    if match is None:
        return None
    todo_id = int(match.group(1))
    return todo_id if todo_id > 0 else None
