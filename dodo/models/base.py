"""Shared base fields for all models."""

import uuid
from datetime import datetime, timedelta, timezone
from enum import StrEnum


def utcnow() -> datetime:
    """Naive UTC; datetime columns are declared as plain ``DateTime``."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_uuid() -> uuid.UUID:
    return uuid.uuid4()


def next_timestamp(previous: datetime | None) -> datetime:
    """Current time, nudged past ``previous`` so a record's clock never repeats."""
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


class Author(StrEnum):
    AI = "ai"
    HUMAN = "human"
