from datetime import UTC, datetime

from pydantic import BaseModel, Field

# --- Identity ---


def _utcnow() -> datetime:
    return datetime.now(UTC)


class User(BaseModel):
    id: int
    email: str
    username: str
    password_hash: str = Field(repr=False)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
