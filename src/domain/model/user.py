from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Domain model representing a user."""
    id: str
    email: str
    created_at: datetime
    updated_at: datetime
    last_login: datetime | None = None
    password_hash: str | None = None


def normalize_email(email: str) -> str:
    """Emails are unique case-insensitively, so they are stored lowercased."""
    return email.strip().lower()
