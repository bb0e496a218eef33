from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, StringConstraints

SLUG_PATTERN = r"^[a-z0-9-]+$"
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

EmailAddress = Annotated[
    str,
    StringConstraints(strip_whitespace=True, to_lower=True, max_length=255, pattern=EMAIL_PATTERN),
]
Password = Annotated[str, StringConstraints(min_length=6, max_length=128)]
PersonName = Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)]


class MessageResponse(BaseModel):
    message: str
