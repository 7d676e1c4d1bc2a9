"""Token schemas."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class Token(BaseModel):
    """Access and refresh token pair issued on login."""

    access_token: str
    refresh_token: str
    token_type: Literal["bearer"] = "bearer"


class TokenPayload(BaseModel):
    sub: uuid.UUID
    exp: datetime
    type: Literal["access", "refresh"]
