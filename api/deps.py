"""Request dependencies shared by the route modules."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import Header, HTTPException


def current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Identify the caller from the ``X-User-Id`` header."""

    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_user_id.strip()


def parse_uuid(value: str, label: str = "Job application") -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=f"{label} not found") from exc
