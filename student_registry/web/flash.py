from __future__ import annotations

from fastapi import Request

FLASH_KEY = "flash"


def set_flash(request: Request, message: str, level: str = "success") -> None:
    """Queue one message for the next rendered page (survives the 303 redirect)."""
    request.session[FLASH_KEY] = {"message": message, "level": level}


def pop_flash(request: Request) -> dict[str, str] | None:
    return request.session.pop(FLASH_KEY, None)
