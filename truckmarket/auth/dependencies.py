from __future__ import annotations

from typing import Callable

from fastapi import HTTPException, Request


def require_user(request: Request) -> dict:
    """Raise 401 if no account is logged in."""
    user = request.session.get("user")
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_role(*roles: str) -> Callable[[Request], dict]:
    """Build a dependency that also raises 403 unless the account has one of ``roles``."""

    def dependency(request: Request) -> dict:
        user = require_user(request)
        if user.get("role") not in roles:
            raise HTTPException(status_code=403, detail="Not authorized for this action")
        return user

    return dependency


require_driver = require_role("driver")
