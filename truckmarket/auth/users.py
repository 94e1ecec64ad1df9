from __future__ import annotations

import threading
import uuid
from typing import Any

import bcrypt

ROLES = ("driver", "user")

_users: dict[str, dict[str, Any]] = {}
_lock = threading.Lock()


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _public(record: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": record["id"],
        "email": record["email"],
        "name": record["name"],
        "role": record["role"],
    }


def register(email: str, password: str, role: str, name: str | None = None) -> dict[str, Any] | None:
    """Create an account. Returns the public user dict, or ``None`` if the email is taken."""
    key = email.strip().lower()
    with _lock:
        if key in _users:
            return None
        record = {
            "id": str(uuid.uuid4()),
            "email": key,
            "name": name,
            "role": role,
            "password_hash": _hash_password(password),
        }
        _users[key] = record
    return _public(record)


def authenticate(email: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns ``{id, email, name, role}`` or ``None``."""
    record = _users.get(email.strip().lower())
    if record and _verify_password(password, record["password_hash"]):
        return _public(record)
    return None


def _find_by_id(user_id: str) -> dict[str, Any] | None:
    for record in _users.values():
        if record["id"] == user_id:
            return record
    return None


def change_password(user_id: str, current: str, new: str) -> bool:
    """Replace the password if ``current`` is correct."""
    with _lock:
        record = _find_by_id(user_id)
        if not record or not _verify_password(current, record["password_hash"]):
            return False
        record["password_hash"] = _hash_password(new)
    return True


def update_profile(user_id: str, name: str | None = None, email: str | None = None) -> dict[str, Any]:
    """
    Update display name and/or email.

    Raises ``KeyError`` for an unknown user and ``ValueError`` when the new
    email already belongs to another account.
    """
    with _lock:
        record = _find_by_id(user_id)
        if record is None:
            raise KeyError(user_id)
        if email:
            key = email.strip().lower()
            other = _users.get(key)
            if other is not None and other["id"] != user_id:
                raise ValueError("Email already in use by another account")
            del _users[record["email"]]
            record["email"] = key
            _users[key] = record
        if name:
            record["name"] = name
    return _public(record)


def _seed_users() -> None:
    """Pre-seed demo accounts on import."""
    register("driver@hacktruck.id", "driver123", "driver", "Demo Driver")
    register("user@hacktruck.id", "user123", "user", "Demo User")


_seed_users()
