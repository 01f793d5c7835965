"""Test helpers for building users and auth headers directly in the fake store."""

from datetime import UTC, datetime
from functools import cache
from typing import Any

from bookstore.services.auth import create_access_token, hash_password
from tests.fakes import FakeDatabase

PASSWORD = "Password123!"


@cache
def password_hash() -> str:
    # bcrypt at 12 rounds is slow; every fixture user shares one hash.
    return hash_password(PASSWORD)


async def insert_user(
    db: FakeDatabase, email: str, role: str = "user", **extra: Any
) -> dict[str, Any]:
    """Insert a user document and return it with its ``_id``."""
    user = {
        "full_name": email.split("@")[0],
        "email": email,
        "password_hash": password_hash(),
        "phone_number": "0900000000",
        "address": "Nhà Bè, TP. Hồ Chí Minh",
        "role": role,
        "created_at": datetime.now(UTC),
        **extra,
    }
    await db["users"].insert_one(user)
    return user


def bearer_for(user: dict[str, Any]) -> dict[str, str]:
    token = create_access_token(str(user["_id"]), user["email"], user["role"])
    return {"Authorization": f"Bearer {token}"}
