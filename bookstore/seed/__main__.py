"""Seed script: populate an empty store with the sample data set.

Run as:
    python -m bookstore.seed

Requires MONGODB_URI and JWT_SECRET_KEY environment variables (or a .env file).
The application seeds automatically on first connect; this script is for
filling a fresh database without starting the API.
"""

import asyncio

from pymongo import AsyncMongoClient

from bookstore.config import settings
from bookstore.seed.planner import seed_if_empty


async def main() -> None:
    if not settings.mongodb_uri:
        raise RuntimeError("MONGODB_URI environment variable is required")

    print(f"{settings.app_name} Seed Script")
    print("=" * 50)

    client: AsyncMongoClient = AsyncMongoClient(
        settings.mongodb_uri,
        serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
        socketTimeoutMS=settings.socket_timeout_ms,
        tz_aware=True,
    )
    try:
        db = client.get_default_database(default=settings.mongodb_db_name)
        report = await seed_if_empty(db, password=settings.seed_user_password)
    finally:
        await client.close()

    if report.skipped:
        print("\n✓ Store already has data, nothing to do")
        return
    for stage in report.completed:
        print(f"  ✓ {stage}: {report.inserted[stage]} created")
    if report.failed_stage is not None:
        print(f"\n✗ Seed failed at stage: {report.failed_stage}")
        raise SystemExit(1)
    print("\n✓ Seed complete!")


if __name__ == "__main__":
    asyncio.run(main())
