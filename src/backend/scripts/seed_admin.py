"""
Seed an administrator account and print an access token for it.

Uses ADMIN_EMAIL and ADMIN_NAME from the environment. Running it again
for an existing e-mail only prints a fresh token.

Run with: python -m scripts.seed_admin
"""

import asyncio
import sys
from datetime import timedelta
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import settings
from core.security import create_access_token
from db.session import close_db, get_session_factory, init_db
from repositories.user_repository import UserRepository


async def seed_admin() -> None:
    await init_db()
    try:
        async with get_session_factory()() as session:
            users = UserRepository(session)
            admin = await users.get_by_email(settings.ADMIN_EMAIL)
            if admin is None:
                admin = await users.create(name=settings.ADMIN_NAME, email=settings.ADMIN_EMAIL, role="admin")
                print(f"Admin created with ID: {admin.id}")
            else:
                print(f"Admin already exists with ID: {admin.id}")

            token = create_access_token({"sub": admin.id, "role": "admin"}, timedelta(days=1))
            print(f"   Email: {admin.email}")
            print(f"   Token (24h): {token}")
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(seed_admin())
