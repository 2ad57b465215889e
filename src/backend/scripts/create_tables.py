"""
Create the voting tables if they do not exist yet.

Safe to run repeatedly; existing tables are left untouched.

Run with: python -m scripts.create_tables
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from db.session import close_db, init_db


async def create_tables() -> None:
    try:
        await init_db()
        print("Tables are up to date.")
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(create_tables())
