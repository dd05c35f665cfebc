#!/usr/bin/env python3
"""
Database seeding script for Swipe Match.
Creates a handful of demo users for local development.
"""

import asyncio
import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from sqlalchemy import select
from app.core.database import AsyncSessionLocal, engine, Base
from app.models.user import User


SAMPLE_USERS = [
    {"name": "Ada Lovelace", "email": "ada@example.com", "bio": "Analytical engines and poetry."},
    {"name": "Alan Turing", "email": "alan@example.com", "bio": "Long-distance runner, codebreaker."},
    {"name": "Grace Hopper", "email": "grace@example.com", "bio": "Nanoseconds enthusiast."},
    {"name": "Edsger Dijkstra", "email": "edsger@example.com", "bio": None},
    {"name": "Barbara Liskov", "email": "barbara@example.com", "bio": "Substitutable, always."},
]


async def create_tables():
    """Create all database tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("✅ Database tables created")


async def seed_users():
    """Create demo users, skipping emails that already exist."""
    async with AsyncSessionLocal() as session:
        try:
            created = 0
            for data in SAMPLE_USERS:
                result = await session.execute(select(User).where(User.email == data["email"]))
                if result.scalar_one_or_none():
                    print(f"⚠️  User {data['email']} already exists. Skipping.")
                    continue
                session.add(User(**data))
                created += 1

            await session.commit()
            print(f"✅ Created {created} users")
            return created

        except Exception as e:
            await session.rollback()
            print(f"❌ Error creating users: {str(e)}")
            raise


async def main():
    """Main seeding function."""
    print("🌱 Starting database seeding...")

    try:
        await create_tables()
        await seed_users()
        print("\n🎉 Database seeding completed successfully!")
    except Exception as e:
        print(f"❌ Seeding failed: {str(e)}")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
