"""
Seed demo accounts.

Creates an admin and a demo user, funds them through reward
transactions and prints bearer tokens for local testing. Users that
already exist are left untouched.

Usage:
    ENV=development python scripts/seed.py
"""

import asyncio

from satstream.config.settings import get_settings
from satstream.di import get_container, initialize_container, shutdown_container
from satstream.infrastructure.auth.jwt_handler import create_access_token
from satstream.infrastructure.monitoring import get_logger, setup_logging

SEED_USERS = [
    # (username, email, is_admin, reward sats)
    ("admin", "admin@satstream.local", True, 1_000_000),
    ("satoshi", "satoshi@satstream.local", False, 500_000),
]


async def seed() -> None:
    """Create seed users and print their tokens."""
    container = await initialize_container()
    logger = get_logger(__name__)

    try:
        for username, email, is_admin, reward in SEED_USERS:
            async with container.uow_factory() as uow:
                user = await uow.users.get_by_username(username)

            if user is not None:
                logger.info(f"User {username} exists, skipping")
            else:
                user = await container.get_create_user().execute(
                    username=username, email=email, is_admin=is_admin
                )
                await container.get_grant_reward().execute(
                    receiver_id=user.id,
                    amount=reward,
                    message="Seed balance",
                )
                print(f"Created {username} with {reward:,} sats")

            print(f"{username} token: {create_access_token(user.id, user.username)}")
    finally:
        await shutdown_container()


if __name__ == "__main__":
    setup_logging(level=get_settings().LOG_LEVEL, json_logs=False)
    asyncio.run(seed())
