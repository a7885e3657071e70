"""
Admin account bootstrap.

Admins cannot self-register or pick the admin role, so the first one is
seeded from ADMIN_EMAIL / ADMIN_PASSWORD at startup.
"""

import asyncio
import logging
from typing import Optional

from shared.config import Settings
from shared.models import UserRole
from modules.passwords import PasswordPolicyEngine

from .interfaces import IUserRepository
from .models import AuthProvider, User

logger = logging.getLogger(__name__)


async def seed_admin_user(
    repository: IUserRepository,
    passwords: PasswordPolicyEngine,
    settings: Settings,
) -> Optional[User]:
    """
    Create the bootstrap admin if configured and not already present.

    Returns:
        The created admin, or None if seeding was skipped

    Raises:
        WeakPasswordError: ADMIN_PASSWORD does not satisfy the active policy
    """
    if not settings.admin_email or not settings.admin_password:
        logger.info("ADMIN_EMAIL/ADMIN_PASSWORD not set, skipping admin seed")
        return None

    existing = await repository.find_by_email(settings.admin_email)
    if existing is not None:
        logger.info(f"Admin user already exists: {existing.email}")
        return None

    password_hash = await asyncio.to_thread(passwords.hash, settings.admin_password)
    admin = await repository.insert(
        User(
            email=settings.admin_email,
            password_hash=password_hash,
            role=UserRole.ADMIN,
            first_name=settings.admin_first_name,
            last_name=settings.admin_last_name,
            provider=AuthProvider.LOCAL,
            onboarding_completed=True,
        )
    )
    logger.info(f"Admin user created: email={admin.email} id={admin.id}")
    return admin
