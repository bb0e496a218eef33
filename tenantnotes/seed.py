from __future__ import annotations

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from tenantnotes.core.billing import free_plan_values
from tenantnotes.core.config import settings
from tenantnotes.core.db import Database
from tenantnotes.core.log import configure_logging
from tenantnotes.core.repositories import TenantRepository, UserDirectory
from tenantnotes.core.security.passwords import hash_password

logger = logging.getLogger(__name__)

DEMO_TENANTS = (
    ("Acme", "acme"),
    ("Globex", "globex"),
)


async def seed_demo_data(session: AsyncSession) -> bool:
    """Create the acme and globex demo tenants with one admin and one member each.

    Does nothing when any tenant already exists. Returns whether data was written.
    """
    tenants = TenantRepository(session)
    if await tenants.count() > 0:
        logger.info("Skipping demo seed, tenants already exist")
        return False

    directory = UserDirectory(session)
    digest = await asyncio.to_thread(hash_password, settings.demo_password)
    for name, slug in DEMO_TENANTS:
        tenant = await tenants.create(name=name, slug=slug, **free_plan_values())
        for local_part, role in (("admin", "admin"), ("user", "member")):
            await directory.create(
                tenant_id=tenant.id,
                email=f"{local_part}@{slug}.test",
                password_digest=digest,
                role=role,
                first_name=local_part.title(),
                last_name=name,
            )
    await session.commit()
    logger.info("Seeded demo tenants: %s", ", ".join(slug for _, slug in DEMO_TENANTS))
    return True


async def main() -> None:
    configure_logging(settings.log_level)
    database = Database(settings.database_url)
    database.connect()
    try:
        async with database.session() as session:
            await seed_demo_data(session)
    finally:
        await database.close()


if __name__ == "__main__":
    asyncio.run(main())
