import asyncio
import logging

from database import Store, get_db, init_db
from services.habits import seed_habits
from services.profiles import ensure_default_profile

logger = logging.getLogger(__name__)


async def run():
    await init_db()
    db = await get_db()
    try:
        store = Store(db)
        profile = await ensure_default_profile(store)
        created = await seed_habits(store, profile.id)
    finally:
        await db.close()

    logger.info("Seeded %d habits into profile %s", len(created), profile.id)
    return created


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    asyncio.run(run())


if __name__ == "__main__":
    main()
