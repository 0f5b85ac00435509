import logging
from typing import List, Optional

import config
from errors import ActiveProfileDeletion, NotFound
from models import Profile, valid_id

logger = logging.getLogger(__name__)


async def ensure_default_profile(store) -> Profile:
    """Oldest profile, creating the default one on first access."""
    existing = await store.oldest_profile()
    if existing:
        return existing

    profile = await store.create_profile(config.DEFAULT_PROFILE_NAME, config.DEFAULT_PROFILE_COLOR)
    logger.info("Created default profile %s", profile.id)
    return profile


async def resolve_active_profile(store, cookie_value: Optional[str]) -> Profile:
    if cookie_value:
        try:
            profile_id = int(cookie_value)
        except ValueError:
            profile_id = None
        if profile_id is not None and valid_id(profile_id):
            profile = await store.get_profile(profile_id)
            if profile:
                return profile

    return await ensure_default_profile(store)


async def set_active_profile(store, profile_id: int) -> Profile:
    await ensure_default_profile(store)

    profile = await store.get_profile(profile_id) if valid_id(profile_id) else None
    if not profile:
        raise NotFound("Profile not found")
    return profile


async def list_profiles(store) -> List[Profile]:
    return await store.list_profiles()


async def create_profile(
    store, name: str, color: Optional[str], source_profile_id: int
) -> Profile:
    """Create a profile starting with the source profile's active habits."""
    profile = await store.create_profile(name, color)

    source = await store.list_habits(source_profile_id)
    await store.create_habits(profile.id, [(h.name, h.color) for h in source])

    logger.info(
        "Created profile %s (%s) with %d habits from profile %s",
        profile.id, profile.name, len(source), source_profile_id,
    )
    return profile


async def delete_profile(store, profile_id: int, active_profile_id: int) -> None:
    await ensure_default_profile(store)

    if profile_id == active_profile_id:
        raise ActiveProfileDeletion()

    if not valid_id(profile_id) or not await store.delete_profile(profile_id):
        raise NotFound("Profile not found")
    logger.info("Deleted profile %s", profile_id)
