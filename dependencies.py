from fastapi import Depends, Request

import config
from database import Store, get_db
from models import Profile
from services.profiles import resolve_active_profile


async def get_store():
    db = await get_db()
    try:
        yield Store(db)
    finally:
        await db.close()


async def active_profile(request: Request, store=Depends(get_store)) -> Profile:
    """Profile selected by the cookie, resolved once per request."""
    return await resolve_active_profile(store, request.cookies.get(config.ACTIVE_PROFILE_COOKIE))
