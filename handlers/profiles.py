from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

import config
from dependencies import active_profile, get_store
from models import Profile
from schemas import ActiveProfileReq, ProfileCreateReq
from services import profiles as profile_service

router = APIRouter(prefix="/api/profiles", tags=["profiles"])


@router.get("")
async def list_profiles(
    profile: Profile = Depends(active_profile),
    store=Depends(get_store),
):
    profiles = await profile_service.list_profiles(store)
    return {
        "activeProfileId": profile.id,
        "profiles": [p.to_dict() for p in profiles],
    }


@router.post("", status_code=201)
async def create_profile(
    req: ProfileCreateReq,
    profile: Profile = Depends(active_profile),
    store=Depends(get_store),
):
    created = await profile_service.create_profile(store, req.name, req.color, profile.id)
    return {"profile": created.to_dict()}


@router.post("/active")
async def set_active(req: ActiveProfileReq, store=Depends(get_store)):
    profile = await profile_service.set_active_profile(store, req.profileId)

    res = JSONResponse({"ok": True})
    res.set_cookie(
        config.ACTIVE_PROFILE_COOKIE,
        str(profile.id),
        max_age=config.COOKIE_MAX_AGE,
        path="/",
        httponly=True,
        samesite="lax",
    )
    return res


@router.delete("/{profile_id}")
async def delete_profile(
    profile_id: int,
    profile: Profile = Depends(active_profile),
    store=Depends(get_store),
):
    await profile_service.delete_profile(store, profile_id, profile.id)
    return {"ok": True}
