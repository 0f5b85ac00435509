from typing import Optional

from fastapi import APIRouter, Depends

from dependencies import active_profile, get_store
from models import Profile
from schemas import CheckInToggleReq, HabitCreateReq, HabitUpdateReq
from services import habits as habit_service
from services.stats import habits_with_completion_for_date
from utils.dates import parse_date, today

router = APIRouter(prefix="/api/habits", tags=["habits"])


# -------------------------
# GET /api/habits?date= — habits with completion for a day
# -------------------------
@router.get("")
async def list_habits(
    date: Optional[str] = None,
    profile: Profile = Depends(active_profile),
    store=Depends(get_store),
):
    date_str = date if date is not None else today()
    day = parse_date(date_str)

    rows = await habits_with_completion_for_date(store, profile.id, day)
    return {
        "date": date_str,
        "habits": [{**h.to_dict(), "completed": done} for h, done in rows],
    }


@router.post("", status_code=201)
async def add_habit(
    req: HabitCreateReq,
    profile: Profile = Depends(active_profile),
    store=Depends(get_store),
):
    habit = await habit_service.create_habit(store, profile.id, req.name, req.color)
    return {"habit": habit.to_dict()}


@router.patch("/{habit_id}")
async def update_habit(
    habit_id: int,
    req: HabitUpdateReq,
    profile: Profile = Depends(active_profile),
    store=Depends(get_store),
):
    habit = await habit_service.update_habit(
        store, habit_id, profile.id, req.model_dump(exclude_unset=True)
    )
    return {"habit": habit.to_dict()}


@router.delete("/{habit_id}")
async def delete_habit(
    habit_id: int,
    profile: Profile = Depends(active_profile),
    store=Depends(get_store),
):
    await habit_service.delete_habit(store, habit_id, profile.id)
    return {"ok": True}


# -------------------------
# POST /api/habits/{id}/checkins — toggle a day
# -------------------------
@router.post("/{habit_id}/checkins")
async def toggle_checkin(
    habit_id: int,
    req: CheckInToggleReq,
    profile: Profile = Depends(active_profile),
    store=Depends(get_store),
):
    day = parse_date(req.date)
    completed = await habit_service.toggle_checkin(store, habit_id, profile.id, day, req.completed)
    return {"completed": completed}
