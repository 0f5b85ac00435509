from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

import config
from dependencies import active_profile, get_store
from errors import InvalidPayload
from models import Profile
from services import stats as stats_service
from utils.charts import stats_chart
from utils.dates import add_days, format_date, parse_date, today

router = APIRouter(prefix="/api", tags=["stats"])


def _last_days(days: int):
    end = parse_date(today())
    return add_days(end, -(days - 1)), end


@router.get("/dashboard")
async def dashboard(
    profile: Profile = Depends(active_profile),
    store=Depends(get_store),
):
    return await stats_service.dashboard(store, profile.id, parse_date(today()))


@router.get("/stats/daily")
async def daily(
    start: Optional[str] = None,
    end: Optional[str] = None,
    profile: Profile = Depends(active_profile),
    store=Depends(get_store),
):
    default_start, default_end = _last_days(config.STATS_DAYS)
    start_d = parse_date(start) if start is not None else default_start
    end_d = parse_date(end) if end is not None else default_end
    if end_d < start_d:
        raise InvalidPayload("end must be on or after start")

    points = await stats_service.profile_series(store, profile.id, start_d, end_d)
    return {
        "start": format_date(start_d),
        "end": format_date(end_d),
        "points": [p.to_dict() for p in points],
    }


@router.get("/stats")
async def stats(
    days: int = Query(config.STATS_DAYS, ge=1, le=365),
    store=Depends(get_store),
):
    start, end = _last_days(days)
    points, series = await stats_service.all_profiles_series(store, start, end)
    return {
        "start": format_date(start),
        "end": format_date(end),
        "series": series,
        "points": points,
    }


@router.get("/stats/chart.png")
async def stats_png(
    days: int = Query(config.STATS_DAYS, ge=1, le=365),
    store=Depends(get_store),
):
    start, end = _last_days(days)
    points, series = await stats_service.all_profiles_series(store, start, end)
    png = await run_in_threadpool(stats_chart, points, series, title=f"Completion over the last {days} days")
    return Response(content=png, media_type="image/png")
