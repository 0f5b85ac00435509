from datetime import date
from typing import List, Tuple

import config
from models import Habit
from utils.analytics import (
    DayStats,
    average_percent,
    completed_by_date,
    day_stats,
    multi_profile_series,
    range_series,
)
from utils.dates import add_days, format_date, start_of_week


async def habits_with_completion_for_date(store, profile_id: int, day: date) -> List[Tuple[Habit, bool]]:
    habits = await store.list_habits(profile_id)
    checkins = await store.list_checkins([h.id for h in habits], day, day)
    done = {c.habit_id for c in checkins}
    return [(h, h.id in done) for h in habits]


async def profile_series(store, profile_id: int, start: date, end: date) -> List[DayStats]:
    habits = await store.list_habits(profile_id)
    ids = [h.id for h in habits]
    checkins = await store.list_checkins(ids, start, end)
    return range_series(ids, checkins, start, end)


async def all_profiles_series(store, start: date, end: date):
    profiles = await store.list_profiles()
    habits = await store.list_habits()
    checkins = await store.list_checkins([h.id for h in habits], start, end)
    return multi_profile_series(profiles, habits, checkins, start, end)


async def dashboard(store, profile_id: int, today: date) -> dict:
    """Today, this week and the recent history for one profile."""
    week_start = start_of_week(today, 1)
    week_end = add_days(week_start, 6)
    history_start = add_days(today, -(config.HISTORY_DAYS - 1))

    habits = await store.list_habits(profile_id)
    ids = {h.id for h in habits}
    checkins = await store.list_checkins(ids, history_start, week_end)
    by_date = completed_by_date(checkins)

    def stats(d):
        return day_stats(d, ids, by_date.get(d, set()))

    week = [stats(add_days(week_start, i)) for i in range(7)]
    history = [stats(add_days(today, -i)) for i in range(config.HISTORY_DAYS)]

    return {
        "today": format_date(today),
        "weekStart": format_date(week_start),
        "habits": [h.to_dict() for h in habits],
        "todayStats": stats(today).to_dict(),
        "week": [s.to_dict() for s in week],
        "history": [s.to_dict() for s in history],
        "weekAvg": average_percent([s.percent for s in week]),
        "last30Avg": average_percent([s.percent for s in history]),
        "completedByDate": {
            format_date(d): sorted(habit_ids)
            for d, habit_ids in sorted(by_date.items())
        },
    }
