from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Sequence, Set

from models import CheckIn, Habit, Profile
from utils.dates import date_range, format_date

DISTINCT_COLORS = [
    "#0ea5e9",
    "#ef4444",
    "#22c55e",
    "#f97316",
    "#a855f7",
    "#ec4899",
    "#14b8a6",
    "#eab308",
    "#3b82f6",
    "#f43f5e",
    "#06b6d4",
    "#84cc16",
    "#8b5cf6",
    "#f59e0b",
    "#10b981",
    "#6366f1",
]


@dataclass(frozen=True)
class DayStats:
    date: date
    done: int
    total: int
    percent: int

    def to_dict(self) -> dict:
        return {
            "date": format_date(self.date),
            "done": self.done,
            "total": self.total,
            "percent": self.percent,
        }


def _round_half_up(numerator: int, denominator: int) -> int:
    return (2 * numerator + denominator) // (2 * denominator)


def daily_percent(done: int, total: int) -> int:
    if total == 0:
        return 0
    return _round_half_up(100 * done, total)


def average_percent(values: Sequence[int]) -> int:
    if not values:
        return 0
    return _round_half_up(sum(values), len(values))


def completed_by_date(checkins: Iterable[CheckIn]) -> Dict[date, Set[int]]:
    out = defaultdict(set)
    for c in checkins:
        if c.completed:
            out[c.date].add(c.habit_id)
    return dict(out)


def day_stats(day: date, habit_ids: Set[int], completed: Set[int]) -> DayStats:
    done = len(habit_ids & completed)
    total = len(habit_ids)
    return DayStats(day, done, total, daily_percent(done, total))


def range_series(
    habit_ids: Iterable[int], checkins: Iterable[CheckIn], start: date, end: date
) -> List[DayStats]:
    ids = set(habit_ids)
    by_date = completed_by_date(checkins)
    return [day_stats(d, ids, by_date.get(d, set())) for d in date_range(start, end)]


def series_color(profile: Profile, index: int) -> str:
    return profile.color or DISTINCT_COLORS[index % len(DISTINCT_COLORS)]


def multi_profile_series(
    profiles: Sequence[Profile],
    habits: Iterable[Habit],
    checkins: Iterable[CheckIn],
    start: date,
    end: date,
):
    """Per-profile completion percent for every day in ``[start, end]``.

    Returns ``(points, series)``: each point maps the ISO date and every
    profile id (as a string) to that profile's percent; ``series`` lists the
    chart lines in profile order.
    """
    owner = {}
    total_by_profile = {p.id: 0 for p in profiles}
    for h in habits:
        if not h.is_active:
            continue
        owner[h.id] = h.profile_id
        total_by_profile[h.profile_id] = total_by_profile.get(h.profile_id, 0) + 1

    # date -> profile id -> completed habit ids
    by_date_profile = defaultdict(lambda: defaultdict(set))
    for c in checkins:
        profile_id = owner.get(c.habit_id)
        if profile_id is None or not c.completed:
            continue
        by_date_profile[c.date][profile_id].add(c.habit_id)

    points = []
    for d in date_range(start, end):
        row = {"date": format_date(d)}
        done_by_profile = by_date_profile.get(d, {})
        for p in profiles:
            done = len(done_by_profile.get(p.id, ()))
            row[str(p.id)] = daily_percent(done, total_by_profile.get(p.id, 0))
        points.append(row)

    series = [
        {"profileId": p.id, "name": p.name, "color": series_color(p, idx)}
        for idx, p in enumerate(profiles)
    ]
    return points, series
