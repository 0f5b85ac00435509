import logging
from datetime import date, datetime, timezone
from typing import List, Optional

from errors import InvalidPayload, NotFound
from models import Habit, valid_id

logger = logging.getLogger(__name__)

SEED_HABITS = [
    ("Drink water", "#0ea5e9"),
    ("Workout", "#f97316"),
    ("Read", "#22c55e"),
    ("Meditate", "#a855f7"),
    ("Journal", "#14b8a6"),
    ("Walk 30 min", "#84cc16"),
    ("Stretch", "#f43f5e"),
    ("No sugar", "#ef4444"),
    ("Take vitamins", "#eab308"),
    ("Practice coding", "#3b82f6"),
    ("Plan tomorrow", "#0f766e"),
    ("Clean desk", "#64748b"),
    ("Sleep 8 hours", "#1d4ed8"),
    ("Read 10 pages", "#16a34a"),
    ("Limit social media", "#fb7185"),
    ("Protein goal", "#f59e0b"),
]


async def list_active_habits(store, profile_id: int) -> List[Habit]:
    return await store.list_habits(profile_id)


async def _owned_habit(store, habit_id: int, profile_id: int) -> Habit:
    habit = await store.get_habit(habit_id, profile_id) if valid_id(habit_id) else None
    if not habit:
        raise NotFound("Habit not found")
    return habit


async def create_habit(store, profile_id: int, name: str, color: Optional[str] = None) -> Habit:
    habit = await store.create_habit(profile_id, name, color)
    logger.info("Created habit %s (%s) for profile %s", habit.id, habit.name, profile_id)
    return habit


async def update_habit(store, habit_id: int, profile_id: int, fields: dict) -> Habit:
    """Rename, recolor, archive or unarchive a habit of ``profile_id``.

    ``fields`` holds any of ``name``, ``color`` and ``archived``.
    """
    if not fields:
        raise InvalidPayload("Provide at least one field to update.")

    changes = {k: fields[k] for k in ("name", "color") if k in fields}
    if "archived" in fields:
        changes["archived_at"] = datetime.now(timezone.utc) if fields["archived"] else None

    await _owned_habit(store, habit_id, profile_id)
    habit = await store.update_habit(habit_id, profile_id, changes)
    if not habit:
        raise NotFound("Habit not found")

    logger.info("Updated habit %s: %s", habit_id, ", ".join(sorted(fields)))
    return habit


async def delete_habit(store, habit_id: int, profile_id: int) -> None:
    if not valid_id(habit_id) or not await store.delete_habit(habit_id, profile_id):
        raise NotFound("Habit not found")
    logger.info("Deleted habit %s", habit_id)


async def toggle_checkin(
    store, habit_id: int, profile_id: int, day: date, completed: Optional[bool] = None
) -> bool:
    """Flip the check-in for ``(habit_id, day)`` and return the new state.

    An explicit ``completed=False`` always clears. Otherwise an existing
    check-in is removed, even when ``completed=True`` was asked for, and a
    missing one is created.
    """
    await _owned_habit(store, habit_id, profile_id)

    existing = await store.get_checkin(habit_id, day)

    if completed is False:
        if existing:
            await store.delete_checkin(habit_id, day)
        result = False
    elif existing:
        await store.delete_checkin(habit_id, day)
        result = False
    else:
        await store.add_checkin(habit_id, day)
        result = True

    logger.info("Check-in habit=%s date=%s completed=%s", habit_id, day.isoformat(), result)
    return result


async def seed_habits(store, profile_id: int, habits=SEED_HABITS) -> List[Habit]:
    """Add sample habits missing from the profile, matched by name."""
    existing = {h.name for h in await store.list_habits(profile_id, include_archived=True)}

    created = []
    for name, color in habits:
        if name in existing:
            continue
        created.append(await store.create_habit(profile_id, name, color))
        existing.add(name)
    return created
