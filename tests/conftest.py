import itertools
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from dependencies import get_store
from models import ACTIVE, MAX_ID, Archived, CheckIn, Habit, Profile
from web import app

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _int4(value):
    # asyncpg rejects these client-side with DataError, a ValueError subclass
    if not -MAX_ID - 1 <= value <= MAX_ID:
        raise ValueError(f"invalid input for query argument: {value} (value out of int32 range)")
    return value


class MemoryStore:
    """Same interface as database.Store, kept in dicts."""

    def __init__(self):
        self.profiles = {}
        self.habits = {}
        self.checkins = {}
        self._ids = itertools.count(1)
        self._clock = itertools.count()

    def _now(self):
        return EPOCH + timedelta(seconds=next(self._clock))

    # profiles

    async def get_profile(self, profile_id):
        return self.profiles.get(_int4(profile_id))

    async def oldest_profile(self):
        profiles = await self.list_profiles()
        return profiles[0] if profiles else None

    async def list_profiles(self):
        return sorted(self.profiles.values(), key=lambda p: (p.created_at, p.id))

    async def create_profile(self, name, color):
        profile = Profile(next(self._ids), name, color, self._now())
        self.profiles[profile.id] = profile
        return profile

    async def delete_profile(self, profile_id):
        if self.profiles.pop(_int4(profile_id), None) is None:
            return False
        for h in [h for h in self.habits.values() if h.profile_id == profile_id]:
            await self.delete_habit(h.id, profile_id)
        return True

    # habits

    async def list_habits(self, profile_id=None, include_archived=False):
        habits = [
            h for h in self.habits.values()
            if (profile_id is None or h.profile_id == profile_id)
            and (include_archived or h.is_active)
        ]
        return sorted(habits, key=lambda h: (h.created_at, h.id))

    async def get_habit(self, habit_id, profile_id):
        habit = self.habits.get(_int4(habit_id))
        if habit and habit.profile_id == profile_id:
            return habit
        return None

    async def create_habit(self, profile_id, name, color):
        habit = Habit(next(self._ids), profile_id, name, color, self._now())
        self.habits[habit.id] = habit
        return habit

    async def create_habits(self, profile_id, habits):
        for name, color in habits:
            await self.create_habit(profile_id, name, color)

    async def update_habit(self, habit_id, profile_id, changes):
        habit = await self.get_habit(habit_id, profile_id)
        if not habit:
            return None
        name = changes.get("name", habit.name)
        color = changes.get("color", habit.color)
        state = habit.state
        if "archived_at" in changes:
            state = Archived(changes["archived_at"]) if changes["archived_at"] else ACTIVE
        habit = Habit(habit.id, habit.profile_id, name, color, habit.created_at, state)
        self.habits[habit.id] = habit
        return habit

    async def delete_habit(self, habit_id, profile_id):
        if not await self.get_habit(habit_id, profile_id):
            return False
        del self.habits[habit_id]
        for key in [k for k in self.checkins if k[0] == habit_id]:
            del self.checkins[key]
        return True

    # check-ins

    async def get_checkin(self, habit_id, day):
        return self.checkins.get((habit_id, day))

    async def add_checkin(self, habit_id, day):
        self.checkins.setdefault((habit_id, day), CheckIn(habit_id, day, True))

    async def delete_checkin(self, habit_id, day):
        return self.checkins.pop((habit_id, day), None) is not None

    async def list_checkins(self, habit_ids, start, end):
        ids = set(habit_ids)
        return sorted(
            (c for c in self.checkins.values()
             if c.habit_id in ids and c.completed and start <= c.date <= end),
            key=lambda c: (c.date, c.habit_id),
        )


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
