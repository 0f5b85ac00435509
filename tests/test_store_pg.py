import os
from datetime import date, datetime, timezone

import asyncpg
import pytest

from database import SCHEMA_PATH, Store

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")

pytestmark = [
    pytest.mark.anyio,
    pytest.mark.skipif(not TEST_DATABASE_URL, reason="TEST_DATABASE_URL is not set"),
]

DAY = date(2024, 3, 1)


@pytest.fixture
async def pg_store():
    db = await asyncpg.connect(TEST_DATABASE_URL)
    await db.execute("DROP TABLE IF EXISTS checkins, habits, profiles")
    await db.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
    try:
        yield Store(db)
    finally:
        await db.execute("DROP TABLE IF EXISTS checkins, habits, profiles")
        await db.close()


async def test_checkin_roundtrip_and_cascade(pg_store):
    profile = await pg_store.create_profile("Default", "#0ea5e9")
    habit = await pg_store.create_habit(profile.id, "Read", None)

    await pg_store.add_checkin(habit.id, DAY)
    # unique (habit_id, date)
    await pg_store.add_checkin(habit.id, DAY)
    assert await pg_store.get_checkin(habit.id, DAY) is not None
    assert len(await pg_store.list_checkins([habit.id], DAY, DAY)) == 1

    assert await pg_store.delete_profile(profile.id) is True
    assert await pg_store.list_checkins([habit.id], DAY, DAY) == []
    assert await pg_store.get_habit(habit.id, profile.id) is None


async def test_update_habit_archive_and_scope(pg_store):
    mine = await pg_store.create_profile("Mine", None)
    theirs = await pg_store.create_profile("Theirs", None)
    habit = await pg_store.create_habit(mine.id, "Read", None)

    now = datetime.now(timezone.utc)
    archived = await pg_store.update_habit(habit.id, mine.id, {"archived_at": now, "color": "#123456"})
    assert archived.archived_at is not None
    assert archived.color == "#123456"
    assert await pg_store.list_habits(mine.id) == []
    assert [h.id for h in await pg_store.list_habits(mine.id, include_archived=True)] == [habit.id]

    assert await pg_store.update_habit(habit.id, theirs.id, {"name": "x"}) is None
    assert await pg_store.delete_habit(habit.id, theirs.id) is False

    await pg_store.create_habits(theirs.id, [("Run", None), ("Swim", "#000000")])
    assert [h.name for h in await pg_store.list_habits(theirs.id)] == ["Run", "Swim"]
    assert (await pg_store.oldest_profile()).id == mine.id
