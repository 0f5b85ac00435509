import logging
import sysconfig
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

import asyncpg

import config
from models import CheckIn, Habit, Profile

logger = logging.getLogger(__name__)


def _schema_path() -> Path:
    # source checkout or editable install first, then the installed data file
    local = Path(__file__).with_name("models.sql")
    if local.exists():
        return local
    return Path(sysconfig.get_path("data")) / "share" / "habit-tracker" / "models.sql"


SCHEMA_PATH = _schema_path()

PROFILE_COLUMNS = "id, name, color, created_at"
HABIT_COLUMNS = "id, profile_id, name, color, created_at, archived_at"

# Columns update_habit is allowed to write.
HABIT_MUTABLE = ("name", "color", "archived_at")


async def get_db():
    if not config.DATABASE_URL:
        raise RuntimeError("DATABASE_URL is not set")
    return await asyncpg.connect(config.DATABASE_URL)


async def init_db():
    conn = await get_db()
    try:
        await conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
    finally:
        await conn.close()
    logger.info("Schema applied from %s", SCHEMA_PATH.name)


def _affected(status: str) -> int:
    # asyncpg returns command tags such as "DELETE 1"
    return int(status.split()[-1])


class Store:
    """Profile, habit and check-in records on one asyncpg connection."""

    def __init__(self, db):
        self.db = db

    # ---------- profiles ----------

    async def get_profile(self, profile_id: int) -> Optional[Profile]:
        row = await self.db.fetchrow(
            f"SELECT {PROFILE_COLUMNS} FROM profiles WHERE id=$1",
            profile_id,
        )
        return Profile.from_row(row) if row else None

    async def oldest_profile(self) -> Optional[Profile]:
        row = await self.db.fetchrow(
            f"SELECT {PROFILE_COLUMNS} FROM profiles ORDER BY created_at, id LIMIT 1"
        )
        return Profile.from_row(row) if row else None

    async def list_profiles(self) -> List[Profile]:
        rows = await self.db.fetch(
            f"SELECT {PROFILE_COLUMNS} FROM profiles ORDER BY created_at, id"
        )
        return [Profile.from_row(r) for r in rows]

    async def create_profile(self, name: str, color: Optional[str]) -> Profile:
        row = await self.db.fetchrow(
            f"""
            INSERT INTO profiles (name, color)
            VALUES ($1, $2)
            RETURNING {PROFILE_COLUMNS}
            """,
            name,
            color,
        )
        return Profile.from_row(row)

    async def delete_profile(self, profile_id: int) -> bool:
        status = await self.db.execute("DELETE FROM profiles WHERE id=$1", profile_id)
        return _affected(status) > 0

    # ---------- habits ----------

    async def list_habits(
        self, profile_id: Optional[int] = None, include_archived: bool = False
    ) -> List[Habit]:
        where = []
        args = []
        if profile_id is not None:
            args.append(profile_id)
            where.append(f"profile_id=${len(args)}")
        if not include_archived:
            where.append("archived_at IS NULL")
        clause = f"WHERE {' AND '.join(where)}" if where else ""

        rows = await self.db.fetch(
            f"SELECT {HABIT_COLUMNS} FROM habits {clause} ORDER BY created_at, id",
            *args,
        )
        return [Habit.from_row(r) for r in rows]

    async def get_habit(self, habit_id: int, profile_id: int) -> Optional[Habit]:
        row = await self.db.fetchrow(
            f"SELECT {HABIT_COLUMNS} FROM habits WHERE id=$1 AND profile_id=$2",
            habit_id,
            profile_id,
        )
        return Habit.from_row(row) if row else None

    async def create_habit(self, profile_id: int, name: str, color: Optional[str]) -> Habit:
        row = await self.db.fetchrow(
            f"""
            INSERT INTO habits (profile_id, name, color)
            VALUES ($1, $2, $3)
            RETURNING {HABIT_COLUMNS}
            """,
            profile_id,
            name,
            color,
        )
        return Habit.from_row(row)

    async def create_habits(
        self, profile_id: int, habits: Sequence[Tuple[str, Optional[str]]]
    ) -> None:
        if not habits:
            return
        await self.db.executemany(
            "INSERT INTO habits (profile_id, name, color) VALUES ($1, $2, $3)",
            [(profile_id, name, color) for name, color in habits],
        )

    async def update_habit(self, habit_id: int, profile_id: int, changes: dict) -> Optional[Habit]:
        sets = []
        args = []
        for column in HABIT_MUTABLE:
            if column in changes:
                args.append(changes[column])
                sets.append(f"{column}=${len(args)}")
        if not sets:
            return await self.get_habit(habit_id, profile_id)

        args.extend([habit_id, profile_id])
        row = await self.db.fetchrow(
            f"""
            UPDATE habits SET {', '.join(sets)}
            WHERE id=${len(args) - 1} AND profile_id=${len(args)}
            RETURNING {HABIT_COLUMNS}
            """,
            *args,
        )
        return Habit.from_row(row) if row else None

    async def delete_habit(self, habit_id: int, profile_id: int) -> bool:
        status = await self.db.execute(
            "DELETE FROM habits WHERE id=$1 AND profile_id=$2",
            habit_id,
            profile_id,
        )
        return _affected(status) > 0

    # ---------- check-ins ----------

    async def get_checkin(self, habit_id: int, day: date) -> Optional[CheckIn]:
        row = await self.db.fetchrow(
            "SELECT habit_id, date, completed FROM checkins WHERE habit_id=$1 AND date=$2",
            habit_id,
            day,
        )
        return CheckIn.from_row(row) if row else None

    async def add_checkin(self, habit_id: int, day: date) -> None:
        await self.db.execute(
            """
            INSERT INTO checkins (habit_id, date, completed)
            VALUES ($1, $2, TRUE)
            ON CONFLICT (habit_id, date) DO NOTHING
            """,
            habit_id,
            day,
        )

    async def delete_checkin(self, habit_id: int, day: date) -> bool:
        status = await self.db.execute(
            "DELETE FROM checkins WHERE habit_id=$1 AND date=$2",
            habit_id,
            day,
        )
        return _affected(status) > 0

    async def list_checkins(
        self, habit_ids: Iterable[int], start: date, end: date
    ) -> List[CheckIn]:
        ids = list(habit_ids)
        if not ids:
            return []
        rows = await self.db.fetch(
            """
            SELECT habit_id, date, completed
            FROM checkins
            WHERE habit_id=ANY($1::int[])
              AND completed=TRUE
              AND date BETWEEN $2 AND $3
            ORDER BY date, habit_id
            """,
            ids,
            start,
            end,
        )
        return [CheckIn.from_row(r) for r in rows]
