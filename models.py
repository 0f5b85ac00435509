from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Union

# ids are SERIAL (int4) columns
MAX_ID = 2**31 - 1


def valid_id(value: int) -> bool:
    return 1 <= value <= MAX_ID


@dataclass(frozen=True)
class Profile:
    id: int
    name: str
    color: Optional[str]
    created_at: datetime

    @classmethod
    def from_row(cls, row) -> "Profile":
        return cls(
            id=row["id"],
            name=row["name"],
            color=row["color"],
            created_at=row["created_at"],
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "createdAt": self.created_at.isoformat(),
        }


# Habit lifecycle: Active until archived, Archived(at) until unarchived.

@dataclass(frozen=True)
class Active:
    pass


@dataclass(frozen=True)
class Archived:
    at: datetime


HabitState = Union[Active, Archived]

ACTIVE = Active()


@dataclass(frozen=True)
class Habit:
    id: int
    profile_id: int
    name: str
    color: Optional[str]
    created_at: datetime
    state: HabitState = field(default=ACTIVE)

    @classmethod
    def from_row(cls, row) -> "Habit":
        archived_at = row["archived_at"]
        return cls(
            id=row["id"],
            profile_id=row["profile_id"],
            name=row["name"],
            color=row["color"],
            created_at=row["created_at"],
            state=Archived(archived_at) if archived_at is not None else ACTIVE,
        )

    @property
    def is_active(self) -> bool:
        return isinstance(self.state, Active)

    @property
    def archived_at(self) -> Optional[datetime]:
        if isinstance(self.state, Archived):
            return self.state.at
        return None

    def to_dict(self) -> dict:
        archived_at = self.archived_at
        return {
            "id": self.id,
            "profileId": self.profile_id,
            "name": self.name,
            "color": self.color,
            "createdAt": self.created_at.isoformat(),
            "archivedAt": archived_at.isoformat() if archived_at else None,
        }


@dataclass(frozen=True)
class CheckIn:
    habit_id: int
    date: date
    completed: bool = True

    @classmethod
    def from_row(cls, row) -> "CheckIn":
        return cls(habit_id=row["habit_id"], date=row["date"], completed=row["completed"])
