from typing import Annotated, Optional

from pydantic import BaseModel, StrictBool, StrictStr, StringConstraints, model_validator

HabitName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=80)]
ProfileName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=40)]
ColorHex = Annotated[str, StringConstraints(pattern=r"^#[0-9a-fA-F]{6}$")]


class HabitCreateReq(BaseModel):
    name: HabitName
    color: Optional[ColorHex] = None


class HabitUpdateReq(BaseModel):
    name: Optional[HabitName] = None
    color: Optional[ColorHex] = None
    archived: Optional[StrictBool] = None

    @model_validator(mode="after")
    def check_fields(self):
        if not self.model_fields_set:
            raise ValueError("Provide at least one field to update.")
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"{name} must not be null")
        return self


class CheckInToggleReq(BaseModel):
    # parsed separately as YYYY-MM-DD
    date: StrictStr
    completed: Optional[StrictBool] = None

    @model_validator(mode="after")
    def check_completed(self):
        if "completed" in self.model_fields_set and self.completed is None:
            raise ValueError("completed must not be null")
        return self


class ProfileCreateReq(BaseModel):
    name: ProfileName
    color: Optional[ColorHex] = None


class ActiveProfileReq(BaseModel):
    profileId: int
