"""Pydantic models for API payloads."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

FieldInput = str | int | float | None


class WorkoutPatch(BaseModel):
    """Partial workout flag update; omitted flags stay as they are."""

    model_config = ConfigDict(extra="forbid")

    push: bool | None = None
    pull: bool | None = None
    legs: bool | None = None
    full: bool | None = None
    hiit: bool | None = None
    liss: bool | None = None


class DailyRecordPatch(BaseModel):
    """Partial daily record update."""

    model_config = ConfigDict(extra="forbid")

    weight: FieldInput = None
    waist: FieldInput = None
    calories: FieldInput = None
    protein: FieldInput = None
    carbs: FieldInput = None
    fat: FieldInput = None
    steps: FieldInput = None
    workout: WorkoutPatch | None = None
    notes: str | None = None

    def changes(self) -> dict[str, object]:
        """Return the fields the client sent; an explicit null clears a field."""
        changes = self.model_dump(exclude_unset=True, exclude={"workout"})
        if self.workout is not None:
            changes["workout"] = self.workout.model_dump(
                exclude_unset=True, exclude_none=True
            )
        return changes


class ActiveDateUpdate(BaseModel):
    """Selection of the date being edited."""

    date: date


class GoalPayload(BaseModel):
    """Goal in its stored camelCase shape."""

    model_config = ConfigDict(populate_by_name=True)

    start_weight: float = Field(alias="startWeight")
    target_weight: float = Field(alias="targetWeight")
    start_body_fat: float = Field(alias="startBodyFat")
    target_body_fat: float = Field(alias="targetBodyFat")
    height: float
