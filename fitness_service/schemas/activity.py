from pydantic import BaseModel, ConfigDict, Field


class WorkoutCreate(BaseModel):
    email: str | None = None
    type: str | None = None
    # Numbers or numeric text, converted to integers before storage
    duration: int | float | str | None = None
    calories: int | float | str | None = None
    date: str | None = None
    notes: str | None = None


class WorkoutResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    email: str
    type: str
    duration: int
    calories: int
    date: str
    notes: str = ""


class WorkoutListResponse(BaseModel):
    success: bool = True
    workouts: list[WorkoutResponse] = Field(default_factory=list)


class MetricCreate(BaseModel):
    email: str | None = None
    date: str | None = None
    weight: float | None = None
    bmi: float | None = None
    fat: float | None = None


class MetricResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    email: str
    date: str
    weight: float
    bmi: float
    fat: float = 0


class MetricListResponse(BaseModel):
    success: bool = True
    metrics: list[MetricResponse] = Field(default_factory=list)
