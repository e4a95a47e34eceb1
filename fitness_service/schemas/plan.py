from pydantic import BaseModel, ConfigDict, Field


class PlanCreate(BaseModel):
    trainer: str | None = Field(None, description="Trainer email")
    client: str | None = Field(None, description="Client email")
    plan: str | None = None


class PlanUpdate(BaseModel):
    client: str | None = None
    plan: str | None = None


class PlanResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    trainer: str
    client: str
    plan: str


class PlanListResponse(BaseModel):
    success: bool = True
    plans: list[PlanResponse] = Field(default_factory=list)
