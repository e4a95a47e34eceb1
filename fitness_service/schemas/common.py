from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MessageResponse(BaseModel):
    msg: str


class SuccessResponse(MessageResponse):
    success: bool = True


class EchoResponse(SuccessResponse):
    model_config = ConfigDict(populate_by_name=True)

    received_data: Any = Field(default=None, alias="receivedData")