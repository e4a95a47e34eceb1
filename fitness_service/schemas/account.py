from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    client = "client"
    trainer = "trainer"


class RegisterRequest(BaseModel):
    """Raw registration body. Presence checks happen in the account service."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    fullname: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None
    goal: str | None = None
    specialization: str | None = None
    experience: str | None = None
    certification: str | None = None


class LoginRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    email: str | None = None
    password: str | None = None
    role: str | None = None


class AccountBase(BaseModel):
    fullname: str
    email: str
    password: str


class ClientAccount(AccountBase):
    role: Literal["client"] = "client"
    goal: str


class TrainerAccount(AccountBase):
    role: Literal["trainer"] = "trainer"
    specialization: str
    experience: str
    certification: str = ""


Account = Annotated[Union[ClientAccount, TrainerAccount], Field(discriminator="role")]


class ProfileBase(BaseModel):
    success: bool = True
    fullname: str
    email: str


class ClientProfile(ProfileBase):
    role: Literal["client"] = "client"
    goal: str | None = None


class TrainerProfile(ProfileBase):
    role: Literal["trainer"] = "trainer"
    specialization: str | None = None
    experience: str | None = None
    certification: str = ""


LoginResponse = Annotated[Union[ClientProfile, TrainerProfile], Field(discriminator="role")]
