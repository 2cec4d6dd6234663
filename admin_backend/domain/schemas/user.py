"""Pydantic schemas for User and Role."""

import re
from typing import List, Optional

from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from admin_backend.domain.schemas.pagination import CamelModel, PaginationQuery

MOBILE_PATTERN = re.compile(r"^1[3-9]\d{9}$")


def normalize_mobile(value: str) -> str:
    """Return a mainland-China mobile number in its 11-digit national form."""
    number = re.sub(r"[\s-]", "", value)
    if number.startswith("+86"):
        number = number[3:]
    elif number.startswith("86") and len(number) == 13:
        number = number[2:]
    if not MOBILE_PATTERN.match(number):
        raise ValueError("Please enter a valid mainland China mobile number")
    return number


class UserCreate(CamelModel):
    phone: str = Field(description="Mobile number", examples=["13800138000"])
    username: Optional[str] = Field(
        default=None, min_length=1, max_length=50, description="Display name", examples=["john.doe"]
    )
    status: int = Field(default=1, ge=0, le=1, description="0 disabled, 1 enabled", examples=[1])

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, v: str) -> str:
        return normalize_mobile(v)


class UserUpdate(CamelModel):
    phone: Optional[str] = Field(default=None, examples=["13800138000"])
    username: Optional[str] = Field(default=None, min_length=1, max_length=50, examples=["john.doe"])
    status: Optional[int] = Field(default=None, ge=0, le=1, examples=[0])

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, v: Optional[str]) -> Optional[str]:
        return normalize_mobile(v) if v is not None else v


class ListUserQuery(PaginationQuery):
    user_name: Optional[str] = Field(default=None, max_length=50, description="Display name contains")
    status: Optional[int] = Field(default=None, ge=0, le=1, description="Status equals", examples=[1])
    phone: Optional[str] = Field(
        default=None, pattern=r"^\d{1,11}$", description="Phone number contains", examples=["138"]
    )

    @field_validator("user_name", "phone", mode="before")
    @classmethod
    def blank_as_unset(cls, v):
        # An empty search box means "no filter"
        if isinstance(v, str) and not v.strip():
            return None
        return v


class RoleRead(CamelModel):
    id: int
    name: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class UserRead(CamelModel):
    id: int
    user_name: Optional[str] = None
    phone: str
    status: int
    role_id: int
    role: RoleRead

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class UserPage(CamelModel):
    items: List[UserRead] = Field(alias="list")
    total: int
