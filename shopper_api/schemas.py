"""Request/response models exchanged over HTTP (camelCase on the wire)."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ShopperIn(BaseModel):
    """Payload accepted by create and update.

    Every field defaults to an empty string: updates are full replacements, so
    an omitted field ends up cleared. ``dateJoined`` is server-assigned and
    ignored if a client sends it.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    username: str = ""
    full_name: str = Field(default="", alias="fullName")
    email: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = Field(default="", alias="zipCode")

    @field_validator("*", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        # JSON null binds to an empty string
        return "" if value is None else value


class Shopper(ShopperIn):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    date_joined: str = Field(default="", alias="dateJoined")


class ShoppersResponse(BaseModel):
    shoppers: List[Shopper]


class ErrorResponse(BaseModel):
    error: str
