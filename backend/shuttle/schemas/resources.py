"""Resource Schemas — request bodies for every registry-backed resource.

Invariants:
    - Every field optional: required-field checks belong to the registry (one 400 shape)
    - Unknown fields pass through (extra="allow"); records are open mappings
    - Known fields are type-coerced (seats -> int, price -> float, numbers -> str) at the boundary
    - Text fields carry no format rules: dates, times and ids are stored as sent
    - Wire names are camelCase where the API has always used camelCase

Design Decisions:
    - to_fields(partial=True) keeps explicit nulls and drops unset fields: PUT merge semantics
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shuttle.core.domain_types import TravelProfile
from shuttle.core.route_points import parse_point


class RecordBody(BaseModel):
    """Base body: open mapping with coercion for declared fields."""

    model_config = ConfigDict(
        extra="allow", populate_by_name=True, str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )

    def to_fields(self, partial: bool = False) -> dict[str, Any]:
        if partial:
            return self.model_dump(by_alias=True, exclude_unset=True, mode="json")
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class CarBody(RecordBody):
    id: str | None = None
    name: str | None = None
    registration: str | None = None
    number_plate: str | None = Field(None, alias="numberPlate")


class BookingBody(RecordBody):
    id: str | None = None
    shuttle_id: str | None = None
    passenger_name: str | None = Field(None, alias="passengerName")
    email: str | None = Field(None, max_length=320)
    phone: str | None = None
    route: str | None = None
    date: str | None = None
    time: str | None = None
    seats: int | None = Field(None, ge=1)
    price: float | None = Field(None, ge=0)
    path: str | None = None
    car: str | None = None


class CheckoutSessionBody(RecordBody):
    shuttle_id: str | None = Field(None, alias="shuttleId")
    shuttle_route: str | None = Field(None, alias="shuttleRoute")
    seats: int | None = Field(None, ge=1)
    price: float | None = Field(None, gt=0)
    user_id: str | None = Field(None, alias="userId")
    user_name: str | None = Field(None, alias="userName")


class DirectionBody(RecordBody):
    id: str | None = None
    email: str | None = Field(None, max_length=320)
    path: str | None = None


class RouteBody(RecordBody):
    id: str | None = None
    points: list[str] | None = Field(None, min_length=2)
    profile: TravelProfile = TravelProfile.CAR

    @field_validator("points")
    @classmethod
    def points_are_coordinates(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        cleaned = [p.replace(" ", "") for p in v]
        for point in cleaned:
            parse_point(point)
        return cleaned


class ExtractRouteRequest(BaseModel):
    url: str = Field(min_length=1, max_length=4096)


class LoginRequest(BaseModel):
    username: str
    password: str


class SignupBody(RecordBody):
    # Passwords are compared byte for byte at login
    model_config = ConfigDict(str_strip_whitespace=False)

    id: str | None = None
    username: str | None = None
    email: str | None = Field(None, max_length=320)
    password: str | None = None
    role: str | None = None
    name: str | None = None
