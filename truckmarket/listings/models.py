from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class TruckType(str, Enum):
    pickup = "pickup"
    box = "box"
    flatbed = "flatbed"
    refrigerated = "refrigerated"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ListingFields(CamelModel):
    company_name: str | None = None
    description: str | None = None
    estimasi_waktu: str | None = Field(default=None, description="Estimated trip duration")
    rating: float | None = Field(default=None, ge=0.0, le=5.0)
    layanan_tambahan: str | None = Field(default=None, description="Extra services offered")
    website: str | None = None
    kontak: str | None = None
    image_url: str | None = None
    map_embed_url: str | None = None


class ListingCreate(ListingFields):
    origin: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    max_weight: float = Field(..., gt=0, description="Capacity in kilograms")
    departure_date: date
    truck_type: TruckType
    phone_number: str = Field(..., min_length=1)
    price: int = Field(default=0, ge=0, description="Rupiah; 0 means contact for pricing")

    @field_validator("departure_date")
    @classmethod
    def _not_in_past(cls, value: date) -> date:
        if value < date.today():
            raise ValueError("departureDate must not be in the past")
        return value


class ListingUpdate(ListingFields):
    origin: str | None = Field(default=None, min_length=1)
    destination: str | None = Field(default=None, min_length=1)
    max_weight: float | None = Field(default=None, gt=0)
    departure_date: date | None = None
    truck_type: TruckType | None = None
    phone_number: str | None = Field(default=None, min_length=1)
    price: int | None = Field(default=None, ge=0)


class Listing(ListingFields):
    id: str
    origin: str
    destination: str
    max_weight: float = Field(..., gt=0)
    departure_date: date
    truck_type: TruckType
    phone_number: str
    price: int = Field(default=0, ge=0)
    driver_id: str | None = None
    created_at: datetime


class ListingPage(CamelModel):
    posts: list[Listing]
    total: int
    total_pages: int
    current_page: int
