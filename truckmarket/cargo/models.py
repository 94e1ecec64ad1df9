from __future__ import annotations

from pydantic import Field, computed_field

from ..listings.models import CamelModel, Listing


class ExtractedFilters(CamelModel):
    weight: int | None = None
    weight_unit: str | None = Field(
        default=None, description="Unit token next to the weight; the value is never converted",
    )
    origin: str | None = None
    destination: str | None = None
    truck_type: str | None = None

    @computed_field(alias="hasFilters")
    @property
    def has_filters(self) -> bool:
        return any(
            v is not None
            for v in (self.weight, self.origin, self.destination, self.truck_type)
        )


class CargoFilters(CamelModel):
    weight: int | None = Field(default=None, gt=0, description="Minimum capacity in kg")
    truck_type: str | None = None
    origin: str | None = None
    destination: str | None = None


class CargoQuery(CamelModel):
    query: str


class CargoRecommendRequest(CargoQuery):
    filters: CargoFilters | None = None


class RecommendationResult(CamelModel):
    recommendation: str
    posts: list[Listing] = Field(default_factory=list)
