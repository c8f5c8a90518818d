from pydantic import BaseModel, Field
from typing import Optional, List, Tuple

from ..providers.base import Bounds, Location


class BoundsModel(BaseModel):
    southwest: Tuple[float, float]
    northeast: Tuple[float, float]


class LocationModel(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    display_name: Optional[str] = None
    name: Optional[str] = None
    road: Optional[str] = None
    city: Optional[str] = None
    suburb: Optional[str] = None
    neighbourhood: Optional[str] = None
    postcode: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None
    house_number: Optional[str] = None
    borough: Optional[str] = None
    municipality: Optional[str] = None
    bounds: Optional[BoundsModel] = None
    geometry: Optional[List[List[Tuple[float, float]]]] = None
    zoom: Optional[float] = None

    @classmethod
    def from_location(cls, loc: Location) -> "LocationModel":
        return cls(
            latitude=loc.latitude,
            longitude=loc.longitude,
            display_name=loc.display_name,
            name=loc.name,
            road=loc.road,
            city=loc.city,
            suburb=loc.suburb,
            neighbourhood=loc.neighbourhood,
            postcode=loc.postcode,
            state=loc.state,
            country=loc.country,
            country_code=loc.country_code,
            house_number=loc.house_number,
            borough=loc.borough,
            municipality=loc.municipality,
            bounds=BoundsModel(southwest=loc.bounds.southwest, northeast=loc.bounds.northeast) if loc.bounds else None,
            geometry=[list(polygon) for polygon in loc.geometry] if loc.geometry is not None else None,
            zoom=loc.zoom,
        )

    def to_location(self) -> Location:
        data = self.model_dump(exclude={"bounds", "geometry"})
        return Location(
            bounds=Bounds(southwest=self.bounds.southwest, northeast=self.bounds.northeast) if self.bounds else None,
            geometry=tuple(tuple(polygon) for polygon in self.geometry) if self.geometry is not None else None,
            **data,
        )


class SearchResponse(BaseModel):
    query: str
    results: List[LocationModel] = []


class InitialLocationResponse(BaseModel):
    location: Optional[LocationModel] = None
    resolved_by: Optional[str] = None


class HistoryResponse(BaseModel):
    items: List[LocationModel] = []
