from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from datemapz.core.types import Lat, Lon, Rating


class NearbySearch(BaseModel):
    """Input payload accepted by the Places Nearby Search endpoint."""

    location: str = Field(description="Latitude/Longitude pair (e.g., '19.2,72.9')")
    radius: int = Field(gt=0, le=50000, description="Search radius in meters")
    keyword: Optional[str] = Field(default=None, description="Free-text keyword, may use OR")
    language: Optional[str] = Field(default=None, description="Response language")

    @classmethod
    def around(cls, lat: float, lng: float, radius: int, keyword: Optional[str] = None) -> "NearbySearch":
        return cls(location=f"{lat},{lng}", radius=radius, keyword=keyword)


class LatLng(BaseModel):
    lat: Lat
    lng: Lon


class Geometry(BaseModel):
    location: LatLng


class PlaceResult(BaseModel):
    """Subset of a Nearby Search result used by the planner."""

    name: str
    vicinity: Optional[str] = None
    formatted_address: Optional[str] = None
    geometry: Geometry
    types: List[str] = Field(default_factory=list)
    rating: Optional[Rating] = None
    place_id: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @property
    def address(self) -> str:
        return (self.vicinity or self.formatted_address or "").strip()


class NearbySearchOutput(BaseModel):
    status: str
    results: List[dict] = Field(default_factory=list)
    error_message: Optional[str] = None

    model_config = ConfigDict(extra="ignore")
