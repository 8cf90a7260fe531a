from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from datemapz.core.schemas import Coordinates, PlanningMode


class GeneratePlanRequest(BaseModel):
    """Request payload for ``POST /api/generate-plan``.

    One of ``location``, ``locationName`` or ``prompt`` must be present; the
    planning mode is inferred from which one when ``planningMode`` is omitted.
    """

    location: Optional[Coordinates] = Field(default=None, description="Base coordinates of the date")
    location_name: Optional[str] = Field(default=None, description="Place name to geocode instead of coordinates")
    prompt: Optional[str] = Field(default=None, description="Free-text request for a simple plan")
    date_vibe: Optional[str] = Field(default=None, description="Romantic, Adventurous, Artsy, Foodie, Casual...")
    transport_mode: Optional[str] = Field(default=None, description="Walking, Transit or Driving")
    is_adult: bool = Field(default=False, description="Allow 18+ venues such as bars")
    planning_mode: Optional[PlanningMode] = Field(default=None, description="Force a prompt variant")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    error: str
