"""Pydantic data models for the date planning workflow.

This module contains the value objects that flow through a single planning
request: candidate places returned by the nearby search, the structured stop
and travel-leg drafts emitted by the model, the assembled itinerary, and the
LangGraph state/context pair that carries them between nodes.

Key model categories:
- PlaceRecord / SearchSpec: nearby-search inputs and outputs
- StopDraft / TravelLegDraft / ToolCall: structured model output
- ItineraryStop / Itinerary: the plan returned to callers
- PlanPrompt / GenerationResult: the exchange with the chat model
- PlanContext / PlanState: LangGraph runtime context and state
"""
from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from datemapz.core.types import Lat, Lon, NonEmptyStr, Rating, StopNumber


class Category(str, Enum):
    """Application-level venue categories shown on the map."""

    FOOD = "Food"
    CAFE = "Cafe"
    BAR = "Bar"
    ACTIVITY = "Activity"
    PARK = "Park"
    SHOP = "Shop"

    @classmethod
    def coerce(cls, value: Any) -> "Category":
        """Map a loosely formatted category label onto the enum, defaulting to Activity."""

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        return cls.ACTIVITY


class PlanningMode(str, Enum):
    """Prompt variant used for a request."""

    CURATED = "curated"
    DISCOVER = "discover"
    SIMPLE = "simple"


class Coordinates(BaseModel):
    """A latitude/longitude pair in degrees."""

    lat: Lat
    lng: Lon

    model_config = ConfigDict(frozen=True)


class PlaceRecord(BaseModel):
    """A candidate venue returned by the nearby search."""

    name: str
    address: str = Field(description="Provider vicinity; used as the uniqueness key")
    lat: Lat
    lng: Lon
    category: Category = Category.ACTIVITY
    rating: Optional[Rating] = None

    model_config = ConfigDict(frozen=True)


class SearchSpec(BaseModel):
    """Parameters of one nearby search, derived from the request preferences."""

    location: Coordinates
    radius_meters: int = Field(gt=0)
    keyword: NonEmptyStr

    model_config = ConfigDict(frozen=True)


_CAMEL_CASE = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StopDraft(BaseModel):
    """Arguments of a ``create_date_stop`` call. Every field is required."""

    stop_number: StopNumber
    name: NonEmptyStr
    description: str
    address: str
    lat: Lat
    lng: Lon
    category: Category
    start_time: str
    duration: str

    model_config = _CAMEL_CASE

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: Any) -> Category:
        return Category.coerce(value)


class TravelLegDraft(BaseModel):
    """Arguments of a ``create_travel_leg`` call."""

    from_stop: StopNumber
    to_stop: StopNumber
    transport_mode: str
    travel_time: str

    model_config = _CAMEL_CASE


class CreateDateStopCall(BaseModel):
    name: Literal["create_date_stop"]
    args: StopDraft


class CreateTravelLegCall(BaseModel):
    name: Literal["create_travel_leg"]
    args: TravelLegDraft


ToolCall = Annotated[
    Union[CreateDateStopCall, CreateTravelLegCall],
    Field(discriminator="name"),
]


class ItineraryStop(BaseModel):
    """One scheduled visit in the returned plan.

    Stops assembled from tool calls always carry every field; stops parsed from
    a JSON answer are only guaranteed to have finite coordinates.
    """

    stop_number: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    lat: float = Field(allow_inf_nan=False)
    lng: float = Field(allow_inf_nan=False)
    category: Category = Category.ACTIVITY
    start_time: Optional[str] = None
    duration: Optional[str] = None
    travel_to_next: Optional[TravelLegDraft] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: Any) -> Category:
        return Category.coerce(value)

    @classmethod
    def from_draft(cls, draft: StopDraft, leg: Optional[TravelLegDraft] = None) -> "ItineraryStop":
        return cls(**draft.model_dump(), travel_to_next=leg)


class Itinerary(BaseModel):
    """The assembled plan: a title and ordered stops."""

    plan_title: str
    stops: List[ItineraryStop] = Field(default_factory=list)

    model_config = _CAMEL_CASE


class PlanPrompt(BaseModel):
    """Everything the chat model receives for one plan."""

    mode: PlanningMode
    system_instruction: str
    user_message: str
    tools: List[Dict[str, Any]] = Field(default_factory=list)


class GenerationResult(BaseModel):
    """Free text plus structured tool invocations returned by the chat model."""

    text: str = ""
    tool_calls: List[Dict[str, Any]] = Field(default_factory=list)


class PlanContext(BaseModel):
    """Immutable description of the request being planned."""

    mode: PlanningMode
    location: Optional[Coordinates] = None
    location_name: Optional[str] = None
    prompt: Optional[str] = None
    vibe: Optional[str] = None
    transport_mode: Optional[str] = None
    is_adult: bool = False

    model_config = ConfigDict(extra="forbid", frozen=True)


class PlanState(BaseModel):
    """State threaded through the LangGraph planning workflow.

    Attributes:
        mode: Prompt variant, copied from the context so edges can route on it
        location: Base coordinates, given or resolved from a place name
        area_description: Human readable area phrase for the discover prompt
        candidates: Deduplicated nearby places for the curated prompt
        prompt: Instruction payload built for the chat model
        generation: Raw model output
        itinerary: Final assembled plan
    """

    mode: PlanningMode
    location: Optional[Coordinates] = None
    area_description: Optional[str] = None
    candidates: List[PlaceRecord] = Field(default_factory=list)
    prompt: Optional[PlanPrompt] = None
    generation: Optional[GenerationResult] = None
    itinerary: Optional[Itinerary] = None


__all__ = [
    "Category",
    "PlanningMode",
    "Coordinates",
    "PlaceRecord",
    "SearchSpec",
    "StopDraft",
    "TravelLegDraft",
    "CreateDateStopCall",
    "CreateTravelLegCall",
    "ToolCall",
    "ItineraryStop",
    "Itinerary",
    "PlanPrompt",
    "GenerationResult",
    "PlanContext",
    "PlanState",
]
