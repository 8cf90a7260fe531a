"""Unit tests for the planning workflow (nodes + compiled graph)."""
from __future__ import annotations

from typing import Any, Dict, List

import pytest
from langchain_core.messages import AIMessage

from datemapz.core.assembler import PlanAssembler
from datemapz.core.candidates import CandidateLocationFinder
from datemapz.core.composer import PlanComposer
from datemapz.core.errors import ConfigurationError, InsufficientCandidates, LocationNotFound, PlanGenerationError
from datemapz.core.generation import PlanGenerator
from datemapz.core.graph_builder import build_planning_graph
from datemapz.core.location import LocationResolver
from datemapz.core.nodes import route_after_location, route_from_start
from datemapz.core.schemas import Category, Coordinates, PlaceRecord, PlanContext, PlanningMode, PlanState


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class StubLLM:
    """Returns a canned AIMessage and records the messages it was sent."""

    def __init__(self, response: AIMessage) -> None:
        self.response = response
        self.calls: List[List[Any]] = []

    def bind_tools(self, tools: List[Dict[str, Any]]) -> "StubLLM":
        return self

    async def ainvoke(self, messages: List[Any]) -> AIMessage:
        self.calls.append(messages)
        return self.response


class StubSearcher:
    def __init__(self, places: List[PlaceRecord]) -> None:
        self.places = places
        self.keywords: List[str] = []

    async def search(self, location: Coordinates, radius_meters: int, keyword: str) -> List[PlaceRecord]:
        self.keywords.append(keyword)
        return list(self.places)


class StubGeocoder:
    def __init__(self, matches: List[Dict[str, Any]] | None = None, address: Dict[str, Any] | None = None) -> None:
        self.matches = matches or []
        self.address = address or {}
        self.searches: List[str] = []
        self.reverses: List[tuple] = []

    async def search(self, query: str, *, limit: int = 1) -> List[Dict[str, Any]]:
        self.searches.append(query)
        return self.matches

    async def reverse(self, lat: float, lng: float) -> Dict[str, Any]:
        self.reverses.append((lat, lng))
        return {"address": self.address}


def _stop(number: int, name: str) -> Dict[str, Any]:
    return {
        "name": "create_date_stop",
        "args": {
            "stopNumber": number,
            "name": name,
            "description": "Nice",
            "address": f"{number} Main St",
            "lat": 19.2,
            "lng": 72.9,
            "category": "Cafe",
            "startTime": "6:00 PM",
            "duration": "1 hour",
        },
        "id": f"call-{number}",
    }


def _plan_message() -> AIMessage:
    return AIMessage(content="Coffee Crawl", tool_calls=[_stop(2, "Second"), _stop(1, "First")])


def _places(count: int) -> List[PlaceRecord]:
    return [
        PlaceRecord(name=f"Place {idx}", address=f"{idx} Main St", lat=19.2, lng=72.9, category=Category.CAFE)
        for idx in range(count)
    ]


def _build(llm: StubLLM, searcher: StubSearcher | None, geocoder: StubGeocoder, min_candidates: int = 3):
    finder = CandidateLocationFinder(searcher) if searcher is not None else None
    return build_planning_graph(
        resolver=LocationResolver(geocoder),
        finder=finder,
        composer=PlanComposer(),
        generator=PlanGenerator(llm),
        assembler=PlanAssembler({PlanningMode.CURATED: 2, PlanningMode.DISCOVER: 2, PlanningMode.SIMPLE: 1}),
        min_candidates=min_candidates,
    )


# ---------------------------------------------------------------------------
# Routing
# ---------------------------------------------------------------------------


def test_routing_by_mode():
    assert route_from_start(PlanState(mode=PlanningMode.SIMPLE)) == "compose_plan"
    assert route_from_start(PlanState(mode=PlanningMode.CURATED)) == "resolve_location"
    assert route_from_start(PlanState(mode=PlanningMode.DISCOVER)) == "resolve_location"
    assert route_after_location(PlanState(mode=PlanningMode.CURATED)) == "find_candidates"
    assert route_after_location(PlanState(mode=PlanningMode.DISCOVER)) == "describe_area"


# ---------------------------------------------------------------------------
# Compiled graph
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_curated_flow_produces_ordered_itinerary():
    llm = StubLLM(_plan_message())
    searcher = StubSearcher(_places(8))
    graph = _build(llm, searcher, StubGeocoder())
    context = PlanContext(
        mode=PlanningMode.CURATED,
        location=Coordinates(lat=19.2, lng=72.9),
        vibe="Casual",
        transport_mode="Walking",
    )

    result = await graph.ainvoke(PlanState(mode=context.mode), context=context)

    itinerary = result["itinerary"]
    assert itinerary.plan_title == "Coffee Crawl"
    assert [stop.name for stop in itinerary.stops] == ["First", "Second"]
    assert len(searcher.keywords) == 1
    system_prompt = llm.calls[0][0].content
    assert "Place 7" in system_prompt


@pytest.mark.asyncio
async def test_curated_flow_geocodes_location_name():
    geocoder = StubGeocoder(matches=[{"lat": "19.2", "lon": "72.9"}])
    graph = _build(StubLLM(_plan_message()), StubSearcher(_places(6)), geocoder)
    context = PlanContext(mode=PlanningMode.CURATED, location_name="Powai, Mumbai", vibe="Foodie")

    result = await graph.ainvoke(PlanState(mode=context.mode), context=context)

    assert geocoder.searches == ["Powai, Mumbai"]
    assert result["location"].lat == pytest.approx(19.2)


@pytest.mark.asyncio
async def test_unknown_location_name_propagates():
    llm = StubLLM(_plan_message())
    graph = _build(llm, StubSearcher(_places(6)), StubGeocoder(matches=[]))
    context = PlanContext(mode=PlanningMode.CURATED, location_name="Atlantis")

    with pytest.raises(LocationNotFound):
        await graph.ainvoke(PlanState(mode=context.mode), context=context)

    assert llm.calls == []


@pytest.mark.asyncio
async def test_too_few_candidates_never_calls_model():
    llm = StubLLM(_plan_message())
    graph = _build(llm, StubSearcher(_places(2)), StubGeocoder())
    context = PlanContext(mode=PlanningMode.CURATED, location=Coordinates(lat=19.2, lng=72.9), vibe="Foodie")

    with pytest.raises(InsufficientCandidates) as excinfo:
        await graph.ainvoke(PlanState(mode=context.mode), context=context)

    assert excinfo.value.status_code == 422
    assert llm.calls == []


@pytest.mark.asyncio
async def test_curated_without_search_configured():
    graph = _build(StubLLM(_plan_message()), None, StubGeocoder())
    context = PlanContext(mode=PlanningMode.CURATED, location=Coordinates(lat=19.2, lng=72.9))

    with pytest.raises(ConfigurationError):
        await graph.ainvoke(PlanState(mode=context.mode), context=context)


@pytest.mark.asyncio
async def test_discover_flow_uses_area_description():
    llm = StubLLM(_plan_message())
    geocoder = StubGeocoder(address={"suburb": "Powai", "city": "Mumbai"})
    searcher = StubSearcher(_places(8))
    graph = _build(llm, searcher, geocoder)
    context = PlanContext(mode=PlanningMode.DISCOVER, location=Coordinates(lat=19.2, lng=72.9), vibe="Artsy")

    result = await graph.ainvoke(PlanState(mode=context.mode), context=context)

    assert result["area_description"] == "the Powai area of Mumbai"
    assert searcher.keywords == []
    assert "the Powai area of Mumbai" in llm.calls[0][0].content


@pytest.mark.asyncio
async def test_simple_flow_skips_location_handling():
    llm = StubLLM(AIMessage(content="Lisbon Day", tool_calls=[_stop(1, "Pastry Shop")]))
    geocoder = StubGeocoder()
    graph = _build(llm, StubSearcher(_places(8)), geocoder)
    context = PlanContext(mode=PlanningMode.SIMPLE, prompt="A slow Sunday in Lisbon")

    result = await graph.ainvoke(PlanState(mode=context.mode), context=context)

    assert result["itinerary"].plan_title == "Lisbon Day"
    assert geocoder.searches == [] and geocoder.reverses == []
    assert llm.calls[0][1].content == "A slow Sunday in Lisbon"


@pytest.mark.asyncio
async def test_insufficient_stops_surface_as_generation_error():
    llm = StubLLM(AIMessage(content="Half a plan", tool_calls=[_stop(1, "Only")]))
    graph = _build(llm, StubSearcher(_places(8)), StubGeocoder())
    context = PlanContext(mode=PlanningMode.CURATED, location=Coordinates(lat=19.2, lng=72.9))

    with pytest.raises(PlanGenerationError):
        await graph.ainvoke(PlanState(mode=context.mode), context=context)
