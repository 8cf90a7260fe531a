"""LangGraph nodes for the date planning workflow."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from langgraph.runtime import Runtime

from datemapz.core.assembler import PlanAssembler
from datemapz.core.candidates import CandidateLocationFinder, CandidateSet
from datemapz.core.composer import PlanComposer
from datemapz.core.errors import ConfigurationError, InsufficientCandidates, MissingFieldsError
from datemapz.core.generation import PlanGenerator
from datemapz.core.location import GENERIC_AREA, LocationResolver
from datemapz.core.schemas import PlanContext, PlanningMode, PlanState

logger = logging.getLogger(__name__)

INSUFFICIENT_CANDIDATES_MESSAGE = "Sorry, I couldn't find enough suitable locations."


def route_from_start(state: PlanState) -> str:
    """Simple plans skip location handling entirely."""

    if state.mode == PlanningMode.SIMPLE:
        return "compose_plan"
    return "resolve_location"


def route_after_location(state: PlanState) -> str:
    if state.mode == PlanningMode.CURATED:
        return "find_candidates"
    return "describe_area"


def make_resolve_location_node(resolver: LocationResolver):
    """Return the node that fixes the base coordinates of the plan."""

    async def node(state: PlanState, runtime: Runtime[PlanContext]) -> Dict[str, Any]:
        context = runtime.context
        if context.location is not None:
            return {"location": context.location}
        if context.location_name:
            location = await resolver.resolve_by_name(context.location_name)
            return {"location": location}
        raise MissingFieldsError("Missing required fields.")

    return node


def make_find_candidates_node(finder: Optional[CandidateLocationFinder], *, min_candidates: int):
    """Return the nearby-search node; too few results abort before the model is called."""

    async def node(state: PlanState, runtime: Runtime[PlanContext]) -> Dict[str, Any]:
        if finder is None:
            raise ConfigurationError("Nearby search is not configured")

        context = runtime.context
        candidates = await finder.find(
            state.location.lat,
            state.location.lng,
            context.vibe,
            context.transport_mode,
            context.is_adult,
        )
        if len(candidates) < min_candidates:
            logger.warning(f"Only {len(candidates)} candidates found, {min_candidates} required")
            raise InsufficientCandidates(INSUFFICIENT_CANDIDATES_MESSAGE)

        logger.info(f"Curating plan from {len(candidates)} candidates")
        return {"candidates": candidates.records()}

    return node


def make_describe_area_node(resolver: LocationResolver):
    async def node(state: PlanState, runtime: Runtime[PlanContext]) -> Dict[str, Any]:
        area = await resolver.describe_area(state.location.lat, state.location.lng)
        logger.info(f"Discover mode area: {area}")
        return {"area_description": area}

    return node


def make_compose_plan_node(composer: PlanComposer):
    """Return the node building the model prompt for the request's mode."""

    async def node(state: PlanState, runtime: Runtime[PlanContext]) -> Dict[str, Any]:
        context = runtime.context

        if state.mode == PlanningMode.CURATED:
            prompt = composer.compose_curated(
                CandidateSet(state.candidates),
                context.vibe,
                context.transport_mode,
                context.is_adult,
            )
        elif state.mode == PlanningMode.DISCOVER:
            prompt = composer.compose_discover(
                state.area_description or GENERIC_AREA,
                state.location,
                context.vibe,
                context.transport_mode,
                context.is_adult,
            )
        else:
            if not (context.prompt or "").strip():
                raise MissingFieldsError("Missing required fields.")
            prompt = composer.compose_simple(context.prompt)

        return {"prompt": prompt}

    return node


def make_generate_plan_node(generator: PlanGenerator):
    async def node(state: PlanState, runtime: Runtime[PlanContext]) -> Dict[str, Any]:
        generation = await generator.generate(state.prompt)
        return {"generation": generation}

    return node


def make_assemble_plan_node(assembler: PlanAssembler):
    async def node(state: PlanState, runtime: Runtime[PlanContext]) -> Dict[str, Any]:
        itinerary = assembler.assemble(state.generation, state.mode, runtime.context.vibe)
        return {"itinerary": itinerary}

    return node
