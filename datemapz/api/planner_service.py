import logging
from typing import Any, Dict, Optional

from datemapz.api.schemas import GeneratePlanRequest
from datemapz.core.assembler import PlanAssembler
from datemapz.core.candidates import CandidateLocationFinder
from datemapz.core.composer import PlanComposer
from datemapz.core.config import ApiSettings
from datemapz.core.errors import ConfigurationError, MissingFieldsError
from datemapz.core.generation import PlanGenerator
from datemapz.core.graph_builder import build_planning_graph
from datemapz.core.location import LocationResolver
from datemapz.core.model_builder import build_chat_model
from datemapz.core.schemas import Itinerary, PlanContext, PlanningMode, PlanState
from datemapz.services import (
    GooglePlaces,
    PlacesSearchAdapter,
    create_geocoding_client,
    create_google_places_client,
)

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Missing required fields."


def _has_text(value: Optional[str]) -> bool:
    return bool(value and value.strip())


class PlannerService:
    """Container for the LangGraph workflow and its dependencies.

    Clients, the chat model and the compiled graph are built once and shared by
    every request; per-request data only lives in the graph state and context.

    Attributes:
        settings: API configuration with external service credentials
        llm: Chat model used for plan generation
        places_client: Google Places client, ``None`` when no key is configured
        geocoder: Nominatim client used for forward and reverse lookups
        graph: Compiled LangGraph workflow ready for execution
    """

    def __init__(self, settings: ApiSettings) -> None:
        self.settings = settings
        self.llm = build_chat_model(settings)

        self.places_client: Optional[GooglePlaces] = None
        finder: Optional[CandidateLocationFinder] = None
        if settings.places_configured:
            self.places_client = create_google_places_client(settings)
            finder = CandidateLocationFinder(PlacesSearchAdapter(self.places_client))
        else:
            logger.warning("GOOGLE_MAPS_API_KEY not set, location requests will use discover mode")

        self.geocoder = create_geocoding_client(settings)
        self.composer = PlanComposer(output_style=settings.output_style)

        self.graph = build_planning_graph(
            resolver=LocationResolver(self.geocoder),
            finder=finder,
            composer=self.composer,
            generator=PlanGenerator(self.llm, timeout_s=settings.llm_timeout_s),
            assembler=PlanAssembler(settings.min_stops),
            min_candidates=settings.min_candidates,
        )

    def __repr__(self) -> str:
        return (
            f"PlannerService(llm='{self.model_name}', "
            f"output_style='{self.composer.output_style}', "
            f"places_configured={self.places_client is not None})"
        )

    @property
    def model_name(self) -> str:
        return getattr(self.llm, "model_name", None) or getattr(self.llm, "model", None) or type(self.llm).__name__

    def info(self) -> Dict[str, Any]:
        return {
            "llm_model": self.model_name,
            "llm_provider": self.settings.llm_provider,
            "output_style": self.composer.output_style,
            "places_configured": self.places_client is not None,
        }

    def resolve_context(self, request: GeneratePlanRequest) -> PlanContext:
        """Pick the planning mode and freeze the request into a :class:`PlanContext`."""

        has_location = request.location is not None or _has_text(request.location_name)
        has_prompt = _has_text(request.prompt)

        mode = request.planning_mode
        if mode is None:
            if has_location:
                mode = PlanningMode.CURATED if self.places_client is not None else PlanningMode.DISCOVER
            elif has_prompt:
                mode = PlanningMode.SIMPLE
            else:
                raise MissingFieldsError(MISSING_FIELDS_MESSAGE)
        elif mode == PlanningMode.SIMPLE and not has_prompt:
            raise MissingFieldsError(MISSING_FIELDS_MESSAGE)
        elif mode != PlanningMode.SIMPLE and not has_location:
            raise MissingFieldsError(MISSING_FIELDS_MESSAGE)

        if mode == PlanningMode.CURATED and self.places_client is None:
            raise ConfigurationError("Curated planning requires GOOGLE_MAPS_API_KEY")

        return PlanContext(
            mode=mode,
            location=request.location,
            location_name=request.location_name.strip() if _has_text(request.location_name) else None,
            prompt=request.prompt.strip() if has_prompt else None,
            vibe=request.date_vibe,
            transport_mode=request.transport_mode,
            is_adult=request.is_adult,
        )

    async def generate_plan(self, request: GeneratePlanRequest) -> Itinerary:
        context = self.resolve_context(request)
        logger.info(f"Planning in {context.mode.value} mode (vibe={context.vibe}, transport={context.transport_mode})")

        result = await self.graph.ainvoke(PlanState(mode=context.mode), context=context)

        itinerary = result.get("itinerary")
        if isinstance(itinerary, dict):
            itinerary = Itinerary.model_validate(itinerary)
        logger.info(f"Plan '{itinerary.plan_title}' ready with {len(itinerary.stops)} stops")
        return itinerary

    async def close(self) -> None:
        if self.places_client is not None:
            await self.places_client.aclose()
        await self.geocoder.aclose()
