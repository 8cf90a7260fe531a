"""Reconcile raw model output into an ordered :class:`Itinerary`.

Two answer shapes are understood:

* tool-call form: unordered ``create_date_stop`` / ``create_travel_leg`` calls,
  with the plan title on the first line of the accompanying text;
* JSON form: one ``{"planTitle": ..., "stops": [...]}`` object embedded
  anywhere in the text.

The tool-call form wins whenever the model issued at least one call.
"""
from __future__ import annotations

import json
import logging
import math
from typing import Any, Dict, List, Mapping, Optional

from pydantic import TypeAdapter, ValidationError

from datemapz.core.errors import PlanGenerationError, PlanParseError
from datemapz.core.schemas import (
    CreateDateStopCall,
    CreateTravelLegCall,
    GenerationResult,
    Itinerary,
    ItineraryStop,
    PlanningMode,
    StopDraft,
    ToolCall,
    TravelLegDraft,
)

logger = logging.getLogger(__name__)

DEFAULT_MIN_STOPS = 2
NO_VIBE_TITLE = "Your Day Plan"

_TOOL_CALL_ADAPTER: TypeAdapter = TypeAdapter(ToolCall)
_TITLE_MARKERS = "#*_`>\"' "


def default_title(vibe: Optional[str]) -> str:
    vibe = (vibe or "").strip()
    return f"A Great {vibe} Date" if vibe else NO_VIBE_TITLE


def plan_title_from_text(text: Optional[str]) -> Optional[str]:
    """Return the first non-empty line of ``text`` without markdown decoration."""

    for line in (text or "").splitlines():
        cleaned = line.strip().strip(_TITLE_MARKERS).strip()
        if cleaned:
            return cleaned
    return None


def extract_json_object(text: Optional[str]) -> Dict[str, Any]:
    """Parse the span between the first ``{`` and the last ``}`` of ``text``."""

    text = text or ""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        raise PlanParseError("AI response did not contain a JSON object")

    try:
        payload = json.loads(text[start : end + 1])
    except json.JSONDecodeError as exc:
        raise PlanParseError(f"AI response contained malformed JSON: {exc.msg}") from exc

    return payload


def _pick(data: Dict[str, Any], alias: str, name: str) -> Any:
    return data[alias] if alias in data else data.get(name)


def _coerce_coordinate(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _coerce_stop_number(value: Any) -> Optional[int]:
    """Integral stop numbers only; anything else leaves the stop unnumbered."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _coerce_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    return value if isinstance(value, str) else str(value)


class PlanAssembler:
    """Pure transformation from :class:`GenerationResult` to :class:`Itinerary`."""

    def __init__(self, min_stops: Optional[Mapping[PlanningMode, int]] = None) -> None:
        self.min_stops: Dict[PlanningMode, int] = dict(min_stops or {})

    def minimum_for(self, mode: PlanningMode) -> int:
        return self.min_stops.get(mode, DEFAULT_MIN_STOPS)

    def assemble(self, generation: GenerationResult, mode: PlanningMode, vibe: Optional[str]) -> Itinerary:
        if generation.tool_calls:
            return self.assemble_tool_calls(generation, mode, vibe)
        return self.assemble_json(generation.text, vibe)

    def assemble_tool_calls(
        self,
        generation: GenerationResult,
        mode: PlanningMode,
        vibe: Optional[str],
    ) -> Itinerary:
        stops: List[StopDraft] = []
        legs: Dict[int, TravelLegDraft] = {}

        for raw_call in generation.tool_calls:
            try:
                call = _TOOL_CALL_ADAPTER.validate_python(raw_call)
            except ValidationError as exc:
                logger.warning(f"Dropping malformed tool call {raw_call.get('name')!r}: {exc.error_count()} errors")
                continue

            if isinstance(call, CreateDateStopCall):
                stops.append(call.args)
            elif isinstance(call, CreateTravelLegCall):
                # First leg per origin wins.
                legs.setdefault(call.args.from_stop, call.args)

        minimum = self.minimum_for(mode)
        if len(stops) < minimum:
            logger.error(f"Model produced {len(stops)} valid stops, {minimum} required for {mode.value}")
            raise PlanGenerationError("AI failed to generate a valid plan")

        stops.sort(key=lambda draft: draft.stop_number)
        itinerary = Itinerary(
            plan_title=plan_title_from_text(generation.text) or default_title(vibe),
            stops=[ItineraryStop.from_draft(draft, legs.get(draft.stop_number)) for draft in stops],
        )
        logger.info(f"Assembled {len(itinerary.stops)} stops and {len(legs)} travel legs")
        return itinerary

    def assemble_json(self, text: str, vibe: Optional[str]) -> Itinerary:
        payload = extract_json_object(text)

        raw_stops = payload.get("stops")
        if not isinstance(raw_stops, list):
            raw_stops = []

        stops: List[ItineraryStop] = []
        for raw_stop in raw_stops:
            stop = self._parse_json_stop(raw_stop)
            if stop is not None:
                stops.append(stop)

        if not stops:
            raise PlanGenerationError("AI failed to generate a valid plan")

        stops.sort(key=lambda stop: (stop.stop_number is None, stop.stop_number or 0))

        title = payload.get("planTitle")
        if not isinstance(title, str) or not title.strip():
            title = default_title(vibe)

        logger.info(f"Parsed {len(stops)} stops from JSON answer ({len(raw_stops) - len(stops)} dropped)")
        return Itinerary(plan_title=title.strip(), stops=stops)

    @staticmethod
    def _parse_json_stop(raw_stop: Any) -> Optional[ItineraryStop]:
        if not isinstance(raw_stop, dict):
            return None

        lat = _coerce_coordinate(raw_stop.get("lat"))
        lng = _coerce_coordinate(raw_stop.get("lng"))
        if lat is None or lng is None:
            logger.warning(f"Dropping stop {raw_stop.get('name')!r}: coordinates are not finite numbers")
            return None

        leg = _pick(raw_stop, "travelToNext", "travel_to_next")
        try:
            travel_to_next = TravelLegDraft.model_validate(leg) if leg is not None else None
        except ValidationError:
            logger.warning(f"Ignoring malformed travelToNext on stop {raw_stop.get('name')!r}")
            travel_to_next = None

        category = raw_stop["category"] if "category" in raw_stop else raw_stop.get("type")
        return ItineraryStop(
            stop_number=_coerce_stop_number(_pick(raw_stop, "stopNumber", "stop_number")),
            name=_coerce_text(raw_stop.get("name")),
            description=_coerce_text(raw_stop.get("description")),
            address=_coerce_text(raw_stop.get("address")),
            lat=lat,
            lng=lng,
            category=category,
            start_time=_coerce_text(_pick(raw_stop, "startTime", "start_time")),
            duration=_coerce_text(raw_stop.get("duration")),
            travel_to_next=travel_to_next,
        )
