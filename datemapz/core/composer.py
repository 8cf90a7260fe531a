"""Build the instruction payloads sent to the chat model."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from datemapz.core.candidates import CandidateSet
from datemapz.core.prompts import (
    adult_instruction,
    all_ages_instruction,
    curated_plan_prompt,
    curated_user_message,
    discover_plan_prompt,
    discover_user_message,
    json_output_instructions,
    simple_plan_prompt,
    tool_output_instructions,
)
from datemapz.core.schemas import Category, Coordinates, PlanningMode, PlanPrompt
from datemapz.core.search_params import radius_for

logger = logging.getLogger(__name__)

CREATE_DATE_STOP = "create_date_stop"
CREATE_TRAVEL_LEG = "create_travel_leg"

OUTPUT_STYLES = ("tools", "json")

CREATE_DATE_STOP_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": CREATE_DATE_STOP,
        "description": "Add one stop to the date plan. Call once per stop.",
        "parameters": {
            "type": "object",
            "properties": {
                "stopNumber": {"type": "integer", "description": "1-based position of the stop in the plan"},
                "name": {"type": "string", "description": "Venue name"},
                "description": {"type": "string", "description": "Why this stop fits the date, 1-2 sentences"},
                "address": {"type": "string", "description": "Street address of the venue"},
                "lat": {"type": "number", "description": "Latitude in decimal degrees"},
                "lng": {"type": "number", "description": "Longitude in decimal degrees"},
                "category": {
                    "type": "string",
                    "enum": [category.value for category in Category],
                    "description": "Venue category",
                },
                "startTime": {"type": "string", "description": "Suggested arrival time, e.g. '7:00 PM'"},
                "duration": {"type": "string", "description": "Suggested time spent, e.g. '1.5 hours'"},
            },
            "required": [
                "stopNumber",
                "name",
                "description",
                "address",
                "lat",
                "lng",
                "category",
                "startTime",
                "duration",
            ],
        },
    },
}

CREATE_TRAVEL_LEG_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": CREATE_TRAVEL_LEG,
        "description": "Describe the trip from one stop to the next. Call once per consecutive pair of stops.",
        "parameters": {
            "type": "object",
            "properties": {
                "fromStop": {"type": "integer", "description": "stopNumber the leg starts at"},
                "toStop": {"type": "integer", "description": "stopNumber the leg ends at"},
                "transportMode": {"type": "string", "description": "e.g. Walking, Transit, Driving"},
                "travelTime": {"type": "string", "description": "Estimated travel time, e.g. '10 minutes'"},
            },
            "required": ["fromStop", "toStop", "transportMode", "travelTime"],
        },
    },
}

PLAN_TOOLS: List[Dict[str, Any]] = [CREATE_DATE_STOP_TOOL, CREATE_TRAVEL_LEG_TOOL]


def _age_instruction(is_adult: bool) -> str:
    return adult_instruction if is_adult else all_ages_instruction


class PlanComposer:
    """Compose curated, discover and simple prompts.

    With the ``tools`` output style the model is handed the two plan tools and
    told to call them once per stop/leg; with ``json`` it gets no tools and is
    asked for a single JSON object instead.
    """

    def __init__(self, *, output_style: str = "tools", stop_count: int = 3) -> None:
        if output_style not in OUTPUT_STYLES:
            raise ValueError(f"Unsupported output_style '{output_style}'")
        self.output_style = output_style
        self.stop_count = stop_count

    @property
    def tools(self) -> List[Dict[str, Any]]:
        return list(PLAN_TOOLS) if self.output_style == "tools" else []

    @property
    def output_instructions(self) -> str:
        return tool_output_instructions if self.output_style == "tools" else json_output_instructions

    def compose_curated(
        self,
        candidates: CandidateSet,
        vibe: Optional[str],
        transport_mode: Optional[str],
        is_adult: bool,
    ) -> PlanPrompt:
        system_instruction = curated_plan_prompt.format(
            stop_count=self.stop_count,
            vibe=vibe or "fun",
            transport_mode=transport_mode or "any means of transport",
            age_instruction=_age_instruction(is_adult),
            places=candidates.to_prompt_json(),
            output_instructions=self.output_instructions,
        )
        logger.debug(f"Curated prompt built with {len(candidates)} candidates")
        return PlanPrompt(
            mode=PlanningMode.CURATED,
            system_instruction=system_instruction.strip(),
            user_message=curated_user_message,
            tools=self.tools,
        )

    def compose_discover(
        self,
        area: str,
        location: Coordinates,
        vibe: Optional[str],
        transport_mode: Optional[str],
        is_adult: bool,
    ) -> PlanPrompt:
        system_instruction = discover_plan_prompt.format(
            area=area,
            lat=location.lat,
            lng=location.lng,
            radius_km=radius_for(transport_mode) / 1000,
            stop_count=self.stop_count,
            vibe=vibe or "fun",
            transport_mode=transport_mode or "any means of transport",
            age_instruction=_age_instruction(is_adult),
            output_instructions=self.output_instructions,
        )
        return PlanPrompt(
            mode=PlanningMode.DISCOVER,
            system_instruction=system_instruction.strip(),
            user_message=discover_user_message,
            tools=self.tools,
        )

    def compose_simple(self, prompt: str) -> PlanPrompt:
        system_instruction = simple_plan_prompt.format(output_instructions=self.output_instructions)
        return PlanPrompt(
            mode=PlanningMode.SIMPLE,
            system_instruction=system_instruction.strip(),
            user_message=prompt.strip(),
            tools=self.tools,
        )
