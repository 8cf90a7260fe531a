from typing import Any, Optional

from langgraph.graph import END, START, StateGraph

from datemapz.core.assembler import PlanAssembler
from datemapz.core.candidates import CandidateLocationFinder
from datemapz.core.composer import PlanComposer
from datemapz.core.generation import PlanGenerator
from datemapz.core.location import LocationResolver
from datemapz.core.nodes import (
    make_assemble_plan_node,
    make_compose_plan_node,
    make_describe_area_node,
    make_find_candidates_node,
    make_generate_plan_node,
    make_resolve_location_node,
    route_after_location,
    route_from_start,
)
from datemapz.core.schemas import PlanContext, PlanState


def build_planning_graph(
    *,
    resolver: LocationResolver,
    finder: Optional[CandidateLocationFinder],
    composer: PlanComposer,
    generator: PlanGenerator,
    assembler: PlanAssembler,
    min_candidates: int = 3,
) -> Any:
    """Wire all nodes into a compiled LangGraph state machine."""

    graph_builder = StateGraph(state_schema=PlanState, context_schema=PlanContext)

    graph_builder.add_node("resolve_location", make_resolve_location_node(resolver))
    graph_builder.add_node("find_candidates", make_find_candidates_node(finder, min_candidates=min_candidates))
    graph_builder.add_node("describe_area", make_describe_area_node(resolver))
    graph_builder.add_node("compose_plan", make_compose_plan_node(composer))
    graph_builder.add_node("generate_plan", make_generate_plan_node(generator))
    graph_builder.add_node("assemble_plan", make_assemble_plan_node(assembler))

    graph_builder.add_conditional_edges(
        START,
        route_from_start,
        ["resolve_location", "compose_plan"],
    )
    graph_builder.add_conditional_edges(
        "resolve_location",
        route_after_location,
        ["find_candidates", "describe_area"],
    )

    graph_builder.add_edge("find_candidates", "compose_plan")
    graph_builder.add_edge("describe_area", "compose_plan")
    graph_builder.add_edge("compose_plan", "generate_plan")
    graph_builder.add_edge("generate_plan", "assemble_plan")
    graph_builder.add_edge("assemble_plan", END)

    return graph_builder.compile()
