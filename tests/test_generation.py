"""Tests for the chat model invocation wrapper."""
from __future__ import annotations

import asyncio
from typing import Any, Dict, List

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from datemapz.core.errors import PlanGenerationError
from datemapz.core.generation import PlanGenerator, message_text
from datemapz.core.schemas import PlanningMode, PlanPrompt


class StubLLM:
    """Captures bound tools and messages and yields a canned AIMessage."""

    def __init__(self, response: Any = None, delay: float = 0.0, error: Exception | None = None) -> None:
        self.response = response if response is not None else AIMessage(content="")
        self.delay = delay
        self.error = error
        self.bound_tools: List[List[Dict[str, Any]]] = []
        self.calls: List[List[Any]] = []

    def bind_tools(self, tools: List[Dict[str, Any]]) -> "StubLLM":
        self.bound_tools.append(tools)
        return self

    async def ainvoke(self, messages: List[Any]) -> Any:
        self.calls.append(messages)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.response


def _prompt(tools: List[Dict[str, Any]] | None = None) -> PlanPrompt:
    return PlanPrompt(
        mode=PlanningMode.CURATED,
        system_instruction="You are a planner.",
        user_message="Plan it.",
        tools=tools or [],
    )


@pytest.mark.asyncio
async def test_generate_binds_tools_and_collects_calls():
    response = AIMessage(
        content="Starlit Evening",
        tool_calls=[
            {"name": "create_date_stop", "args": {"stopNumber": 1}, "id": "call-1"},
            {"name": "create_travel_leg", "args": {"fromStop": 1}, "id": "call-2"},
        ],
    )
    llm = StubLLM(response)
    tools = [{"type": "function", "function": {"name": "create_date_stop"}}]

    result = await PlanGenerator(llm).generate(_prompt(tools))

    assert llm.bound_tools == [tools]
    messages = llm.calls[0]
    assert isinstance(messages[0], SystemMessage)
    assert isinstance(messages[1], HumanMessage)
    assert messages[1].content == "Plan it."
    assert result.text == "Starlit Evening"
    assert result.tool_calls == [
        {"name": "create_date_stop", "args": {"stopNumber": 1}},
        {"name": "create_travel_leg", "args": {"fromStop": 1}},
    ]


@pytest.mark.asyncio
async def test_generate_without_tools_skips_binding():
    llm = StubLLM(AIMessage(content='{"planTitle": "X", "stops": []}'))

    result = await PlanGenerator(llm).generate(_prompt())

    assert llm.bound_tools == []
    assert result.tool_calls == []
    assert result.text.startswith('{"planTitle"')


@pytest.mark.asyncio
async def test_generate_wraps_model_errors():
    llm = StubLLM(error=ValueError("quota exceeded"))

    with pytest.raises(PlanGenerationError, match="quota exceeded"):
        await PlanGenerator(llm).generate(_prompt())


@pytest.mark.asyncio
async def test_generate_times_out():
    llm = StubLLM(delay=1.0)

    with pytest.raises(PlanGenerationError, match="timed out"):
        await PlanGenerator(llm, timeout_s=0.01).generate(_prompt())


def test_message_text_flattens_content_parts():
    assert message_text("plain") == "plain"
    assert message_text(None) == ""
    assert message_text([{"type": "text", "text": "Title"}, {"type": "image_url"}, "more"]) == "Title\nmore"
    assert message_text({"type": "text", "text": "solo"}) == "solo"
