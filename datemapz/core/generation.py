"""Single-shot chat model invocation for plan generation."""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, List

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from datemapz.core.errors import PlanGenerationError
from datemapz.core.schemas import GenerationResult, PlanPrompt

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 60.0


def message_text(content: Any) -> str:
    """Flatten an ``AIMessage.content`` value into plain text."""

    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, dict):
        if content.get("type") == "text":
            return str(content.get("text", ""))
        return json.dumps(content)
    if isinstance(content, list):
        text_chunks: List[str] = []
        for chunk in content:
            if isinstance(chunk, str):
                text_chunks.append(chunk)
            elif isinstance(chunk, dict) and chunk.get("type") == "text":
                text_chunks.append(str(chunk.get("text", "")))
        return "\n".join(text_chunks)
    return str(content)


def _normalise_tool_calls(raw_calls: Any) -> List[Dict[str, Any]]:
    calls: List[Dict[str, Any]] = []
    for call in raw_calls or []:
        if isinstance(call, dict):
            calls.append({"name": call.get("name"), "args": call.get("args") or {}})
    return calls


class PlanGenerator:
    """Send a :class:`PlanPrompt` to the chat model and collect its answer.

    Any failure of the call, including the timeout, is reported as
    :class:`PlanGenerationError`; the raw answer is not interpreted here.
    """

    def __init__(self, llm: BaseChatModel, *, timeout_s: float = DEFAULT_TIMEOUT_S) -> None:
        self.llm = llm
        self.timeout_s = timeout_s

    async def generate(self, prompt: PlanPrompt) -> GenerationResult:
        runnable = self.llm.bind_tools(prompt.tools) if prompt.tools else self.llm
        messages = [
            SystemMessage(content=prompt.system_instruction),
            HumanMessage(content=prompt.user_message),
        ]

        try:
            response = await asyncio.wait_for(runnable.ainvoke(messages), timeout=self.timeout_s)
        except asyncio.TimeoutError as exc:
            logger.error(f"Plan generation timed out after {self.timeout_s}s")
            raise PlanGenerationError("AI request timed out") from exc
        except Exception as exc:
            logger.error(f"Plan generation failed: {exc}")
            raise PlanGenerationError(f"AI request failed: {exc}") from exc

        result = GenerationResult(
            text=message_text(getattr(response, "content", None)),
            tool_calls=_normalise_tool_calls(getattr(response, "tool_calls", None)),
        )
        logger.info(
            f"Model answered with {len(result.tool_calls)} tool calls and {len(result.text)} chars of text"
        )
        return result
