"""Shared helpers for relay tests."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock


def make_tool_call(name: str, arguments: dict[str, Any] | str) -> MagicMock:
    """Create a ``MagicMock`` shaped like a LiteLLM tool call."""
    tool_call = MagicMock()
    tool_call.id = "call_1"
    tool_call.function.name = name
    tool_call.function.arguments = arguments if isinstance(arguments, str) else json.dumps(arguments)
    return tool_call


def make_mock_litellm_response(
    content: str = "",
    tool_calls: list[Any] | None = None,
    finish_reason: str = "stop",
    model: str = "openrouter/anthropic/claude-3-haiku",
) -> MagicMock:
    """Create a ``MagicMock`` matching LiteLLM's response structure."""
    message = MagicMock()
    message.content = content or None
    message.tool_calls = tool_calls

    choice = MagicMock()
    choice.message = message
    choice.finish_reason = finish_reason

    response = MagicMock()
    response.choices = [choice]
    response.model = model

    return response
