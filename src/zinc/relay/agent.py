"""MessageRelay — forwards user text to a completion API with tool access.

The relay offers the registry's tools to the model as callable functions.
If the model answers with a tool call, the relay runs the tool directly
through the registry (no protocol server involved) and returns the tool's
text as the reply.  Otherwise the model's text is the reply.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import litellm

from zinc.protocols.errors import ProtocolError
from zinc.utils.telemetry import ATTR_MODEL, ATTR_TOOL_NAME, get_tracer

if TYPE_CHECKING:
    from zinc.relay.settings import Settings
    from zinc.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

_tracer = get_tracer(__name__)

NO_RESPONSE = "No response"


class RelayError(Exception):
    """The relay could not produce a reply."""


class MessageRelay:
    """Async single-turn relay between a user and a tool-calling model.

    Usage::

        relay = MessageRelay(SettingsStore().load(), build_default_registry())
        reply = await relay.handle_message("list the files in /tmp")
    """

    def __init__(self, settings: Settings, registry: ToolRegistry) -> None:
        self._settings = settings
        self._registry = registry

    async def handle_message(self, message: str) -> str:
        """Send *message* to the model and return the reply text.

        Raises:
            RelayError: The relay is disabled, the completion call failed,
                or the requested tool failed.
        """
        if not self._settings.ai_enabled:
            raise RelayError("AI is disabled")

        with _tracer.start_as_current_span("relay.handle_message") as span:
            span.set_attribute(ATTR_MODEL, self._settings.model)
            call_kwargs: dict[str, Any] = {
                "model": self._settings.model,
                "messages": [{"role": "user", "content": message}],
                "tools": self._registry.function_schemas(),
            }
            if self._settings.api_key:
                call_kwargs["api_key"] = self._settings.api_key

            try:
                response = await litellm.acompletion(**call_kwargs)  # pyright: ignore[reportUnknownMemberType]
            except Exception as exc:
                raise RelayError(f"Completion request failed: {exc}") from exc

            reply = response.choices[0].message
            for tool_call in reply.tool_calls or []:
                name = tool_call.function.name
                if name not in self._registry:
                    logger.warning("Model requested unknown tool %s", name)
                    continue
                span.set_attribute(ATTR_TOOL_NAME, name)
                return await self._run_tool(name, tool_call.function.arguments)

            return reply.content or NO_RESPONSE

    async def _run_tool(self, name: str, raw_arguments: str | None) -> str:
        try:
            arguments = json.loads(raw_arguments or "{}")
        except json.JSONDecodeError as exc:
            raise RelayError(f"Malformed arguments for {name}: {exc}") from exc
        try:
            return await self._registry.invoke(name, arguments)
        except ProtocolError as exc:
            raise RelayError(exc.message) from exc
