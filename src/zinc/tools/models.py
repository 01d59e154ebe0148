"""Parameter models for the built-in tools.

Each model doubles as the tool's input schema: ``model_json_schema()`` is
what ``tools/list`` advertises, and strict validation against the same model
is what ``tools/call`` enforces.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ToolParams(BaseModel):
    """Base for tool parameter models — strict types, extras ignored."""

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)


class ReadFileParams(ToolParams):
    path: str = Field(..., description="The file path to read.")


class WriteFileParams(ToolParams):
    path: str = Field(..., description="The file path to write to.")
    content: str = Field(..., description="The content to write.")


class ListFilesParams(ToolParams):
    path: str = Field(..., description="The directory path to list.")


class RunCommandParams(ToolParams):
    command: str = Field(..., description="The executable to run.")
    args: list[str] = Field(default_factory=list, description="The arguments for the command.")
