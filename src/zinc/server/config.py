"""Server configuration — protocol policy switches and logging level."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from zinc import __version__

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigError(Exception):
    """Raised when a configuration file fails parsing or validation."""


class ServerConfig(BaseModel):
    """Configuration for the protocol server."""

    server_name: str = Field(default="zinc-mcp-server", description="Name reported by initialize.")
    server_version: str = Field(default=__version__, description="Version reported by initialize.")
    answer_notifications: bool = Field(
        default=False,
        description="Answer requests that carry no id (legacy callers expect a reply).",
    )
    tool_errors_as_results: bool = Field(
        default=False,
        description="Report handler failures as isError results instead of JSON-RPC errors.",
    )
    log_level: LogLevel = Field(default="WARNING", description="Diagnostic log level (stderr).")
    otlp_endpoint: str | None = Field(default=None, description="OTLP/gRPC endpoint receiving tracing spans.")


def load_config(path: Path) -> ServerConfig:
    """Read a YAML config file, interpolate env vars, and validate.

    Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
    using :func:`os.path.expandvars` before YAML parsing.  An empty file
    yields the defaults.

    Raises:
        ConfigError: On read errors, YAML parse errors or schema validation
            failures.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc

    expanded = os.path.expandvars(raw)

    try:
        data: Any = yaml.safe_load(expanded)
    except yaml.YAMLError as exc:
        raise ConfigError(f"YAML parse error: {exc}") from exc

    if data is None:
        return ServerConfig()
    if not isinstance(data, dict):
        raise ConfigError("Config YAML must be a mapping")

    try:
        return ServerConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
