"""zinc — a line-delimited JSON-RPC server exposing local file and process tools."""

from __future__ import annotations

__version__ = "0.1.0"
