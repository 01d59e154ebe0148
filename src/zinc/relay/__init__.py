"""Message relay — the completion-API caller of the built-in tools."""

from zinc.relay.agent import MessageRelay, RelayError
from zinc.relay.settings import Settings, SettingsError, SettingsStore

__all__ = [
    "MessageRelay",
    "RelayError",
    "Settings",
    "SettingsError",
    "SettingsStore",
]
