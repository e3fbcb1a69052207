"""Claude Code hook integration."""

from secrets_guardian.hooks.events import (
    ConversationEvent,
    EventParseError,
    HookEvent,
    Notification,
    ToolInvocation,
    UnknownEvent,
    UserPrompt,
    content_to_scan,
    event_from_payload,
    parse_event,
)
from secrets_guardian.hooks.runtime import HookResolution, read_payload

__all__ = [
    "ConversationEvent",
    "EventParseError",
    "HookEvent",
    "HookResolution",
    "Notification",
    "ToolInvocation",
    "UnknownEvent",
    "UserPrompt",
    "content_to_scan",
    "event_from_payload",
    "parse_event",
    "read_payload",
]
