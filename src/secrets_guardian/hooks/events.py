"""Hook event payloads and content selection.

Claude Code serialises one event per hook invocation. The payload shape
decides which part of it is scanned:

- tool invocations (PreToolUse/PostToolUse): the tool's primary text field
- conversation events (Stop/SubagentStop): assistant message text only
- user prompts (UserPromptSubmit): the prompt
- notifications: nothing
- anything else: the whole payload
"""

import json
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Union

from secrets_guardian.core.secret_scanner.scanner import normalize_input


class EventParseError(ValueError):
    """Raised when the hook input is not valid JSON."""


@dataclass(frozen=True)
class ToolInvocation:
    tool_name: str
    tool_input: Any
    hook_event_name: Optional[str] = None

    event_type: ClassVar[str] = "PreToolUse/PostToolUse"


@dataclass(frozen=True)
class ConversationEvent:
    messages: tuple[Any, ...]
    hook_event_name: Optional[str] = None

    event_type: ClassVar[str] = "Stop/SubagentStop"


@dataclass(frozen=True)
class UserPrompt:
    prompt: Any
    hook_event_name: Optional[str] = None

    event_type: ClassVar[str] = "UserPromptSubmit"


@dataclass(frozen=True)
class Notification:
    notification_type: Any
    hook_event_name: Optional[str] = None

    event_type: ClassVar[str] = "Notification"


@dataclass(frozen=True)
class UnknownEvent:
    payload: Any
    hook_event_name: Optional[str] = None

    event_type: ClassVar[str] = "Unknown"


HookEvent = Union[ToolInvocation, ConversationEvent, UserPrompt, Notification, UnknownEvent]

# Tools whose input is read field by field.
FIELD_TOOLS = frozenset({"Write", "Edit", "MultiEdit", "Bash", "Task"})


def event_label(event: HookEvent) -> str:
    """Name reported in diagnostics, preferring the host's own event name."""
    return event.hook_event_name or event.event_type


def event_from_payload(data: Any) -> HookEvent:
    """Classify a decoded payload into one of the event variants.

    Raises:
        EventParseError: If a file or shell tool arrives with a null
            ``tool_input``.
    """
    if not isinstance(data, dict):
        return UnknownEvent(payload=data)

    hook_event_name = data.get("hook_event_name")
    if not isinstance(hook_event_name, str):
        hook_event_name = None

    # Older Claude Code releases sent camelCase keys.
    tool_name = data.get("tool_name", data.get("toolName"))
    if tool_name is not None and ("tool_input" in data or "toolInput" in data):
        tool_input = data["tool_input"] if "tool_input" in data else data["toolInput"]
        tool_name = str(tool_name)
        if tool_input is None and tool_name in FIELD_TOOLS:
            raise EventParseError(f"Missing tool_input for {tool_name} event")
        return ToolInvocation(tool_name, tool_input, hook_event_name)

    messages = data.get("messages")
    if isinstance(messages, list):
        return ConversationEvent(tuple(messages), hook_event_name)

    if data.get("prompt"):
        return UserPrompt(data["prompt"], hook_event_name)

    if "notification_type" in data:
        return Notification(data["notification_type"], hook_event_name)

    return UnknownEvent(data, hook_event_name)


def parse_event(raw: str) -> HookEvent:
    """Decode a hook payload.

    Raises:
        EventParseError: If ``raw`` is not valid JSON.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise EventParseError(f"Invalid hook payload: {e}") from e
    return event_from_payload(data)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return normalize_input(value)


def _first_field(fields: dict[str, Any], *names: str) -> str:
    for name in names:
        value = fields.get(name)
        if value:
            return _as_text(value)
    return ""


def _tool_content(tool_name: str, tool_input: Any) -> str:
    if not isinstance(tool_input, dict):
        return _as_text(tool_input)

    if tool_name == "Write":
        return _first_field(tool_input, "content", "file_content")
    if tool_name == "Edit":
        return _first_field(tool_input, "new_string", "new_content")
    if tool_name == "MultiEdit":
        edits = tool_input.get("edits")
        if not isinstance(edits, list):
            return normalize_input(tool_input)
        return "\n".join(
            _first_field(edit, "new_string", "new_content") if isinstance(edit, dict) else ""
            for edit in edits
        )
    if tool_name == "Bash":
        return _first_field(tool_input, "command")
    if tool_name == "Task":
        return _first_field(tool_input, "prompt")
    return normalize_input(tool_input)


def _message_text(message: Any) -> str:
    content = message.get("content")
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "\n".join(
            segment["text"]
            if isinstance(segment, dict) and isinstance(segment.get("text"), str)
            else ""
            for segment in content
        )
    return ""


def content_to_scan(event: HookEvent) -> Optional[str]:
    """Select the text to scan for an event.

    Returns:
        The text to scan, or None when the event is not scanned.

    Raises:
        TypeError: For an object that is not a known event variant.
    """
    if isinstance(event, ToolInvocation):
        return _tool_content(event.tool_name, event.tool_input)
    if isinstance(event, ConversationEvent):
        return "\n".join(
            _message_text(m)
            for m in event.messages
            if isinstance(m, dict) and m.get("role") == "assistant"
        )
    if isinstance(event, UserPrompt):
        return _as_text(event.prompt)
    if isinstance(event, Notification):
        return None
    if isinstance(event, UnknownEvent):
        return normalize_input(event.payload)
    raise TypeError(f"Unhandled hook event type: {type(event).__name__}")
