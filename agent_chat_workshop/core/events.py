"""
Typed data model for chat messages, stream events and resume commands.

The agent runtime emits loosely shaped chunks; the classifier turns every
chunk it understands into one of the event models below so that consumers
can dispatch on ``kind`` instead of probing optional fields.
"""

from enum import Enum
from typing import Any, Annotated, Dict, List, Literal, Optional, Union
from uuid import uuid4

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from .errors import UnknownResumeCommandError


class ChatMessage(BaseModel):
    """A single rendered chat turn."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    role: Literal["user", "assistant"]
    content: str = ""

    def append(self, text: str) -> None:
        """Append streamed text to the message content."""
        self.content += text


class EventKind(str, Enum):
    """Discriminator values for stream events"""
    INTERRUPT = "interrupt"
    AGENT = "agent"
    TOOL = "tool"
    SUB_AGENT = "sub_agent"
    STEP = "step"
    PROGRESS = "progress"


class TextEvent(BaseModel):
    """Common fields of events that carry the text of one message."""

    message_id: Optional[str] = None
    blocks: List[str] = Field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(self.blocks)


class InterruptEvent(BaseModel):
    """The run paused and is waiting for a human decision."""

    kind: Literal[EventKind.INTERRUPT] = EventKind.INTERRUPT
    prompt: str
    interrupt_id: Optional[str] = None


class AgentTextEvent(TextEvent):
    """Text produced by the primary agent node."""

    kind: Literal[EventKind.AGENT] = EventKind.AGENT


class ToolResultEvent(TextEvent):
    """Output of a tool call; ``is_error`` marks validation or runtime failures."""

    kind: Literal[EventKind.TOOL] = EventKind.TOOL
    tool_name: Optional[str] = None
    is_error: bool = False


class SubAgentEvent(TextEvent):
    """Text produced by a named agent in a supervisor team or swarm."""

    kind: Literal[EventKind.SUB_AGENT] = EventKind.SUB_AGENT
    agent_name: str


class IntermediateStepEvent(BaseModel):
    """A tool action and its observation, from agents that report intermediate steps."""

    kind: Literal[EventKind.STEP] = EventKind.STEP
    tool: Optional[str] = None
    tool_input: Any = None
    observation: Optional[str] = None


class ProgressEvent(BaseModel):
    """Free-form progress update written by a tool through the stream writer."""

    kind: Literal[EventKind.PROGRESS] = EventKind.PROGRESS
    text: str


StreamEvent = Annotated[
    Union[
        InterruptEvent,
        AgentTextEvent,
        ToolResultEvent,
        SubAgentEvent,
        IntermediateStepEvent,
        ProgressEvent,
    ],
    Field(discriminator="kind"),
]


class ApproveCommand(BaseModel):
    """Continue the paused action as proposed."""

    type: Literal["approve"] = "approve"


class EditCommand(BaseModel):
    """Continue the paused action with some arguments replaced."""

    type: Literal["edit"] = "edit"
    args: Dict[str, Any] = Field(default_factory=dict)


ResumeCommand = Annotated[Union[ApproveCommand, EditCommand], Field(discriminator="type")]

_resume_adapter = TypeAdapter(ResumeCommand)


def parse_resume_command(value: Any) -> Union[ApproveCommand, EditCommand]:
    """
    Validate a resume payload coming back from ``interrupt()``.

    Args:
        value: A command model or its dict form, e.g. ``{"type": "approve"}``

    Returns:
        The matching command model

    Raises:
        UnknownResumeCommandError: If the payload has an unknown ``type``
    """
    if isinstance(value, (ApproveCommand, EditCommand)):
        return value
    try:
        return _resume_adapter.validate_python(value)
    except ValidationError as e:
        command_type = value.get("type") if isinstance(value, dict) else value
        raise UnknownResumeCommandError(f"Unknown response type: {command_type}") from e
