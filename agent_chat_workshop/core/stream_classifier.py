"""
Classifier that turns raw agent-runtime stream chunks into typed events.

LangGraph emits one mapping per node update (``{"agent": {"messages": [...]}}``),
a ``"__interrupt__"`` entry when a run pauses, and ``(mode, payload)`` tuples
when more than one stream mode is requested. Messages can be LangChain
message objects or plain mappings, so every field is read through
``read_field``.
"""

import json
import logging
from typing import Any, Iterable, List, Optional, Sequence

from .events import (
    AgentTextEvent,
    InterruptEvent,
    IntermediateStepEvent,
    ProgressEvent,
    StreamEvent,
    SubAgentEvent,
    ToolResultEvent,
)

logger = logging.getLogger(__name__)

INTERRUPT_KEY = "__interrupt__"
STEPS_KEY = "intermediate_steps"
DEFAULT_AGENT_CHANNEL = "agent"
DEFAULT_TOOLS_CHANNEL = "tools"


def read_field(obj: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a mapping or an object attribute."""
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


def text_blocks(content: Any) -> List[str]:
    """
    Extract the plain-text segments of a message content value.

    A string is a single block. A list holds typed blocks; only blocks tagged
    ``"text"`` (or bare strings) are kept, so ``tool_use`` blocks vanish.
    Empty segments are dropped.
    """
    if content is None:
        return []
    if isinstance(content, str):
        return [content] if content else []
    if isinstance(content, (list, tuple)):
        blocks = []
        for block in content:
            if isinstance(block, str):
                if block:
                    blocks.append(block)
            elif read_field(block, "type") == "text":
                text = read_field(block, "text")
                if text:
                    blocks.append(text)
        return blocks
    return []


def _interrupt_prompt(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        for key in ("prompt", "question", "message"):
            if isinstance(value.get(key), str):
                return value[key]
    return json.dumps(value, default=str)


class ChunkClassifier:
    """
    Classify stream chunks in a fixed priority order.

    The interrupt signal wins outright. Otherwise events are produced for the
    primary agent channel, the tools channel, legacy intermediate steps and
    finally each named sub-agent channel, in that order.
    """

    def __init__(
        self,
        agent_channel: Optional[str] = DEFAULT_AGENT_CHANNEL,
        tools_channel: Optional[str] = DEFAULT_TOOLS_CHANNEL,
        sub_agents: Optional[Sequence[str]] = (),
    ):
        """
        Args:
            agent_channel: Node name of the primary agent, or None if the graph has none
            tools_channel: Node name of the tool executor, or None
            sub_agents: Named agent channels to merge, in emission order. ``None``
                treats every other key carrying messages as a sub-agent channel.
        """
        self.agent_channel = agent_channel
        self.tools_channel = tools_channel
        self.sub_agents = tuple(sub_agents) if sub_agents is not None else None

    def classify(self, chunk: Any) -> List[StreamEvent]:
        """Return the events found in ``chunk``; unknown shapes yield nothing."""
        if isinstance(chunk, tuple):
            return self._classify_tuple(chunk)
        if not isinstance(chunk, dict):
            logger.debug("Ignoring unrecognized chunk of type %s", type(chunk).__name__)
            return []
        return self._classify_update(chunk)

    def _classify_tuple(self, chunk: tuple) -> List[StreamEvent]:
        # (mode, payload) or, with subgraphs, (namespace, mode, payload)
        if len(chunk) == 3:
            chunk = chunk[1:]
        if len(chunk) != 2 or not isinstance(chunk[0], str):
            logger.debug("Ignoring unrecognized tuple chunk of length %d", len(chunk))
            return []
        mode, payload = chunk
        if mode == "custom":
            text = payload if isinstance(payload, str) else read_field(payload, "text")
            return [ProgressEvent(text=text)] if text else []
        if mode == "updates":
            return self.classify(payload)
        logger.debug("Ignoring chunk for stream mode %r", mode)
        return []

    def _classify_update(self, chunk: dict) -> List[StreamEvent]:
        if INTERRUPT_KEY in chunk:
            return self._interrupts(chunk[INTERRUPT_KEY])

        events: List[StreamEvent] = []
        if self.agent_channel and self.agent_channel in chunk:
            events.extend(self._agent_events(chunk[self.agent_channel]))
        if self.tools_channel and self.tools_channel in chunk:
            events.extend(self._tool_events(chunk[self.tools_channel]))
        if STEPS_KEY in chunk:
            events.extend(self._step_events(chunk[STEPS_KEY]))

        for name in self._sub_agent_channels(chunk):
            events.extend(self._sub_agent_events(name, chunk[name]))

        if not events:
            logger.debug("No renderable content in chunk with keys %s", list(chunk))
        return events

    def _sub_agent_channels(self, chunk: dict) -> Iterable[str]:
        if self.sub_agents is not None:
            return [name for name in self.sub_agents if name in chunk]
        known = {self.agent_channel, self.tools_channel, STEPS_KEY}
        return [
            name for name, payload in chunk.items()
            if name not in known and read_field(payload, "messages") is not None
        ]

    def _interrupts(self, interrupts: Any) -> List[StreamEvent]:
        if not isinstance(interrupts, (list, tuple)):
            interrupts = [interrupts]
        return [
            InterruptEvent(
                prompt=_interrupt_prompt(read_field(item, "value")),
                interrupt_id=read_field(item, "id") or read_field(item, "interrupt_id"),
            )
            for item in interrupts
        ]

    def _agent_events(self, payload: Any) -> List[StreamEvent]:
        events = []
        for message in read_field(payload, "messages") or []:
            blocks = text_blocks(read_field(message, "content"))
            if blocks:
                events.append(AgentTextEvent(message_id=read_field(message, "id"), blocks=blocks))
        return events

    def _tool_events(self, payload: Any) -> List[StreamEvent]:
        events = []
        for message in read_field(payload, "messages") or []:
            blocks = text_blocks(read_field(message, "content"))
            if blocks:
                events.append(ToolResultEvent(
                    message_id=read_field(message, "id"),
                    blocks=blocks,
                    tool_name=read_field(message, "name"),
                    is_error=read_field(message, "status") == "error",
                ))
        return events

    def _step_events(self, steps: Any) -> List[StreamEvent]:
        events = []
        for step in steps or []:
            action = read_field(step, "action")
            observation = read_field(step, "observation")
            if action is None and observation is None:
                continue
            events.append(IntermediateStepEvent(
                tool=read_field(action, "tool") if action is not None else None,
                tool_input=read_field(action, "tool_input", read_field(action, "toolInput")) if action is not None else None,
                observation=str(observation) if observation is not None else None,
            ))
        return events

    def _sub_agent_events(self, name: str, payload: Any) -> List[StreamEvent]:
        events = []
        for message in read_field(payload, "messages") or []:
            # Tool output and the user's own prompt are echoed back by sub-agent subgraphs
            if read_field(message, "type") in ("tool", "human"):
                continue
            blocks = text_blocks(read_field(message, "content"))
            if blocks:
                events.append(SubAgentEvent(
                    agent_name=name,
                    message_id=read_field(message, "id"),
                    blocks=blocks,
                ))
        return events
