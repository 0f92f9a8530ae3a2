"""
Core abstractions for the agent chat workshop.

This module provides the protocol interfaces, the typed stream events and the
stream aggregation / interrupt-resume logic shared by every agent demo.
"""

from .aggregator import StreamAggregator
from .events import (
    AgentTextEvent,
    ApproveCommand,
    ChatMessage,
    EditCommand,
    InterruptEvent,
    IntermediateStepEvent,
    ProgressEvent,
    SubAgentEvent,
    ToolResultEvent,
)
from .protocols import ChatUserInterface, ChatLogger
from .session import AgentSession, SessionState
from .stream_classifier import ChunkClassifier

__all__ = [
    'AgentSession',
    'AgentTextEvent',
    'ApproveCommand',
    'ChatLogger',
    'ChatMessage',
    'ChatUserInterface',
    'ChunkClassifier',
    'EditCommand',
    'InterruptEvent',
    'IntermediateStepEvent',
    'ProgressEvent',
    'SessionState',
    'StreamAggregator',
    'SubAgentEvent',
    'ToolResultEvent',
]
