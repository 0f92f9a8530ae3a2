"""
Exception hierarchy for the agent chat workshop.
"""

from typing import Optional

from langchain_core.tools import ToolException


class AgentChatError(Exception):
    """Base class for errors raised by this package."""


class StreamError(AgentChatError):
    """The underlying agent run failed while a response was being streamed."""

    def __init__(self, message: str, thread_id: Optional[str] = None):
        super().__init__(message)
        self.thread_id = thread_id


class SessionBusyError(AgentChatError):
    """A session was asked to stream while another stream is still active."""


class UnknownResumeCommandError(AgentChatError, ValueError):
    """A resume payload did not match any known command type."""


class ToolValidationError(ToolException):
    """
    Tool input failed validation.

    Raised from inside a tool; tools are built with ``handle_tool_error`` so
    the framework turns it into a tool message with ``status="error"``.
    """
