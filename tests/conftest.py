# Pytest configuration and fixtures
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from langchain_core.language_models.fake_chat_models import GenericFakeChatModel
from langchain_core.messages import AIMessage


class ToolCallingFakeModel(GenericFakeChatModel):
    """Scripted chat model that accepts tool binding and replays its messages in order."""

    def bind_tools(self, tools, **kwargs):
        return self


def tool_call(name, args, call_id="call_1", content=""):
    """An assistant message asking for one tool call."""
    return AIMessage(content=content, tool_calls=[{"name": name, "args": args, "id": call_id, "type": "tool_call"}])


class FakeGraph:
    """
    Stand-in for a compiled graph.

    Each positional argument is the list of chunks one ``stream`` call
    produces; an exception in the list is raised at that point.
    """

    def __init__(self, *runs, history=None):
        self.runs = list(runs)
        self.inputs = []
        self.stream_modes = []
        self.checkpointer = object() if history is not None else None
        self.history = history or []

    def stream(self, graph_input, config, stream_mode="updates"):
        self.inputs.append(graph_input)
        self.stream_modes.append(stream_mode)
        run = self.runs.pop(0)
        for chunk in run:
            if isinstance(chunk, Exception):
                raise chunk
            yield chunk

    def get_state(self, config):
        return SimpleNamespace(values={"messages": self.history})


@pytest.fixture
def fake_model():
    """Build a scripted chat model from the replies it should give."""
    def build(*replies):
        return ToolCallingFakeModel(messages=iter(replies))
    return build


@pytest.fixture
def ui():
    return MagicMock()


@pytest.fixture
def chat_logger():
    return MagicMock()
