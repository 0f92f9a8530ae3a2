"""
Tests for the interrupt/resume bridge around a graph.
"""

import pytest
from langgraph.types import Command

from agent_chat_workshop.core.errors import SessionBusyError, StreamError, UnknownResumeCommandError
from agent_chat_workshop.core.events import ApproveCommand, EditCommand, InterruptEvent, ToolResultEvent
from agent_chat_workshop.core.session import AgentSession, SessionState
from agent_chat_workshop.core.stream_classifier import ChunkClassifier
from tests.conftest import FakeGraph

INTERRUPTED_RUN = [
    {"agent": {"messages": [{"id": "a1", "content": "Let me book that."}]}},
    {"__interrupt__": [{"value": "Approve booking?"}]},
]
RESUMED_RUN = [
    {"tools": {"messages": [{"id": "t1", "content": "Successfully booked."}]}},
    {"agent": {"messages": [{"id": "a2", "content": "All done!"}]}},
]
DOUBLE_INTERRUPT_RUN = [
    {"__interrupt__": [{"value": "Book hotel?", "id": "i1"}, {"value": "Book flight?", "id": "i2"}]},
]


def test_stream_sends_system_prompt_first(chat_logger):
    graph = FakeGraph([{"agent": {"messages": [{"content": "Hello"}]}}])
    session = AgentSession(graph, thread_id="t-1", logger=chat_logger)

    assert list(session.stream("Hi", system_prompt="Be brief")) == ["Hello"]
    assert graph.inputs[0] == {"messages": [
        {"role": "system", "content": "Be brief"},
        {"role": "user", "content": "Hi"},
    ]}
    assert session.config == {"configurable": {"thread_id": "t-1"}}


def test_thread_id_is_generated():
    assert AgentSession(FakeGraph()).thread_id != AgentSession(FakeGraph()).thread_id


def test_configurable_values_are_sent():
    session = AgentSession(FakeGraph(), thread_id="t", configurable={"preference": "plot"})

    assert session.config == {"configurable": {"thread_id": "t", "preference": "plot"}}


def test_interrupt_pauses_until_resumed(chat_logger):
    graph = FakeGraph(INTERRUPTED_RUN, RESUMED_RUN)
    session = AgentSession(graph, thread_id="t-2", logger=chat_logger)

    assert list(session.stream("Book a hotel")) == ["Let me book that.", "Approve booking?"]
    assert session.state == SessionState.PAUSED
    assert session.pending_interrupt.prompt == "Approve booking?"
    chat_logger.log_interrupt.assert_called_once_with("t-2", "Approve booking?")

    assert list(session.resume({"type": "approve"})) == ["Successfully booked.", "All done!"]
    assert session.state == SessionState.RUNNING
    assert isinstance(graph.inputs[1], Command)
    assert graph.inputs[1].resume == {"type": "approve"}
    chat_logger.log_resume.assert_called_once_with("t-2", {"type": "approve"})


def test_several_interrupts_resume_by_id(chat_logger):
    graph = FakeGraph(DOUBLE_INTERRUPT_RUN, RESUMED_RUN)
    session = AgentSession(graph, thread_id="t-5", logger=chat_logger)

    assert list(session.stream("Book both")) == ["Book hotel?", "Book flight?"]
    assert [e.interrupt_id for e in session.pending_interrupts] == ["i1", "i2"]
    assert session.pending_prompt == "Book hotel?\nBook flight?"
    assert chat_logger.log_interrupt.call_count == 2

    list(session.resume(ApproveCommand()))

    assert graph.inputs[1].resume == {"i1": {"type": "approve"}, "i2": {"type": "approve"}}
    assert session.pending_interrupts == []


def test_auto_resume_answers_every_interrupt(chat_logger):
    graph = FakeGraph(DOUBLE_INTERRUPT_RUN, RESUMED_RUN)
    session = AgentSession(graph, auto_resume={"type": "approve"}, logger=chat_logger)

    assert list(session.stream("Book both"))[-1] == "All done!"
    assert graph.inputs[1].resume == {"i1": {"type": "approve"}, "i2": {"type": "approve"}}


def test_auto_resume_continues_in_the_same_stream(chat_logger):
    graph = FakeGraph(INTERRUPTED_RUN, RESUMED_RUN)
    session = AgentSession(graph, auto_resume={"type": "approve"}, logger=chat_logger)

    segments = list(session.stream("Book a hotel"))

    assert segments == ["Let me book that.", "Approve booking?", "Successfully booked.", "All done!"]
    assert graph.inputs[1].resume == {"type": "approve"}
    assert not session.is_paused


def test_edit_command_payload(chat_logger):
    graph = FakeGraph(INTERRUPTED_RUN, RESUMED_RUN)
    session = AgentSession(graph, logger=chat_logger)
    list(session.stream("Book a hotel"))

    list(session.resume(EditCommand(args={"room_type": "suite"})))

    assert graph.inputs[1].resume == {"type": "edit", "args": {"room_type": "suite"}}


def test_unknown_resume_type_is_rejected(chat_logger):
    session = AgentSession(FakeGraph(INTERRUPTED_RUN), logger=chat_logger)
    list(session.stream("Book a hotel"))

    with pytest.raises(UnknownResumeCommandError, match="Unknown response type: reject"):
        list(session.resume({"type": "reject"}))


def test_resume_when_not_paused_warns(chat_logger):
    session = AgentSession(FakeGraph(RESUMED_RUN), logger=chat_logger)

    assert list(session.resume(ApproveCommand())) == ["Successfully booked.", "All done!"]
    chat_logger.log_warning.assert_called_once()


def test_typed_events(chat_logger):
    graph = FakeGraph([
        ("custom", "Booking..."),
        ("updates", {"tools": {"messages": [{"content": "Invalid date", "status": "error", "name": "bookHotel"}]}}),
        ("updates", {"__interrupt__": [{"value": "Approve?"}]}),
    ])
    session = AgentSession(graph, stream_mode=["updates", "custom"], logger=chat_logger)

    events = list(session.stream_events("Book"))

    assert [e.kind.value for e in events] == ["progress", "tool", "interrupt"]
    assert isinstance(events[1], ToolResultEvent) and events[1].is_error
    assert isinstance(events[2], InterruptEvent)
    assert graph.stream_modes == [["updates", "custom"]]
    assert chat_logger.log_stream_event.call_count == 3


def test_history_ids_are_not_replayed(chat_logger):
    graph = FakeGraph(
        [{"supervisor": {"messages": [{"id": "old", "content": "earlier"}, {"id": "new", "content": "now"}]}}],
        history=[{"id": "old", "content": "earlier"}],
    )
    session = AgentSession(graph, classifier=ChunkClassifier(agent_channel=None, sub_agents=("supervisor",)), separator="\n", logger=chat_logger)

    assert list(session.stream("Next")) == ["now\n"]


def test_runtime_failures_become_stream_errors(chat_logger):
    graph = FakeGraph([{"agent": {"messages": [{"content": "partial"}]}}, ConnectionError("provider down")])
    session = AgentSession(graph, thread_id="t-3", logger=chat_logger)
    stream = session.stream("Hi")

    assert next(stream) == "partial"
    with pytest.raises(StreamError) as info:
        next(stream)

    assert info.value.thread_id == "t-3"
    assert isinstance(info.value.__cause__, ConnectionError)
    chat_logger.log_error.assert_called_once()


def test_stream_error_thread_id_is_optional():
    assert StreamError("boom").thread_id is None


def test_second_stream_while_active_is_refused(chat_logger):
    graph = FakeGraph([{"agent": {"messages": [{"content": "one"}]}}, {"agent": {"messages": [{"content": "two"}]}}])
    session = AgentSession(graph, logger=chat_logger)
    first = session.stream("Hi")
    next(first)

    with pytest.raises(SessionBusyError):
        next(session.stream("Again"))

    assert list(first) == ["two"]
