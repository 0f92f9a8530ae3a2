"""
End-to-end agent runs against a scripted chat model.
"""

from langchain_core.messages import AIMessage
from langgraph.checkpoint.memory import InMemorySaver

from agent_chat_workshop.agents import (
    APOLOGY,
    AssistantAgent,
    BookingAgent,
    FlightBookingAgent,
    MovieAgent,
    MovieExpertAgent,
    MovieMemoryAgent,
    SupervisorTeam,
    TravelSwarm,
)
from agent_chat_workshop.core.events import ApproveCommand, EditCommand, ToolResultEvent
from agent_chat_workshop.core.session import SessionState
from agent_chat_workshop.tools import BookingLedger
from tests.conftest import tool_call

HOTEL_ARGS = {"hotel_name": "Grand Hotel", "dates": "2025-06-01", "room_type": "double"}
FLIGHT_ARGS = {"origin": "BOS", "destination": "JFK", "dates": "2025-06-01"}


# --- Booking with human approval ---

def test_booking_pauses_then_resumes_with_edit(fake_model, chat_logger):
    ledger = BookingLedger()
    agent = BookingAgent(
        llm=fake_model(tool_call("bookHotel", HOTEL_ARGS, content="Let me book that."), AIMessage(content="Your suite is booked.")),
        ledger=ledger,
        logger=chat_logger,
    )
    session = agent.new_session(thread_id="booking-1")

    first = list(session.stream("Book the Grand Hotel for June 1st"))

    assert first[0] == "Let me book that."
    assert first[-1].startswith("Trying to book hotel with args: {")
    assert session.state == SessionState.PAUSED
    assert ledger.records == []

    second = list(agent.resume_with_command(EditCommand(args={"room_type": "suite"})))

    assert second == [
        "Successfully booked a suite room at Grand Hotel for 2025-06-01.",
        "Your suite is booked.",
    ]
    assert not session.is_paused
    assert ledger.records == [{"kind": "hotel", "hotel_name": "Grand Hotel", "dates": "2025-06-01", "room_type": "suite"}]


def test_booking_auto_approve(fake_model, chat_logger):
    ledger = BookingLedger()
    agent = BookingAgent(
        llm=fake_model(tool_call("bookHotel", HOTEL_ARGS), AIMessage(content="Booked.")),
        ledger=ledger,
        auto_approve=True,
        logger=chat_logger,
    )

    segments = list(agent.stream("Book the Grand Hotel"))

    assert segments[-2:] == ["Successfully booked a double room at Grand Hotel for 2025-06-01.", "Booked."]
    assert ledger.records[0]["room_type"] == "double"
    chat_logger.log_function_call.assert_any_call("bookHotel", HOTEL_ARGS)


def two_bookings():
    """One assistant turn asking for a hotel and a flight at once."""
    return AIMessage(content="", tool_calls=[
        {"name": "bookHotel", "args": HOTEL_ARGS, "id": "call_1", "type": "tool_call"},
        {"name": "bookFlight", "args": FLIGHT_ARGS, "id": "call_2", "type": "tool_call"},
    ])


BOTH_BOOKED = {
    "Successfully booked a double room at Grand Hotel for 2025-06-01.",
    "Successfully booked flight from BOS to JFK for 2025-06-01.",
}


def test_parallel_bookings_are_approved_together(fake_model, chat_logger):
    ledger = BookingLedger()
    agent = BookingAgent(
        llm=fake_model(two_bookings(), AIMessage(content="Both booked.")),
        ledger=ledger,
        logger=chat_logger,
    )
    session = agent.new_session(thread_id="booking-2")

    first = list(session.stream("Book the Grand Hotel and a flight to JFK"))

    assert any(s.startswith("Trying to book hotel") for s in first)
    assert any(s.startswith("Trying to book flight") for s in first)
    assert session.is_paused
    assert len(session.pending_interrupts) == 2
    assert "Trying to book hotel" in session.pending_prompt
    assert "Trying to book flight" in session.pending_prompt

    second = list(agent.resume_with_command(ApproveCommand()))

    assert set(second[:2]) == BOTH_BOOKED
    assert second[-1] == "Both booked."
    assert not session.is_paused
    assert sorted(record["kind"] for record in ledger.records) == ["flight", "hotel"]


def test_parallel_bookings_auto_approve(fake_model, chat_logger):
    ledger = BookingLedger()
    agent = BookingAgent(
        llm=fake_model(two_bookings(), AIMessage(content="Both booked.")),
        ledger=ledger,
        auto_approve=True,
        logger=chat_logger,
    )

    segments = list(agent.stream("Book the Grand Hotel and a flight to JFK"))

    assert BOTH_BOOKED <= set(segments)
    assert segments[-1] == "Both booked."
    assert len(ledger.records) == 2


def test_booking_validation_error_skips_approval(fake_model, chat_logger):
    agent = BookingAgent(
        llm=fake_model(
            tool_call("bookHotel", {**HOTEL_ARGS, "dates": "June 1st"}),
            AIMessage(content="Which date exactly?"),
        ),
        logger=chat_logger,
    )

    segments = list(agent.stream("Book the Grand Hotel"))

    assert segments == ["Error: Invalid date format. Use YYYY-MM-DD", "Which date exactly?"]
    assert not agent.session.is_paused


def test_conversation_loop_asks_for_approval(fake_model, ui, chat_logger):
    ui.display_streaming_message.side_effect = lambda reply: "".join(reply)
    ui.request_resume_command.return_value = ApproveCommand()
    ledger = BookingLedger()
    agent = BookingAgent(
        llm=fake_model(tool_call("bookHotel", HOTEL_ARGS), AIMessage(content="Done.")),
        ledger=ledger,
        ui=ui,
        logger=chat_logger,
    )

    agent.process_user_message("Book the Grand Hotel")

    ui.request_resume_command.assert_called_once()
    assert ui.request_resume_command.call_args.args[0].startswith("Trying to book hotel")
    assert len(ledger.records) == 1
    ui.display_error.assert_not_called()


# --- Streaming assistant ---

def test_assistant_streams_typed_events(fake_model, chat_logger):
    agent = AssistantAgent(
        llm=fake_model(tool_call("calculator", {"expression": "6*7"}), AIMessage(content="It is 42.")),
        logger=chat_logger,
    )

    events = list(agent.events("What is 6 times 7?"))

    assert [e.kind.value for e in events] == ["progress", "tool", "agent"]
    assert events[0].text == "Calculating 6*7..."
    assert isinstance(events[1], ToolResultEvent)
    assert events[1].tool_name == "calculator"
    assert events[1].text == "The result of 6*7 is 42"
    assert events[2].text == "It is 42."


def test_assistant_tool_failure_is_an_error_event(fake_model, chat_logger):
    agent = AssistantAgent(
        llm=fake_model(tool_call("calculator", {"expression": "1/0"}), AIMessage(content="That does not work.")),
        logger=chat_logger,
    )

    tool_events = [e for e in agent.events("Divide one by zero") if isinstance(e, ToolResultEvent)]

    assert tool_events[0].is_error
    assert "Division by zero" in tool_events[0].text


# --- Flight booking flow ---

def test_flight_booking_progress_in_text_stream(fake_model, chat_logger):
    agent = FlightBookingAgent(
        llm=fake_model(
            tool_call("searchFlights", {"origin": "SFO", "destination": "JFK", "date": "2025-06-01"}),
            AIMessage(content="I found 4 flights."),
        ),
        logger=chat_logger,
    )

    segments = list(agent.stream("Find me a flight from SFO to JFK on June 1st"))

    assert segments[0] == "Searching for flights from SFO to JFK on 2025-06-01...\n"
    assert segments[-1] == "I found 4 flights.\n"
    assert len(agent.store.flights) == 4


# --- Movie agents ---

def test_movie_agent_returns_chat_messages(fake_model, chat_logger):
    agent = MovieAgent(
        llm=fake_model(tool_call("getMovieInfo", {"title": "Inception"}), AIMessage(content="Inception is a 2010 Sci-Fi film.")),
        logger=chat_logger,
    )

    messages = agent.ask("Tell me about Inception")

    assert [(m.role, m.content) for m in messages] == [
        ("user", "Tell me about Inception"),
        ("assistant", "Inception is a 2010 Sci-Fi film."),
    ]


def test_movie_agent_apologizes_on_failure(fake_model, chat_logger):
    agent = MovieAgent(llm=fake_model(), logger=chat_logger)

    messages = agent.ask("Tell me about Inception")

    assert [(m.role, m.content) for m in messages] == [("assistant", APOLOGY)]
    chat_logger.log_error.assert_called_once()


def test_movie_expert_prompt_follows_preference(fake_model, chat_logger):
    agent = MovieExpertAgent(llm=fake_model(), preference="soundtrack", logger=chat_logger)
    state = {"messages": [{"role": "user", "content": "Recommend something"}]}

    messages = agent.system_prompt(state, {"configurable": {"preference": "plot and characters"}})

    assert messages[0]["role"] == "system"
    assert "Focus on plot and characters aspects of movies" in messages[0]["content"]
    assert agent.run_config() == {"configurable": {"preference": "soundtrack"}}


def test_movie_memory_agent_remembers_per_user(fake_model, chat_logger):
    agent = MovieMemoryAgent(
        llm=fake_model(AIMessage(content="Hi Sam!"), AIMessage(content="You are Sam.")),
        user_id="sam",
        checkpointer=InMemorySaver(),
        logger=chat_logger,
    )

    agent.ask("I'm Sam")
    messages = agent.ask("Who am I?")

    assert [m.content for m in messages] == ["I'm Sam", "Hi Sam!", "Who am I?", "You are Sam."]


# --- Multi-agent graphs ---

def test_supervisor_team_graph(fake_model, chat_logger):
    team = SupervisorTeam(llm=fake_model(), logger=chat_logger)

    nodes = set(team.graph.get_graph().nodes)
    options = team.session_options()

    assert {"supervisor", "flight_assistant", "hotel_assistant", "attraction_assistant"} <= nodes
    assert options["separator"] == "\n"
    assert options["classifier"].sub_agents[0] == "supervisor"


def test_swarm_graph(fake_model, chat_logger):
    swarm = TravelSwarm(llm=fake_model(), logger=chat_logger)

    nodes = set(swarm.graph.get_graph().nodes)

    assert {"flight_assistant", "hotel_assistant"} <= nodes
    assert "graph" in swarm.mermaid().lower()
    assert [t.name for t in swarm.flight_tools.tools] == ["book_flight"]
