"""
Agent chat workshop - streaming chat front ends for LangGraph agents.

This package wires tool-calling agents, a supervisor team, a swarm and
human-in-the-loop booking flows into console and Streamlit chat front ends.
The parts it owns are the stream classifier/aggregator, which turns the
agent runtime's chunks into ordered and de-duplicated text or typed events,
and the interrupt/resume bridge around a conversation thread.

Example Usage:
    ```python
    from agent_chat_workshop.agents import BookingAgent

    agent = BookingAgent(model="openai/gpt-4o-mini")
    session = agent.new_session()

    for text in session.stream("Book the Grand Hotel for 2025-06-01, double room"):
        print(text, end="")

    if session.is_paused:
        for text in session.resume({"type": "approve"}):
            print(text, end="")
    ```
"""

__all__ = []

__version__ = '0.1.0'
