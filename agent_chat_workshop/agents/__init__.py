#!/usr/bin/env python3
"""
Agents package - LangGraph agent configurations for each demo.

Every agent wires a chat model, a toolset, a prompt template and a
checkpointer into a compiled graph, and talks to its front end through the
ChatUserInterface and ChatLogger protocols.
"""

from .assistant_agent import AssistantAgent
from .base_agent import APOLOGY, BaseAgent
from .booking_agent import BookingAgent
from .flight_booking import FlightBookingAgent
from .llm_client import DEFAULT_MODEL, DEFAULT_TEMPERATURE, build_chat_model
from .movie_agent import MovieAgent, MovieExpertAgent, MovieMemoryAgent
from .supervisor import SupervisorTeam
from .swarm import TravelSwarm
from .travel_agent import TravelAgent

AGENTS = {
    'movie': MovieAgent,
    'movie-expert': MovieExpertAgent,
    'movie-memory': MovieMemoryAgent,
    'assistant': AssistantAgent,
    'travel': TravelAgent,
    'booking': BookingAgent,
    'supervisor': SupervisorTeam,
    'swarm': TravelSwarm,
    'flights': FlightBookingAgent,
}

__all__ = [
    'AGENTS',
    'APOLOGY',
    'AssistantAgent',
    'BaseAgent',
    'BookingAgent',
    'DEFAULT_MODEL',
    'DEFAULT_TEMPERATURE',
    'FlightBookingAgent',
    'MovieAgent',
    'MovieExpertAgent',
    'MovieMemoryAgent',
    'SupervisorTeam',
    'TravelAgent',
    'TravelSwarm',
    'build_chat_model',
]
