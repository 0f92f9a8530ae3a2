"""
Streamlit frontend for the agent demos.

Run with ``streamlit run agent_chat_workshop/frontends/streamlit_frontend.py``.
Imports are absolute because Streamlit executes this file as a script.
"""

import json
import os

import streamlit as st

from agent_chat_workshop.agents import AGENTS, DEFAULT_MODEL
from agent_chat_workshop.agents.movie_agent import MovieAgent
from agent_chat_workshop.core.events import ApproveCommand, EditCommand
from agent_chat_workshop.interfaces.streamlit_interface import StreamlitUserInterface, StreamlitLogger

AGENT_LABELS = {
    'assistant': "🧮 Assistant (weather, math, jokes)",
    'booking': "🏨 Booking with human approval",
    'flights': "✈️ Step-by-step flight booking",
    'movie': "🎬 Movie info",
    'movie-expert': "🎬 Movie expert",
    'movie-memory': "🎬 Movie assistant with memory",
    'supervisor': "🧑‍💼 Supervisor team",
    'swarm': "🐝 Flight and hotel swarm",
    'travel': "🧳 Travel planner",
}


def setup_sidebar():
    """Setup the sidebar with configuration options."""
    st.sidebar.title("🔧 Configuration")

    agent_choice = st.sidebar.selectbox(
        "Choose Agent",
        list(AGENT_LABELS),
        format_func=AGENT_LABELS.get,
        help="Select an agent demo"
    )

    options = {}
    if agent_choice == "movie-expert":
        options["preference"] = st.sidebar.text_input("Preference", value="general")
    elif agent_choice == "movie-memory":
        options["user_id"] = st.sidebar.text_input("User ID", value="default")
    elif agent_choice == "booking":
        options["auto_approve"] = st.sidebar.checkbox("Approve automatically", value=False)

    # Model configuration
    model = os.environ.get("LITELLM_MODEL", DEFAULT_MODEL)
    temperature = 0

    st.sidebar.subheader("Debug")
    show_debug = st.sidebar.checkbox("Show Debug Logs", value=False)
    show_graph = st.sidebar.checkbox("Show Agent Graph", value=False)

    return {
        "agent_choice": agent_choice,
        "options": options,
        "model": model,
        "temperature": temperature,
        "show_debug": show_debug,
        "show_graph": show_graph,
    }


def create_agent(config):
    ui = StreamlitUserInterface()
    ui.cleanup_session()
    logger = StreamlitLogger(show_debug=config["show_debug"])
    agent = AGENTS[config["agent_choice"]](
        ui=ui,
        logger=logger,
        model=config["model"],
        temperature=config["temperature"],
        **config["options"]
    )
    if not isinstance(agent, MovieAgent):
        agent.new_session()
    return agent


def display_approval_controls(agent):
    """Approve or edit the action a paused run is waiting on."""
    prompt = st.session_state.pending_approval
    st.warning(f"⏸️  {prompt}")

    approve_col, edit_col = st.columns(2)
    with edit_col:
        edits = st.text_area("Edits (JSON object)", value="{}", key="approval_edits")
    with approve_col:
        approved = st.button("✅ Approve", key="approve")
    edited = edit_col.button("✏️ Apply edits", key="edit")

    command = None
    if approved:
        command = ApproveCommand()
    elif edited:
        try:
            args = json.loads(edits)
        except ValueError as e:
            st.error(f"❌ Invalid JSON: {e}")
            return
        if not isinstance(args, dict):
            st.error("❌ Edits must be a JSON object")
            return
        command = EditCommand(args=args)

    if command is not None:
        st.session_state.pending_approval = None
        agent.continue_paused(command)
        st.rerun()


def main():
    """Main Streamlit application."""
    st.set_page_config(
        page_title="Agent Chat Workshop",
        page_icon="🤖",
        layout="wide"
    )

    st.title("🤖 Agent Chat Workshop")
    st.markdown("Streaming chat with LangGraph agents, supervisors, swarms and human approval")

    config = setup_sidebar()

    if "agent" not in st.session_state:
        st.session_state.agent = None
    if "current_agent" not in st.session_state:
        st.session_state.current_agent = None

    agent_changed = st.session_state.current_agent != (config["agent_choice"], repr(config["options"]))
    if agent_changed or st.sidebar.button("🆕 New Conversation"):
        st.session_state.current_agent = (config["agent_choice"], repr(config["options"]))
        st.session_state.agent = create_agent(config)

    agent = st.session_state.agent
    ui = agent.ui
    logger = agent.logger

    if config["show_graph"]:
        try:
            ui.display_mermaid_diagram(agent.mermaid(), AGENT_LABELS[config["agent_choice"]])
        except (AttributeError, ValueError) as e:
            logger.log_warning(f"Could not draw the agent graph: {e}")

    if not st.session_state.history:
        with st.chat_message("assistant"):
            st.markdown(agent.welcome_message)

    ui.display_conversation_history()

    if st.session_state.pending_approval:
        display_approval_controls(agent)
    elif prompt := st.chat_input("Ask the agent..."):
        agent.process_user_message(prompt)
        if st.session_state.pending_approval:
            st.rerun()

    if config["show_debug"]:
        logger.display_logs_sidebar()

    if agent.session is not None:
        st.sidebar.caption(f"Thread: {agent.session.thread_id} ({agent.session.state.value})")


if __name__ == "__main__":
    main()
