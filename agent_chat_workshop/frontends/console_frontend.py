"""
Console frontend for the agent demos.

Pick an agent with ``--agent`` and chat with it in the terminal. Booking
actions pause for approval unless ``--auto-approve`` is given.
"""

import argparse
from typing import Any, Dict

from rich.console import Console

from ..agents import AGENTS, DEFAULT_MODEL, DEFAULT_TEMPERATURE
from ..agents.movie_agent import DEFAULT_PREFERENCE, MovieAgent
from ..interfaces.console_interface import ConsoleUserInterface, ConsoleLogger


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Chat with LangGraph agent demos from the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  agent-chat --agent assistant
  agent-chat --agent booking --model anthropic/claude-3-5-sonnet-latest
  agent-chat --agent movie-expert --preference "plot and characters"
        """
    )

    parser.add_argument(
        "--agent",
        choices=sorted(AGENTS),
        default="assistant",
        help="Agent demo to run (default: assistant)"
    )

    parser.add_argument(
        "--model",
        default=DEFAULT_MODEL,
        help=f"LiteLLM model to use (default: $LITELLM_MODEL or {DEFAULT_MODEL})"
    )

    parser.add_argument(
        "--temperature",
        type=float,
        default=DEFAULT_TEMPERATURE,
        help=f"Temperature for LLM responses (default: {DEFAULT_TEMPERATURE})"
    )

    parser.add_argument(
        "--thread-id",
        help="Conversation thread id (default: a new random id)"
    )

    parser.add_argument(
        "--auto-approve",
        action="store_true",
        help="Approve every booking without asking (booking agent)"
    )

    parser.add_argument(
        "--preference",
        default=DEFAULT_PREFERENCE,
        help="What the movie expert should focus on (movie-expert agent)"
    )

    parser.add_argument(
        "--user-id",
        default="default",
        help="User whose conversation is remembered (movie-memory agent)"
    )

    parser.add_argument(
        "--latency",
        type=float,
        default=0.0,
        help="Simulated tool latency in seconds (travel and flights agents)"
    )

    parser.add_argument(
        "--show-graph",
        action="store_true",
        help="Print the agent graph as Mermaid before chatting"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    return parser.parse_args(argv)


def agent_options(args) -> Dict[str, Any]:
    """Agent-specific constructor arguments taken from the command line."""
    return {
        'booking': {"auto_approve": args.auto_approve},
        'movie-expert': {"preference": args.preference},
        'movie-memory': {"user_id": args.user_id},
        'travel': {"latency": args.latency},
        'flights': {"latency": args.latency},
    }.get(args.agent, {})


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)

    console = Console()
    ui = ConsoleUserInterface(console)
    logger = ConsoleLogger(console, verbose=args.verbose)

    agent = AGENTS[args.agent](
        ui=ui,
        logger=logger,
        model=args.model,
        temperature=args.temperature,
        **agent_options(args)
    )
    if not isinstance(agent, MovieAgent):
        agent.new_session(thread_id=args.thread_id)

    if args.show_graph:
        ui.display_mermaid_diagram(agent.mermaid(), f"{args.agent} graph")

    console.print(f"[bold cyan]💬 Chat started with the {args.agent} agent ({args.model}).[/bold cyan]")
    console.print("[dim]Type 'quit', 'exit', or 'bye' to end the conversation.[/dim]")
    console.print()

    ui.initialize_session()
    try:
        agent.start_conversation()
    finally:
        ui.cleanup_session()


if __name__ == "__main__":
    main()
