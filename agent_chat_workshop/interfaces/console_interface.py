"""
Console implementation of ChatUserInterface and ChatLogger protocols.

This module provides Rich-based console implementations that can be used
for command-line interfaces.
"""

import json
from typing import Any, Dict, Generator, Optional, Union

from prompt_toolkit import prompt
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from ..core.events import (
    AgentTextEvent,
    ApproveCommand,
    EditCommand,
    InterruptEvent,
    IntermediateStepEvent,
    ProgressEvent,
    StreamEvent,
    SubAgentEvent,
    ToolResultEvent,
)
from ..core.protocols import ChatUserInterface, ChatLogger


def _json_or_text(text: str):
    """Pretty-print JSON tool output, leave anything else as is."""
    try:
        return Syntax(json.dumps(json.loads(text), indent=2), "json", theme="monokai")
    except ValueError:
        return text


class ConsoleUserInterface(ChatUserInterface):
    """Rich console implementation of ChatUserInterface."""

    def __init__(self, console: Console = None):
        """
        Initialize console interface.

        Args:
            console: Rich Console instance (creates new one if None)
        """
        self.console = console or Console()
        self.history = InMemoryHistory()
        self.prompt_style = Style.from_dict({
            'username': '#00aaff bold',  # Blue color for "You: "
        })
        self.current_role = None

    def begin_user_message(self):
        """Begin a new user message context."""
        self.console.print("[bold blue]👤 You:[/bold blue]", end=" ")
        self.current_role = "user"

    def end_user_message(self):
        """End the current user message context."""
        self.console.print()
        self.current_role = None

    def begin_assistant_message(self):
        """Begin a new assistant message context."""
        self.current_role = "assistant"

    def end_assistant_message(self):
        """End the current assistant message context."""
        self.console.print()
        self.current_role = None

    def display_message(self, content: str):
        """Display a message with role-based formatting."""
        self.console.print(content)

    def display_streaming_message(self, content_generator: Generator[str, None, None]) -> str:
        """Display streaming message content with live updates."""
        complete_content = ""
        current_text = Text("")
        current_text.append("🤖 Assistant: ", style="bold green")

        with Live(current_text, refresh_per_second=10, console=self.console) as live:
            for chunk in content_generator:
                complete_content += chunk
                current_text.append(chunk, style="green")
                live.update(current_text)

        return complete_content

    def display_stream_event(self, event: StreamEvent):
        """Render one typed event as it arrives."""
        if isinstance(event, AgentTextEvent):
            self.console.print(f"[bold green]🤖 Assistant:[/bold green] [green]{event.text}[/green]")
        elif isinstance(event, SubAgentEvent):
            self.console.print(f"[bold green]🤖 {event.agent_name}:[/bold green] [green]{event.text}[/green]")
        elif isinstance(event, ToolResultEvent):
            title = f"🔧 {event.tool_name or 'tool'}"
            if event.is_error:
                self.console.print(Panel(event.text, title=title, border_style="red"))
            else:
                self.console.print(Panel(_json_or_text(event.text), title=title, border_style="cyan"))
        elif isinstance(event, IntermediateStepEvent):
            self.console.print(f"[bold cyan]🔧 {event.tool}({event.tool_input})[/bold cyan]")
            if event.observation:
                self.console.print(Panel(event.observation, title="Observation", border_style="blue"))
        elif isinstance(event, ProgressEvent):
            self.update_tool_status(event.text)
        elif isinstance(event, InterruptEvent):
            self.console.print(Panel(event.prompt, title="⏸️  Approval needed", border_style="yellow"))

    def get_user_input(self, prompt_text: str = "You: ") -> Optional[str]:
        """Get user input with enhanced editing capabilities."""
        try:
            user_input = prompt(
                FormattedText([('class:username', prompt_text)]),
                history=self.history,
                enable_history_search=True,
                style=self.prompt_style,
                complete_style='column'
            )
            return user_input
        except (KeyboardInterrupt, EOFError):
            return None

    def request_resume_command(self, prompt_text: str) -> Optional[Union[ApproveCommand, EditCommand]]:
        """
        Ask whether to approve the paused action.

        ``y`` approves, ``n`` leaves the run paused and ``e`` asks for a JSON
        object of argument overrides.
        """
        while True:
            answer = self.get_user_input("Approve? [y]es / [n]o / [e]dit: ")
            if answer is None or answer.strip().lower() in ("n", "no"):
                return None
            answer = answer.strip().lower()
            if answer in ("", "y", "yes"):
                return ApproveCommand()
            if answer in ("e", "edit"):
                raw = self.get_user_input("Edits as JSON, e.g. {\"room_type\": \"suite\"}: ")
                if raw is None:
                    return None
                try:
                    args = json.loads(raw)
                except ValueError as e:
                    self.display_error(f"Invalid JSON: {e}")
                    continue
                if not isinstance(args, dict):
                    self.display_error("Edits must be a JSON object")
                    continue
                return EditCommand(args=args)
            self.display_warning(f"Unrecognized answer: {answer}")

    def display_error(self, error_message: str):
        """Display error message."""
        self.console.print(f"[bold red]❌ Error: {error_message}[/bold red]")

    def display_info(self, info: str):
        """Display informational message."""
        self.console.print(f"[blue]ℹ️  {info}[/blue]")

    def display_warning(self, warning: str):
        """Display warning message."""
        self.console.print(f"[yellow]⚠️  WARNING: {warning}[/yellow]")

    def update_tool_status(self, status: str):
        """Update the status of a tool execution."""
        self.console.print(f"[dim]🔧 Tool status: {status}[/dim]")

    def display_mermaid_diagram(self, mermaid_content: str, title: str = "Agent Graph"):
        """Print the Mermaid source; terminals cannot render the diagram itself."""
        self.console.print(Panel(
            Syntax(mermaid_content, "text", theme="monokai"),
            title=title,
            border_style="magenta"
        ))

    def initialize_session(self):
        """Initialize the user interface session."""
        pass  # Console interface doesn't need special initialization

    def cleanup_session(self):
        """Clean up the user interface session."""
        pass  # Console interface doesn't need special cleanup


class ConsoleLogger(ChatLogger):
    """Console implementation of ChatLogger."""

    def __init__(self, console: Console = None, verbose: bool = True):
        """
        Initialize console logger.

        Args:
            console: Rich Console instance (creates new one if None)
            verbose: Whether to display debug messages
        """
        self.console = console or Console()
        self.verbose = verbose

    def log_debug(self, message: str):
        """Log debug message."""
        if self.verbose:
            self.console.print(f"[dim]🔍 DEBUG: {message}[/dim]")

    def log_info(self, message: str):
        """Log info message."""
        if self.verbose:
            self.console.print(f"[blue]ℹ️  INFO: {message}[/blue]")

    def log_error(self, message: str, exc_info: bool = False):
        """Log error message."""
        self.console.print(f"[bold red]❌ ERROR: {message}[/bold red]")
        if exc_info and self.verbose:
            self.console.print_exception()

    def log_warning(self, message: str):
        """Log warning message."""
        if self.verbose:
            self.console.print(f"[yellow]⚠️  WARNING: {message}[/yellow]")

    def log_function_call(self, function_name: str, arguments: Dict[str, Any]):
        if self.verbose:
            self.console.print(f"[cyan]📞 CALL: {function_name}({arguments})[/cyan]")

    def log_function_result(self, function_name: str, success: bool, duration: float, result: Dict[str, Any] = None):
        if self.verbose:
            status = "✅ SUCCESS" if success else "❌ FAILED"
            self.console.print(f"[cyan]📋 RESULT: {function_name} - {status} ({duration:.2f}s)[/cyan]")

    def log_stream_event(self, event: StreamEvent):
        if self.verbose:
            self.console.print(f"[dim]📡 STREAM: {event.kind.value}[/dim]")

    def log_interrupt(self, thread_id: str, prompt_text: str):
        self.console.print(f"[yellow]⏸️  PAUSED: thread {thread_id} is waiting for approval[/yellow]")

    def log_resume(self, thread_id: str, command: Dict[str, Any]):
        if self.verbose:
            self.console.print(f"[yellow]▶️  RESUME: thread {thread_id} with {command}[/yellow]")

    def log_llm_request(self, model: str, messages: Any, tools: Any = None):
        """Log LLM request."""
        if self.verbose:
            num_messages = len(messages) if hasattr(messages, '__len__') else 'unknown'
            num_tools = len(tools) if tools and hasattr(tools, '__len__') else 0
            self.console.print(f"[magenta]🧠 LLM REQUEST: {model} - {num_messages} messages, {num_tools} tools[/magenta]")

    def log_llm_response(self, content: str, tool_calls: Any = None, duration: float = None):
        """Log LLM response."""
        if self.verbose:
            content_preview = content[:50] + "..." if content and len(content) > 50 else content or ""
            has_tools = bool(tool_calls)
            self.console.print(f"[magenta]🧠 LLM RESPONSE: '{content_preview}' - tools: {has_tools} ({duration or 0.0:.2f}s)[/magenta]")
