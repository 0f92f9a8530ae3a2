"""
Tool registry system with mixin support for automatic tool registration.
"""

from typing import Any, Dict, List, Optional

from langchain_core.tools import BaseTool
from langchain_core.utils.function_calling import convert_to_openai_tool

from .tool import make_tool


class ToolRegistry:
    """Registry for managing and executing tools."""

    def __init__(self):
        self.tools: Dict[str, BaseTool] = {}

    def add_tool(self, name: Optional[str] = None):
        """Decorator to add a function as a tool."""
        def decorator(func):
            tool = make_tool(func, name)
            self.tools[tool.name] = tool
            return func
        return decorator

    def register_tool(self, name: str, tool: BaseTool):
        """Register a tool instance."""
        self.tools[name] = tool

    def get_tool(self, name: str) -> BaseTool:
        """Get a tool by name."""
        if name not in self.tools:
            raise KeyError(f"Tool '{name}' not found")
        return self.tools[name]

    def invoke(self, name: str, arguments: Dict[str, Any]) -> Any:
        """Run a tool directly with JSON-style arguments."""
        return self.get_tool(name).invoke(arguments)

    def list_tools(self) -> List[str]:
        """List all registered tool names."""
        return list(self.tools.keys())

    @property
    def schemas(self) -> List[dict]:
        """Get all tool schemas in OpenAI function-calling format."""
        return [convert_to_openai_tool(tool) for tool in self.tools.values()]


class ToolRegistryMixin:
    """Mixin providing tool registry functionality with decorator support."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.tool_registry = ToolRegistry()
        self._register_tools()

    def _register_tools(self):
        """Automatically register methods decorated with @tool, in definition order."""
        for klass in reversed(type(self).__mro__):
            for attr_name, attr in vars(klass).items():
                if getattr(attr, '_is_tool', False):
                    method = getattr(self, attr_name)
                    tool = make_tool(method, attr._tool_name or attr_name)
                    self.tool_registry.register_tool(tool.name, tool)

    @staticmethod
    def tool(func=None, *, name: Optional[str] = None):
        """
        Decorator to mark methods as tools.

        Use bare (``@ToolRegistryMixin.tool``) to expose the method name, or
        with ``name=`` when the LLM-facing name differs.
        """
        def mark(f):
            f._is_tool = True
            f._tool_name = name
            return f
        if func is not None:
            return mark(func)
        return mark

    def invoke_tool(self, name: str, arguments: Dict[str, Any]) -> Any:
        """Run one of this object's tools with JSON-style arguments."""
        return self.tool_registry.invoke(name, arguments)

    @property
    def tools(self) -> List[BaseTool]:
        """Registered tools, ready to hand to an agent."""
        return list(self.tool_registry.tools.values())

    @property
    def tool_schemas(self):
        """Get all tool schemas for LLM."""
        return self.tool_registry.schemas
