import inspect
from typing import Optional, Type

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, create_model


def function_to_args_schema(func, model_name: Optional[str] = None) -> Type[BaseModel]:
    """
    Build a pydantic argument model from a function signature.

    Parameters are expected to be annotated, typically as
    ``Annotated[str, Field(description=...)]`` so the description reaches the
    LLM. Parameters with a default become optional fields.

    Args:
        func: A Python function or bound method with type annotations
        model_name: Name for the generated model (defaults to the function name)

    Returns:
        A pydantic model class describing the function's arguments
    """
    sig = inspect.signature(func)
    fields = {}

    for param_name, param in sig.parameters.items():
        if param_name == 'self':  # Skip self parameter
            continue
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            raise ValueError(f"Tool {func.__name__} cannot take *args or **kwargs")

        annotation = param.annotation
        if annotation == inspect.Parameter.empty:
            raise ValueError(f"Parameter {param_name} missing type annotation")

        default = ... if param.default == inspect.Parameter.empty else param.default
        fields[param_name] = (annotation, default)

    name = model_name or "".join(part.title() for part in func.__name__.split("_")) + "Args"
    return create_model(name, **fields)


def make_tool(func, name: Optional[str] = None) -> StructuredTool:
    """
    Convert a Python function into a LangChain tool.

    The docstring becomes the tool description. Tools raise
    ``ToolValidationError`` for bad input; ``handle_tool_error`` turns that into
    a tool message with ``status="error"`` instead of aborting the run.

    Args:
        func: A Python function (or bound method) with type annotations
        name: Tool name exposed to the LLM (defaults to the function name)

    Returns:
        StructuredTool: A tool the agent runtime can call
    """
    doc = inspect.getdoc(func)
    if not doc:
        raise ValueError(f"Tool {func.__name__} needs a docstring to use as its description")

    return StructuredTool.from_function(
        func=func,
        name=name or func.__name__,
        description=doc,
        args_schema=function_to_args_schema(func),
        infer_schema=False,
        handle_tool_error=True,
    )
