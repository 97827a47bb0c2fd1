"""
Tool definitions and dispatch for LLM frameworks.

    from gorilli.tools import execute_tool, to_openai_tools

    tools = to_openai_tools()                       # pass to the model
    reply = execute_tool(name, arguments, wallet)   # run what the model asked for
"""

from typing import Any, Dict, List

from pydantic import ValidationError

from gorilli.actions import GORILLI_ACTIONS, get_action
from gorilli.utils import get_logger

logger = get_logger(__name__)


def to_openai_tools() -> List[Dict[str, Any]]:
    """Generate OpenAI function-calling tool definitions for every action."""
    return [
        {
            "type": "function",
            "function": {
                "name": action.name,
                "description": action.description.strip(),
                "parameters": action.parameters(),
            },
        }
        for action in GORILLI_ACTIONS
    ]


def execute_tool(name: str, args: Dict[str, Any], wallet: Any = None) -> str:
    """
    Run an action by name and return its text result.

    Unknown names, invalid arguments and handlers that raise are all reported
    back as text so the model can correct itself.
    """
    try:
        action = get_action(name)
    except KeyError:
        return f"Unknown action: {name}. Available actions: {', '.join(a.name for a in GORILLI_ACTIONS)}."

    try:
        return action.invoke(wallet, args or {})
    except ValidationError as ve:
        logger.warning(f"Validation error in {name}: {ve}")
        return f"Invalid arguments for {name}: {_summarize(ve)}"
    except Exception as e:
        logger.error(f"Error executing {name}: {e}", exc_info=True)
        return f"Failed to execute '{name}': {e}"


def _summarize(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    )
