"""Agent implementations for Ralph."""

from ralph_opencode.agents.base import Agent, AgentInvocationError
from ralph_opencode.agents.custom import CustomAgent
from ralph_opencode.agents.logging import LoggingAgent
from ralph_opencode.agents.opencode import OpenCodeAgent

__all__ = [
    "Agent",
    "AgentInvocationError",
    "CustomAgent",
    "LoggingAgent",
    "OpenCodeAgent",
    "get_agent",
]


def get_agent(agent_cmd: str | None = None, model: str | None = None) -> Agent:
    """Get appropriate agent based on configuration."""
    if agent_cmd:
        return CustomAgent(agent_cmd)
    return OpenCodeAgent(model=model)
