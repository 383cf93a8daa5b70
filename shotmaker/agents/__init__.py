"""AI Agents for Shotmaker."""

from shotmaker.agents.script_agent import ScriptAgent

__all__ = [
    "ScriptAgent",
]
