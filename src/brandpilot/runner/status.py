"""Per-type status lines and the live streaming buffer."""
from __future__ import annotations

from brandpilot.model.agent import AgentType

STATUS_LINES: dict[AgentType, tuple[str, ...]] = {
    AgentType.CONTENT_RESEARCHER: (
        "Initializing trend analysis...",
        "Scanning social media trends...",
        "Analyzing competitor content...",
    ),
    AgentType.CONTENT_WRITER: (
        "Loading brand voice profile...",
        "Generating caption draft...",
        "Applying tone and style...",
    ),
    AgentType.HASHTAG_GENERATOR: (
        "Analyzing content context...",
        "Researching hashtag performance...",
        "Selecting optimal mix...",
    ),
    AgentType.MEDIA_CREATOR: (
        "Analyzing content for visual direction...",
        "Generating visual brief...",
        "Preparing creative specifications...",
    ),
    AgentType.SCHEDULER: (
        "Analyzing audience activity patterns...",
        "Calculating optimal posting window...",
        "Checking schedule conflicts...",
    ),
    AgentType.PUBLISHER: (
        "Preparing publish package...",
        "Validating content requirements...",
        "Running pre-publish checks...",
    ),
    AgentType.ENGAGEMENT_BOT: (
        "Analyzing engagement patterns...",
        "Crafting reply templates...",
        "Configuring trigger rules...",
    ),
    AgentType.ANALYTICS_MONITOR: (
        "Collecting performance metrics...",
        "Analyzing engagement data...",
        "Generating insights report...",
    ),
}

DEFAULT_STATUS_LINES: tuple[str, ...] = ("Processing...",)


def status_lines_for(agent_type: AgentType | str) -> tuple[str, ...]:
    return STATUS_LINES.get(agent_type, DEFAULT_STATUS_LINES)  # type: ignore[arg-type]


class StreamBuffer:
    """Live status text for the node currently executing.

    Not thread-safe on its own; the runner mutates it under its lock.
    """

    def __init__(self) -> None:
        self._lines: list[str] = []

    def reset(self, first_line: str | None = None) -> None:
        self._lines = [first_line] if first_line is not None else []

    def append(self, line: str) -> None:
        self._lines.append(line)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    def __bool__(self) -> bool:
        return bool(self._lines)
