"""In-memory AgentCaller with canned per-type output, for tests and dry runs."""
from __future__ import annotations

import threading
from dataclasses import dataclass

from brandpilot.agents.caller import AgentCallRequest, AgentCallResult, ProgressCallback
from brandpilot.model.agent import AgentType


@dataclass(frozen=True)
class CannedOutput:
    lines: tuple[str, ...]
    result: str


CANNED_OUTPUTS: dict[AgentType, CannedOutput] = {
    AgentType.CONTENT_RESEARCHER: CannedOutput(
        lines=(
            "Found 14 trending topics in niche...",
            "Top trend: 'Morning routine content' (+340% engagement)",
            "Recommendation: Focus on morning routine + transformation content",
        ),
        result=(
            "Trend Report: 14 topics identified. Top recommendation: Morning routine "
            "content (+340% engagement). 3 competitor insights collected."
        ),
    ),
    AgentType.CONTENT_WRITER: CannedOutput(
        lines=(
            "Draft 1: \"Your morning sets the tone for everything...\"",
            "Refining with engagement hooks...",
            "Final caption generated (142 characters)",
        ),
        result=(
            "Your morning sets the tone for everything. 5 AM isn't early, it's an "
            "advantage. Drop a \U0001F525 if you're part of the early crew.\n\n"
            "What's your non-negotiable morning habit? Tell me below \U0001F447"
        ),
    ),
    AgentType.HASHTAG_GENERATOR: CannedOutput(
        lines=(
            "Filtering banned hashtags...",
            "Selecting mix: 5 broad + 10 niche + 5 trending",
            "20 hashtags selected, avg reach: 2.1M",
        ),
        result=(
            "#fitness #morningroutine #fitnessmotivation #5amclub #grindset #gymlife "
            "#healthylifestyle #fitfam #workoutmotivation #transformationtuesday"
        ),
    ),
    AgentType.MEDIA_CREATOR: CannedOutput(
        lines=(
            "Style: minimalist, high contrast",
            "Layout: vertical (1080x1350)",
            "Image ready, 1080x1350px, optimized for feed",
        ),
        result=(
            "Generated: 1080x1350 feed image. Style: minimalist dark with red accent. "
            "Text overlay: \"Your morning sets the tone.\""
        ),
    ),
    AgentType.SCHEDULER: CannedOutput(
        lines=(
            "Peak engagement window: 6:00 AM - 8:00 AM EST",
            "No conflicts found",
            "Optimal slot: Tuesday 6:30 AM EST",
        ),
        result=(
            "Scheduled for Tuesday at 6:30 AM EST. Predicted engagement: 4.2% "
            "(above 3.8% average). No queue conflicts."
        ),
    ),
    AgentType.PUBLISHER: CannedOutput(
        lines=(
            "Validating media dimensions...",
            "Publishing caption + hashtags...",
            "Post ID: ig_post_9284756",
        ),
        result="Published. Post ID: ig_post_9284756. Status: Live.",
    ),
    AgentType.ENGAGEMENT_BOT: CannedOutput(
        lines=(
            "3 new comments detected",
            "1 new DM, auto-response queued",
            "Engagement session complete: 3 replies, 1 DM",
        ),
        result=(
            "Engagement complete: 3 comments replied to, 1 DM auto-responded. "
            "Sentiment: 100% positive."
        ),
    ),
    AgentType.ANALYTICS_MONITOR: CannedOutput(
        lines=(
            "Impressions: 1,240 (first 2 hours)",
            "Engagement rate: 4.8% (above 3.8% baseline)",
            "Performance: 26% above average",
        ),
        result=(
            "Post Performance: 1,240 impressions, 4.8% engagement rate (+26% vs avg). "
            "+18 new followers attributed."
        ),
    ),
}


class StubAgentCaller:
    """AgentCaller returning canned output per agent type.

    *script* queues results per type; each call for that type consumes the
    next entry (an ``AgentCallResult`` is returned, an exception raised) and
    falls back to the canned output once the queue is empty. Every request is
    recorded in ``calls``.
    """

    def __init__(
        self,
        script: dict[AgentType, list[AgentCallResult | Exception]] | None = None,
    ) -> None:
        self._script = {k: list(v) for k, v in (script or {}).items()}
        self._lock = threading.Lock()
        self.calls: list[AgentCallRequest] = []

    @classmethod
    def failing(cls, *agent_types: AgentType, error: str = "Simulated failure") -> StubAgentCaller:
        """Stub whose first call for each of *agent_types* fails with *error*."""
        return cls({t: [AgentCallResult.failure(error)] for t in agent_types})

    def call(
        self,
        request: AgentCallRequest,
        progress: ProgressCallback | None = None,
    ) -> AgentCallResult:
        with self._lock:
            self.calls.append(request)
            queue = self._script.get(request.node_type)
            scripted = queue.pop(0) if queue else None

        if isinstance(scripted, Exception):
            raise scripted
        if scripted is not None:
            return scripted

        canned = CANNED_OUTPUTS[request.node_type]
        if progress is not None:
            for line in canned.lines:
                progress(line)
        return AgentCallResult.ok(canned.result)
