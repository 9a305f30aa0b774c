"""Turn raw agent output into JSON and one-paragraph summaries."""
from __future__ import annotations

import json
import re
from typing import Any, Callable

from brandpilot.model.agent import AgentType

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)
_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


def extract_json_string(text: str) -> str:
    """Best-effort extraction of a JSON document from model output.

    Tries, in order: the text as-is, the first markdown code fence, the
    outermost ``{...}`` span. Returns *text* unchanged when none apply;
    the result is not guaranteed to parse.
    """
    try:
        json.loads(text)
        return text
    except (json.JSONDecodeError, TypeError):
        pass
    match = _FENCE_RE.search(text)
    if match:
        return match.group(1).strip()
    match = _OBJECT_RE.search(text)
    if match:
        return match.group(0)
    return text


def _lines(*parts: Any) -> str:
    return "\n".join(str(p) for p in parts if p)


def _joined(items: Any, sep: str) -> str:
    if not isinstance(items, list) or not items:
        return ""
    return sep.join(str(i) for i in items)


def _researcher(p: dict[str, Any]) -> str:
    trending = _joined(p.get("trendingTopics"), ", ")
    return _lines(
        p.get("contentRecommendation") and f"Recommendation: {p['contentRecommendation']}",
        trending and f"Trending: {trending}",
        p.get("predictedEngagement") and f"Predicted engagement: {p['predictedEngagement']}",
    )


def _writer(p: dict[str, Any]) -> str:
    return str(p.get("caption") or "")


def _hashtags(p: dict[str, Any]) -> str:
    tags = p.get("hashtags")
    if not isinstance(tags, list) or not tags:
        return ""
    return " ".join(f"#{t}" for t in tags)


def _media(p: dict[str, Any]) -> str:
    return _lines(
        p.get("imageDescription"),
        p.get("dimensions") and f"Dimensions: {p['dimensions']}",
        p.get("style") and f"Style: {p['style']}",
    )


def _scheduler(p: dict[str, Any]) -> str:
    return _lines(
        p.get("scheduledTime") and f"Scheduled: {p['scheduledTime']}",
        p.get("dayOfWeek") and f"Day: {p['dayOfWeek']}",
        p.get("reasoning"),
    )


def _publisher(p: dict[str, Any]) -> str:
    checklist = _joined(p.get("contentChecklist"), ", ")
    return _lines(p.get("publishSummary"), checklist and f"Checklist: {checklist}")


def _engagement(p: dict[str, Any]) -> str:
    templates = p.get("replyTemplates")
    count = len(templates) if isinstance(templates, list) else 0
    return _lines(p.get("engagementStrategy"), count and f"Templates: {count} created")


def _analytics(p: dict[str, Any]) -> str:
    insights = _joined(p.get("insights"), "; ")
    return _lines(p.get("performanceSummary"), insights and f"Insights: {insights}")


_FORMATTERS: dict[AgentType, Callable[[dict[str, Any]], str]] = {
    AgentType.CONTENT_RESEARCHER: _researcher,
    AgentType.CONTENT_WRITER: _writer,
    AgentType.HASHTAG_GENERATOR: _hashtags,
    AgentType.MEDIA_CREATOR: _media,
    AgentType.SCHEDULER: _scheduler,
    AgentType.PUBLISHER: _publisher,
    AgentType.ENGAGEMENT_BOT: _engagement,
    AgentType.ANALYTICS_MONITOR: _analytics,
}


def format_node_result(agent_type: AgentType, raw: str) -> str:
    """Summarise an agent's JSON output for display and for the next node.

    Pulls the two or three most useful fields for the agent type and joins
    them with newlines. Falls back to *raw* verbatim when it is not a JSON
    object or none of the expected fields are present.
    """
    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return raw
    if not isinstance(parsed, dict):
        return raw

    formatter = _FORMATTERS.get(agent_type)
    if formatter is None:
        return raw
    return formatter(parsed) or raw
