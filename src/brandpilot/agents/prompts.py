"""System and user prompts for each agent type."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable

from brandpilot.model.agent import AccountContext, AgentType

_JSON_ONLY = "Respond ONLY with valid JSON in this format:"

RESEARCHER_FORMAT = """\
{
  "trendingTopics": ["topic1", "topic2", "topic3"],
  "competitorInsights": "Brief competitor analysis",
  "contentRecommendation": "Specific content idea with reasoning",
  "predictedEngagement": "high/medium/low with brief explanation"
}"""

WRITER_FORMAT = """\
{
  "caption": "The full post caption text ready to publish",
  "hook": "The opening line/hook",
  "callToAction": "The CTA at the end"
}"""

HASHTAG_FORMAT = """\
{
  "hashtags": ["hashtag1", "hashtag2"],
  "strategy": "Brief explanation of hashtag selection strategy",
  "estimatedReach": "Rough reach estimate"
}"""

MEDIA_FORMAT = """\
{
  "imageDescription": "Detailed description of the visual to create",
  "dimensions": "1080x1080 or 1080x1350 or 1080x1920",
  "style": "Visual style description",
  "textOverlay": "Any text to overlay on the image, or null",
  "colorPalette": ["#hex1", "#hex2"]
}"""

SCHEDULER_FORMAT = """\
{
  "scheduledTime": "YYYY-MM-DDTHH:mm:ss",
  "dayOfWeek": "Monday/Tuesday/etc",
  "reasoning": "Why this time was chosen",
  "alternativeSlot": "YYYY-MM-DDTHH:mm:ss"
}"""

PUBLISHER_FORMAT = """\
{
  "publishReady": true,
  "publishSummary": "Summary of what will be published",
  "platform": "instagram",
  "contentChecklist": ["item1", "item2"],
  "estimatedReach": "Rough estimate"
}"""

ENGAGEMENT_FORMAT = """\
{
  "replyTemplates": ["reply1", "reply2", "reply3"],
  "engagementStrategy": "Overall engagement approach",
  "dmTemplate": "Auto DM template text or null",
  "triggerKeywords": ["keyword1", "keyword2"]
}"""

ANALYTICS_FORMAT = """\
{
  "performanceSummary": "Overall performance assessment",
  "keyMetrics": {"metric1": "value1", "metric2": "value2"},
  "insights": ["insight1", "insight2"],
  "recommendations": ["recommendation1", "recommendation2"]
}"""


@dataclass(frozen=True)
class AgentPrompt:
    system: str
    user: str


@dataclass(frozen=True)
class _PromptContext:
    config: dict[str, Any]
    niche: str
    handle: str
    tone: str
    previous: str
    today: date


def brand_tone_description(formality: int, humor: int, inspiration: int) -> str:
    """Describe a brand voice from its 0-100 tone sliders."""
    parts: list[str] = []
    if formality < 30:
        parts.append("very casual")
    elif formality < 60:
        parts.append("conversational")
    else:
        parts.append("professional")
    if humor > 60:
        parts.append("humorous")
    if inspiration > 60:
        parts.append("inspirational")
    return ", ".join(parts)


def _list(value: Any, default: str, sep: str = ", ") -> str:
    if isinstance(value, list) and value:
        return sep.join(str(v) for v in value)
    return default


def _researcher(ctx: _PromptContext) -> AgentPrompt:
    cfg = ctx.config
    sources = cfg.get("trendSources")
    if isinstance(sources, dict):
        sources_str = ", ".join(k for k, v in sources.items() if v)
    else:
        sources_str = "all available"
    return AgentPrompt(
        system=(
            f"You are a social media trend researcher specializing in the {ctx.niche} niche. "
            "You analyze trends, competitor content, and audience interests to provide "
            f"actionable content recommendations.\n\n{_JSON_ONLY}\n{RESEARCHER_FORMAT}"
        ),
        user=(
            f"Research trending content opportunities for {ctx.handle} in the {ctx.niche} niche.\n\n"
            f"Focus areas: {_list(cfg.get('topics'), ctx.niche)}\n"
            f"Competitor accounts to analyze: {_list(cfg.get('competitorAccounts'), 'none specified')}\n"
            f"Trend sources: {sources_str}{ctx.previous}\n\n"
            "Provide trending topics, competitor insights, and a specific content recommendation."
        ),
    )


def _writer(ctx: _PromptContext) -> AgentPrompt:
    cfg = ctx.config
    persona = [f"You are a social media copywriter with a {ctx.tone} voice for the {ctx.niche} niche."]
    if cfg.get("personaName"):
        persona.append(f'You write as "{cfg["personaName"]}".')
    if cfg.get("personalityDescription"):
        persona.append(f"Personality: {cfg['personalityDescription']}")
    if cfg.get("writingTone"):
        persona.append(f"Writing tone: {cfg['writingTone']}")
    persona.append(f"Emoji usage: {cfg.get('emojiUsage') or 'moderate'}")

    examples = ""
    posts = cfg.get("examplePosts")
    if isinstance(posts, list) and posts:
        numbered = "\n".join(f'{i}. "{p}"' for i, p in enumerate(posts, start=1))
        examples = f"\nExample posts for voice reference:\n{numbered}"

    return AgentPrompt(
        system="\n".join(persona) + f"\n\n{_JSON_ONLY}\n{WRITER_FORMAT}",
        user=(
            f"Write an engaging social media post for {ctx.handle}.\n"
            f"{examples}{ctx.previous}\n\n"
            "Create a caption that matches the brand voice. Include a strong opening hook "
            "and a clear call-to-action."
        ),
    )


def _hashtags(ctx: _PromptContext) -> AgentPrompt:
    cfg = ctx.config
    banned = ""
    if isinstance(cfg.get("bannedHashtags"), list) and cfg["bannedHashtags"]:
        banned = f"Banned hashtags (DO NOT use): {_list(cfg['bannedHashtags'], '')}"
    return AgentPrompt(
        system=(
            f"You are a social media hashtag strategist for the {ctx.niche} niche. "
            "You select hashtags that maximize reach and engagement.\n\n"
            f"{_JSON_ONLY}\n{HASHTAG_FORMAT}"
        ),
        user=(
            f"Generate optimal hashtags for {ctx.handle} in the {ctx.niche} niche.\n\n"
            f"Strategy: {cfg.get('strategy') or 'mixed'}\n"
            f"Count: {cfg.get('hashtagCountMin', 5)} to {cfg.get('hashtagCountMax', 20)} hashtags\n"
            f"{banned}{ctx.previous}\n\n"
            "Select a mix of broad reach and niche-specific hashtags. "
            "Do NOT include the # symbol in the hashtag strings."
        ),
    )


def _media(ctx: _PromptContext) -> AgentPrompt:
    cfg = ctx.config
    return AgentPrompt(
        system=(
            f"You are a visual content strategist for social media in the {ctx.niche} niche. "
            "You provide detailed visual content briefs and image descriptions.\n\n"
            f"{_JSON_ONLY}\n{MEDIA_FORMAT}"
        ),
        user=(
            f"Create a visual content brief for {ctx.handle}.\n\n"
            f"Visual style: {cfg.get('visualStyle') or 'modern and clean'}\n"
            f"Brand colors: {_list(cfg.get('brandColors'), 'use niche-appropriate colors')}\n"
            f"Content formats: {_list(cfg.get('contentFormats'), 'feed post')}{ctx.previous}\n\n"
            "Describe the ideal visual that would complement the content."
        ),
    )


def _scheduler(ctx: _PromptContext) -> AgentPrompt:
    cfg = ctx.config
    return AgentPrompt(
        system=(
            "You are a social media scheduling strategist. You determine optimal posting "
            "times based on audience behavior patterns.\n\n"
            f"{_JSON_ONLY}\n{SCHEDULER_FORMAT}"
        ),
        user=(
            f"Determine the optimal posting time for {ctx.handle} in the {ctx.niche} niche.\n\n"
            f"Active days: {_list(cfg.get('activeDays'), 'Monday through Friday')}\n"
            f"Posting window: {cfg.get('postingWindowStart') or '09:00'} to "
            f"{cfg.get('postingWindowEnd') or '21:00'}\n"
            f"Timezone: {cfg.get('timezone') or 'EST'}\n"
            f"Posts per day: {cfg.get('postsPerDay', 1)}{ctx.previous}\n\n"
            f"The current date is {ctx.today.isoformat()}. Schedule the next optimal post time."
        ),
    )


def _publisher(ctx: _PromptContext) -> AgentPrompt:
    cfg = ctx.config
    cross = "enabled" if cfg.get("crossPostingEnabled") else "disabled"
    return AgentPrompt(
        system=(
            "You are a social media publishing assistant. You prepare final publish-ready "
            "content packages and verify everything is ready for posting.\n\n"
            f"{_JSON_ONLY}\n{PUBLISHER_FORMAT}"
        ),
        user=(
            f"Prepare a publish package for {ctx.handle}.\n\n"
            f"Target accounts: {_list(cfg.get('accountIds'), ctx.handle)}\n"
            f"Cross-posting: {cross}{ctx.previous}\n\n"
            "Review the content from previous agents and confirm it's ready to publish. "
            "Provide a final summary."
        ),
    )


def _engagement(ctx: _PromptContext) -> AgentPrompt:
    cfg = ctx.config
    keywords = ""
    if isinstance(cfg.get("triggerKeywords"), list) and cfg["triggerKeywords"]:
        keywords = f"Trigger keywords: {_list(cfg['triggerKeywords'], '')}"
    dm = "enabled" if cfg.get("dmAutoResponse") else "disabled"
    return AgentPrompt(
        system=(
            "You are a social media engagement specialist. You craft authentic replies, "
            "responses, and engagement strategies.\n\n"
            f"{_JSON_ONLY}\n{ENGAGEMENT_FORMAT}"
        ),
        user=(
            f"Create an engagement strategy for {ctx.handle} in the {ctx.niche} niche.\n\n"
            f"Reply tone: {cfg.get('replyTone') or ctx.tone}\n"
            f"Auto-reply triggers: {_list(cfg.get('autoReplyTriggers'), 'all comments')}\n"
            f"{keywords}\n"
            f"DM auto-response: {dm}{ctx.previous}\n\n"
            "Create reply templates and an engagement strategy that feels authentic."
        ),
    )


def _analytics(ctx: _PromptContext) -> AgentPrompt:
    cfg = ctx.config
    thresholds = cfg.get("performanceThresholds") or {}
    return AgentPrompt(
        system=(
            "You are a social media analytics expert. You analyze performance data and "
            "provide actionable insights.\n\n"
            f"{_JSON_ONLY}\n{ANALYTICS_FORMAT}"
        ),
        user=(
            f"Analyze content performance for {ctx.handle} in the {ctx.niche} niche.\n\n"
            "Metrics to focus on: "
            f"{_list(cfg.get('metricsToTrack'), 'followers, engagement_rate, reach')}\n"
            f"Reporting frequency: {cfg.get('reportingFrequency') or 'daily'}\n"
            f"Min engagement rate threshold: {thresholds.get('minEngagementRate', 3)}%\n"
            f"Min reach threshold: {thresholds.get('minReach', 500)}{ctx.previous}\n\n"
            "Provide a performance analysis with insights and actionable recommendations."
        ),
    )


_BUILDERS: dict[AgentType, Callable[[_PromptContext], AgentPrompt]] = {
    AgentType.CONTENT_RESEARCHER: _researcher,
    AgentType.CONTENT_WRITER: _writer,
    AgentType.HASHTAG_GENERATOR: _hashtags,
    AgentType.MEDIA_CREATOR: _media,
    AgentType.SCHEDULER: _scheduler,
    AgentType.PUBLISHER: _publisher,
    AgentType.ENGAGEMENT_BOT: _engagement,
    AgentType.ANALYTICS_MONITOR: _analytics,
}


def build_agent_prompt(
    agent_type: AgentType,
    config: dict[str, Any] | None,
    previous_output: str | None,
    account_context: AccountContext | None,
    *,
    today: date | None = None,
) -> AgentPrompt:
    """Build the system and user prompt for one agent call.

    Unconfigured nodes (``config=None``) fall back to per-type defaults.
    When *previous_output* is set it is appended to the user prompt as
    context from the previous agent in the pipeline.
    """
    if account_context is not None:
        voice = account_context.brand_voice
        tone = brand_tone_description(
            voice.tone_formality, voice.tone_humor, voice.tone_inspiration
        )
        niche, handle = account_context.niche, account_context.handle
    else:
        tone, niche, handle = "engaging and authentic", "general", "the account"

    previous = ""
    if previous_output:
        previous = (
            "\n\nContext from the previous agent in the pipeline:\n"
            f"---\n{previous_output}\n---"
        )

    ctx = _PromptContext(
        config=config or {},
        niche=niche,
        handle=handle,
        tone=tone,
        previous=previous,
        today=today or date.today(),
    )
    builder = _BUILDERS.get(agent_type)
    if builder is None:
        return AgentPrompt(
            system="You are a helpful social media assistant. Respond with valid JSON.",
            user=f"Help with a social media task for {handle}.{previous}",
        )
    return builder(ctx)
