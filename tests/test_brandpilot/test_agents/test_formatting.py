"""Tests for JSON extraction and result summaries."""

from __future__ import annotations

import json

import pytest

from brandpilot.agents.formatting import extract_json_string, format_node_result
from brandpilot.model.agent import AgentType


class TestExtractJson:
    def test_plain_json_unchanged(self):
        text = '{"caption": "hi"}'
        assert extract_json_string(text) == text

    def test_code_fence(self):
        text = 'Here you go:\n```json\n{"caption": "hi"}\n```\nEnjoy!'
        assert json.loads(extract_json_string(text)) == {"caption": "hi"}

    def test_fence_without_language(self):
        text = '```\n{"a": 1}\n```'
        assert json.loads(extract_json_string(text)) == {"a": 1}

    def test_embedded_object(self):
        text = 'Sure! {"hashtags": ["fit"]} Hope that helps.'
        assert json.loads(extract_json_string(text)) == {"hashtags": ["fit"]}

    def test_no_json(self):
        assert extract_json_string("no json here") == "no json here"


class TestFormatNodeResult:
    def test_researcher(self):
        raw = json.dumps({
            "trendingTopics": ["5am club", "meal prep"],
            "contentRecommendation": "Morning routine reel",
            "predictedEngagement": "high",
        })
        assert format_node_result(AgentType.CONTENT_RESEARCHER, raw) == (
            "Recommendation: Morning routine reel\n"
            "Trending: 5am club, meal prep\n"
            "Predicted engagement: high"
        )

    def test_writer_returns_caption(self):
        raw = json.dumps({"caption": "Your morning sets the tone.", "hook": "Your morning"})
        assert format_node_result(AgentType.CONTENT_WRITER, raw) == "Your morning sets the tone."

    def test_hashtags_prefixed(self):
        raw = json.dumps({"hashtags": ["fitness", "5amclub"]})
        assert format_node_result(AgentType.HASHTAG_GENERATOR, raw) == "#fitness #5amclub"

    def test_media(self):
        raw = json.dumps({"imageDescription": "Sunrise gym", "dimensions": "1080x1350", "style": "dark"})
        assert format_node_result(AgentType.MEDIA_CREATOR, raw) == (
            "Sunrise gym\nDimensions: 1080x1350\nStyle: dark"
        )

    def test_scheduler(self):
        raw = json.dumps({
            "scheduledTime": "2026-02-11T06:30:00",
            "dayOfWeek": "Tuesday",
            "reasoning": "Early risers",
        })
        assert format_node_result(AgentType.SCHEDULER, raw) == (
            "Scheduled: 2026-02-11T06:30:00\nDay: Tuesday\nEarly risers"
        )

    def test_publisher(self):
        raw = json.dumps({"publishSummary": "Ready", "contentChecklist": ["caption", "image"]})
        assert format_node_result(AgentType.PUBLISHER, raw) == "Ready\nChecklist: caption, image"

    def test_engagement_counts_templates(self):
        raw = json.dumps({"engagementStrategy": "Reply fast", "replyTemplates": ["a", "b", "c"]})
        assert format_node_result(AgentType.ENGAGEMENT_BOT, raw) == "Reply fast\nTemplates: 3 created"

    def test_analytics(self):
        raw = json.dumps({"performanceSummary": "Strong week", "insights": ["reels win", "post early"]})
        assert format_node_result(AgentType.ANALYTICS_MONITOR, raw) == (
            "Strong week\nInsights: reels win; post early"
        )

    def test_missing_fields_are_omitted(self):
        raw = json.dumps({"publishSummary": "Ready"})
        assert format_node_result(AgentType.PUBLISHER, raw) == "Ready"

    @pytest.mark.parametrize("raw", ["not json at all", "[1, 2, 3]", '"just a string"', ""])
    def test_non_object_returned_verbatim(self, raw):
        assert format_node_result(AgentType.CONTENT_WRITER, raw) == raw

    def test_no_expected_fields_returns_raw(self):
        raw = json.dumps({"unexpected": True})
        assert format_node_result(AgentType.CONTENT_WRITER, raw) == raw

    @pytest.mark.parametrize("agent_type", list(AgentType))
    def test_same_input_same_output(self, agent_type):
        raw = json.dumps({"caption": "c", "hashtags": ["h"], "publishSummary": "p", "insights": ["i"]})
        assert format_node_result(agent_type, raw) == format_node_result(agent_type, raw)
