from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class AgentType(StrEnum):
    CONTENT_RESEARCHER = "content_researcher"
    CONTENT_WRITER = "content_writer"
    HASHTAG_GENERATOR = "hashtag_generator"
    MEDIA_CREATOR = "media_creator"
    SCHEDULER = "scheduler"
    PUBLISHER = "publisher"
    ENGAGEMENT_BOT = "engagement_bot"
    ANALYTICS_MONITOR = "analytics_monitor"


AGENT_TYPE_LABELS: dict[AgentType, str] = {
    AgentType.CONTENT_RESEARCHER: "Content Researcher",
    AgentType.CONTENT_WRITER: "Content Writer",
    AgentType.HASHTAG_GENERATOR: "Hashtag Generator",
    AgentType.MEDIA_CREATOR: "Media Creator",
    AgentType.SCHEDULER: "Scheduler",
    AgentType.PUBLISHER: "Publisher",
    AgentType.ENGAGEMENT_BOT: "Engagement Bot",
    AgentType.ANALYTICS_MONITOR: "Analytics Monitor",
}


class AgentNodeStatus(StrEnum):
    UNCONFIGURED = "unconfigured"
    CONFIGURED = "configured"
    ERROR = "error"


class AutonomyLevel(StrEnum):
    FULL_AUTO = "full_auto"
    SEMI_AUTO = "semi_auto"
    APPROVAL_REQUIRED = "approval_required"


class AIProvider(StrEnum):
    ANTHROPIC = "anthropic"
    OPENAI = "openai"


class PipelineStatus(StrEnum):
    DRAFT = "draft"
    ACTIVE = "active"
    PAUSED = "paused"


@dataclass(frozen=True)
class Position:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class AgentNode:
    id: str
    type: AgentType
    name: str = ""
    position: Position = Position()
    config: dict[str, Any] | None = field(default=None, hash=False)
    status: AgentNodeStatus = AgentNodeStatus.UNCONFIGURED
    autonomy_level: AutonomyLevel = AutonomyLevel.APPROVAL_REQUIRED
    is_active: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AgentNode:
        position = data.get("position") or {}
        return cls(
            id=data["id"],
            type=AgentType(data["type"]),
            name=data.get("name", ""),
            position=Position(x=position.get("x", 0.0), y=position.get("y", 0.0)),
            config=data.get("config"),
            status=AgentNodeStatus(data.get("status", AgentNodeStatus.UNCONFIGURED)),
            autonomy_level=AutonomyLevel(
                data.get("autonomyLevel", AutonomyLevel.APPROVAL_REQUIRED)
            ),
            is_active=bool(data.get("isActive", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "name": self.name,
            "position": {"x": self.position.x, "y": self.position.y},
            "config": self.config,
            "status": self.status.value,
            "autonomyLevel": self.autonomy_level.value,
            "isActive": self.is_active,
        }


@dataclass(frozen=True)
class PipelineConnection:
    id: str
    source_node_id: str
    target_node_id: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PipelineConnection:
        return cls(
            id=data["id"],
            source_node_id=data["sourceNodeId"],
            target_node_id=data["targetNodeId"],
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "sourceNodeId": self.source_node_id,
            "targetNodeId": self.target_node_id,
        }


@dataclass(frozen=True)
class Pipeline:
    id: str
    name: str
    status: PipelineStatus = PipelineStatus.DRAFT
    nodes: tuple[AgentNode, ...] = ()
    connections: tuple[PipelineConnection, ...] = ()
    assigned_account_ids: tuple[str, ...] = ()
    created_at: str = ""
    updated_at: str = ""

    def node(self, node_id: str) -> AgentNode | None:
        """Return the node with *node_id*, or None."""
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
            "nodes": [n.to_dict() for n in self.nodes],
            "connections": [c.to_dict() for c in self.connections],
            "assignedAccountIds": list(self.assigned_account_ids),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass(frozen=True)
class BrandVoice:
    """Tone sliders, each 0-100."""

    tone_formality: int = 50
    tone_humor: int = 50
    tone_inspiration: int = 50


@dataclass(frozen=True)
class AccountContext:
    handle: str
    niche: str
    brand_voice: BrandVoice = BrandVoice()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AccountContext:
        voice = data.get("brandVoice") or {}
        return cls(
            handle=data["handle"],
            niche=data["niche"],
            brand_voice=BrandVoice(
                tone_formality=int(voice.get("toneFormality", 50)),
                tone_humor=int(voice.get("toneHumor", 50)),
                tone_inspiration=int(voice.get("toneInspiration", 50)),
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "handle": self.handle,
            "niche": self.niche,
            "brandVoice": {
                "toneFormality": self.brand_voice.tone_formality,
                "toneHumor": self.brand_voice.tone_humor,
                "toneInspiration": self.brand_voice.tone_inspiration,
            },
        }
