"""Read pipeline documents and render runs as JSON."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from brandpilot.errors import PipelineLoadError
from brandpilot.model.agent import (
    AccountContext,
    AgentNode,
    Pipeline,
    PipelineConnection,
    PipelineStatus,
)
from brandpilot.model.run import PipelineRun


def pipeline_from_dict(data: dict[str, Any]) -> Pipeline:
    """Build a Pipeline from its stored JSON shape (camelCase keys)."""
    if not isinstance(data, dict):
        raise PipelineLoadError("Pipeline document must be a JSON object")
    try:
        return Pipeline(
            id=data["id"],
            name=data.get("name", ""),
            status=PipelineStatus(data.get("status", PipelineStatus.DRAFT)),
            nodes=tuple(AgentNode.from_dict(n) for n in data.get("nodes") or []),
            connections=tuple(
                PipelineConnection.from_dict(c) for c in data.get("connections") or []
            ),
            assigned_account_ids=tuple(data.get("assignedAccountIds") or []),
            created_at=data.get("createdAt", ""),
            updated_at=data.get("updatedAt", ""),
        )
    except KeyError as exc:
        raise PipelineLoadError(f"Missing field: {exc.args[0]}") from exc
    except (TypeError, ValueError) as exc:
        raise PipelineLoadError(f"Invalid pipeline: {exc}") from exc


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise PipelineLoadError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise PipelineLoadError(f"{path} is not valid JSON: {exc}") from exc


def load_pipeline(path: str | Path) -> Pipeline:
    """Load a pipeline document from *path*."""
    return pipeline_from_dict(_read_json(Path(path)))


def load_account_context(path: str | Path) -> AccountContext:
    """Load an account context (handle, niche, brandVoice) from *path*."""
    data = _read_json(Path(path))
    try:
        return AccountContext.from_dict(data)
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise PipelineLoadError(f"Invalid account context: {exc}") from exc


def dump_run(run: PipelineRun) -> str:
    return json.dumps(run.to_dict(), indent=2)
