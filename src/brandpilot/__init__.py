"""BrandPilot: sequential runner for social-media agent pipelines."""
from __future__ import annotations

__version__ = "0.1.0"

from brandpilot.config import BrandPilotConfig  # noqa: E402
from brandpilot.runner import ExecutionRunner  # noqa: E402

__all__ = [
    "__version__",
    "BrandPilotConfig",
    "ExecutionRunner",
]
