"""Stream analysis service client."""

from clipbot_core.ai.vibestream import (
    AnalysisModel,
    AnalysisServiceError,
    CheckResult,
    Moment,
    MonitorJob,
    VibeStreamClient,
)

__all__ = [
    "AnalysisModel",
    "AnalysisServiceError",
    "CheckResult",
    "Moment",
    "MonitorJob",
    "VibeStreamClient",
]
