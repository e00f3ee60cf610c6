"""Export pipeline orchestration."""

from clipbot_core.pipeline.base import PipelineStage, StageResult, WorkUnit
from clipbot_core.pipeline.export import ExportPipeline

__all__ = ["PipelineStage", "StageResult", "WorkUnit", "ExportPipeline"]
