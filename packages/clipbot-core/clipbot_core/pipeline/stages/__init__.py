"""Pipeline stages."""

from clipbot_core.pipeline.stages.assemble import AssembleStage
from clipbot_core.pipeline.stages.fetch import FetchStage
from clipbot_core.pipeline.stages.transcode import (
    LoopStage,
    RemuxStage,
    StillStage,
    TranscodeStage,
    VerticalStage,
)

__all__ = [
    "FetchStage",
    "TranscodeStage",
    "RemuxStage",
    "VerticalStage",
    "LoopStage",
    "StillStage",
    "AssembleStage",
]
