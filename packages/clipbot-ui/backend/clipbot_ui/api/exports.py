"""Export API routes."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from clipbot_core import ArtifactKind, ExportPipeline
from clipbot_ui.dependencies import get_pipeline
from clipbot_ui.schemas.export import ExportBody

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["exports"])


def run_export(
    pipeline: ExportPipeline,
    body: ExportBody,
    kind: ArtifactKind,
    action: str,
) -> JSONResponse:
    """Run one export and map the result onto an HTTP response."""
    try:
        result = pipeline.run(body.to_request(kind))
    except Exception as e:
        logger.exception("api.export_crashed", extra={"kind": kind.value})
        return JSONResponse(
            {
                "success": False,
                "error": f"Failed to {action}",
                "category": "InternalError",
                "details": str(e),
            },
            status_code=500,
        )

    if result.success:
        return JSONResponse(result.to_response())

    status_code = 400 if result.category == "InvalidRequest" else 500
    return JSONResponse(result.to_response(), status_code=status_code)


@router.post("/clip/generate")
def generate_clip(body: ExportBody, pipeline: ExportPipeline = Depends(get_pipeline)):
    """Short clip, returned inline."""
    return run_export(pipeline, body, ArtifactKind.CLIP, "generate clip")


@router.post("/clip/video")
def generate_video(body: ExportBody, pipeline: ExportPipeline = Depends(get_pipeline)):
    """Longer clip, stored and returned as a download URL."""
    return run_export(pipeline, body, ArtifactKind.VIDEO, "generate video clip")


@router.post("/gif/generate")
def generate_gif(body: ExportBody, pipeline: ExportPipeline = Depends(get_pipeline)):
    """Palette-optimized animated GIF."""
    return run_export(pipeline, body, ArtifactKind.GIF, "generate GIF")


@router.post("/export")
def export_vertical(body: ExportBody, pipeline: ExportPipeline = Depends(get_pipeline)):
    """1080x1920 export for TikTok or YouTube Shorts."""
    return run_export(pipeline, body, ArtifactKind.PLATFORM_EXPORT, "export clip")


@router.post("/frame/generate")
def generate_frame(body: ExportBody, pipeline: ExportPipeline = Depends(get_pipeline)):
    """Single JPEG frame."""
    return run_export(pipeline, body, ArtifactKind.FRAME, "capture frame")
