"""Stream analysis API routes."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from clipbot_core import AnalysisServiceError, TwitchClient, VibeStreamClient
from clipbot_core.ai.vibestream import AnalysisModel
from clipbot_core.platforms.twitch import TwitchAPIError, extract_channel_name, get_stream_thumbnail
from clipbot_core.utils.video import detect_source_platform, extract_video_id, get_thumbnail_url
from clipbot_ui.dependencies import get_twitch, get_vibestream
from clipbot_ui.schemas.stream import StreamCheckBody, StreamMonitorBody

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/stream", tags=["stream"])


def error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def parse_model(name: Optional[str]) -> AnalysisModel:
    return AnalysisModel(name) if name else AnalysisModel.GEMINI_FLASH


@router.post("/check")
def check_stream(body: StreamCheckBody, client: VibeStreamClient = Depends(get_vibestream)):
    """Ask the analysis service whether a condition holds right now."""
    if not body.youtubeUrl or not body.condition:
        return error("youtubeUrl and condition are required", 400)
    try:
        model = parse_model(body.model)
    except ValueError:
        return error(f"Unknown model: {body.model}", 400)

    try:
        result = client.check_once(body.youtubeUrl, body.condition, model=model)
    except AnalysisServiceError as e:
        logger.error("api.check_failed", extra={"error": str(e)})
        return error("Failed to check stream", 500)
    return result.to_dict()


@router.post("/monitor")
def start_monitor(body: StreamMonitorBody, client: VibeStreamClient = Depends(get_vibestream)):
    """Start a monitoring job."""
    if not body.youtubeUrl or not body.condition:
        return error("youtubeUrl and condition are required", 400)
    try:
        model = parse_model(body.model)
    except ValueError:
        return error(f"Unknown model: {body.model}", 400)

    try:
        job = client.start_monitoring(
            body.youtubeUrl,
            body.condition,
            model=model,
            interval_seconds=body.intervalSeconds or 30,
        )
    except AnalysisServiceError as e:
        logger.error("api.monitor_failed", extra={"error": str(e)})
        return error("Failed to start monitoring", 500)
    return job.to_dict()


@router.delete("/monitor")
def stop_monitor(
    job_id: Optional[str] = Query(None, alias="jobId"),
    client: VibeStreamClient = Depends(get_vibestream),
):
    """Stop a monitoring job."""
    if not job_id:
        return error("jobId is required", 400)
    try:
        client.stop_monitoring(job_id)
    except AnalysisServiceError as e:
        logger.error("api.stop_failed", extra={"job_id": job_id, "error": str(e)})
        return error("Failed to stop monitoring", 500)
    return {"success": True}


@router.get("/jobs")
def list_jobs(client: VibeStreamClient = Depends(get_vibestream)):
    """All monitoring jobs."""
    try:
        jobs = client.list_jobs()
    except AnalysisServiceError as e:
        logger.error("api.jobs_failed", extra={"error": str(e)})
        return error("Failed to get jobs", 500)
    return [job.to_dict() for job in jobs]


@router.get("/moments")
def list_moments(
    job_id: Optional[str] = Query(None, alias="jobId"),
    client: VibeStreamClient = Depends(get_vibestream),
):
    """Moments detected by a monitoring job."""
    if not job_id:
        return error("jobId is required", 400)
    try:
        moments = client.get_moments(job_id)
    except AnalysisServiceError as e:
        logger.error("api.moments_failed", extra={"job_id": job_id, "error": str(e)})
        return error("Failed to get moments", 500)
    return [moment.to_dict() for moment in moments]


@router.get("/info")
def stream_info(
    url: Optional[str] = Query(None),
    twitch: TwitchClient = Depends(get_twitch),
):
    """Detect the source platform and describe the stream."""
    if not url:
        return error("url is required", 400)

    match detect_source_platform(url):
        case "youtube":
            video_id = extract_video_id(url)
            return {
                "platform": "youtube",
                "videoId": video_id,
                "thumbnailUrl": get_thumbnail_url(video_id) if video_id else None,
            }
        case "twitch":
            channel = extract_channel_name(url)
            if not channel:
                return error("Could not find a channel name in the URL", 400)
            try:
                stream = twitch.get_stream_info(channel)
                user = twitch.get_user_info(channel)
            except TwitchAPIError as e:
                logger.error("api.twitch_failed", extra={"channel": channel, "error": str(e)})
                return error("Failed to get stream info", 500)
            return {
                "platform": "twitch",
                "channel": channel,
                "live": bool(stream and stream.is_live),
                "stream": stream.to_dict() if stream else None,
                "user": user.to_dict() if user else None,
                "thumbnailUrl": get_stream_thumbnail(stream.thumbnail_url) if stream else None,
            }
        case _:
            return error("Unsupported stream URL; use a YouTube or Twitch link", 400)
