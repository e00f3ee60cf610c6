"""VibeStream vision-language analysis client."""

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://vibestream.machinefi.com"


class AnalysisModel(str, Enum):
    """Vision models the analysis service can run."""

    GEMINI_FLASH = "gemini-2.5-flash"
    GPT_4O_MINI = "gpt-4o-mini"


class AnalysisServiceError(Exception):
    """The analysis service was unreachable or answered with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class CheckResult:
    """Whether a condition currently holds in a stream."""

    triggered: bool
    explanation: str
    model: str = ""
    frame_b64: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "CheckResult":
        return cls(
            triggered=bool(data.get("triggered", False)),
            explanation=data.get("explanation", ""),
            model=data.get("model", ""),
            frame_b64=data.get("frame_b64"),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class MonitorJob:
    """A continuous monitoring job on the analysis service."""

    id: str
    youtube_url: str
    condition: str
    status: str  # running, stopped, error
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "MonitorJob":
        return cls(
            id=str(data["id"]),
            youtube_url=data.get("youtube_url", ""),
            condition=data.get("condition", ""),
            status=data.get("status", "running"),
            created_at=data.get("created_at", ""),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Moment:
    """A moment a monitoring job flagged."""

    id: str
    job_id: str
    timestamp: str
    result: str
    score: float = 0.0
    frame: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Moment":
        return cls(
            id=str(data["id"]),
            job_id=str(data.get("job_id", "")),
            timestamp=data.get("timestamp", ""),
            result=data.get("result", ""),
            score=float(data.get("score", 0)),
            frame=data.get("frame"),
        )

    def to_dict(self) -> dict:
        return asdict(self)


class VibeStreamClient:
    """
    Client for the stream analysis service.

    The service samples the live stream behind a YouTube URL and asks a
    vision model whether a free-text condition holds.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60.0,
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(base_url=self.base_url, timeout=timeout)

    def __enter__(self) -> "VibeStreamClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise AnalysisServiceError(f"VibeStream API unreachable: {e}") from e

        if response.is_error:
            raise AnalysisServiceError(
                f"VibeStream API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise AnalysisServiceError("VibeStream API returned invalid JSON") from e

    def check_once(
        self,
        youtube_url: str,
        condition: str,
        model: AnalysisModel = AnalysisModel.GEMINI_FLASH,
        include_frame: bool = True,
    ) -> CheckResult:
        """Check a stream once against a condition."""
        data = self._request(
            "POST",
            "/check-once",
            json={
                "youtube_url": youtube_url,
                "condition": condition,
                "model": AnalysisModel(model).value,
                "include_frame": include_frame,
            },
        )
        result = CheckResult.from_dict(data or {})
        logger.info(
            "vibestream.checked",
            extra={"model": result.model, "triggered": result.triggered},
        )
        return result

    def start_monitoring(
        self,
        youtube_url: str,
        condition: str,
        model: AnalysisModel = AnalysisModel.GEMINI_FLASH,
        interval_seconds: int = 30,
    ) -> MonitorJob:
        """Start monitoring a stream continuously."""
        data = self._request(
            "POST",
            "/live-monitor",
            json={
                "youtube_url": youtube_url,
                "condition": condition,
                "model": AnalysisModel(model).value,
                "interval_seconds": interval_seconds,
            },
        )
        return MonitorJob.from_dict(data)

    def list_jobs(self) -> list[MonitorJob]:
        """Get all monitoring jobs."""
        return [MonitorJob.from_dict(item) for item in self._request("GET", "/jobs") or []]

    def get_moments(self, job_id: str) -> list[Moment]:
        """Get moments detected by a job."""
        data = self._request("GET", "/moments", params={"job_id": job_id})
        return [Moment.from_dict(item) for item in data or []]

    def stop_monitoring(self, job_id: str) -> None:
        """Stop a monitoring job."""
        self._request("DELETE", f"/jobs/{job_id}")
