"""Shared service objects, injectable through FastAPI's Depends."""

from functools import lru_cache

from fastapi import Depends

from clipbot_core import ArtifactStorage, ExportPipeline, TwitchClient, VibeStreamClient
from clipbot_ui.config import Settings


@lru_cache
def get_settings() -> Settings:
    return Settings()


@lru_cache
def get_pipeline() -> ExportPipeline:
    return ExportPipeline(get_settings().to_export_config())


@lru_cache
def get_vibestream() -> VibeStreamClient:
    settings = get_settings()
    return VibeStreamClient(base_url=settings.vibestream_url, timeout=settings.vibestream_timeout)


@lru_cache
def get_twitch() -> TwitchClient:
    settings = get_settings()
    return TwitchClient(
        client_id=settings.twitch_client_id,
        access_token=settings.twitch_access_token,
    )


def get_storage(pipeline: ExportPipeline = Depends(get_pipeline)) -> ArtifactStorage:
    return pipeline.storage
