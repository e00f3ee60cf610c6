"""Durable storage routes."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from clipbot_core import ArtifactStorage
from clipbot_ui.dependencies import get_storage

router = APIRouter(tags=["media"])


@router.get("/media/{filename}")
def get_media(filename: str, storage: ArtifactStorage = Depends(get_storage)):
    """Serve a persisted artifact."""
    path = storage.resolve(filename)
    if path is None:
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(path, filename=path.name)
