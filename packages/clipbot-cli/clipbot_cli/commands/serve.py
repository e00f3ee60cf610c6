"""API server command."""

import uvicorn


def serve_command(host: str = "127.0.0.1", port: int = 8000, reload: bool = False) -> None:
    """Run the HTTP service."""
    uvicorn.run("clipbot_ui.main:app", host=host, port=port, reload=reload)
