"""Static file server for the generated artifacts."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

_MEDIA_TYPES = {
    ".rss": "application/rss+xml",
    ".atom": "application/atom+xml",
    ".json": "application/feed+json",
}


class FeedStaticFiles(StaticFiles):
    """StaticFiles that labels feed files with their syndication media types."""

    def file_response(self, full_path, stat_result, scope, status_code=200):
        response = super().file_response(full_path, stat_result, scope, status_code)
        media_type = _MEDIA_TYPES.get(Path(full_path).suffix.lower())
        if media_type is not None:
            response.media_type = media_type
            response.headers["content-type"] = f"{media_type}; charset=utf-8"
        return response


def create_app(directory: str | Path, title: str = "clipfeed") -> FastAPI:
    """App serving ``directory`` at the site root, with index.html at ``/``."""
    app = FastAPI(title=title, docs_url=None, redoc_url=None, openapi_url=None)
    app.mount("/", FeedStaticFiles(directory=str(directory), html=True), name="feeds")
    return app


def serve(directory: str | Path, host: str, port: int, title: str = "clipfeed") -> None:
    """Serve the artifacts directory until interrupted (blocking)."""
    import uvicorn

    uvicorn.run(create_app(directory, title), host=host, port=port, log_config=None)
