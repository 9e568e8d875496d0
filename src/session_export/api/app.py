"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, Response, status

from session_export.api.export_models import ExportRequest
from session_export.app_logging import configure_logging
from session_export.containers import AppContainer
from session_export.domain.artifacts import ExportFormat
from session_export.domain.errors import RenderingSurfaceError, UnsupportedFormatError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/exports/{export_format}")
    async def export_session(
        export_format: str, payload: ExportRequest, request: Request
    ) -> Response:
        """Render a session record and return it as a download."""
        state_container: AppContainer = request.app.state.container
        try:
            resolved = ExportFormat.parse(export_format)
        except UnsupportedFormatError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        labels = payload.labels.to_label_set() if payload.labels else None
        try:
            artifact = await state_container.export_service.export(
                payload.record.to_record(),
                resolved,
                base_name=payload.base_name,
                labels=labels,
            )
        except RenderingSurfaceError as exc:
            logger.exception("Export failed: format=%s", resolved)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Export failed",
            ) from exc
        return Response(
            content=artifact.content,
            media_type=artifact.media_type,
            headers={
                "Content-Disposition": f'attachment; filename="{artifact.filename}"'
            },
        )

    return app
