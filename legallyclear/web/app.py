from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse, Response
from fastapi.staticfiles import StaticFiles

from legallyclear.analysis.factory import build_services
from legallyclear.config.settings import Settings
from legallyclear.ingestion.file_loader import FileIngestor
from legallyclear.llm.client_base import BaseModelClient
from legallyclear.logging.logger import Log
from legallyclear.session.controller import SessionController
from legallyclear.session.exceptions import SessionError
from legallyclear.session.registry import SessionRegistry
from legallyclear.web.routes import redirect_home, router

STATIC_DIR = Path(__file__).parent / "static"


def create_app(settings: Settings, client: BaseModelClient | None = None) -> FastAPI:
    """Build the web application with all required services."""
    analyzer, negotiator = build_services(settings, client)

    def new_session(session_id: str) -> SessionController:
        return SessionController(
            session_id=session_id,
            analyzer=analyzer,
            negotiator=negotiator,
            min_scan_seconds=settings.min_scan_seconds,
        )

    registry = SessionRegistry(new_session, max_sessions=settings.max_sessions)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        await registry.close()
        Log.info("Sessions closed")

    app = FastAPI(
        title="LegallyClear",
        description="Understand what you're signing.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.ingestor = FileIngestor(settings.max_upload_bytes)
    app.state.registry = registry

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    app.include_router(router)

    @app.exception_handler(SessionError)
    async def session_error_handler(request: Request, exc: SessionError) -> Response:
        # Out-of-order form posts land back on the view for the real state.
        Log.warning(f"{request.method} {request.url.path} rejected: {exc}")
        session = getattr(request.state, "session", None)
        if session is None:
            return RedirectResponse(url="/", status_code=303)
        return redirect_home(request, session)

    return app
