from pathlib import Path

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from legallyclear.analysis.exceptions import NegotiationFailedError
from legallyclear.analysis.models import Severity
from legallyclear.ingestion.exceptions import IngestionError
from legallyclear.ingestion.file_loader import FileIngestor
from legallyclear.logging.logger import Log
from legallyclear.session.controller import SessionController
from legallyclear.session.models import SessionStatus

TEMPLATES_DIR = Path(__file__).parent / "templates"

NEGOTIATION_ALERT = "Failed to generate negotiation text. Please try again."

_VIEW_TEMPLATES = {
    SessionStatus.IDLE: "idle.html",
    SessionStatus.SCANNING: "scanning.html",
    SessionStatus.COMPLETE: "dashboard.html",
    SessionStatus.ERROR: "error.html",
}

router = APIRouter()
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


async def current_session(request: Request) -> SessionController:
    """Resolve the session for the request's cookie, creating one if needed."""
    cookie_name = request.app.state.settings.session_cookie_name
    session = await request.app.state.registry.get_or_create(request.cookies.get(cookie_name))
    request.state.session = session
    return session


def _with_cookie(request: Request, response: Response, session: SessionController) -> Response:
    response.set_cookie(
        request.app.state.settings.session_cookie_name,
        session.session_id,
        httponly=True,
        samesite="lax",
    )
    return response


def redirect_home(request: Request, session: SessionController) -> Response:
    return _with_cookie(request, RedirectResponse(url="/", status_code=303), session)


def _render(
    request: Request,
    session: SessionController,
    *,
    alert: str | None = None,
    status_code: int = 200,
) -> Response:
    snapshot = session.snapshot()
    context: dict[str, object] = {
        "snapshot": snapshot,
        "document": snapshot.document,
        "result": snapshot.result,
        "dashboard": snapshot.dashboard,
        "alert": alert,
        "model_name": request.app.state.settings.model_name,
    }
    if snapshot.result is not None:
        context["severity_counts"] = {
            severity.value: snapshot.result.count_by_severity(severity)
            for severity in Severity
        }
    response = templates.TemplateResponse(
        request,
        _VIEW_TEMPLATES[snapshot.status],
        context,
        status_code=status_code,
    )
    return _with_cookie(request, response, session)


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    session: SessionController = Depends(current_session),
) -> Response:
    return _render(request, session)


@router.post("/upload")
async def upload(
    request: Request,
    file: UploadFile = File(...),
    session: SessionController = Depends(current_session),
) -> Response:
    ingestor: FileIngestor = request.app.state.ingestor
    try:
        document = await ingestor.ingest(file)
    except IngestionError as exc:
        return _render(request, session, alert=str(exc), status_code=400)
    await session.submit(document)
    return redirect_home(request, session)


@router.get("/api/session")
async def session_status(
    request: Request,
    session: SessionController = Depends(current_session),
) -> Response:
    response = JSONResponse(session.snapshot().to_dict())
    return _with_cookie(request, response, session)


@router.post("/reset")
async def reset(
    request: Request,
    session: SessionController = Depends(current_session),
) -> Response:
    session.reset()
    return redirect_home(request, session)


@router.post("/reasoning")
async def toggle_reasoning(
    request: Request,
    session: SessionController = Depends(current_session),
) -> Response:
    session.toggle_reasoning()
    return redirect_home(request, session)


@router.post("/negotiate")
async def negotiate(
    request: Request,
    session: SessionController = Depends(current_session),
) -> Response:
    try:
        await session.request_negotiation()
    except NegotiationFailedError as exc:
        Log.warning(f"Session {session.session_id}: negotiation failed: {exc}")
        return _render(request, session, alert=NEGOTIATION_ALERT, status_code=502)
    return redirect_home(request, session)


@router.post("/negotiation/close")
async def close_negotiation(
    request: Request,
    session: SessionController = Depends(current_session),
) -> Response:
    session.close_negotiation()
    return redirect_home(request, session)


@router.get("/health", tags=["system"])
async def health() -> dict[str, str]:
    return {"status": "ok"}
