"""Per-session state machine: idle -> scanning -> complete | error."""

import asyncio
from dataclasses import replace

from legallyclear.analysis.base import BaseAnalyzer, BaseNegotiator
from legallyclear.analysis.exceptions import AnalysisError
from legallyclear.analysis.models import AnalysisResult
from legallyclear.ingestion.models import UploadedDocument
from legallyclear.logging.logger import Log
from legallyclear.session.exceptions import (
    InvalidSessionStateError,
    NegotiationInProgressError,
    SessionBusyError,
)
from legallyclear.session.models import (
    DashboardState,
    NegotiationStatus,
    SessionSnapshot,
    SessionStatus,
)

DEFAULT_ERROR_MESSAGE = "Something went wrong during analysis."


class SessionController:
    """Owns one session's document, analysis result and dashboard state.

    Every analysis is tagged with a request id. Results whose id no longer
    matches the active one (the session was reset meanwhile) are discarded.
    """

    def __init__(
        self,
        *,
        session_id: str,
        analyzer: BaseAnalyzer,
        negotiator: BaseNegotiator,
        min_scan_seconds: float = 2.0,
    ) -> None:
        self._session_id = session_id
        self._analyzer = analyzer
        self._negotiator = negotiator
        self._min_scan_seconds = min_scan_seconds
        self._status = SessionStatus.IDLE
        self._request_id = 0
        self._document: UploadedDocument | None = None
        self._result: AnalysisResult | None = None
        self._error_message: str | None = None
        self._dashboard = DashboardState()
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def session_id(self) -> str:
        return self._session_id

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            status=self._status,
            request_id=self._request_id,
            document=self._document,
            result=self._result,
            error_message=self._error_message,
            dashboard=self._dashboard,
        )

    async def submit(self, document: UploadedDocument) -> int:
        """Start analyzing a document: idle -> scanning.

        Returns:
            The request id tagging this analysis.

        Raises:
            SessionBusyError: if the session is not idle.
        """
        if self._status is not SessionStatus.IDLE:
            raise SessionBusyError(
                f"Session {self._session_id} is {self._status.value}, reset it first"
            )
        self._request_id += 1
        request_id = self._request_id
        self._document = document
        self._result = None
        self._error_message = None
        self._dashboard = DashboardState()
        self._status = SessionStatus.SCANNING

        task = asyncio.create_task(self._run_analysis(request_id, document))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        Log.info(
            f"Session {self._session_id}: analysis {request_id} started "
            f"for '{document.filename}'"
        )
        return request_id

    async def drain(self) -> None:
        """Wait for every analysis started by this session, stale ones included."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def cancel_pending(self) -> None:
        for task in list(self._tasks):
            task.cancel()

    def reset(self) -> None:
        """Return to idle from any state, dropping document, result and error."""
        self._request_id += 1
        self._status = SessionStatus.IDLE
        self._document = None
        self._result = None
        self._error_message = None
        self._dashboard = DashboardState()
        Log.info(f"Session {self._session_id}: reset")

    def toggle_reasoning(self) -> bool:
        self._require_complete()
        self._dashboard = replace(
            self._dashboard, show_reasoning=not self._dashboard.show_reasoning
        )
        return self._dashboard.show_reasoning

    async def request_negotiation(self) -> str:
        """Draft a negotiation email for the current result and open the modal.

        Raises:
            InvalidSessionStateError: if there is no result with red flags.
            NegotiationInProgressError: if a draft is already being generated.
            NegotiationFailedError: if the model call fails; dashboard unchanged.
        """
        result = self._require_complete()
        if not result.red_flags:
            raise InvalidSessionStateError("No red flags to negotiate")
        if self._dashboard.negotiation_status is NegotiationStatus.DRAFTING:
            raise NegotiationInProgressError("A negotiation draft is already in progress")

        request_id = self._request_id
        self._dashboard = replace(
            self._dashboard, negotiation_status=NegotiationStatus.DRAFTING
        )
        try:
            text = await self._negotiator.draft(result.summary, result.red_flags)
        finally:
            if request_id == self._request_id:
                self._dashboard = replace(
                    self._dashboard, negotiation_status=NegotiationStatus.IDLE
                )

        if request_id != self._request_id:
            Log.debug(f"Session {self._session_id}: discarded stale negotiation draft")
            return text
        self._dashboard = replace(
            self._dashboard, negotiation_text=text, modal_visible=True
        )
        return text

    def close_negotiation(self) -> None:
        self._require_complete()
        self._dashboard = replace(self._dashboard, modal_visible=False)

    async def _run_analysis(self, request_id: int, document: UploadedDocument) -> None:
        timer = asyncio.create_task(asyncio.sleep(self._min_scan_seconds))
        try:
            result = await self._analyzer.analyze(document)
        except asyncio.CancelledError:
            timer.cancel()
            raise
        except AnalysisError as exc:
            timer.cancel()
            self._fail(request_id, str(exc) or DEFAULT_ERROR_MESSAGE)
            return
        except Exception:
            timer.cancel()
            Log.exception(f"Session {self._session_id}: unexpected analysis error")
            self._fail(request_id, DEFAULT_ERROR_MESSAGE)
            return

        await timer
        self._complete(request_id, result)

    def _complete(self, request_id: int, result: AnalysisResult) -> None:
        if self._is_stale(request_id):
            return
        self._result = result
        self._status = SessionStatus.COMPLETE
        Log.info(f"Session {self._session_id}: analysis {request_id} complete")

    def _fail(self, request_id: int, message: str) -> None:
        if self._is_stale(request_id):
            return
        self._error_message = message
        self._status = SessionStatus.ERROR
        Log.warning(f"Session {self._session_id}: analysis {request_id} failed: {message}")

    def _is_stale(self, request_id: int) -> bool:
        if request_id == self._request_id:
            return False
        Log.debug(
            f"Session {self._session_id}: discarded stale analysis {request_id} "
            f"(active {self._request_id})"
        )
        return True

    def _require_complete(self) -> AnalysisResult:
        if self._status is not SessionStatus.COMPLETE or self._result is None:
            raise InvalidSessionStateError(
                f"Session {self._session_id} has no analysis result ({self._status.value})"
            )
        return self._result
