from dataclasses import dataclass, field
from enum import Enum

from legallyclear.analysis.models import AnalysisResult
from legallyclear.ingestion.models import UploadedDocument
from legallyclear.session.exceptions import InvalidSessionStateError


class SessionStatus(str, Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    COMPLETE = "complete"
    ERROR = "error"


class NegotiationStatus(str, Enum):
    IDLE = "idle"
    DRAFTING = "drafting"


@dataclass(frozen=True)
class DashboardState:
    """Reasoning toggle and negotiation modal state of the result dashboard."""

    show_reasoning: bool = False
    negotiation_status: NegotiationStatus = NegotiationStatus.IDLE
    negotiation_text: str | None = None
    modal_visible: bool = False


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable view of one session's state."""

    status: SessionStatus
    request_id: int = 0
    document: UploadedDocument | None = None
    result: AnalysisResult | None = None
    error_message: str | None = None
    dashboard: DashboardState = field(default_factory=DashboardState)

    def __post_init__(self) -> None:
        if self.status is SessionStatus.COMPLETE and (
            self.document is None or self.result is None
        ):
            raise InvalidSessionStateError("complete requires a document and a result")
        if self.status is SessionStatus.ERROR and not self.error_message:
            raise InvalidSessionStateError("error requires an error message")
        if self.status is SessionStatus.IDLE and (
            self.document is not None or self.result is not None
        ):
            raise InvalidSessionStateError("idle must not hold a document or a result")

    def to_dict(self) -> dict[str, object]:
        return {
            "status": self.status.value,
            "request_id": self.request_id,
            "error_message": self.error_message,
            "filename": self.document.filename if self.document else None,
        }
