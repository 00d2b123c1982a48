from abc import ABC, abstractmethod
from collections.abc import Sequence

from legallyclear.analysis.models import AnalysisResult, RiskFlag
from legallyclear.ingestion.models import UploadedDocument


class BaseAnalyzer(ABC):
    """Contract for document analyzers."""

    @abstractmethod
    async def analyze(self, document: UploadedDocument) -> AnalysisResult:
        """Turn a document image into a structured analysis.

        Raises:
            AnalysisFailedError: on any failure, with the cause chained.
        """


class BaseNegotiator(ABC):
    """Contract for negotiation draft generators."""

    @abstractmethod
    async def draft(self, summary: str, red_flags: Sequence[RiskFlag]) -> str:
        """Draft a negotiation email body for the given red flags.

        Raises:
            NegotiationFailedError: on any failure, with the cause chained.
        """
