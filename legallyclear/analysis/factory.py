from legallyclear.analysis.analyzer import DocumentAnalyzer
from legallyclear.analysis.negotiator import NegotiationDrafter
from legallyclear.config.settings import Settings
from legallyclear.llm.client_base import BaseModelClient
from legallyclear.llm.factory import ModelClientFactory


def build_services(
    settings: Settings,
    client: BaseModelClient | None = None,
) -> tuple[DocumentAnalyzer, NegotiationDrafter]:
    """Build the analyzer and negotiator sharing one model client."""
    if client is None:
        client = ModelClientFactory.create(settings)
    analyzer = DocumentAnalyzer(
        client=client,
        model=settings.model_name,
        temperature=settings.model_temperature,
    )
    negotiator = NegotiationDrafter(
        client=client,
        model=settings.model_name,
        temperature=settings.model_temperature,
    )
    return analyzer, negotiator
