from legallyclear.analysis.analyzer import DocumentAnalyzer
from legallyclear.analysis.base import BaseAnalyzer, BaseNegotiator
from legallyclear.analysis.models import AnalysisResult, RiskFlag, Severity
from legallyclear.analysis.negotiator import NegotiationDrafter

__all__ = [
    "AnalysisResult",
    "BaseAnalyzer",
    "BaseNegotiator",
    "DocumentAnalyzer",
    "NegotiationDrafter",
    "RiskFlag",
    "Severity",
]
