class AnalysisError(Exception):
    """Base exception for analysis and negotiation failures."""


class AnalysisValidationError(AnalysisError):
    """Raised when the model's answer fails domain validation."""


class AnalysisFailedError(AnalysisError):
    """Raised to the caller when a document could not be analyzed.

    The message is safe to show to the user; the original cause is chained.
    """


class NegotiationFailedError(AnalysisError):
    """Raised to the caller when a negotiation draft could not be generated."""


class PromptLoadError(AnalysisError):
    """Raised when a bundled prompt or schema file cannot be read."""
