class ModelClientError(Exception):
    """Raised when the model provider call fails."""


class ModelNetworkError(ModelClientError):
    """Raised when the provider call fails due to network/infrastructure issues."""


class EmptyModelResponseError(ModelClientError):
    """Raised when the provider answers without any text content."""
