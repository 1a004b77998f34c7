"""Error taxonomy shared by the ingestion and chat pipelines."""


class InvalidInputError(ValueError):
    """Raised when a request carries empty content or no messages."""


class UpstreamUnavailableError(RuntimeError):
    """Raised when the knowledge store or completion provider cannot be used."""


class MalformedUpstreamResponseError(UpstreamUnavailableError):
    """Raised when the completion provider answers with an unexpected shape."""


class ConfigurationError(RuntimeError):
    """Raised when a deployment is missing configuration it cannot run without."""
