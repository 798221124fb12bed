"""Exception types shared across the package."""


class ScholarError(Exception):
    """Base class for all scholar summarizer errors."""


class ConfigError(ScholarError):
    """Missing credentials or an invalid configuration profile."""


class FlowValidationError(ScholarError):
    """A prompt flow request or response failed schema validation."""

    def __init__(self, flow: str, message: str):
        self.flow = flow
        super().__init__(f"{flow}: {message}")


class ProviderError(ScholarError):
    """An LLM provider call failed.

    Keeps the upstream status code so the retry wrapper can classify it.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
