"""Provider and configuration error kinds.

Provider errors are fatal for a run: the conversation driver lets them
propagate and the CLI reports them with a non-zero exit status.
"""


class ProviderError(RuntimeError):
    """Failure talking to the completion endpoint (network, HTTP, auth)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProviderTimeoutError(ProviderError):
    """The completion endpoint did not answer within the request timeout."""


class ProviderResponseError(ProviderError):
    """The completion endpoint answered with a body that cannot be used."""


class ConfigurationError(ValueError):
    """No usable provider configuration could be resolved."""
