"""embedgate custom exceptions."""

class EmbedGateError(Exception):
    """Base exception for all embedgate errors."""


class UnknownProviderError(EmbedGateError):
    """A provider id that is not part of the registry was used."""

    def __init__(self, provider_id: str) -> None:
        """Initialize with the offending provider id."""
        super().__init__(f"Unknown embed provider: {provider_id!r}")
        self.provider_id = provider_id


class ConsentStoreError(EmbedGateError):
    """Errors while reading the consent store."""
