"""Value types and default implementations of the filter's collaborators."""

from collections.abc import Mapping
from typing import NamedTuple

from embedgate.config import Settings


class ProviderConfig(NamedTuple):
    """Per-provider settings."""

    disabled: bool = False
    custom_message: str = ""


class ConsentState(NamedTuple):
    """Snapshot of the consent subsystem."""

    system_active: bool
    consent_record_count: int


DEFAULT_PROVIDER_CONFIG = ProviderConfig()


class SettingsProviderConfigReader:
    """Reads provider configs from application settings."""

    def __init__(self, settings: Settings) -> None:
        """Initialize the reader.

        Args:
            settings: Settings holding EMBED_DISABLED_TYPES and EMBED_CUSTOM_MESSAGES.

        """
        self._disabled = settings.disabled_provider_ids
        self._messages = dict(settings.embed_custom_messages)

    def get_provider_config(self, provider_id: str) -> ProviderConfig:
        return ProviderConfig(
            disabled=provider_id in self._disabled,
            custom_message=self._messages.get(provider_id, ""),
        )


class StaticProviderConfigReader:
    """Serves provider configs from a fixed mapping."""

    def __init__(self, configs: Mapping[str, ProviderConfig] | None = None) -> None:
        self._configs = dict(configs or {})

    def get_provider_config(self, provider_id: str) -> ProviderConfig:
        return self._configs.get(provider_id, DEFAULT_PROVIDER_CONFIG)


class StaticConsentReader:
    """Consent reader returning a fixed state.

    Used when no consent store is configured; the default state reports the
    subsystem as absent so content passes through untouched.
    """

    def __init__(self, system_active: bool = False, consent_record_count: int = 0) -> None:
        self._state = ConsentState(system_active, consent_record_count)

    def get_consent_state(self) -> ConsentState:
        return self._state


class CookieOptInReader:
    """Reads per-provider opt-in cookies of the current request.

    A provider counts as accepted when the cookie ``<prefix><provider_id>``
    holds exactly ``"1"``.
    """

    def __init__(self, cookies: Mapping[str, str], prefix: str = "embed_consent_") -> None:
        """Initialize the reader.

        Args:
            cookies: Request cookies.
            prefix: Cookie name prefix, followed by the provider id.

        """
        self._cookies = cookies
        self._prefix = prefix

    def has_opted_in(self, provider_id: str) -> bool:
        return self._cookies.get(f"{self._prefix}{provider_id}") == "1"


class MappingOptInReader:
    """Opt-in reader backed by a mapping of provider id to bool."""

    def __init__(self, opt_ins: Mapping[str, bool]) -> None:
        self._opt_ins = opt_ins

    def has_opted_in(self, provider_id: str) -> bool:
        return bool(self._opt_ins.get(provider_id, False))


class NoOptIns:
    """Opt-in reader for a visitor who accepted nothing."""

    def has_opted_in(self, provider_id: str) -> bool:
        return False
