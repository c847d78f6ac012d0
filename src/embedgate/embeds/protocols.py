"""Protocol definitions for the embeds package.

The filter never reaches for global state. Everything it needs from the
surrounding application (settings store, consent subsystem, the visitor's
cookies, translations) is passed in through these interfaces.
"""

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from embedgate.embeds.collaborators import ConsentState, ProviderConfig
    from embedgate.embeds.matcher import EmbedMatch

Translator = Callable[[str], str]


class SettingsReader(Protocol):
    """Read access to per-provider settings."""

    def get_provider_config(self, provider_id: str) -> "ProviderConfig":
        """Return the stored config, or the default config when none is stored."""
        ...


class ConsentReader(Protocol):
    """Read access to the consent subsystem."""

    def get_consent_state(self) -> "ConsentState":
        """Return a snapshot of whether consent handling is active."""
        ...


class OptInReader(Protocol):
    """Per-request view of which providers the visitor already accepted."""

    def has_opted_in(self, provider_id: str) -> bool:
        """Return True if the visitor opted in to the provider."""
        ...


class EmbedFinder(Protocol):
    """Locates iframe embeds in an HTML string.

    Implementations must yield non-overlapping matches in document order.
    """

    def find_embeds(self, html: str) -> Iterator["EmbedMatch"]:
        """Yield every iframe embed found in html."""
        ...
