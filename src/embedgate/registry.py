"""Registry of known third-party embed providers."""

from collections.abc import Iterator
from typing import NamedTuple

from embedgate.exceptions import UnknownProviderError


class ProviderDefinition(NamedTuple):
    """A third-party embed source and the URL fragments that identify it."""

    id: str
    label: str
    description: str
    patterns: tuple[str, ...]
    cookie_info: str


DEFAULT_PROVIDERS: tuple[ProviderDefinition, ...] = (
    ProviderDefinition(
        id="youtube",
        label="YouTube",
        description="YouTube videos",
        patterns=("youtube.com/embed", "youtube.com/watch", "youtu.be"),
        cookie_info="YouTube uses cookies to track user behaviour.",
    ),
    ProviderDefinition(
        id="vimeo",
        label="Vimeo",
        description="Vimeo videos",
        patterns=("vimeo.com", "player.vimeo.com"),
        cookie_info="Vimeo uses cookies to track user behaviour.",
    ),
    ProviderDefinition(
        id="google_maps",
        label="Google Maps",
        description="Google Maps",
        patterns=("maps.google.com", "google.com/maps", "maps.googleapis.com"),
        cookie_info="Google Maps uses cookies and collects location data.",
    ),
    ProviderDefinition(
        id="twitter",
        label="Twitter/X",
        description="Twitter/X embeds",
        patterns=("twitter.com", "platform.twitter.com", "x.com"),
        cookie_info="Twitter uses cookies to track user behaviour.",
    ),
    ProviderDefinition(
        id="instagram",
        label="Instagram",
        description="Instagram posts",
        patterns=("instagram.com",),
        cookie_info="Instagram (Facebook) uses cookies to track user behaviour.",
    ),
    ProviderDefinition(
        id="facebook",
        label="Facebook",
        description="Facebook embeds",
        patterns=("facebook.com", "fb.com"),
        cookie_info="Facebook uses cookies to track user behaviour.",
    ),
    ProviderDefinition(
        id="spotify",
        label="Spotify",
        description="Spotify player",
        patterns=("spotify.com", "open.spotify.com"),
        cookie_info="Spotify uses cookies to track user behaviour.",
    ),
)


class Registry:
    """Ordered, read-only table of provider definitions.

    Order matters: the filter runs one pass per provider in this order and
    later passes see the output of earlier ones.
    """

    def __init__(self, providers: tuple[ProviderDefinition, ...] = DEFAULT_PROVIDERS) -> None:
        """Initialize the registry.

        Args:
            providers: Provider definitions in filtering order.

        Raises:
            ValueError: If two providers share the same id.

        """
        self._providers = tuple(providers)
        self._by_id = {provider.id: provider for provider in self._providers}
        if len(self._by_id) != len(self._providers):
            msg = "Provider ids must be unique"
            raise ValueError(msg)

    def list_providers(self) -> tuple[ProviderDefinition, ...]:
        """Return all providers in filtering order."""
        return self._providers

    def get(self, provider_id: str) -> ProviderDefinition:
        """Look up a provider by id.

        Raises:
            UnknownProviderError: If the id is not registered.

        """
        try:
            return self._by_id[provider_id]
        except KeyError:
            raise UnknownProviderError(provider_id) from None

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._by_id

    def __iter__(self) -> Iterator[ProviderDefinition]:
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)


default_registry = Registry()
