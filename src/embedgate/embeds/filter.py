"""Replaces third-party iframe embeds with consent placeholders."""

from collections.abc import Callable, Iterable, Mapping

from embedgate.embeds.collaborators import (
    ConsentState,
    MappingOptInReader,
    NoOptIns,
    ProviderConfig,
)
from embedgate.embeds.gate import is_provider_enabled, should_filter
from embedgate.embeds.matcher import RegexEmbedFinder, classify
from embedgate.embeds.messages import format_default_message, translate
from embedgate.embeds.placeholder import PlaceholderRenderer
from embedgate.embeds.protocols import (
    ConsentReader,
    EmbedFinder,
    OptInReader,
    SettingsReader,
    Translator,
)
from embedgate.logger import logger
from embedgate.registry import ProviderDefinition, Registry, default_registry

MessageResolver = Callable[[ProviderDefinition, ProviderConfig | None], str]


def filter_content(
    html: str,
    providers: Iterable[ProviderDefinition],
    configs: Mapping[str, ProviderConfig],
    consent_state: ConsentState | None,
    opt_ins: OptInReader,
    resolve_message: MessageResolver,
    privacy_policy_url: str,
    *,
    finder: EmbedFinder,
    renderer: PlaceholderRenderer,
) -> str:
    """Replace blocked iframes in html with placeholders.

    Providers are processed in the given order, each pass working on the
    output of the previous one. Once an iframe is replaced it is no longer
    iframe markup, so it can only be claimed by the first provider that
    matches it.

    Args:
        html: Rendered page content.
        providers: Provider definitions in filtering order.
        configs: Provider configs keyed by id; missing ids use the defaults.
        consent_state: Snapshot of the consent subsystem.
        opt_ins: Which providers the visitor already accepted.
        resolve_message: Builds the placeholder message for a provider.
        privacy_policy_url: Link target shown in placeholders.
        finder: Locates iframes.
        renderer: Renders placeholder markup.

    Returns:
        The transformed content, or the input unchanged when nothing applies.

    """
    if not html or not isinstance(html, str):
        return html

    if not should_filter(consent_state):
        logger.debug("Embed filtering skipped, consent state: %s", consent_state)
        return html

    for provider in providers:
        config = configs.get(provider.id)
        if not is_provider_enabled(config):
            logger.debug("Embed type %s is disabled, skipping", provider.id)
            continue
        if opt_ins.has_opted_in(provider.id):
            logger.debug("Visitor opted in to %s, skipping replacement", provider.id)
            continue

        message = resolve_message(provider, config)
        replaced = _replace_provider_embeds(
            html, provider, message, privacy_policy_url, finder, renderer
        )
        if replaced is not html:
            logger.debug("Replaced embeds for type: %s", provider.id)
        html = replaced

    return html


def _replace_provider_embeds(
    html: str,
    provider: ProviderDefinition,
    message: str,
    privacy_policy_url: str,
    finder: EmbedFinder,
    renderer: PlaceholderRenderer,
) -> str:
    """Run a single provider's pass over html.

    Returns the same object when nothing was replaced.
    """
    parts: list[str] = []
    position = 0
    for embed in finder.find_embeds(html):
        if not classify(embed.src, provider):
            logger.debug("No %s pattern matched for src: %.100s", provider.id, embed.src)
            continue
        logger.debug("Matched %s iframe, replacing src: %.100s", provider.id, embed.src)
        parts.append(html[position:embed.start])
        parts.append(renderer.render(provider, embed.src, message, privacy_policy_url))
        position = embed.end

    if not parts:
        return html
    parts.append(html[position:])
    return "".join(parts)


class EmbedFilter:
    """Filters HTML with collaborators bound at construction.

    Configs and the consent state are re-read on every call, so one instance
    can serve many requests; only the visitor's opt-ins are passed per call.
    """

    def __init__(
        self,
        settings_reader: SettingsReader,
        consent_reader: ConsentReader,
        *,
        registry: Registry = default_registry,
        finder: EmbedFinder | None = None,
        renderer: PlaceholderRenderer | None = None,
        privacy_policy_url: str | Callable[[], str] = "",
        translator: Translator = translate,
    ) -> None:
        """Initialize the filter.

        Args:
            settings_reader: Source of per-provider configs.
            consent_reader: Source of the consent state.
            registry: Providers to block.
            finder: Iframe finder, defaults to RegexEmbedFinder.
            renderer: Placeholder renderer, defaults to one using translator.
            privacy_policy_url: Link target, or a callable resolving it per call.
            translator: Translates user-facing placeholder strings.

        """
        self._settings_reader = settings_reader
        self._consent_reader = consent_reader
        self._registry = registry
        self._finder = finder or RegexEmbedFinder()
        self._renderer = renderer or PlaceholderRenderer(translator)
        self._privacy_policy_url = privacy_policy_url
        self._translate = translator

    @property
    def registry(self) -> Registry:
        """Providers this filter blocks."""
        return self._registry

    def filter_content(
        self,
        html: str,
        opt_ins: OptInReader | Mapping[str, bool] | None = None,
    ) -> str:
        """Replace blocked iframes in html with placeholders.

        Args:
            html: Rendered page content.
            opt_ins: The visitor's opt-ins; None means nothing was accepted.

        Returns:
            The transformed content.

        """
        if not html or not isinstance(html, str):
            return html

        consent_state = self._consent_reader.get_consent_state()
        if not should_filter(consent_state):
            logger.debug("Consent not active: %s", consent_state)
            return html

        providers = self._registry.list_providers()
        configs = {p.id: self._settings_reader.get_provider_config(p.id) for p in providers}

        return filter_content(
            html,
            providers,
            configs,
            consent_state,
            self._opt_in_reader(opt_ins),
            self._resolve_message,
            self._resolve_privacy_policy_url(),
            finder=self._finder,
            renderer=self._renderer,
        )

    def _resolve_message(self, provider: ProviderDefinition, config: ProviderConfig | None) -> str:
        if config is not None and config.custom_message:
            return config.custom_message
        return format_default_message(provider.label, self._translate)

    def _resolve_privacy_policy_url(self) -> str:
        if callable(self._privacy_policy_url):
            return self._privacy_policy_url()
        return self._privacy_policy_url

    @staticmethod
    def _opt_in_reader(opt_ins: OptInReader | Mapping[str, bool] | None) -> OptInReader:
        if opt_ins is None:
            return NoOptIns()
        if isinstance(opt_ins, Mapping):
            return MappingOptInReader(opt_ins)
        return opt_ins
