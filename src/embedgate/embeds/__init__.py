"""Embed filtering package.

Finds third-party iframes in rendered HTML and swaps them for consent
placeholders until the visitor opts in.
"""

from embedgate.embeds.collaborators import (
    ConsentState,
    CookieOptInReader,
    MappingOptInReader,
    NoOptIns,
    ProviderConfig,
    SettingsProviderConfigReader,
    StaticConsentReader,
    StaticProviderConfigReader,
)
from embedgate.embeds.filter import EmbedFilter, filter_content
from embedgate.embeds.gate import is_provider_enabled, should_filter
from embedgate.embeds.matcher import EmbedMatch, RegexEmbedFinder, classify
from embedgate.embeds.messages import get_translator
from embedgate.embeds.placeholder import PlaceholderRef, PlaceholderRenderer, find_placeholders
from embedgate.embeds.protocols import ConsentReader, EmbedFinder, OptInReader, SettingsReader

__all__ = [
    "ConsentReader",
    "ConsentState",
    "CookieOptInReader",
    "EmbedFilter",
    "EmbedFinder",
    "EmbedMatch",
    "MappingOptInReader",
    "NoOptIns",
    "OptInReader",
    "PlaceholderRef",
    "PlaceholderRenderer",
    "ProviderConfig",
    "RegexEmbedFinder",
    "SettingsProviderConfigReader",
    "SettingsReader",
    "StaticConsentReader",
    "StaticProviderConfigReader",
    "classify",
    "filter_content",
    "find_placeholders",
    "get_translator",
    "is_provider_enabled",
    "should_filter",
]
