"""embedgate - consent placeholders for third-party iframe embeds.

Replaces YouTube, Vimeo, Maps and social media iframes in rendered HTML
with a placeholder until the visitor opts in to the provider.
"""

from embedgate.config import Settings, settings
from embedgate.embeds import EmbedFilter, filter_content, find_placeholders
from embedgate.registry import ProviderDefinition, Registry, default_registry

__version__ = "0.1.0"

__all__ = [
    "EmbedFilter",
    "ProviderDefinition",
    "Registry",
    "Settings",
    "__version__",
    "default_registry",
    "filter_content",
    "find_placeholders",
    "settings",
]
