"""Lexical iframe scanning and provider classification."""

import re
from collections.abc import Iterator
from html import unescape
from typing import NamedTuple

from embedgate.registry import ProviderDefinition


class EmbedMatch(NamedTuple):
    """An iframe found in an HTML string."""

    start: int
    end: int
    src: str
    markup: str


# Opening tag through the first closing tag. The body may not contain another
# "<iframe" so an unclosed tag never swallows the next embed. "data-src" and
# similar attributes are not taken for "src".
IFRAME_PATTERN = re.compile(
    r"<iframe\b[^>]*?(?<![\w-])src\s*=\s*(?:\"(?P<dq>[^\"]+)\"|'(?P<sq>[^']+)')[^>]*>"
    r"(?:(?!<iframe\b).)*?</iframe\s*>",
    re.IGNORECASE | re.DOTALL,
)


class RegexEmbedFinder:
    """Finds iframes with a single regular expression.

    This is a best-effort scan, not an HTML parser: iframes without a quoted
    ``src`` or without a closing tag are not found and stay in the content.
    """

    def __init__(self, pattern: re.Pattern[str] = IFRAME_PATTERN) -> None:
        self._pattern = pattern

    def find_embeds(self, html: str) -> Iterator[EmbedMatch]:
        """Yield iframe matches in document order.

        Args:
            html: HTML content to scan.

        Yields:
            EmbedMatch for every complete iframe element with a src, the
            src decoded from its attribute form (``&amp;`` becomes ``&``).

        """
        for match in self._pattern.finditer(html):
            # Attribute values are HTML-encoded; the URL itself is not
            src = unescape(match.group("dq") or match.group("sq"))
            yield EmbedMatch(match.start(), match.end(), src, match.group(0))


def classify(src: str, provider: ProviderDefinition) -> bool:
    """Return True if src contains any of the provider's patterns.

    Matching is a case-insensitive substring test on the raw URL, so
    ``facebook.com`` matches anywhere in the URL, query string included.
    """
    lowered = src.lower()
    return any(pattern.lower() in lowered for pattern in provider.patterns)
