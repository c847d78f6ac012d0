"""Unit tests for iframe matching and classification."""

import pytest

from embedgate.embeds.matcher import EmbedMatch, RegexEmbedFinder, classify
from embedgate.registry import default_registry


@pytest.fixture
def finder() -> RegexEmbedFinder:
    """Create the default regex finder."""
    return RegexEmbedFinder()


class TestRegexEmbedFinder:
    """Test RegexEmbedFinder functionality."""

    def test_finds_double_quoted_src(self, finder: RegexEmbedFinder) -> None:
        """Test that a double-quoted src is extracted with its span."""
        iframe = '<iframe src="https://youtu.be/abc"></iframe>'
        html = f"<p>x</p>{iframe}<p>y</p>"

        matches = list(finder.find_embeds(html))

        start = html.index("<iframe")
        assert matches == [EmbedMatch(start, start + len(iframe), "https://youtu.be/abc", iframe)]

    def test_finds_single_quoted_src(self, finder: RegexEmbedFinder) -> None:
        """Test that a single-quoted src is extracted."""
        html = "<iframe width='1' src='https://vimeo.com/1'></iframe>"

        matches = list(finder.find_embeds(html))

        assert [m.src for m in matches] == ["https://vimeo.com/1"]

    def test_case_insensitive_tags(self, finder: RegexEmbedFinder) -> None:
        """Test that upper-case markup is matched."""
        html = '<IFRAME SRC="https://open.spotify.com/embed/track/1"></IFRAME>'

        matches = list(finder.find_embeds(html))

        assert [m.src for m in matches] == ["https://open.spotify.com/embed/track/1"]

    def test_multiline_tag_and_body(self, finder: RegexEmbedFinder) -> None:
        """Test that attributes and fallback text may span lines."""
        html = """<iframe
            width="560"
            src="https://www.youtube.com/embed/abc"
            allowfullscreen>
            Your browser does not support iframes.
        </iframe>"""

        matches = list(finder.find_embeds(html))

        assert len(matches) == 1
        assert matches[0].markup == html

    def test_multiple_iframes_matched_separately(self, finder: RegexEmbedFinder) -> None:
        """Test that the body match is non-greedy across several iframes."""
        html = (
            '<iframe src="https://youtu.be/a"></iframe>'
            "<p>between</p>"
            '<iframe src="https://vimeo.com/b"></iframe>'
        )

        matches = list(finder.find_embeds(html))

        assert [m.src for m in matches] == ["https://youtu.be/a", "https://vimeo.com/b"]
        assert "between" not in matches[0].markup

    def test_unclosed_iframe_does_not_swallow_next(self, finder: RegexEmbedFinder) -> None:
        """Test that an iframe without closing tag is skipped, not merged."""
        html = (
            '<iframe src="https://youtu.be/a"><p>text</p>'
            '<iframe src="https://vimeo.com/b"></iframe>'
        )

        matches = list(finder.find_embeds(html))

        assert [m.src for m in matches] == ["https://vimeo.com/b"]

    def test_src_entities_decoded(self, finder: RegexEmbedFinder) -> None:
        """Test that an HTML-encoded src yields the real URL."""
        html = '<iframe src="https://www.youtube.com/embed/x?a=1&amp;b=2&#38;c=3"></iframe>'

        [embed] = finder.find_embeds(html)

        assert embed.src == "https://www.youtube.com/embed/x?a=1&b=2&c=3"
        assert embed.markup == html

    def test_data_src_is_not_src(self, finder: RegexEmbedFinder) -> None:
        """Test that lazy-loading data-src attributes are not taken for src."""
        html = '<iframe data-src="https://youtu.be/a"></iframe>'

        assert list(finder.find_embeds(html)) == []

    def test_src_after_data_src(self, finder: RegexEmbedFinder) -> None:
        """Test that the real src is found behind a data-src attribute."""
        html = '<iframe data-src="https://youtu.be/a" src="about:blank"></iframe>'

        assert [m.src for m in finder.find_embeds(html)] == ["about:blank"]

    def test_iframe_without_src_ignored(self, finder: RegexEmbedFinder) -> None:
        """Test that iframes without src are not matched."""
        assert list(finder.find_embeds("<iframe srcdoc='<p>hi</p>'></iframe>")) == []

    def test_matching_is_lazy(self, finder: RegexEmbedFinder) -> None:
        """Test that find_embeds returns an iterator."""
        embeds = finder.find_embeds('<iframe src="a"></iframe>')

        assert next(embeds).src == "a"
        with pytest.raises(StopIteration):
            next(embeds)


class TestClassify:
    """Test substring classification against provider patterns."""

    @pytest.mark.parametrize(
        ("src", "provider_id"),
        [
            ("https://www.youtube.com/embed/xyz", "youtube"),
            ("https://youtu.be/xyz", "youtube"),
            ("https://player.vimeo.com/video/1", "vimeo"),
            ("https://www.google.com/maps/embed?pb=1", "google_maps"),
            ("https://maps.googleapis.com/maps/api/js", "google_maps"),
            ("https://platform.twitter.com/embed/Tweet.html", "twitter"),
            ("https://www.instagram.com/p/abc/embed", "instagram"),
            ("https://www.facebook.com/plugins/video.php", "facebook"),
            ("https://open.spotify.com/embed/track/1", "spotify"),
        ],
    )
    def test_known_urls(self, src: str, provider_id: str) -> None:
        """Test that typical embed URLs classify to their provider."""
        assert classify(src, default_registry.get(provider_id))

    def test_case_insensitive(self) -> None:
        """Test that classification ignores case."""
        assert classify("HTTPS://WWW.YOUTUBE.COM/EMBED/X", default_registry.get("youtube"))

    def test_substring_anywhere_in_url(self) -> None:
        """Test that a pattern in the query string still matches."""
        src = "https://example.org/proxy?target=facebook.com/video"

        assert classify(src, default_registry.get("facebook"))

    def test_unrelated_url(self) -> None:
        """Test that unrelated URLs do not match."""
        assert not classify("https://example.org/widget", default_registry.get("youtube"))

    def test_youtube_channel_page_not_embed(self) -> None:
        """Test that only the listed YouTube paths match."""
        assert not classify("https://www.youtube.com/@channel", default_registry.get("youtube"))
