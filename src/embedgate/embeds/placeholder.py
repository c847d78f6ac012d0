"""Placeholder markup shown in place of a blocked embed.

The markup is the contract with the client-side consent script: the
``data-embed-type`` and ``data-embed-url`` attributes of the outer element
let it re-inject the real iframe once the visitor opts in.
"""

from typing import NamedTuple

from bs4 import BeautifulSoup
from jinja2 import Environment, PackageLoader, select_autoescape

from embedgate.embeds.messages import LOAD_CONTENT, PRIVACY_POLICY, translate
from embedgate.embeds.protocols import Translator
from embedgate.registry import ProviderDefinition

PLACEHOLDER_CLASS = "embedgate-placeholder"


class PlaceholderRef(NamedTuple):
    """Provider and original URL recovered from placeholder markup."""

    provider_id: str
    url: str


class PlaceholderRenderer:
    """Renders placeholders from a Jinja2 template."""

    def __init__(
        self,
        translator: Translator = translate,
        template_name: str = "placeholder.html",
    ) -> None:
        """Initialize the renderer.

        Args:
            translator: Translates the button and privacy link labels.
            template_name: Template inside the embedgate templates directory.

        """
        self._translate = translator
        env = Environment(
            loader=PackageLoader("embedgate", "templates"),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._template = env.get_template(template_name)

    def render(
        self,
        provider: ProviderDefinition,
        url: str,
        message: str,
        privacy_policy_url: str = "",
    ) -> str:
        """Render the placeholder for one blocked embed.

        Args:
            provider: Provider the embed was classified to.
            url: Original iframe src.
            message: Text explaining why the content is blocked.
            privacy_policy_url: Link target; the link is omitted when empty.

        Returns:
            HTML fragment without any iframe markup.

        """
        return self._template.render(
            provider=provider,
            url=url,
            message=message,
            privacy_policy_url=privacy_policy_url,
            load_label=self._translate(LOAD_CONTENT),
            privacy_label=self._translate(PRIVACY_POLICY),
        )


def find_placeholders(html: str) -> list[PlaceholderRef]:
    """Recover provider ids and original URLs from rendered placeholders.

    Args:
        html: Filtered HTML content.

    Returns:
        One PlaceholderRef per placeholder, in document order.

    """
    soup = BeautifulSoup(html, "html.parser")
    refs = []
    for element in soup.find_all("div", class_=PLACEHOLDER_CLASS):
        provider_id = element.get("data-embed-type")
        url = element.get("data-embed-url")
        if provider_id and url:
            refs.append(PlaceholderRef(str(provider_id), str(url)))
    return refs
