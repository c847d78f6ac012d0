"""User-facing strings shown in placeholders."""

from embedgate.embeds.protocols import Translator

DEFAULT_MESSAGE = "placeholder.default_message"
LOAD_CONTENT = "placeholder.load_content"
PRIVACY_POLICY = "placeholder.privacy_policy"

CATALOGS: dict[str, dict[str, str]] = {
    "en": {
        DEFAULT_MESSAGE: (
            "This content is loaded from {label}. To view it, you need to agree "
            "to the use of cookies."
        ),
        LOAD_CONTENT: "Load content",
        PRIVACY_POLICY: "Privacy policy",
    },
    "de": {
        DEFAULT_MESSAGE: (
            "Dieser Inhalt wird von {label} geladen. Um diesen Inhalt zu sehen, "
            "müssen Sie der Verwendung von Cookies zustimmen."
        ),
        LOAD_CONTENT: "Inhalt laden",
        PRIVACY_POLICY: "Datenschutzerklärung",
    },
}


def get_translator(locale: str = "en") -> Translator:
    """Return a translate(key) function for the locale.

    Unknown keys are returned as-is; an unknown locale falls back to English.
    """
    catalog = CATALOGS.get(locale, CATALOGS["en"])

    def translate(key: str) -> str:
        return catalog.get(key, key)

    return translate


translate = get_translator("en")


def format_default_message(label: str, translator: Translator = translate) -> str:
    """Build the default placeholder message for a provider label."""
    return translator(DEFAULT_MESSAGE).format(label=label)
