"""Decides whether embed filtering applies at all and per provider."""

from embedgate.embeds.collaborators import ConsentState, ProviderConfig


def should_filter(consent_state: ConsentState | None) -> bool:
    """Return True if embeds should be blocked for this request.

    Blocking only starts once the consent subsystem is present, active and
    has created at least one consent record.
    """
    if consent_state is None or not consent_state.system_active:
        return False
    return consent_state.consent_record_count > 0


def is_provider_enabled(config: ProviderConfig | None) -> bool:
    """Return True if the provider's embeds should be blocked.

    A provider without stored config is blocked; only an explicit
    ``disabled`` flag lets its embeds through.
    """
    if config is None:
        return True
    return not config.disabled
