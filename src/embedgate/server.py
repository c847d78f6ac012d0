"""HTTP service exposing the embed filter and its HTML middleware."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel

from embedgate.config import Settings, settings
from embedgate.consent_store import RedisConsentReader
from embedgate.embeds import (
    ConsentReader,
    CookieOptInReader,
    EmbedFilter,
    SettingsProviderConfigReader,
    StaticConsentReader,
    find_placeholders,
    get_translator,
)
from embedgate.logger import logger, setup_logging
from embedgate.middleware.embed_middleware import EmbedConsentMiddleware


class FilterRequest(BaseModel):
    """Body of POST /filter."""

    html: str
    opt_ins: list[str] = []


class FilterResponse(BaseModel):
    """Filtered HTML plus the placeholders it now contains."""

    html: str
    placeholders: list[dict[str, str]]


class ServerState:
    """Encapsulates the server dependencies and state."""

    def __init__(self, app_settings: Settings) -> None:
        """Initialize the server state."""
        self.settings = app_settings
        self.consent_reader = build_consent_reader(app_settings)
        self.embed_filter = EmbedFilter(
            SettingsProviderConfigReader(app_settings),
            self.consent_reader,
            privacy_policy_url=app_settings.privacy_policy_url,
            translator=get_translator(app_settings.embed_locale),
        )

    def stop(self) -> None:
        """Cleanup logic for client resources."""
        logger.info("Stopping embedgate server resources...")
        if isinstance(self.consent_reader, RedisConsentReader):
            self.consent_reader.close()


def build_consent_reader(app_settings: Settings) -> ConsentReader:
    """Pick the consent reader for the configured store.

    Without a Redis URL there is no consent subsystem, so nothing is blocked.
    """
    if app_settings.redis_url:
        return RedisConsentReader(
            redis_url=app_settings.redis_url,
            key_prefix=app_settings.redis_consent_key_prefix,
            enabled=app_settings.consent_enabled,
        )
    logger.warning("REDIS_URL is not set, consent store absent: embeds will not be blocked")
    return StaticConsentReader(system_active=False)


def create_app(app_settings: Settings = settings) -> FastAPI:
    """Build the FastAPI application.

    Args:
        app_settings: Settings to build the filter from.

    Returns:
        Application with the embed middleware installed.

    """
    state = ServerState(app_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            yield
        finally:
            state.stop()

    app = FastAPI(title="embedgate", lifespan=lifespan)
    app.state.embedgate = state
    app.add_middleware(
        EmbedConsentMiddleware,
        embed_filter=state.embed_filter,
        cookie_prefix=app_settings.embed_cookie_prefix,
    )

    @app.get("/providers")
    async def list_providers() -> list[dict[str, Any]]:
        """List known providers and whether their embeds are blocked."""
        reader = SettingsProviderConfigReader(app_settings)
        return [
            {
                "id": provider.id,
                "label": provider.label,
                "description": provider.description,
                "patterns": list(provider.patterns),
                "cookie_info": provider.cookie_info,
                "enabled": not reader.get_provider_config(provider.id).disabled,
            }
            for provider in state.embed_filter.registry
        ]

    @app.post("/filter")
    async def filter_html(body: FilterRequest, request: Request) -> FilterResponse:
        """Filter an HTML fragment for the calling visitor.

        Opt-ins listed in the body are merged with the opt-in cookies sent
        along with the request.
        """
        registry = state.embed_filter.registry
        unknown = [provider_id for provider_id in body.opt_ins if provider_id not in registry]
        if unknown:
            raise HTTPException(
                status_code=400, detail=f"Unknown provider(s): {', '.join(unknown)}"
            )

        cookies = CookieOptInReader(request.cookies, app_settings.embed_cookie_prefix)
        opt_ins = {
            provider.id: provider.id in body.opt_ins or cookies.has_opted_in(provider.id)
            for provider in registry
        }
        html = await asyncio.to_thread(state.embed_filter.filter_content, body.html, opt_ins)
        placeholders = [ref._asdict() for ref in find_placeholders(html)]
        return FilterResponse(html=html, placeholders=placeholders)

    return app


def main() -> None:
    """Run the embedgate server."""
    setup_logging()
    uvicorn.run(create_app(), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
