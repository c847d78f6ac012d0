"""HTTP middleware that filters embeds out of HTML responses."""

import asyncio

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from embedgate.embeds.collaborators import CookieOptInReader
from embedgate.embeds.filter import EmbedFilter
from embedgate.logger import logger


class EmbedConsentMiddleware(BaseHTTPMiddleware):
    """Rewrites text/html responses through an EmbedFilter.

    Opt-ins come from the request's cookies. Responses that are not HTML,
    are content-encoded, or cannot be decoded are passed through unchanged.
    """

    def __init__(self, app: ASGIApp, embed_filter: EmbedFilter, cookie_prefix: str) -> None:
        """Initialize the middleware.

        Args:
            app: The wrapped ASGI application
            embed_filter: Filter applied to HTML bodies
            cookie_prefix: Prefix of the per-provider opt-in cookies

        """
        super().__init__(app)
        self._embed_filter = embed_filter
        self._cookie_prefix = cookie_prefix

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Filter the downstream response if it is HTML."""
        response = await call_next(request)

        content_type = response.headers.get("content-type", "")
        if not content_type.startswith("text/html") or "content-encoding" in response.headers:
            return response

        body = b"".join([chunk async for chunk in response.body_iterator])  # type: ignore[attr-defined]
        charset = _charset_from_content_type(content_type)
        try:
            html = body.decode(charset)
        except (UnicodeDecodeError, LookupError):
            logger.warning("Could not decode HTML response as %s, passing through", charset)
            return _rebuild_response(response, body)

        opt_ins = CookieOptInReader(request.cookies, self._cookie_prefix)
        filtered = await asyncio.to_thread(self._embed_filter.filter_content, html, opt_ins)
        # Placeholder text may hold characters the page charset cannot encode
        return _rebuild_response(response, filtered.encode(charset, errors="xmlcharrefreplace"))


def _charset_from_content_type(content_type: str) -> str:
    """Extract the charset parameter, defaulting to utf-8."""
    for param in content_type.split(";")[1:]:
        name, _, value = param.strip().partition("=")
        if name.lower() == "charset" and value:
            return value.strip('"')
    return "utf-8"


def _rebuild_response(original: Response, body: bytes) -> Response:
    """Copy status and headers of original onto a response with a new body."""
    response = Response(content=body, status_code=original.status_code)
    response.raw_headers = [
        (name, value) for name, value in original.raw_headers if name != b"content-length"
    ]
    response.raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))
    return response
