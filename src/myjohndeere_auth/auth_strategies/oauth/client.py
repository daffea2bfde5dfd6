"""
OAuth 1.0a client used by the OAuth 1.0a strategies.

Strategies never sign requests or talk HTTP themselves. They hold an
``OAuth1Client`` and delegate every leg of the handshake to it. The default
implementation wraps authlib's ``AsyncOAuth1Client`` (httpx-based); tests
inject a fake.

All failures leave the client as ``OAuthTransportError`` so strategies only
have one exception type to translate.
"""

import logging
from typing import Any, Protocol

import httpx
from authlib.common.urls import add_params_to_uri
from authlib.integrations.base_client import OAuthError
from authlib.integrations.httpx_client import AsyncOAuth1Client

from myjohndeere_auth.core.exceptions import OAuthTransportError

logger = logging.getLogger(__name__)


class OAuth1Client(Protocol):
    async def fetch_request_token(self, url: str, callback_url: str | None) -> dict[str, Any]: ...

    def create_authorization_url(self, url: str, request_token: str) -> str: ...

    async def fetch_access_token(
        self, url: str, request_token: str, request_token_secret: str, verifier: str | None
    ) -> dict[str, Any]: ...

    async def get(self, url: str, token: str, token_secret: str) -> str: ...


class AuthlibOAuth1Client:
    """
    ``OAuth1Client`` backed by authlib.

    A fresh ``AsyncOAuth1Client`` is opened per call, carrying only the
    credentials that call needs, so concurrent handshakes share nothing.
    """

    def __init__(
        self,
        consumer_key: str | None,
        consumer_secret: str | None,
        custom_headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret
        self.custom_headers = dict(custom_headers or {})
        self._transport = transport

    def _client(self, **kwargs: Any) -> AsyncOAuth1Client:
        return AsyncOAuth1Client(
            client_id=self.consumer_key,
            client_secret=self.consumer_secret,
            headers=self.custom_headers,
            transport=self._transport,
            **kwargs,
        )

    async def fetch_request_token(self, url: str, callback_url: str | None) -> dict[str, Any]:
        async with self._client(redirect_uri=callback_url) as client:
            try:
                token = await client.fetch_request_token(url)
            except (OAuthError, ValueError, KeyError, httpx.HTTPError) as e:
                raise OAuthTransportError(f"Request token call to {url} failed: {e}") from e
        return dict(token)

    def create_authorization_url(self, url: str, request_token: str) -> str:
        return add_params_to_uri(url, [("oauth_token", request_token)])

    async def fetch_access_token(
        self, url: str, request_token: str, request_token_secret: str, verifier: str | None
    ) -> dict[str, Any]:
        async with self._client(token=request_token, token_secret=request_token_secret) as client:
            try:
                token = await client.fetch_access_token(url, verifier=verifier)
            except (OAuthError, ValueError, KeyError, httpx.HTTPError) as e:
                raise OAuthTransportError(f"Access token call to {url} failed: {e}") from e
        return dict(token)

    async def get(self, url: str, token: str, token_secret: str) -> str:
        """Signed GET. Returns the body text on 2xx."""
        async with self._client(token=token, token_secret=token_secret) as client:
            try:
                response = await client.get(url)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                logger.debug(f"GET {url} returned {e.response.status_code}")
                raise OAuthTransportError(
                    f"GET {url} returned {e.response.status_code}",
                    status_code=e.response.status_code,
                    data=e.response.text,
                ) from e
            except httpx.HTTPError as e:
                raise OAuthTransportError(f"GET {url} failed: {e}") from e
            return response.text
