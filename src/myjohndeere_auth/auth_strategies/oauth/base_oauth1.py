# auth_strategies/oauth/base_oauth1.py

import inspect
import logging
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from myjohndeere_auth.auth_strategies.base import BaseAuthStrategy
from myjohndeere_auth.auth_strategies.constants import (
    OAUTH_TOKEN,
    OAUTH_TOKEN_SECRET,
    OAUTH_VERIFIER,
)
from myjohndeere_auth.auth_strategies.oauth.client import AuthlibOAuth1Client, OAuth1Client
from myjohndeere_auth.core.exceptions import (
    AuthenticationError,
    InternalOAuthError,
    OAuthTransportError,
)
from myjohndeere_auth.schemas.oauth import OAuth1StrategyOptions, RequestTokenState

logger = logging.getLogger(__name__)

# verify(token, token_secret, profile) -> user, sync or async
VerifyCallback = Callable[[str, str, dict[str, Any]], Any]


class BaseOAuth1Strategy(BaseAuthStrategy):
    """
    Base class for OAuth 1.0a login strategies.

    The handshake itself (signing, token requests, transport) belongs to the
    injected ``OAuth1Client``. This class only sequences it and hands the
    resulting profile to the application's ``verify`` callback.

    Flow:
        1. begin_authentication() - get a request token, build the consent redirect
        2. authenticate()         - check the callback against the stored request
                                    token, exchange it, fetch the profile, verify
    """

    def __init__(
        self,
        name: str,
        options: OAuth1StrategyOptions,
        verify: VerifyCallback,
        oauth_client: OAuth1Client | None = None,
    ):
        if verify is None:
            raise TypeError(f"{self.__class__.__name__} requires a verify callback")

        super().__init__(name)
        self.options = options
        self._verify = verify
        self._oauth: OAuth1Client = oauth_client or AuthlibOAuth1Client(
            consumer_key=options.consumer_key,
            consumer_secret=options.consumer_secret,
            custom_headers=options.custom_headers,
        )

    @property
    def session_key(self) -> str:
        """Key under which the host keeps the request token between redirect and callback."""
        return self.options.session_key or "oauth"

    async def begin_authentication(self) -> tuple[str, dict[str, str]]:
        """
        Step 1: obtain a request token and the URL to send the user to.

        Returns:
            (authorization_url, request_token_state). The host must store the
            state under ``session_key`` and pass it back to authenticate().
        """
        try:
            token = await self._oauth.fetch_request_token(
                self.options.request_token_url, self.options.callback_url
            )
        except OAuthTransportError as e:
            logger.warning(f"[{self.name}] Request token fetch failed: {e}")
            raise InternalOAuthError("Failed to obtain request token", e) from e

        if not token.get(OAUTH_TOKEN) or not token.get(OAUTH_TOKEN_SECRET):
            raise InternalOAuthError("Failed to obtain request token")

        state = RequestTokenState(
            oauth_token=token[OAUTH_TOKEN], oauth_token_secret=token[OAUTH_TOKEN_SECRET]
        )
        authorization_url = self._oauth.create_authorization_url(
            self.options.user_authorization_url, state.oauth_token
        )
        return authorization_url, state.model_dump()

    async def prepare_credentials(self, raw_credentials: dict[str, Any]) -> dict[str, Any]:
        """Keep only the OAuth 1.0a callback parameters."""
        return {
            key: raw_credentials[key]
            for key in (OAUTH_TOKEN, OAUTH_VERIFIER, "denied")
            if raw_credentials.get(key) is not None
        }

    async def user_profile(
        self, token: str, token_secret: str, params: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """
        Fetch the provider's profile for an access token.

        Providers that expose a profile endpoint override this. The default
        is an empty profile tagged with the provider name.
        """
        return {"provider": self.name}

    async def authenticate(self, credentials: dict[str, Any]) -> dict[str, Any]:
        """
        Step 2: complete the handshake from the provider's callback.

        Expected credentials keys:
            oauth_token    : str  - request token echoed back by the provider
            oauth_verifier : str  - verifier from the consent page
            request_token  : dict - state returned by begin_authentication()
            denied         : str  - set by the provider when the user refused

        Returns:
            dict with keys: user (whatever verify returned), profile
        """
        if credentials.get("denied"):
            raise AuthenticationError("User denied access")

        stored = credentials.get("request_token")
        if not stored:
            raise AuthenticationError("Failed to find request token in session")
        try:
            state = RequestTokenState.model_validate(stored)
        except ValidationError as e:
            raise AuthenticationError("Failed to find request token in session") from e

        if credentials.get(OAUTH_TOKEN) != state.oauth_token:
            raise AuthenticationError("Request token does not match")

        try:
            params = await self._oauth.fetch_access_token(
                self.options.access_token_url,
                state.oauth_token,
                state.oauth_token_secret,
                credentials.get(OAUTH_VERIFIER),
            )
        except OAuthTransportError as e:
            logger.warning(f"[{self.name}] Access token exchange failed: {e}")
            raise InternalOAuthError("Failed to obtain access token", e) from e

        token = params.get(OAUTH_TOKEN)
        token_secret = params.get(OAUTH_TOKEN_SECRET)
        if not token or not token_secret:
            raise InternalOAuthError("Failed to obtain access token")

        profile = await self.user_profile(token, token_secret, params)

        user = self._verify(token, token_secret, profile)
        if inspect.isawaitable(user):
            user = await user
        if not user:
            raise AuthenticationError("Authentication failed")

        logger.info(f"[{self.name}] Handshake completed for {profile.get('id')}")
        return {"user": user, "profile": profile}
