# auth_strategies/oauth/myjohndeere.py

import json
import logging
from collections.abc import Mapping
from typing import Any

from myjohndeere_auth.auth_strategies.constants import (
    ACCESS_TOKEN_PATH,
    MYJOHNDEERE,
    MYJOHNDEERE_ACCEPT,
    MYJOHNDEERE_AUTHORIZATION_URL,
    MYJOHNDEERE_PLATFORM_URL,
    MYJOHNDEERE_SESSION_KEY,
    PROFILE_ACCOUNT_NAME,
    PROFILE_FAMILY_NAME,
    PROFILE_GIVEN_NAME,
    REQUEST_TOKEN_PATH,
    USER_PROFILE_PATH,
)
from myjohndeere_auth.auth_strategies.oauth.base_oauth1 import BaseOAuth1Strategy, VerifyCallback
from myjohndeere_auth.auth_strategies.oauth.client import OAuth1Client
from myjohndeere_auth.core.exceptions import (
    APIError,
    InternalOAuthError,
    OAuthTransportError,
    ProfileParseError,
)
from myjohndeere_auth.schemas.oauth import MyJohnDeereStrategyOptions

logger = logging.getLogger(__name__)


class MyJohnDeereStrategy(BaseOAuth1Strategy):
    """
    OAuth 1.0a strategy for MyJohnDeere.

    Options:
        consumer_key     MyJohnDeere client App ID
        consumer_secret  MyJohnDeere client App Shared Secret
        platform_url     Base URL of the API platform (defaults to the sandbox)
        callback_url     Where MyJohnDeere redirects the user after consent

    The token endpoints and the profile endpoint hang off ``platform_url``
    unless given explicitly. The consent page lives on my.deere.com, not on
    the platform, so it is never derived.

    Example:

        strategy = MyJohnDeereStrategy(
            {
                "consumer_key": "123-456-789",
                "consumer_secret": "shhh-its-a-secret",
                "platform_url": "https://api.deere.com/platform",
                "callback_url": "https://www.example.net/oauth/callback",
            },
            verify=find_or_create_user,
        )
    """

    def __init__(
        self,
        options: MyJohnDeereStrategyOptions | Mapping[str, Any] | None,
        verify: VerifyCallback,
        oauth_client: OAuth1Client | None = None,
    ):
        if options is None:
            options = MyJohnDeereStrategyOptions()
        elif not isinstance(options, MyJohnDeereStrategyOptions):
            options = MyJohnDeereStrategyOptions.model_validate(dict(options))

        platform_url = options.platform_url or MYJOHNDEERE_PLATFORM_URL

        if options.custom_headers:
            # MyJohnDeere requires its versioned media type; caller headers are replaced
            logger.debug(f"[{MYJOHNDEERE}] Ignoring caller custom_headers {options.custom_headers}")

        resolved = options.model_copy(
            update={
                "platform_url": platform_url,
                "request_token_url": options.request_token_url
                or platform_url + REQUEST_TOKEN_PATH,
                "access_token_url": options.access_token_url or platform_url + ACCESS_TOKEN_PATH,
                "user_authorization_url": options.user_authorization_url
                or MYJOHNDEERE_AUTHORIZATION_URL,
                "session_key": options.session_key or MYJOHNDEERE_SESSION_KEY,
                "custom_headers": {"Accept": MYJOHNDEERE_ACCEPT},
                "user_profile_url": options.user_profile_url or platform_url + USER_PROFILE_PATH,
            }
        )

        super().__init__(MYJOHNDEERE, resolved, verify, oauth_client=oauth_client)
        self.user_profile_url: str = resolved.user_profile_url  # type: ignore[assignment]

    async def user_profile(
        self, token: str, token_secret: str, params: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """
        Fetch the current user from MyJohnDeere and normalize it.

        MyJohnDeere does not return profile data with the access token, so
        this costs one extra signed GET.

        Returns a dict with keys:
            provider    : "myjohndeere"
            id          : same as accountName
            accountName
            givenName, familyName (None when MyJohnDeere omits them)
            _raw        : response body as received
            _json       : parsed body

        Raises:
            APIError:            MyJohnDeere answered with an ``errors`` body
            InternalOAuthError:  any other failed request
            ProfileParseError:   the request succeeded but the body is not JSON, or is null
        """
        try:
            body = await self._oauth.get(self.user_profile_url, token, token_secret)
        except OAuthTransportError as e:
            api_error = _parse_api_error(e.data)
            if api_error is not None:
                logger.warning(f"[{self.name}] Profile fetch rejected: {api_error.message}")
                raise api_error from e
            logger.warning(f"[{self.name}] Profile fetch failed: {e}")
            raise InternalOAuthError("Failed to fetch user profile", e) from e

        try:
            data = json.loads(body)
        except ValueError as e:
            raise ProfileParseError("Failed to parse user profile") from e
        if data is None:
            raise ProfileParseError("Failed to parse user profile")

        # Non-object JSON still yields an identity, just without any fields
        fields = data if isinstance(data, dict) else {}
        return {
            "provider": MYJOHNDEERE,
            "id": fields.get(PROFILE_ACCOUNT_NAME),
            "accountName": fields.get(PROFILE_ACCOUNT_NAME),
            "givenName": fields.get(PROFILE_GIVEN_NAME),
            "familyName": fields.get(PROFILE_FAMILY_NAME),
            "_raw": body,
            "_json": data,
        }


def _parse_api_error(data: str | bytes | None) -> APIError | None:
    """
    Build an APIError from a MyJohnDeere error body, if it is one.

    The body looks like ``{"errors": [{"message": "...", "code": "..."}]}``;
    only the first entry is used, and a first entry that is not an object
    gives an APIError without message or code. Anything else yields None.
    """
    if not data:
        return None
    try:
        payload = json.loads(data)
    except ValueError:
        return None

    if not isinstance(payload, dict):
        return None
    errors = payload.get("errors")
    if not isinstance(errors, list) or not errors or errors[0] is None:
        return None

    first = errors[0]
    if not isinstance(first, dict):
        return APIError(None, None)
    return APIError(first.get("message"), first.get("code"))
