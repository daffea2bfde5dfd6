"""Handshake sequencing in BaseOAuth1Strategy, exercised through MyJohnDeereStrategy."""

from unittest.mock import AsyncMock

import pytest

from myjohndeere_auth.auth_strategies.oauth import BaseOAuth1Strategy, MyJohnDeereStrategy
from myjohndeere_auth.core.exceptions import (
    APIError,
    AuthenticationError,
    InternalOAuthError,
    OAuthTransportError,
)
from myjohndeere_auth.schemas.oauth import OAuth1StrategyOptions

CALLBACK_URL = "https://www.example.net/oauth/callback"

SANDBOX = "https://sandboxapi.deere.com/platform"
JANE = '{"accountName":"jdoe","givenName":"Jane","familyName":"Doe"}'
STORED = {"oauth_token": "rt", "oauth_token_secret": "rts"}


def _callback(**overrides):
    credentials = {"oauth_token": "rt", "oauth_verifier": "v", "request_token": dict(STORED)}
    credentials.update(overrides)
    return credentials


def _access_token(oauth_client: AsyncMock) -> None:
    oauth_client.fetch_access_token.return_value = {
        "oauth_token": "at",
        "oauth_token_secret": "ats",
    }
    oauth_client.get.return_value = JANE


# ===========================================================================
# begin_authentication
# ===========================================================================


@pytest.mark.asyncio
async def test_begin_returns_consent_url_and_state(
    strategy: MyJohnDeereStrategy, oauth_client: AsyncMock
):
    oauth_client.fetch_request_token.return_value = {
        "oauth_token": "rt",
        "oauth_token_secret": "rts",
        "oauth_callback_confirmed": "true",
    }

    url, state = await strategy.begin_authentication()

    assert url == "https://my.deere.com/consentToUseOfData?oauth_token=rt"
    assert state == STORED
    oauth_client.fetch_request_token.assert_awaited_once_with(
        f"{SANDBOX}/oauth/request_token", CALLBACK_URL
    )


@pytest.mark.asyncio
async def test_begin_wraps_client_failure(strategy: MyJohnDeereStrategy, oauth_client: AsyncMock):
    failure = OAuthTransportError("401")
    oauth_client.fetch_request_token.side_effect = failure

    with pytest.raises(InternalOAuthError) as exc_info:
        await strategy.begin_authentication()

    assert exc_info.value.message == "Failed to obtain request token"
    assert exc_info.value.oauth_error is failure


@pytest.mark.asyncio
async def test_begin_rejects_incomplete_request_token(
    strategy: MyJohnDeereStrategy, oauth_client: AsyncMock
):
    oauth_client.fetch_request_token.return_value = {"oauth_token": "rt"}

    with pytest.raises(InternalOAuthError, match="Failed to obtain request token"):
        await strategy.begin_authentication()


# ===========================================================================
# prepare_credentials
# ===========================================================================


@pytest.mark.asyncio
async def test_prepare_credentials_keeps_oauth_params(strategy: MyJohnDeereStrategy):
    prepared = await strategy.prepare_credentials(
        {"oauth_token": "rt", "oauth_verifier": "v", "utm_source": "mail"}
    )

    assert prepared == {"oauth_token": "rt", "oauth_verifier": "v"}


# ===========================================================================
# authenticate
# ===========================================================================


@pytest.mark.asyncio
async def test_authenticate_success(
    strategy: MyJohnDeereStrategy, oauth_client: AsyncMock, verify: AsyncMock
):
    _access_token(oauth_client)

    result = await strategy.authenticate(_callback())

    assert result["user"] == {"username": "jdoe"}
    assert result["profile"]["id"] == "jdoe"
    oauth_client.fetch_access_token.assert_awaited_once_with(
        f"{SANDBOX}/oauth/access_token", "rt", "rts", "v"
    )
    oauth_client.get.assert_awaited_once_with(f"{SANDBOX}/users/@currentUser", "at", "ats")
    verify.assert_awaited_once_with("at", "ats", result["profile"])


@pytest.mark.asyncio
async def test_authenticate_accepts_sync_verify(oauth_client: AsyncMock):
    strategy = MyJohnDeereStrategy(
        {}, verify=lambda token, secret, profile: profile["id"], oauth_client=oauth_client
    )
    _access_token(oauth_client)

    result = await strategy.authenticate(_callback())

    assert result["user"] == "jdoe"


@pytest.mark.parametrize("user", [None, False, {}])
@pytest.mark.asyncio
async def test_authenticate_falsy_user_fails(oauth_client: AsyncMock, user):
    strategy = MyJohnDeereStrategy(
        {}, verify=AsyncMock(return_value=user), oauth_client=oauth_client
    )
    _access_token(oauth_client)

    with pytest.raises(AuthenticationError, match="Authentication failed"):
        await strategy.authenticate(_callback())


@pytest.mark.asyncio
async def test_authenticate_denied(strategy: MyJohnDeereStrategy, oauth_client: AsyncMock):
    with pytest.raises(AuthenticationError, match="User denied access"):
        await strategy.authenticate(_callback(denied="rt"))

    oauth_client.fetch_access_token.assert_not_awaited()


@pytest.mark.parametrize("stored", [None, {}, {"oauth_token": "rt"}])
@pytest.mark.asyncio
async def test_authenticate_without_stored_token(
    strategy: MyJohnDeereStrategy, oauth_client: AsyncMock, stored
):
    with pytest.raises(AuthenticationError, match="Failed to find request token in session"):
        await strategy.authenticate(_callback(request_token=stored))

    oauth_client.fetch_access_token.assert_not_awaited()


@pytest.mark.asyncio
async def test_authenticate_token_mismatch(
    strategy: MyJohnDeereStrategy, oauth_client: AsyncMock
):
    with pytest.raises(AuthenticationError, match="Request token does not match"):
        await strategy.authenticate(_callback(oauth_token="someone-else"))

    oauth_client.fetch_access_token.assert_not_awaited()


@pytest.mark.asyncio
async def test_authenticate_access_token_failure(
    strategy: MyJohnDeereStrategy, oauth_client: AsyncMock, verify: AsyncMock
):
    oauth_client.fetch_access_token.side_effect = OAuthTransportError("denied")

    with pytest.raises(InternalOAuthError, match="Failed to obtain access token"):
        await strategy.authenticate(_callback())

    oauth_client.get.assert_not_awaited()
    verify.assert_not_awaited()


@pytest.mark.asyncio
async def test_authenticate_profile_error_propagates(
    strategy: MyJohnDeereStrategy, oauth_client: AsyncMock, verify: AsyncMock
):
    oauth_client.fetch_access_token.return_value = {
        "oauth_token": "at",
        "oauth_token_secret": "ats",
    }
    oauth_client.get.side_effect = OAuthTransportError(
        "401", data='{"errors":[{"message":"Invalid access token","code":"ERR401"}]}'
    )

    with pytest.raises(APIError):
        await strategy.authenticate(_callback())

    verify.assert_not_awaited()


# ===========================================================================
# Generic base defaults
# ===========================================================================


@pytest.mark.asyncio
async def test_base_strategy_defaults(oauth_client: AsyncMock):
    strategy = BaseOAuth1Strategy(
        "generic",
        OAuth1StrategyOptions(access_token_url="https://example.com/access"),
        verify=lambda token, secret, profile: profile,
        oauth_client=oauth_client,
    )
    oauth_client.fetch_access_token.return_value = {
        "oauth_token": "at",
        "oauth_token_secret": "ats",
    }

    result = await strategy.authenticate(_callback())

    assert strategy.session_key == "oauth"
    assert result["profile"] == {"provider": "generic"}
    oauth_client.get.assert_not_awaited()
