from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from myjohndeere_auth.auth_strategies.oauth import MyJohnDeereStrategy

CONSUMER_KEY = "123-456-789"
CONSUMER_SECRET = "shhh-its-a-secret"
CALLBACK_URL = "https://www.example.net/oauth/callback"


@pytest.fixture
def oauth_client() -> AsyncMock:
    """Stand-in for the OAuth 1.0a client; every leg is an awaitable mock."""
    client = AsyncMock()
    client.create_authorization_url = MagicMock(
        side_effect=lambda url, token: f"{url}?oauth_token={token}"
    )
    return client


@pytest.fixture
def verify() -> AsyncMock:
    async def _verify(token: str, token_secret: str, profile: dict[str, Any]) -> dict[str, Any]:
        return {"username": profile["accountName"]}

    return AsyncMock(side_effect=_verify)


@pytest.fixture
def strategy(oauth_client: AsyncMock, verify: AsyncMock) -> MyJohnDeereStrategy:
    return MyJohnDeereStrategy(
        {
            "consumer_key": CONSUMER_KEY,
            "consumer_secret": CONSUMER_SECRET,
            "callback_url": CALLBACK_URL,
        },
        verify=verify,
        oauth_client=oauth_client,
    )
