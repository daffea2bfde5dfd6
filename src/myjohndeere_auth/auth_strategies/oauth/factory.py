"""
OAuthProviderFactory: builds the correct strategy instance based on provider name.

Reads credentials from settings so endpoints don't need to know about config.
"""

from myjohndeere_auth.auth_strategies.constants import MYJOHNDEERE, SUPPORTED_PROVIDERS
from myjohndeere_auth.auth_strategies.oauth import BaseOAuth1Strategy, MyJohnDeereStrategy
from myjohndeere_auth.auth_strategies.oauth.base_oauth1 import VerifyCallback
from myjohndeere_auth.core.config import Settings, settings
from myjohndeere_auth.core.exceptions import AuthenticationError
from myjohndeere_auth.schemas.oauth import MyJohnDeereStrategyOptions


def get_oauth_strategy(
    provider: str, verify: VerifyCallback, config: Settings | None = None
) -> BaseOAuth1Strategy:
    """
    Return a configured OAuth strategy for the given provider name.

    Args:
        provider: "myjohndeere"
        verify:   Application callback resolving (token, token_secret, profile) to a user
        config:   Settings to read credentials from (defaults to the global settings)

    Returns:
        Configured strategy instance

    Raises:
        AuthenticationError: If provider is unknown or not configured
    """
    config = config or settings
    provider = provider.lower()

    if provider == MYJOHNDEERE:
        if not config.MYJOHNDEERE_CONSUMER_KEY or not config.MYJOHNDEERE_CONSUMER_SECRET:
            raise AuthenticationError("MyJohnDeere OAuth is not configured.")
        return MyJohnDeereStrategy(
            MyJohnDeereStrategyOptions(
                consumer_key=config.MYJOHNDEERE_CONSUMER_KEY,
                consumer_secret=config.MYJOHNDEERE_CONSUMER_SECRET,
                callback_url=config.MYJOHNDEERE_CALLBACK_URL,
                platform_url=config.MYJOHNDEERE_PLATFORM_URL,
            ),
            verify=verify,
        )

    raise AuthenticationError(
        f"Unknown OAuth provider: '{provider}'. "
        f"Supported providers: {', '.join(sorted(SUPPORTED_PROVIDERS))}"
    )
