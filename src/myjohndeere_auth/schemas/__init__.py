from .oauth import (
    MyJohnDeereStrategyOptions,
    OAuth1StrategyOptions,
    OAuthLoginResponse,
    OAuthProvider,
    RequestTokenState,
)

__all__ = [
    "MyJohnDeereStrategyOptions",
    "OAuth1StrategyOptions",
    "OAuthLoginResponse",
    "OAuthProvider",
    "RequestTokenState",
]
