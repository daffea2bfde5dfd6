from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

OAuthProvider = Literal["myjohndeere"]


class OAuth1StrategyOptions(BaseModel):
    """Endpoints and credentials every OAuth 1.0a strategy needs."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    consumer_key: str | None = None
    consumer_secret: str | None = None
    request_token_url: str | None = None
    access_token_url: str | None = None
    user_authorization_url: str | None = None
    callback_url: str | None = None
    session_key: str | None = None
    custom_headers: dict[str, str] | None = None


class MyJohnDeereStrategyOptions(OAuth1StrategyOptions):
    platform_url: str | None = None
    user_profile_url: str | None = None


class RequestTokenState(BaseModel):
    """What the host keeps in its session between the login redirect and the callback."""

    oauth_token: str
    oauth_token_secret: str


class OAuthLoginResponse(BaseModel):
    """Returned after a successful OAuth 1.0a login."""

    provider: OAuthProvider
    profile: dict[str, Any]
    user: Any = None
