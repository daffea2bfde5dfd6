import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from myjohndeere_auth.auth_strategies.constants import SUPPORTED_PROVIDERS
from myjohndeere_auth.auth_strategies.oauth import BaseOAuth1Strategy
from myjohndeere_auth.auth_strategies.oauth.base_oauth1 import VerifyCallback
from myjohndeere_auth.auth_strategies.oauth.factory import get_oauth_strategy
from myjohndeere_auth.core.exceptions import (
    AuthEngineException,
    AuthenticationError,
    convert_to_http_exception,
)
from myjohndeere_auth.schemas.oauth import OAuthLoginResponse

logger = logging.getLogger(__name__)

router = APIRouter()


async def accept_profile(token: str, token_secret: str, profile: dict[str, Any]) -> dict[str, Any]:
    """Default verify callback: the normalized profile is the user."""
    return profile


def get_verify() -> VerifyCallback:
    """Override this dependency to plug in application user lookup/creation."""
    return accept_profile


def get_strategy(provider: str, verify: VerifyCallback = Depends(get_verify)) -> BaseOAuth1Strategy:
    if provider not in SUPPORTED_PROVIDERS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"Unsupported provider '{provider}'. "
                f"Choose from: {', '.join(sorted(SUPPORTED_PROVIDERS))}"
            ),
        )
    try:
        return get_oauth_strategy(provider, verify=verify)
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.get("/{provider}/login")
async def oauth_login(
    request: Request,
    strategy: BaseOAuth1Strategy = Depends(get_strategy),
) -> RedirectResponse:
    """
    Redirect the user to the provider's consent page.

    The request token is kept in the session under the strategy's
    session key until the provider calls back.
    """
    try:
        authorization_url, request_token = await strategy.begin_authentication()
    except AuthEngineException as e:
        logger.warning(f"[oauth:{strategy.name}] Failed to initiate login: {e}")
        raise convert_to_http_exception(e) from e

    request.session[strategy.session_key] = request_token
    logger.info(f"[oauth:{strategy.name}] Initiating login")
    return RedirectResponse(url=authorization_url, status_code=status.HTTP_302_FOUND)


@router.get("/{provider}/callback", response_model=OAuthLoginResponse)
async def oauth_callback(
    request: Request,
    strategy: BaseOAuth1Strategy = Depends(get_strategy),
) -> OAuthLoginResponse:
    """
    Handle the OAuth 1.0a callback from the provider.

    The stored request token is consumed whatever the outcome; a failed
    attempt has to start again from /login.
    """
    credentials = await strategy.prepare_credentials(dict(request.query_params))
    credentials["request_token"] = request.session.pop(strategy.session_key, None)

    try:
        result = await strategy.authenticate(credentials)
    except AuthEngineException as e:
        logger.warning(f"[oauth:{strategy.name}] Authentication failed: {e}")
        raise convert_to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"[oauth:{strategy.name}] Callback error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="OAuth authentication failed. Please try again.",
        ) from e

    return OAuthLoginResponse(
        provider=strategy.name,  # type: ignore[arg-type]
        profile=result["profile"],
        user=result["user"],
    )
