from myjohndeere_auth.auth_strategies.oauth.base_oauth1 import BaseOAuth1Strategy
from myjohndeere_auth.auth_strategies.oauth.client import AuthlibOAuth1Client, OAuth1Client
from myjohndeere_auth.auth_strategies.oauth.myjohndeere import MyJohnDeereStrategy

__all__ = [
    "AuthlibOAuth1Client",
    "BaseOAuth1Strategy",
    "MyJohnDeereStrategy",
    "OAuth1Client",
]
