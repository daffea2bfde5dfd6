# auth_strategies/constants.py

MYJOHNDEERE = "myjohndeere"

SUPPORTED_PROVIDERS = {MYJOHNDEERE}

# MyJohnDeere platform
MYJOHNDEERE_PLATFORM_URL = "https://sandboxapi.deere.com/platform"
MYJOHNDEERE_AUTHORIZATION_URL = "https://my.deere.com/consentToUseOfData"
MYJOHNDEERE_SESSION_KEY = "oauth:myjohndeere"
MYJOHNDEERE_ACCEPT = "application/vnd.deere.axiom.v3+json"

# Appended to the platform URL
REQUEST_TOKEN_PATH = "/oauth/request_token"
ACCESS_TOKEN_PATH = "/oauth/access_token"
USER_PROFILE_PATH = "/users/@currentUser"

# OAuth 1.0a parameter names
OAUTH_TOKEN = "oauth_token"
OAUTH_TOKEN_SECRET = "oauth_token_secret"
OAUTH_VERIFIER = "oauth_verifier"

# MyJohnDeere profile keys
PROFILE_ACCOUNT_NAME = "accountName"
PROFILE_GIVEN_NAME = "givenName"
PROFILE_FAMILY_NAME = "familyName"
