"""API-related constants."""

API_PREFIX = "/api"

# HTTP Headers
CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"
WWW_AUTHENTICATE_HEADER = "WWW-Authenticate"
BEARER_CHALLENGE = "Bearer"

# Request logging
MAX_USER_AGENT_LENGTH = 200
