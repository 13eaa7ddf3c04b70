"""HTTP constants for the request layer.

Centralizes status ranges and header values shared by the executor and verbs.
"""

# HTTP Status Code Ranges
HTTP_STATUS_OK_MIN = 200
HTTP_STATUS_OK_MAX = 300
HTTP_STATUS_CLIENT_ERROR_MIN = 400
HTTP_STATUS_SERVER_ERROR_MIN = 500

# Timeouts
DEFAULT_TIMEOUT_SECONDS = 30.0

# Headers
HEADER_CACHE_CONTROL = "Cache-Control"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_USER_AGENT = "User-Agent"
HEADER_API_KEY = "X-API-KEY"

CACHE_CONTROL_NO_STORE = "no-store"
CONTENT_TYPE_JSON = "application/json"

DEFAULT_USER_AGENT = "typed-request/1.0"
