"""Wire and API constants for the Tradologics SDK.

- **Live API**: scheme, host and base path of the public REST API
- **Backtest Bridge**: default engine socket and escalation reply values
- **Client Identity**: version string sent with sandbox tradehooks
"""

VERSION = "0.2.0"
CLIENT_NAME = f"python-sdk/{VERSION}"

# ============================================================================
# LIVE API
# ============================================================================

API_SCHEME = "https"
API_HOST = "api.tradologics.com"
API_BASE_PATH = "/v1"
HTTP_TIMEOUT = 5.0  # seconds

SANDBOX_URL = f"{API_SCHEME}://{API_HOST}{API_BASE_PATH}/sandbox"

# ============================================================================
# BACKTEST BRIDGE
# ============================================================================

BACKTEST_SOCKET_URL = "tcp://0.0.0.0:3003"

# Reply returned to the caller when an exchange with the engine fails
ESCALATION_STATUS = 502
ESCALATION_ERROR_ID = "internal_server_error"
DEFAULT_ERROR_MESSAGE = "Something bad happened"
INVALID_JSON_MESSAGE = "Invalid JSON"
TIMEOUT_ERROR_MESSAGE = "Backtest engine timed out"

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
