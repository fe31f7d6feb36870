"""
Constants for the Scribd client library.
Wire names and defaults used by the Scribd platform API.
"""

# Endpoint (every remote method is a POST to this URL)
API_URL = "http://api.scribd.com/api"

# Request fields managed by the library
FIELD_METHOD = "method"
FIELD_API_KEY = "api_key"
FIELD_API_SIG = "api_sig"
FIELD_SESSION_KEY = "session_key"
FIELD_MY_USER_ID = "my_user_id"
FIELD_FILE = "file"

# Response envelope
ENVELOPE_TAG = "rsp"
STATUS_ATTR = "stat"
STATUS_OK = "ok"
STATUS_FAIL = "fail"

# Environment variables read by API.reload()
ENV_API_KEY = "SCRIBD_API_KEY"
ENV_API_SECRET = "SCRIBD_API_SECRET"

# Default transport configuration
DEFAULT_CONFIG = {
    'url': API_URL,
    'timeout': 15 * 60,         # read timeout; conversions can be slow
    'connect_timeout': 30,
    'tries': 3,                 # total attempts, not retries
    'retry_delay': 20,          # seconds between attempts
}

DEFAULT_MIME_TYPE = "application/octet-stream"

# Remote error codes some call sites may ignore
DOCUMENT_MISSING_ERROR_CODE = 652
DOCUMENT_EXISTS_ERROR_CODE = 653
