"""Default configuration for loklak."""

# Service URLs
DEFAULT_BASE_URL = "http://loklak.org/"
LOCAL_URL = "http://localhost:9000/"  # settings/account are served to localhost only

# Raw calls go to <base>/api/<call>
API_PREFIX = "api/"

# Defaults
DEFAULT_TIMEOUT = 30.0
USER_AGENT = "loklak-python/0.1.0"
JSON_INDENT = 2
