"""
MetalCloud CLI Constants

Centralized constants for magic values, defaults, and configuration.
"""

# API
API_PREFIX = "/api/v2"
DEFAULT_REQUEST_TIMEOUT = 30
DEFAULT_VERIFY_SSL = True

# Config locations
DEFAULT_CONFIG_FILE = "~/.metalcloud/config.yaml"
DEFAULT_LOG_DIR = "~/.metalcloud/logs"
ENV_PREFIX = "METALCLOUD_"

# Output
DEFAULT_OUTPUT_FORMAT = "text"
OUTPUT_FORMATS = ("text", "json", "yaml", "csv", "md")

# Shutdown defaults for deploy
DEFAULT_ATTEMPT_SOFT_SHUTDOWN = True
DEFAULT_ATTEMPT_HARD_SHUTDOWN = True
DEFAULT_SOFT_SHUTDOWN_TIMEOUT = 180

# Blocking deploy defaults
DEFAULT_BLOCK_TIMEOUT = 180 * 60
DEFAULT_BLOCK_CHECK_INTERVAL = 10

# Deploy status values reported by the API
DEPLOY_STATUS_FINISHED = "finished"
DEPLOY_SUCCESS_STATUSES = frozenset({DEPLOY_STATUS_FINISHED})
DEPLOY_FAILURE_STATUSES = frozenset({"error", "failed"})

# Service statuses hidden from `infrastructure list` by default
SERVICE_STATUS_ORDERED = "ordered"
SERVICE_STATUS_DELETED = "deleted"

# Confirmation
CONFIRMATION_ANSWER = "yes"

# Log Configuration
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"
