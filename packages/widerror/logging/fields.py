"""Canonical logging field names for WidError producers and consumers.

Keeping names centralized prevents drift between services that log records
and the pipelines that index them.
"""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EVENT = "event"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"

# Error record fields.
ERROR = "error"
ERROR_PREFIX = "error_"
ERROR_CODE = "error_code"
ERROR_NAME = "error_name"
ERROR_NAMESPACE = "error_namespace"
ERROR_KIND = "error_kind"
ERROR_SCOPE = "error_scope"
ERROR_LEVEL = "error_level"
ERROR_RETRY_MODE = "error_retry_mode"
ERROR_PASS_THROUGH_MODE = "error_pass_through_mode"
ERROR_MAPPING_CODE = "error_mapping_code"
ERROR_CHAIN_DEPTH = "error_chain_depth"
ERROR_ROOT_CODE = "error_root_code"

# Codec events.
DECODE_FAILURE_EVENT = "widerror_decode_failure"
DISCRIMINANT_DEGRADED_EVENT = "widerror_discriminant_degraded"
ERROR_EVENT = "widerror"
