from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Extra physical retention after logical expiry, so expired pastes still answer 404
    GRACE_PERIOD = 60
    # Lifetime of the healthcheck probe key
    HEALTHCHECK_PROBE = 10


class Paste:
    """Paste record constraints."""

    ID_LENGTH = 8
    MIN_TTL_SECONDS = 1
    MAX_TTL_SECONDS = 8_640_000_000_000  # 10**8 days
    MIN_MAX_VIEWS = 1
    MAX_UPDATE_ATTEMPTS = 5  # optimistic WATCH/MULTI retries for view increments


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'
        TEST_MODE = 'TEST_MODE'
        PUBLIC_BASE_URL = 'PUBLIC_BASE_URL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


# Request header carrying a deterministic "now" (ms since epoch), honored only in test mode
TEST_NOW_HEADER = 'x-test-now-ms'

# Fallback public base URL for local invocations (SAM CLI, tests, etc.)
LOCAL_BASE_URL = 'http://localhost:3000'

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
