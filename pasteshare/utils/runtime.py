"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if lambda is running in local SAM, False otherwise.
    in_test_mode() -> bool:
        True if the process-wide test-mode flag is enabled, False otherwise.

Example:
    >>> from pasteshare.utils.runtime import running_locally, in_test_mode
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
    >>> os.environ['TEST_MODE'] = '1'
    >>> in_test_mode()
    True
"""

import os

from pasteshare.constants import ENV


def running_locally() -> bool:
    """Return True if running in SAM local invoke/api, False otherwise."""
    env = os.getenv(ENV.App.APP_ENV, '').lower()
    return env == 'local' or os.getenv(ENV.App.AWS_SAM_LOCAL) == 'true'


def in_test_mode() -> bool:
    """Return True only when TEST_MODE is exactly '1'.

    Gates the deterministic time override header. Any other value, including
    'true', leaves the real clock in charge.
    """
    return os.getenv(ENV.App.TEST_MODE) == '1'
