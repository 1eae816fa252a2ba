"""Utility functions for application configuration management.

Each Lambda function reads its data store settings from **AWS AppConfig**.
Every environment (`APP_ENV`) has a dedicated AppConfig *Environment* within
the shared AppConfig *Application* identified by `APP_NAME`. Configuration
data is a JSON document under a configuration profile (typically
`backend-config`):

    {
        "build": 7,
        "active_backend": "redis",
        "configs": {
            "create_paste": {
                "redis": {"host": "...", "port": 6379, "db": 0}
            },
            "get_paste": { ... },
            "view_paste": { ... },
            "healthz": { ... }
        }
    }

Process-level flags (`TEST_MODE`, `PUBLIC_BASE_URL`, `LOG_LEVEL`) are plain
environment variables and are read where they are used.

Typical usage inside a Lambda handler:
    >>> from pasteshare.utils.config import load_config
    >>> config = load_config('get_paste')
    >>> print(config['redis']['host'])
    redis.host.docker.internal
"""

import os
import json
import functools
import urllib.parse
import urllib.request
import logging
from collections.abc import Callable

import boto3

from pasteshare.types import LambdaConfiguration
from pasteshare.constants import ENV
from pasteshare.exceptions import BadConfigurationError
from pasteshare.utils.helpers import require_environment
from pasteshare.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return the Redis key prefix as <app name>:<app env>, or None if APP_NAME is not set."""
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _select_function_config(document: dict, function_name: str) -> LambdaConfiguration:
    """Extract `{<active backend>: <settings>}` for one function from an AppConfig document."""
    try:
        backend = document['active_backend']
        return {backend: document['configs'][function_name][backend]}
    except (KeyError, TypeError) as e:
        raise BadConfigurationError(f"AppConfig document has no '{function_name}' section for the active backend.") from e


def _validate_appconfig_url(url: str | None) -> str:
    if not url:
        return ''
    components = urllib.parse.urlparse(url)
    if components.scheme not in {'http', 'https'}:
        raise BadConfigurationError(f'Bad scheme {url}')
    if components.hostname not in {'localhost', '127.0.0.1', 'host.docker.internal', 'appconfig-agent'}:
        raise BadConfigurationError(f'Bad host {url}')
    if components.port not in {2772, None}:
        raise BadConfigurationError(f'Bad port {url}')
    return url


def _sam_load_local_appconfig(func: Callable) -> Callable:
    """Decorator: load AppConfig from a local AppConfig Agent when running under SAM.

    Behavior:
        - If the application is running locally and `APPCONFIG_AGENT_URL` is set
          to a safe local URL, fetch the configuration JSON from the local agent.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).
    """

    @functools.wraps(func)
    def wrapper(function_name: str) -> LambdaConfiguration:
        agent_url = _validate_appconfig_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not running_locally() or not agent_url:
            return func(function_name)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'functionName': function_name})
        with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
            document = json.load(r)

        data = _select_function_config(document, function_name)
        logger.debug('Loaded AppConfig from local agent.', extra={'functionName': function_name, 'build': document.get('build')})
        return data

    return wrapper


@_sam_load_local_appconfig
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(function_name: str) -> LambdaConfiguration:
    """Load configuration for a given Lambda from AWS AppConfig.

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested function (e.g., 'create_paste', 'get_paste').

    Raises:
        MissingEnvironmentVariableError: If the AppConfig identifiers are not set.
        BadConfigurationError: If the document lacks the function's section.
        botocore.exceptions.ClientError: On AppConfig API failures.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'functionName': function_name})

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    document = json.loads(content.decode('utf-8'))

    data = _select_function_config(document, function_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'functionName': function_name, 'build': document.get('build')})
    return data


def redis_settings(config: LambdaConfiguration) -> dict:
    """Turn a loaded `{'redis': {...}}` section into RedisClientMixin keyword arguments.

    Example:
        >>> redis_settings({'redis': {'host': 'redis', 'port': 6379}})
        {'redis_host': 'redis', 'redis_port': 6379}
    """
    try:
        section = config['redis']
    except KeyError as e:
        raise BadConfigurationError('Only the redis backend is supported.') from e
    return {f'redis_{k}': v for k, v in section.items()}
