"""Helper utilities for AWS lambda functions.

Functions:
    base_url() -> str
        Resolve the public base URL (explicit setting, API Gateway domain, local default)
    get_paste_url() -> str
        Get the shareable URL for a given paste id
    get_header() -> str | None
        Case-insensitive header lookup on an API Gateway event
    get_path_parameter() -> str | None
        Read a path parameter (tolerates `pathParameters: null`)
    parse_json_body() -> Any
        Decode a (possibly base64-encoded) JSON request body
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler) -> Callable
        Decorator: Convert unhandled handler exceptions into a 500 response

Example:
    Typical usage inside a Lambda handler:

        >>> from pasteshare.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> base_url({})
        'http://localhost:3000'
"""

import os
import json
import base64
import logging
import functools
from collections.abc import Callable
from typing import Any

from pasteshare.constants import ENV, LOCAL_BASE_URL, UNKNOWN_INTERNAL_SERVER_ERROR
from pasteshare.exceptions import MissingEnvironmentVariableError
from pasteshare.types import LambdaEvent, LambdaContext, LambdaResponse
from pasteshare.utils.responses import response_500
from pasteshare.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def base_url(event: LambdaEvent) -> str:
    """Resolve the public base URL for shareable paste links

    Resolution order:
        1. `PUBLIC_BASE_URL` environment variable, when set.
        2. API Gateway domain of the current invocation. A SAM local domain
           gets plain HTTP, a custom domain is used as-is and the default
           execute-api domain gets the stage appended.
        3. Local development default (`http://localhost:3000`).

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: Base URL without a trailing slash, e.g.:
             - "https://paste.example.com"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    explicit = os.getenv(ENV.App.PUBLIC_BASE_URL)
    if explicit:
        return explicit.rstrip('/')

    request_context = event.get('requestContext') or {}
    domain = request_context.get('domainName') or ''
    stage = request_context.get('stage') or ''

    if domain.startswith(('localhost', '127.0.0.1')):
        # SAM local API: plain HTTP, no stage
        return f'http://{domain}'
    elif domain and 'execute-api' not in domain:
        # Custom domain: skip stage
        return f'https://{domain}'
    elif domain:
        return f'https://{domain}/{stage}'.rstrip('/')
    else:
        return LOCAL_BASE_URL


def get_paste_url(paste_id: str, event: LambdaEvent) -> str:
    """Get the absolute shareable URL (`<base>/p/<id>`) of a paste"""
    return f'{base_url(event)}/p/{paste_id}'


def get_header(event: LambdaEvent, name: str) -> str | None:
    """Look up a request header by name, ignoring case

    API Gateway forwards headers with the client's casing and sends
    `"headers": null` when there are none.
    """
    headers = event.get('headers') or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def get_path_parameter(event: LambdaEvent, name: str) -> str | None:
    """Read a path parameter; API Gateway sends `"pathParameters": null` when there are none"""
    return (event.get('pathParameters') or {}).get(name) or None


def parse_json_body(event: LambdaEvent) -> Any:
    """Decode the JSON request body of an API Gateway event

    A missing or empty body decodes to an empty object. Base64-encoded
    bodies (`isBase64Encoded: true`) are decoded first.

    Raises:
        ValueError: If the body is not valid base64, UTF-8 or JSON.
    """
    body = event.get('body')
    if not body:
        return {}
    if event.get('isBase64Encoded'):
        body = base64.b64decode(body, validate=True).decode('utf-8')
    return json.loads(body)


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable[[LambdaEvent, LambdaContext], LambdaResponse]) -> Callable:
    """Decorator: respond with 500 instead of crashing the Lambda runtime

    When running locally the original exception is re-raised so SAM prints
    the traceback.
    """

    @functools.wraps(handler)
    def wrapper(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
        try:
            return handler(event, context)
        except Exception:
            if running_locally():
                raise
            logger.exception(
                'Unhandled exception in lambda handler. Responding with 500.',
                extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR},
            )
            return response_500(error_code=UNKNOWN_INTERNAL_SERVER_ERROR)

    return wrapper
