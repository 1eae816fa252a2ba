import logging

from pasteshare.types import LambdaEvent, LambdaContext, LambdaResponse
from pasteshare.lifecycle import PasteLifecycle, validate_create_request
from pasteshare.exceptions import ValidationError, ConfigurationError
from pasteshare.dao.redis import PasteRedisDAO
from pasteshare.dao.exceptions import DAOError
from pasteshare.utils import load_config, redis_settings, app_prefix, get_paste_url, parse_json_body, resolve_clock
from pasteshare.utils.helpers import guarantee_500_response
from pasteshare.utils.responses import response_201, response_400, response_500
from pasteshare.lambdas.create_paste.constants import (
    PASTE_CREATED,
    INVALID_REQUEST_BODY,
    VALIDATION_FAILED,
    DATA_STORE_UNAVAILABLE,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to create pastes (`POST /pastes`)

    This Lambda handler follows this procedure to create a paste:
    - Step 1: Decode JSON request body
    - Step 2: Validate paste fields (all violations reported together)
    - Step 3: Connect to the paste store
    - Step 4: Store paste record and schedule its reclaim
    - Step 5: Respond with the paste id and shareable URL

    HTTP responses:
        201: Paste created
            id: new paste identifier
            url: shareable URL (<base>/p/<id>)
        400: Bad client request
            error: "Invalid request body", or the joined validation messages
        500: Internal server error
            error: "Internal server error"

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'body': '{"content": "hello", "max_views": 1}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])
        {'id': 'V1StGXR8', 'url': 'http://localhost:3000/p/V1StGXR8'}
    """
    # 1- Decode JSON request body
    try:
        body = parse_json_body(event)
    except ValueError:
        logger.info('Request body is not valid JSON. Responding with 400.', extra={'event': INVALID_REQUEST_BODY})
        return response_400('Invalid request body')

    # 2- Validate paste fields
    try:
        request = validate_create_request(body)
    except ValidationError as e:
        logger.info(
            'Paste creation request failed validation. Responding with 400.',
            extra={'event': VALIDATION_FAILED, 'errors': e.errors},
        )
        return response_400(str(e))

    # 3- Connect to the paste store
    try:
        app_config = load_config('create_paste')
        dao = PasteRedisDAO(**redis_settings(app_config), prefix=app_prefix())
    except (ConfigurationError, DAOError):
        logger.exception('Failed to connect to paste store. Responding with 500.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_500()

    # 4- Store paste record
    lifecycle = PasteLifecycle(dao, resolve_clock(event))
    try:
        paste = lifecycle.create(request.content, ttl_seconds=request.ttl_seconds, max_views=request.max_views)
    except DAOError:
        logger.exception('Failed to store paste. Responding with 500.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_500()

    # 5- Respond with paste id and URL
    url = get_paste_url(paste.paste_id, event)
    logger.info(
        'Paste created. Responding with 201.',
        extra={
            'event': PASTE_CREATED,
            'paste_id': paste.paste_id,
            'ttl_seconds': paste.ttl_seconds,
            'max_views': paste.max_views,
        },
    )
    return response_201(paste_id=paste.paste_id, url=url)
