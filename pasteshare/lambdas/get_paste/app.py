import logging

from pasteshare.types import LambdaEvent, LambdaContext, LambdaResponse
from pasteshare.models import Availability
from pasteshare.lifecycle import PasteLifecycle
from pasteshare.exceptions import PasteUnavailableError, ConfigurationError
from pasteshare.dao.redis import PasteRedisDAO
from pasteshare.dao.exceptions import DAOError, PasteNotFoundError
from pasteshare.utils import load_config, redis_settings, app_prefix, get_path_parameter, resolve_clock
from pasteshare.utils.helpers import guarantee_500_response
from pasteshare.utils.responses import response_200, response_404, response_500
from pasteshare.lambdas.get_paste.constants import (
    PASTE_VIEWED,
    MISSING_PASTE_ID,
    PASTE_NOT_FOUND,
    PASTE_EXPIRED,
    PASTE_VIEW_LIMIT_EXCEEDED,
    DATA_STORE_UNAVAILABLE,
)


logger = logging.getLogger(__name__)

UNAVAILABLE_EVENTS = {
    Availability.EXPIRED: PASTE_EXPIRED,
    Availability.VIEW_LIMIT_EXCEEDED: PASTE_VIEW_LIMIT_EXCEEDED,
}


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to read pastes (`GET /pastes/{id}`)

    Every successful response counts as one view.

    This Lambda handler follows this procedure to read a paste:
    - Step 1: Extract paste id from request path
    - Step 2: Connect to the paste store
    - Step 3: Check availability and count the view (atomically)
    - Step 4: Respond with content and derived fields

    HTTP responses:
        200: Paste available
            content: paste text
            remaining_views: views left after this one (null without a view limit)
            expires_at: ISO-8601 expiry (null without a TTL)
        404: Paste missing, expired or out of views (indistinguishable)
            error: "Paste not found"
        500: Internal server error
            error: "Internal server error"

    Example:
        >>> event = {'pathParameters': {'id': 'V1StGXR8'}}
        >>> response = lambda_handler(event, None)
        >>> json.loads(response['body'])
        {'content': 'hello', 'remaining_views': 0, 'expires_at': None}
    """
    # 1- Extract paste id from request's path
    paste_id = get_path_parameter(event, 'id')
    if paste_id is None:
        logger.info('Missing "id" in path. Responding with 404.', extra={'event': MISSING_PASTE_ID})
        return response_404()

    # 2- Connect to the paste store
    try:
        app_config = load_config('get_paste')
        dao = PasteRedisDAO(**redis_settings(app_config), prefix=app_prefix())
    except (ConfigurationError, DAOError):
        logger.exception('Failed to connect to paste store. Responding with 500.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_500()

    # 3- Check availability and count the view
    lifecycle = PasteLifecycle(dao, resolve_clock(event))
    try:
        view = lifecycle.record_view(paste_id)
    except PasteNotFoundError:
        logger.info('Paste not found. Responding with 404.', extra={'event': PASTE_NOT_FOUND, 'paste_id': paste_id})
        return response_404()
    except PasteUnavailableError as e:
        logger.info(
            'Paste no longer available (%s). Responding with 404.',
            e.availability,
            extra={'event': UNAVAILABLE_EVENTS[e.availability], 'paste_id': paste_id},
        )
        return response_404()
    except DAOError:
        logger.exception('Failed to read paste. Responding with 500.', extra={'event': DATA_STORE_UNAVAILABLE, 'paste_id': paste_id})
        return response_500()

    # 4- Respond with content and derived fields
    logger.info(
        'Paste viewed. Responding with 200.',
        extra={'event': PASTE_VIEWED, 'paste_id': paste_id, 'view_count': view.view_count},
    )
    return response_200(view.as_api_dict())
