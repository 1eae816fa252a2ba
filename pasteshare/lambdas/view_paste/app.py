import logging

from pasteshare.types import LambdaEvent, LambdaContext, LambdaResponse
from pasteshare.models import Availability
from pasteshare.lifecycle import PasteLifecycle
from pasteshare.exceptions import PasteUnavailableError, ConfigurationError
from pasteshare.dao.redis import PasteRedisDAO
from pasteshare.dao.exceptions import DAOError, PasteNotFoundError
from pasteshare.utils import load_config, redis_settings, app_prefix, get_path_parameter, resolve_clock
from pasteshare.utils.helpers import guarantee_500_response
from pasteshare.utils.responses import html_response, response_500
from pasteshare.lambdas.view_paste.pages import render_paste_page, render_not_found_page
from pasteshare.lambdas.view_paste.constants import (
    PASTE_PAGE_RENDERED,
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


def response_page_404() -> LambdaResponse:
    return html_response(404, render_not_found_page())


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming browser requests to view pastes (`GET /p/{id}`)

    Shares the view-counting path with `GET /pastes/{id}`: rendering the page
    counts as one view.

    HTTP responses:
        200: HTML page with the escaped content, view counter and expiry
        404: HTML not-found page (missing, expired or out of views)
        500: Internal server error (JSON)
    """
    paste_id = get_path_parameter(event, 'id')
    if paste_id is None:
        logger.info('Missing "id" in path. Responding with 404.', extra={'event': MISSING_PASTE_ID})
        return response_page_404()

    try:
        app_config = load_config('view_paste')
        dao = PasteRedisDAO(**redis_settings(app_config), prefix=app_prefix())
    except (ConfigurationError, DAOError):
        logger.exception('Failed to connect to paste store. Responding with 500.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_500()

    lifecycle = PasteLifecycle(dao, resolve_clock(event))
    try:
        view = lifecycle.record_view(paste_id)
    except PasteNotFoundError:
        logger.info('Paste not found. Responding with 404.', extra={'event': PASTE_NOT_FOUND, 'paste_id': paste_id})
        return response_page_404()
    except PasteUnavailableError as e:
        logger.info(
            'Paste no longer available (%s). Responding with 404.',
            e.availability,
            extra={'event': UNAVAILABLE_EVENTS[e.availability], 'paste_id': paste_id},
        )
        return response_page_404()
    except DAOError:
        logger.exception('Failed to read paste. Responding with 500.', extra={'event': DATA_STORE_UNAVAILABLE, 'paste_id': paste_id})
        return response_500()

    logger.info('Paste page rendered. Responding with 200.', extra={'event': PASTE_PAGE_RENDERED, 'paste_id': paste_id})
    return html_response(200, render_paste_page(paste_id, view))
