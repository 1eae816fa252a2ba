import logging

from botocore.exceptions import BotoCoreError, ClientError

from pasteshare.types import LambdaEvent, LambdaContext, LambdaResponse
from pasteshare.exceptions import ConfigurationError
from pasteshare.dao.redis import PasteRedisDAO
from pasteshare.dao.exceptions import DAOError
from pasteshare.utils import load_config, redis_settings, app_prefix
from pasteshare.utils.helpers import guarantee_500_response
from pasteshare.utils.responses import response_200
from pasteshare.lambdas.healthz.constants import HEALTHCHECK_OK, HEALTHCHECK_FAILED


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Report whether the paste store is reachable (`GET /healthz`)

    Always answers 200; store health is carried in the body as `{"ok": bool}`.
    """
    try:
        app_config = load_config('healthz')
        dao = PasteRedisDAO(**redis_settings(app_config), prefix=app_prefix())
        ok = dao.probe()
    except (ConfigurationError, DAOError, BotoCoreError, ClientError, OSError) as error:
        logger.warning(
            'Paste store healthcheck failed.',
            extra={'event': HEALTHCHECK_FAILED, 'reason': str(error), 'error': error.__class__.__name__},
        )
        return response_200({'ok': False})

    logger.info('Paste store healthcheck finished.', extra={'event': HEALTHCHECK_OK if ok else HEALTHCHECK_FAILED, 'ok': ok})
    return response_200({'ok': ok})
