from pasteshare.utils.config import app_env, app_name, app_prefix, load_config, redis_settings
from pasteshare.utils.helpers import (
    base_url,
    get_paste_url,
    get_header,
    get_path_parameter,
    parse_json_body,
    require_environment,
    guarantee_500_response,
)
from pasteshare.utils.identifiers import generate_paste_id
from pasteshare.utils.clock import Clock, SystemClock, FixedClock, resolve_clock, iso_timestamp
from pasteshare.utils.logging import initialize_logging


__all__ = [
    'generate_paste_id',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'redis_settings',
    'base_url',
    'get_paste_url',
    'get_header',
    'get_path_parameter',
    'parse_json_body',
    'require_environment',
    'guarantee_500_response',
    'Clock',
    'SystemClock',
    'FixedClock',
    'resolve_clock',
    'iso_timestamp',
    'initialize_logging',
]
