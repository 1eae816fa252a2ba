from typing import cast

import pytest
from pytest import MonkeyPatch

from pasteshare.types import LambdaEvent, LambdaContext, LambdaConfiguration
from pasteshare.constants import ENV
from pasteshare.lambdas.create_paste import app as create_paste_app
from pasteshare.lambdas.get_paste import app as get_paste_app
from pasteshare.lambdas.view_paste import app as view_paste_app
from pasteshare.lambdas.healthz import app as healthz_app


HANDLER_MODULES = (create_paste_app, get_paste_app, view_paste_app, healthz_app)


@pytest.fixture
def context() -> LambdaContext:
    return cast(LambdaContext, {'function_name': 'pasteshare'})


@pytest.fixture
def config() -> LambdaConfiguration:
    return cast(LambdaConfiguration, {'redis': {'host': 'redis.test', 'port': 6379, 'db': 0}})


@pytest.fixture(autouse=True)
def lambda_environment(monkeypatch: MonkeyPatch, config: LambdaConfiguration, memory_dao) -> None:
    """Wire every handler to the in-memory DAO and a deterministic clock."""
    monkeypatch.setenv(ENV.App.APP_ENV, 'test')
    monkeypatch.setenv(ENV.App.APP_NAME, 'pasteshare')
    monkeypatch.setenv(ENV.App.TEST_MODE, '1')
    monkeypatch.delenv(ENV.App.AWS_SAM_LOCAL, raising=False)
    monkeypatch.delenv(ENV.App.PUBLIC_BASE_URL, raising=False)

    for module in HANDLER_MODULES:
        monkeypatch.setattr(module, 'load_config', lambda *a, **kw: config)
        monkeypatch.setattr(module, 'PasteRedisDAO', lambda *a, **kw: memory_dao)


def build_event(*, now_ms: int | None = None, paste_id: str | None = None, body: str | None = None) -> LambdaEvent:
    headers = {'content-type': 'application/json'}
    if now_ms is not None:
        headers['x-test-now-ms'] = str(now_ms)
    return cast(LambdaEvent, {
        'httpMethod': 'GET' if body is None else 'POST',
        'headers': headers,
        'pathParameters': None if paste_id is None else {'id': paste_id},
        'requestContext': {'domainName': 'abc123.execute-api.us-east-1.amazonaws.com', 'stage': 'Prod'},
        'body': body,
        'isBase64Encoded': False,
    })


@pytest.fixture
def make_event():
    """Factory for API Gateway (Lambda Proxy) events."""
    return build_event
