"""API Gateway (Lambda Proxy) response builders

Every JSON response carries `Content-Type: application/json`; pages carry
`text/html`. Bodies are always serialized strings, as API Gateway expects.

Example:
    >>> response_404()
    {'statusCode': 404, 'headers': {'Content-Type': 'application/json'}, 'body': '{"error": "Paste not found"}'}
"""

import json
from typing import Any

from pasteshare.types import LambdaResponse


JSON_CONTENT_TYPE = 'application/json'
HTML_CONTENT_TYPE = 'text/html; charset=utf-8'


def json_response(status_code: int, body: dict[str, Any]) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': JSON_CONTENT_TYPE},
        'body': json.dumps(body),
    }


def html_response(status_code: int, html: str) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': HTML_CONTENT_TYPE},
        'body': html,
    }


def response_200(body: dict[str, Any]) -> LambdaResponse:
    return json_response(200, body)


def response_201(*, paste_id: str, url: str) -> LambdaResponse:
    return json_response(201, {'id': paste_id, 'url': url})


def response_400(message: str) -> LambdaResponse:
    return json_response(400, {'error': message})


def response_404(message: str = 'Paste not found') -> LambdaResponse:
    return json_response(404, {'error': message})


def response_500(message: str = 'Internal server error', error_code: str | None = None) -> LambdaResponse:
    body = {'error': message}
    if error_code:
        body['error_code'] = error_code
    return json_response(500, body)
