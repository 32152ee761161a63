from functools import wraps as _wraps
from typing import Optional

from .errors import RangeError
from .http import DEFAULT_SETTINGS, RangeSettings, accept_ranges_header, range_from_environ, range_from_scope
from .log import logger


WSGI_ENVIRON_KEY = 'pagerange.range'
ASGI_SCOPE_KEY = 'range'


def _error_body(exc: RangeError) -> bytes:
    return f'Invalid range header: {exc}'.encode('utf8')


def _has_header(headers, name: str) -> bool:
    name = name.lower()
    for key, _ in headers:
        if isinstance(key, bytes):
            key = key.decode('latin1')
        if key.lower() == name:
            return True
    return False


def wrap_wsgi_with_range(app, settings: Optional[RangeSettings] = None):
    settings = settings or DEFAULT_SETTINGS
    accept = accept_ranges_header(settings=settings) if settings.accept else None

    @_wraps(app)
    def wrapped(environ, start_response):
        try:
            environ[WSGI_ENVIRON_KEY] = range_from_environ(environ, settings)
        except RangeError as exc:
            logger.debug('Rejected range header on %s: %s', environ.get('PATH_INFO'), exc)
            body = _error_body(exc)
            start_response(
                '400 Bad Request',
                [('content-type', 'text/plain; charset=utf-8'), ('content-length', str(len(body)))],
            )
            return [body]

        if accept is None:
            return app(environ, start_response)

        def _start_response(status, headers, exc_info=None):
            if not _has_header(headers, accept[0]):
                headers = [*headers, accept]
            return start_response(status, headers, exc_info)

        return app(environ, _start_response)

    return wrapped


def wrap_asgi_with_range(app, settings: Optional[RangeSettings] = None):
    settings = settings or DEFAULT_SETTINGS
    accept = None
    if settings.accept:
        name, value = accept_ranges_header(settings=settings)
        accept = (name.lower().encode('latin1'), value.encode('latin1'))

    @_wraps(app)
    async def wrapped(scope, receive, send):
        if scope['type'] != 'http':
            return await app(scope, receive, send)

        try:
            scope[ASGI_SCOPE_KEY] = range_from_scope(scope, settings)
        except RangeError as exc:
            logger.debug('Rejected range header on %s: %s', scope.get('path'), exc)
            body = _error_body(exc)
            await send(
                {
                    'type': 'http.response.start',
                    'status': 400,
                    'headers': [
                        (b'content-type', b'text/plain; charset=utf-8'),
                        (b'content-length', str(len(body)).encode('latin1')),
                    ],
                }
            )
            await send({'type': 'http.response.body', 'body': body})
            return

        if accept is None:
            return await app(scope, receive, send)

        async def _send(message):
            if message['type'] == 'http.response.start':
                headers = list(message.get('headers', []))
                if not _has_header(headers, accept[0].decode('latin1')):
                    headers.append(accept)
                message = {**message, 'headers': headers}
            await send(message)

        return await app(scope, receive, _send)

    return wrapped
