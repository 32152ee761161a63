import json

from pagerange import next_range_header

from ._items import paginate


async def names(scope, receive, send):
    page, next_rng = paginate(scope['range'])
    headers = [(b'content-type', b'application/json')]
    if next_rng is not None:
        name, value = next_range_header(next_rng)
        headers.append((name.lower().encode('latin1'), value.encode('latin1')))
    await send({'type': 'http.response.start', 'status': 206 if next_rng else 200, 'headers': headers})
    await send({'type': 'http.response.body', 'body': json.dumps(page).encode('utf8'), 'more_body': False})


async def info(scope, receive, send):
    rng = scope.get('range')
    await send(
        {
            'type': 'http.response.start',
            'status': 200,
            'headers': [(b'content-type', b'application/json')],
        }
    )
    await send(
        {
            'type': 'http.response.body',
            'body': json.dumps({'type': scope['type'], 'range': None if rng is None else str(rng)}).encode('utf8'),
            'more_body': False,
        }
    )


async def app(scope, receive, send):
    if scope['type'] == 'lifespan':
        return
    return await {'/names': names, '/info': info}[scope['path']](scope, receive, send)
