from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from .constants import Headers
from .range import Range, parse_range_header


_HeaderValue = Union[str, bytes]
_Headers = Union[Mapping[_HeaderValue, _HeaderValue], Iterable[Tuple[_HeaderValue, _HeaderValue]]]


@dataclass(frozen=True)
class RangeSettings:
    header: str = Headers.range.value
    fallback_header: str = Headers.x_range.value
    next_header: str = Headers.next_range.value
    accept_header: str = Headers.accept_ranges.value
    accept: Tuple[str, ...] = ()


DEFAULT_SETTINGS = RangeSettings()


def _to_str(value: _HeaderValue) -> str:
    if isinstance(value, bytes):
        return value.decode('latin1')
    return value


def _environ_key(name: str) -> str:
    return 'HTTP_' + name.upper().replace('-', '_')


def _lookup(headers: _Headers, name: str) -> Optional[str]:
    items = headers.items() if isinstance(headers, Mapping) else headers
    name = name.lower()
    for key, value in items:
        if _to_str(key).lower() == name:
            return _to_str(value)
    return None


def _decode(value: Optional[str]) -> Range:
    # absent header selects the whole collection
    if not value:
        return Range()
    return parse_range_header(value)


def range_from_headers(headers: _Headers, settings: Optional[RangeSettings] = None) -> Range:
    settings = settings or DEFAULT_SETTINGS
    value = _lookup(headers, settings.header) or _lookup(headers, settings.fallback_header)
    return _decode(value)


def range_from_environ(environ: Dict[str, Any], settings: Optional[RangeSettings] = None) -> Range:
    settings = settings or DEFAULT_SETTINGS
    value = environ.get(_environ_key(settings.header)) or environ.get(_environ_key(settings.fallback_header))
    return _decode(value)


def range_from_scope(scope: Dict[str, Any], settings: Optional[RangeSettings] = None) -> Range:
    return range_from_headers(scope.get('headers') or [], settings)


def next_range_header(rng: Range, settings: Optional[RangeSettings] = None) -> Tuple[str, str]:
    settings = settings or DEFAULT_SETTINGS
    return (settings.next_header, str(rng))


def accept_ranges_header(*props: str, settings: Optional[RangeSettings] = None) -> Tuple[str, str]:
    settings = settings or DEFAULT_SETTINGS
    return (settings.accept_header, ', '.join(props or settings.accept))
