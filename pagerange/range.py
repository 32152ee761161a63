"""Sortable-key range header encoding and decoding."""

import re
from dataclasses import dataclass, replace
from typing import List, Tuple
from urllib.parse import quote_plus, unquote_plus

from .constants import (
    BOUNDS_SEPARATOR,
    CLAUSE_TERMINATOR,
    EXCLUSIVE_MARKER,
    OPTION_ASSIGN,
    OPTIONS_SEPARATOR,
    Option,
    Order,
)
from .errors import DecodingError, FormatError


_invalid_escape_re = re.compile(r'%(?![0-9A-Fa-f]{2})')
_ambiguous_dot_re = re.compile(r'^\.|\.$|\.(?=\.)|(?<=\.)\.')
_limit_re = re.compile(r'[0-9]+')


@dataclass(frozen=True)
class Range:
    sort: str = ''
    start: str = ''
    start_exclusive: bool = False
    end: str = ''
    limit: int = 0
    desc: bool = False

    @classmethod
    def parse(cls, value: str) -> 'Range':
        return parse_range_header(value)

    def next(self, cursor: str) -> 'Range':
        """
        Build the range for the page following `cursor`, the sort value
        of the last item in the current page.
        """
        return replace(self, start=cursor, start_exclusive=True)

    def __str__(self) -> str:
        return encode_range(self)


def _quote(value: str) -> str:
    return quote_plus(value, safe='')


def _quote_cursor(value: str) -> str:
    # a raw ".." inside a cursor would split the bounds token
    return _ambiguous_dot_re.sub('%2E', _quote(value))


def _unquote(token: str) -> str:
    if _invalid_escape_re.search(token):
        raise DecodingError(f'invalid escape sequence in {token!r}')
    try:
        return unquote_plus(token, errors='strict')
    except UnicodeDecodeError as exc:
        raise DecodingError(f'invalid utf-8 payload in {token!r}') from exc


def encode_range(rng: Range) -> str:
    start = _quote_cursor(rng.start)
    if start.startswith(EXCLUSIVE_MARKER):
        start = '%7E' + start[1:]
    if rng.start_exclusive:
        start = EXCLUSIVE_MARKER + start
    rv = f'{_quote(rng.sort)} {start}{BOUNDS_SEPARATOR}{_quote_cursor(rng.end)}{CLAUSE_TERMINATOR}'

    opts: List[str] = []
    if rng.limit > 0:
        opts.append(f'{Option.max}{OPTION_ASSIGN}{rng.limit}')
    if rng.desc:
        opts.append(f'{Option.order}{OPTION_ASSIGN}{Order.desc}')
    if opts:
        rv += ' ' + OPTIONS_SEPARATOR.join(opts) + CLAUSE_TERMINATOR
    return rv


def next_range(rng: Range, cursor: str) -> Range:
    return rng.next(cursor)


def _parse_bounds(clause: str) -> Tuple[str, str, bool, str]:
    tokens = clause.split()
    if not tokens:
        raise FormatError('missing sort property')

    sort = _unquote(tokens[0])
    start, start_exclusive, end = '', False, ''
    # NOTE: tokens past the bounds one are ignored
    if len(tokens) > 1:
        parts = tokens[1].split(BOUNDS_SEPARATOR)
        if len(parts) > 2:
            raise FormatError(f'multiple range separators in {tokens[1]!r}')
        start_spec = parts[0]
        if start_spec.startswith(EXCLUSIVE_MARKER):
            start_exclusive = True
            start_spec = start_spec[1:]
        if start_spec:
            start = _unquote(start_spec)
        if len(parts) == 2 and parts[1]:
            end = _unquote(parts[1])
    return sort, start, start_exclusive, end


def _parse_options(clause: str) -> Tuple[int, bool]:
    limit, desc = 0, False

    clause = clause.strip()
    if not clause:
        return limit, desc

    for opt in clause.split(OPTIONS_SEPARATOR):
        kv = opt.strip().split(OPTION_ASSIGN)
        if len(kv) != 2:
            raise FormatError(f'invalid option {opt.strip()!r}')
        key, value = kv
        if key == Option.max:
            if not _limit_re.fullmatch(value):
                raise FormatError(f'invalid max value {value!r}')
            limit = int(value)
        elif key == Option.order:
            if value not in (Order.asc, Order.desc):
                raise FormatError(f'invalid order value {value!r}')
            desc = value == Order.desc
        else:
            raise FormatError(f'unknown option {key!r}')
    return limit, desc


def parse_range_header(value: str) -> Range:
    """
    Parse a range header value into a `Range`.

    Args:
        value: The header value (e.g., "name ~meredith..; max=10;")

    Returns:
        The decoded `Range`. Missing bounds leave `start`/`end` empty,
        a missing options clause leaves `limit` at 0 and ascending order.

    Raises:
        FormatError: the value does not follow the grammar
        DecodingError: a percent-encoded token is malformed

    Examples:
        >>> parse_range_header('name;')
        Range(sort='name', start='', start_exclusive=False, end='', limit=0, desc=False)
        >>> parse_range_header('id ..42; max=5,order=desc;').limit
        5
    """
    bounds, sep, rest = value.partition(CLAUSE_TERMINATOR)
    if not sep:
        raise FormatError('unterminated range clause')
    sort, start, start_exclusive, end = _parse_bounds(bounds)

    # An unterminated options clause counts as absent
    options, sep, _ = rest.partition(CLAUSE_TERMINATOR)
    limit, desc = _parse_options(options) if sep else (0, False)

    return Range(
        sort=sort,
        start=start,
        start_exclusive=start_exclusive,
        end=end,
        limit=limit,
        desc=desc,
    )
