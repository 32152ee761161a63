from .errors import DecodingError, FormatError, RangeError
from .http import (
    RangeSettings,
    accept_ranges_header,
    next_range_header,
    range_from_environ,
    range_from_headers,
    range_from_scope,
)
from .range import Range, encode_range, next_range, parse_range_header


__version__ = '0.1.0'
