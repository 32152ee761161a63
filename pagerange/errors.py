class RangeError(ValueError):
    pass


class FormatError(RangeError):
    """The header value does not follow the range grammar."""


class DecodingError(RangeError):
    """A percent-encoded token in the header value is malformed."""
