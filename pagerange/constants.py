from enum import Enum


class StrEnum(str, Enum):
    def __str__(self) -> str:
        return str(self.value)


class Order(StrEnum):
    asc = 'asc'
    desc = 'desc'


class Option(StrEnum):
    max = 'max'
    order = 'order'


class Headers(StrEnum):
    range = 'Range'
    x_range = 'X-Range'
    next_range = 'Next-Range'
    accept_ranges = 'Accept-Ranges'


EXCLUSIVE_MARKER = '~'
BOUNDS_SEPARATOR = '..'
CLAUSE_TERMINATOR = ';'
OPTIONS_SEPARATOR = ','
OPTION_ASSIGN = '='
