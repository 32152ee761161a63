import dataclasses
import json
import pathlib
from enum import Enum
from typing import Any, Callable, Optional, Type, TypeVar, Union

import click

from . import __version__
from .constants import Order
from .errors import RangeError
from .log import LogLevels, configure_logging, logger
from .range import Range, encode_range, parse_range_header


_AnyCallable = Callable[..., Any]
FC = TypeVar('FC', bound=Union[_AnyCallable, click.Command])


class EnumType(click.Choice):
    def __init__(self, enum: Enum, case_sensitive=False) -> None:
        self.__enum = enum
        super().__init__(choices=[item.value for item in enum], case_sensitive=case_sensitive)

    def convert(self, value: Any, param: Optional[click.Parameter], ctx: Optional[click.Context]) -> Enum:
        if value is None or isinstance(value, Enum):
            return value

        converted_str = super().convert(value, param, ctx)
        return self.__enum(converted_str)


def _pretty_print_default(value: Optional[bool]) -> Optional[str]:
    if isinstance(value, bool):
        return 'enabled' if value else 'disabled'
    if isinstance(value, Enum):
        return value.value
    return value


def option(*param_decls: str, cls: Optional[Type[click.Option]] = None, **attrs: Any) -> Callable[[FC], FC]:
    attrs['show_envvar'] = True
    if 'default' in attrs:
        attrs['show_default'] = _pretty_print_default(attrs['default'])
    return click.option(*param_decls, cls=cls, **attrs)


def _parse_or_exit(header: str) -> Range:
    try:
        return parse_range_header(header)
    except RangeError as exc:
        logger.debug('Unable to decode %r', header)
        click.echo(f'Invalid range header: {exc}', err=True)
        raise click.exceptions.Exit(1)


@click.group(context_settings={'show_default': True})
@option('--log/--no-log', 'log_enabled', default=True, help='Enable logging')
@option('--log-level', type=EnumType(LogLevels), default=LogLevels.info, help='Log level')
@option(
    '--log-config',
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True, path_type=pathlib.Path),
    help='Logging configuration file (json)',
)
@click.version_option(version=__version__, message='%(prog)s %(version)s')
def cli(log_enabled: bool, log_level: LogLevels, log_config: Optional[pathlib.Path]) -> None:
    log_dictconfig = None
    if log_config:
        with log_config.open() as log_config_file:
            try:
                log_dictconfig = json.loads(log_config_file.read())
            except Exception:
                click.echo('Unable to parse provided logging config.', err=True)
                raise click.exceptions.Exit(1)

    configure_logging(log_level, log_dictconfig, log_enabled)


@cli.command(help='HEADER  Range header value to decode.  [required]')
@click.argument('header', required=True)
@option('--json/--no-json', 'as_json', default=True, help='Print the decoded range as JSON')
def decode(header: str, as_json: bool) -> None:
    fields = dataclasses.asdict(_parse_or_exit(header))
    if as_json:
        click.echo(json.dumps(fields))
        return
    for key, value in fields.items():
        click.echo(f'{key}: {value}')


@cli.command(help='SORT  Property results are sorted by.  [required]')
@click.argument('sort', required=True)
@option('--start', default='', help='Lower bound of the range')
@option(
    '--exclusive/--inclusive',
    'start_exclusive',
    default=False,
    help='Exclude the lower bound from the range',
)
@option('--end', default='', help='Upper bound of the range')
@option('--max', 'limit', type=click.IntRange(0), default=0, help='Maximum number of results (0 means unset)')
@option('--order', type=EnumType(Order), default=Order.asc, help='Sort order')
def encode(sort: str, start: str, start_exclusive: bool, end: str, limit: int, order: Order) -> None:
    rng = Range(
        sort=sort,
        start=start,
        start_exclusive=start_exclusive,
        end=end,
        limit=limit,
        desc=order == Order.desc,
    )
    click.echo(encode_range(rng))


@cli.command(
    name='next',
    help='HEADER  Range header value of the current page.  [required]\n\n'
    'CURSOR  Sort value of the last item in the current page.  [required]',
)
@click.argument('header', required=True)
@click.argument('cursor', required=True)
def next_page(header: str, cursor: str) -> None:
    click.echo(str(_parse_or_exit(header).next(cursor)))


def entrypoint():
    cli(auto_envvar_prefix='PAGERANGE')
