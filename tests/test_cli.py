import json
import logging

import click
import pytest
from click.testing import CliRunner

from pagerange import __version__
from pagerange.cli import EnumType, cli
from pagerange.constants import Order
from pagerange.log import LogLevels


@pytest.fixture(scope='function')
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger('pagerange')
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def test_decode(runner: CliRunner) -> None:
    result = runner.invoke(cli, ['decode', 'name ~meredith..; max=10;'])
    assert result.exit_code == 0
    assert json.loads(result.output) == {
        'sort': 'name',
        'start': 'meredith',
        'start_exclusive': True,
        'end': '',
        'limit': 10,
        'desc': False,
    }


def test_decode_plain(runner: CliRunner) -> None:
    result = runner.invoke(cli, ['decode', '--no-json', 'name ..z; order=desc;'])
    assert result.exit_code == 0
    assert 'end: z' in result.output.splitlines()
    assert 'desc: True' in result.output.splitlines()


@pytest.mark.parametrize('value', ['name a..b..c;', 'id; bogus=1;', 'name %zz..;'])
def test_decode_invalid(runner: CliRunner, value: str) -> None:
    result = runner.invoke(cli, ['decode', value])
    assert result.exit_code == 1
    assert 'Invalid range header' in result.output


@pytest.mark.parametrize(
    ('args', 'expected'),
    (
        (['name'], 'name ..;'),
        (['name', '--start', 'Gary Schwartz'], 'name Gary+Schwartz..;'),
        (['name', '--start', 'a', '--exclusive', '--end', 'z'], 'name ~a..z;'),
        (['name', '--max', '5', '--order', 'desc'], 'name ..; max=5,order=desc;'),
        (['name', '--order', 'ASC'], 'name ..;'),
    ),
)
def test_encode(runner: CliRunner, args, expected: str) -> None:
    result = runner.invoke(cli, ['encode', *args])
    assert result.exit_code == 0
    assert result.output == expected + '\n'


def test_encode_negative_max(runner: CliRunner) -> None:
    result = runner.invoke(cli, ['encode', 'name', '--max', '-1'])
    assert result.exit_code == 2


def test_next(runner: CliRunner) -> None:
    result = runner.invoke(cli, ['next', 'name ..z; max=10;', 'jordan'])
    assert result.exit_code == 0
    assert result.output == 'name ~jordan..z; max=10;\n'


def test_next_invalid(runner: CliRunner) -> None:
    result = runner.invoke(cli, ['next', 'name', 'jordan'])
    assert result.exit_code == 1


def test_envvar(runner: CliRunner) -> None:
    result = runner.invoke(
        cli,
        ['encode', 'name'],
        auto_envvar_prefix='PAGERANGE',
        env={'PAGERANGE_ENCODE_LIMIT': '20', 'PAGERANGE_LOG_LEVEL': 'debug'},
    )
    assert result.exit_code == 0
    assert result.output == 'name ..; max=20;\n'


def test_log_config(runner: CliRunner, tmp_path) -> None:
    config = tmp_path / 'log.json'
    config.write_text('{not json')
    result = runner.invoke(cli, ['--log-config', str(config), 'decode', 'name;'])
    assert result.exit_code == 1
    assert 'Unable to parse provided logging config.' in result.output


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(cli, ['--version'])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.parametrize(('value', 'expected'), (('desc', Order.desc), ('ASC', Order.asc)))
def test_enum_convert(value: str, expected: Order) -> None:
    assert EnumType(Order).convert(value, None, None) is expected


def test_enum_convert_invalid() -> None:
    with pytest.raises(click.BadParameter):
        EnumType(LogLevels).convert('loud', None, None)
