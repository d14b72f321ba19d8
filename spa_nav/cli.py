# === FILE: spa_nav/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска навигатора SpaNav через командную строку.

Команды:
  browse    Открыть сайт, пройти по страницам без перезагрузки и вывести/сохранить снимок сессии
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML-конфигу (default: configs/default.yaml)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования (e.g. "%(asctime)s %(levelname)s %(message)s")

Команда browse опции:
  --entry PAGE        Страница полной загрузки (default: entry_page из конфига)
  --base-url URL      Переопределить base_url
  --back N            Сколько раз нажать «назад» после переходов
  --json PATH         Сохранить JSON-снимок в файл
  --pretty            Преформатировать JSON-вывод (отступ 2)

Дополнительно:
  --version, -v       Показать версию SpaNav

Пример:
  spa-nav browse discover.html trending.html --back 1 --pretty
"""
import asyncio
import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from spa_nav import __version__
from spa_nav.config import NavigatorConfig, load_config
from spa_nav.engine import start_browse
from spa_nav.errors import FetchFailure
from spa_nav.logger import init_logging
from spa_nav.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SpaNav, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default='configs/default.yaml',
    show_default=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SpaNav CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('browse', context_settings=CONTEXT_SETTINGS)
@click.argument('pages', nargs=-1)
@click.option(
    '--entry', '-e', 'entry',
    default=None,
    help='Страница полной загрузки'
)
@click.option(
    '--base-url', 'base_url',
    default=None,
    help='Переопределить base_url из конфига'
)
@click.option(
    '--back', '-b', 'back_steps',
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help='Сколько раз нажать «назад» в конце'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-снимок в файл'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.pass_context
def browse(ctx, pages, entry, base_url, back_steps, json_output, pretty):
    """Открыть сайт и пройти по страницам без перезагрузки."""
    cfg = ctx.obj['config']
    if base_url:
        try:
            cfg = NavigatorConfig(**{**cfg.model_dump(mode='json'), 'base_url': base_url})
        except ValidationError as e:
            print_error(f'Неправильный base_url: {e}')
    try:
        snapshot = asyncio.run(start_browse(cfg, entry, pages, back_steps))
    except FetchFailure as e:
        print_error(f'Не удалось открыть страницу: {e}')
    except Exception as e:
        print_error(f'Ошибка навигации: {e}')

    if json_output:
        try:
            saved_json = render_json(snapshot, json_output)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')
        return

    indent = 2 if pretty else None
    click.echo(json.dumps(snapshot, ensure_ascii=False, indent=indent))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
