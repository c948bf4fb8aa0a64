"""CLI entry point for finance-chart-analyst."""

from __future__ import annotations

import asyncio
import base64
import json
import mimetypes
import sys
from pathlib import Path

import click

from finance_chart_analyst import __version__

TEXT_MEDIA_TYPES = {'application/json', 'application/xml', 'application/x-yaml', 'text/csv'}


def _load_settings(config_path: str | None, overrides: dict | None = None):
    """Return (AppConfig, InfraConfig) from YAML plus overrides, exiting on a missing file."""
    from finance_chart_analyst.l3_interface_adapters.gateways.yaml_config_loader import (  # noqa: PLC0415 -- deferred: yaml stack not loaded on --help
        YamlConfigLoader,
    )
    from finance_chart_analyst.l4_frameworks_and_drivers.infra_config import (  # noqa: PLC0415 -- deferred: not needed for --help
        InfraConfig,
        build_app_config,
    )

    try:
        raw = YamlConfigLoader().load_raw(config_path, overrides=overrides)
        return build_app_config(raw), InfraConfig.model_validate(raw)
    except FileNotFoundError as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)


def _setup_logging(infra) -> None:
    from finance_chart_analyst.l4_frameworks_and_drivers.logging_setup import setup_logging  # noqa: PLC0415 -- deferred: not needed for --help

    log_file = Path(infra.logging.file) if infra.logging.file else None
    setup_logging(infra.logging.level, log_file)


def build_file_data(path: Path) -> dict:
    """Encode a local file the way the browser client does: base64 plus a text/image hint."""
    media_type = mimetypes.guess_type(path.name)[0] or 'application/octet-stream'
    is_text = media_type.startswith('text/') or media_type in TEXT_MEDIA_TYPES
    return {
        'base64': base64.b64encode(path.read_bytes()).decode('ascii'),
        'mediaType': media_type,
        'fileName': path.name,
        'isText': is_text,
    }


@click.group()
@click.version_option(version=__version__)
def cli():
    """finance-chart-analyst -- financial Q&A with validated chart data."""


@cli.command()
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(exists=True),
    help='Path to YAML config file.',
)
@click.option('--host', default=None, help='Bind address (overrides config).')
@click.option('--port', default=None, type=int, help='Bind port (overrides config).')
def serve(config_path, host, port):
    """Run the HTTP API under uvicorn."""
    import uvicorn  # noqa: PLC0415 -- deferred: server stack not loaded for ask/--help

    from finance_chart_analyst.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: server stack not loaded for ask/--help
        DependencyContainer,
    )
    from finance_chart_analyst.l4_frameworks_and_drivers.server import create_app  # noqa: PLC0415 -- deferred: server stack not loaded for ask/--help

    server_overrides: dict = {}
    if host:
        server_overrides['host'] = host
    if port:
        server_overrides['port'] = port
    config, infra = _load_settings(config_path, {'server': server_overrides} if server_overrides else None)
    _setup_logging(infra)

    app = create_app(lambda: DependencyContainer(config, infra))
    uvicorn.run(app, host=infra.server.host, port=infra.server.port, log_level=infra.logging.level.lower())


@cli.command()
@click.argument('message')
@click.option('-m', '--model', required=True, help='Model identifier to invoke.')
@click.option(
    '-f',
    '--file',
    'file_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Attach a text or image file to the message.',
)
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(exists=True),
    help='Path to YAML config file.',
)
def ask(message, model, file_path, config_path):
    """Run one analysis and print the normalized JSON response."""
    from finance_chart_analyst.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: boto3 stack not loaded on --help
        DependencyContainer,
    )

    config, infra = _load_settings(config_path)
    _setup_logging(infra)

    body: dict = {'messages': [{'role': 'user', 'content': message}], 'model': model}
    if file_path:
        body['fileData'] = build_file_data(Path(file_path))

    status, content = asyncio.run(_run_once(DependencyContainer(config, infra), body))
    click.echo(json.dumps(content, indent=2, ensure_ascii=False))
    if status != 200:
        sys.exit(1)


async def _run_once(container, body: dict) -> tuple[int, dict]:
    try:
        return await container.controller.handle(body)
    finally:
        await container.aclose()
