"""CLI entry point for api-docs-updater."""

import os
from pathlib import Path

import click

from api_docs_updater.config import (
    DEFAULT_FALLBACK_BASE_URL,
    DEFAULT_HTML_FILE,
    DEFAULT_SOURCE_URL,
    DEFAULT_TIMEOUT,
    UpdaterConfig,
)
from api_docs_updater.errors import ApiDocsError
from api_docs_updater.parser.fetch import load_source_document
from api_docs_updater.pipeline import render_reference, update_api_reference


def _env(name: str, default):
    """Option default that can be overridden from the environment at call time."""
    return lambda: os.getenv(name, default)


def _source_options(func):
    func = click.option(
        "--fallback-base-url",
        default=_env("API_DOCS_FALLBACK_BASE_URL", DEFAULT_FALLBACK_BASE_URL),
        help="Base URL for curl examples when the document declares no servers.",
    )(func)
    func = click.option(
        "--timeout",
        type=float,
        default=_env("API_DOCS_TIMEOUT", DEFAULT_TIMEOUT),
        help="Seconds to wait for the API description.",
    )(func)
    func = click.option(
        "--source",
        default=_env("API_DOCS_SOURCE_URL", DEFAULT_SOURCE_URL),
        help="URL or local path of the OpenAPI/Swagger JSON (or YAML) document.",
    )(func)
    return func


@click.group(invoke_without_command=True)
@click.pass_context
def main(ctx: click.Context):
    """API Docs Updater — regenerate the API reference section of the docs page."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(update)


@main.command()
@_source_options
@click.option(
    "--html-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=_env("API_DOCS_HTML_FILE", str(DEFAULT_HTML_FILE)),
    help="HTML page whose API reference section is rewritten in place.",
)
@click.option("--dry-run", is_flag=True, help="Render and check markers without writing the page.")
def update(source: str, timeout: float, fallback_base_url: str, html_file: Path, dry_run: bool):
    """Fetch the API description and rewrite the API reference in the HTML page."""
    config = _build_config(source, timeout, fallback_base_url, html_file=html_file)

    click.echo(f"Fetching Swagger from: {config.source_url}")
    try:
        report = update_api_reference(config, dry_run=dry_run)
    except ApiDocsError as e:
        raise click.ClickException(str(e)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Failed to update {config.html_file}: {e}") from e

    click.echo(f"API Title: {report.title}")
    click.echo(f"API Version: {report.version}")
    click.echo(f"Generated {report.endpoint_count} endpoints across {report.tag_count} tags")
    if not report.sidebar_updated:
        click.echo("Warning: Could not find sidebar markers, sidebar not updated", err=True)

    if report.written:
        click.echo(f"Updated: {report.html_file}")
    else:
        click.echo(f"Dry run: {report.html_file} left unchanged")
    click.echo("Done!")


@main.command()
@_source_options
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write the fragment here instead of stdout.")
def render(source: str, timeout: float, fallback_base_url: str, output: Path | None):
    """Print the generated API reference fragment without touching the HTML page."""
    config = _build_config(source, timeout, fallback_base_url)
    try:
        doc = load_source_document(config.source_url, timeout=config.timeout)
    except ApiDocsError as e:
        raise click.ClickException(str(e)) from e

    rendered = render_reference(doc, config.fallback_base_url)
    if output is None:
        click.echo(rendered.body_html, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered.body_html, encoding="utf-8")
    click.echo(
        f"Rendered {rendered.endpoint_count} endpoints across {len(rendered.groups)} tags to {output}",
        err=True,
    )


def _build_config(source: str, timeout: float, fallback_base_url: str, html_file: Path | None = None) -> UpdaterConfig:
    if timeout <= 0:
        raise click.BadParameter("must be greater than 0", param_hint="--timeout")
    fields = {"source_url": source, "timeout": timeout, "fallback_base_url": fallback_base_url}
    if html_file is not None:
        fields["html_file"] = html_file
    return UpdaterConfig(**fields)
