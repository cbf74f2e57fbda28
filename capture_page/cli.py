# === FILE: capture_page/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for the capture client.

Commands:
  url KIND TARGET       Print a signed URL (no network call)
  image TARGET          Save a screenshot
  pdf TARGET            Save a PDF
  animated TARGET       Save an animated capture
  content TARGET        Print page content as JSON
  metadata TARGET       Print page metadata as JSON
  config                Show the effective configuration (secrets masked)

Common options:
  --config PATH         YAML/JSON config file (credentials from CAPTURE_KEY /
                        CAPTURE_SECRET when omitted)
  --edge                Use the edge host
  --log-level LEVEL     Logging level (DEBUG, INFO, ...)
  --log-file PATH       Log file (stderr only when omitted)

Capture options are passed as repeated ``-o name=value``; values ``true`` /
``false``, integers and floats are typed, anything else is a string.

Example:
  capture-page image https://example.com -o full=true -o delay=3 -O example.png
"""
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, Tuple

import click

from capture_page import __version__
from capture_page.client import Capture
from capture_page.config import config_from_env, load_config
from capture_page.errors import CaptureError
from capture_page.logger import DEFAULT_FORMAT, configure
from capture_page.signer import RequestType

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg="red", err=True)
    sys.exit(1)


def parse_option_value(raw: str) -> Any:
    """Type a ``-o`` value: booleans, then int, then float, else string."""
    lowered = raw.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    for cast in (int, float):
        try:
            return cast(raw)
        except ValueError:
            continue
    return raw


def _parse_options(ctx, param, values: Tuple[str, ...]) -> Dict[str, Any]:
    options: Dict[str, Any] = {}
    for item in values:
        name, sep, raw = item.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected name=value, got {item!r}", ctx=ctx, param=param)
        options[name] = parse_option_value(raw)
    return options


option_flag = click.option(
    "--option", "-o", "options",
    multiple=True,
    callback=_parse_options,
    metavar="NAME=VALUE",
    help="Capture option (repeatable).",
)


def output_flag(default_suffix: str):
    return click.option(
        "--output", "-O", "output",
        default=None,
        type=click.Path(writable=True, dir_okay=False, path_type=Path),
        help=f"Output file (default: capture.{default_suffix}).",
    )


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "--version", "-v", message="capture-page, version %(version)s")
@click.option(
    "--config", "-c", "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a YAML/JSON config file.",
)
@click.option("--edge", is_flag=True, default=False, help="Use the edge host.")
@click.option(
    "--log-level", "log_level",
    default="WARNING", show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Logging level",
)
@click.option(
    "--log-file", "log_file",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Log file path (stderr only when omitted)",
)
@click.pass_context
def cli(ctx, config_path, edge, log_level, log_file):
    """capture-page CLI."""
    configure(level=log_level, log_file=str(log_file) if log_file else None, log_format=DEFAULT_FORMAT)
    try:
        cfg = load_config(config_path) if config_path else config_from_env()
    except Exception as e:
        print_error(f"Failed to load configuration: {e}")
    if edge:
        cfg = cfg.model_copy(update={"use_edge": True})
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


def _client(ctx) -> Capture:
    return Capture.from_config(ctx.obj["config"])


@cli.command("url", context_settings=CONTEXT_SETTINGS)
@click.argument("kind", type=click.Choice([t.value for t in RequestType]))
@click.argument("target")
@option_flag
@click.pass_context
def show_url(ctx, kind, target, options):
    """Print a signed URL for KIND without fetching it."""
    try:
        url = _client(ctx).build_request(kind, target, options).url
    except CaptureError as e:
        print_error(f"Error: {e}")
    click.echo(url)


def _save_binary(ctx, request_type: RequestType, target: str, options, output: Path | None, suffix: str):
    capture = _client(ctx)
    fetch = {
        RequestType.IMAGE: capture.fetch_image,
        RequestType.PDF: capture.fetch_pdf,
        RequestType.ANIMATED: capture.fetch_animated,
    }[request_type]
    try:
        data = asyncio.run(fetch(target, options))
    except CaptureError as e:
        print_error(f"Error: {e}")
    path = output or Path(f"capture.{suffix}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    click.echo(f"Saved {len(data)} bytes to {path}")


@cli.command("image", context_settings=CONTEXT_SETTINGS)
@click.argument("target")
@option_flag
@output_flag("png")
@click.pass_context
def image(ctx, target, options, output):
    """Capture a screenshot of TARGET."""
    _save_binary(ctx, RequestType.IMAGE, target, options, output, "png")


@cli.command("pdf", context_settings=CONTEXT_SETTINGS)
@click.argument("target")
@option_flag
@output_flag("pdf")
@click.pass_context
def pdf(ctx, target, options, output):
    """Render TARGET to PDF."""
    _save_binary(ctx, RequestType.PDF, target, options, output, "pdf")


@cli.command("animated", context_settings=CONTEXT_SETTINGS)
@click.argument("target")
@option_flag
@output_flag("gif")
@click.pass_context
def animated(ctx, target, options, output):
    """Record an animated capture of TARGET."""
    _save_binary(ctx, RequestType.ANIMATED, target, options, output, "gif")


def _print_json(result, pretty: bool) -> None:
    click.echo(result.model_dump_json(by_alias=True, indent=2 if pretty else None))


@cli.command("content", context_settings=CONTEXT_SETTINGS)
@click.argument("target")
@option_flag
@click.option("--pretty", is_flag=True, help="Indent JSON output")
@click.pass_context
def content(ctx, target, options, pretty):
    """Print the content of TARGET (html, textContent, markdown) as JSON."""
    try:
        result = asyncio.run(_client(ctx).fetch_content(target, options))
    except CaptureError as e:
        print_error(f"Error: {e}")
    _print_json(result, pretty)


@cli.command("metadata", context_settings=CONTEXT_SETTINGS)
@click.argument("target")
@option_flag
@click.option("--pretty", is_flag=True, help="Indent JSON output")
@click.pass_context
def metadata(ctx, target, options, pretty):
    """Print the metadata of TARGET as JSON."""
    try:
        result = asyncio.run(_client(ctx).fetch_metadata(target, options))
    except CaptureError as e:
        print_error(f"Error: {e}")
    _print_json(result, pretty)


@cli.command("config", context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the current configuration as JSON (secrets masked)."""
    cfg = ctx.obj["config"]
    click.echo(json.dumps(cfg.model_dump(mode="json"), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    cli()
