"""CLI entry point for the trade psychology engine."""

from __future__ import annotations

import json
import sys

import click

from .core.config import Settings, load_settings
from .core.errors import ConfigError, TradeLoadError
from .observability.logger import get_logger, setup_logging, start_run


def _init(
    command: str,
    config: str | None,
    log_format: str | None,
    request_id: str | None = None,
) -> tuple[Settings, str]:
    try:
        settings = load_settings(config)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    obs = settings.observability
    setup_logging(level=obs.log_level, format=log_format or obs.log_format)
    return settings, start_run(command, request_id)


@click.group()
def main() -> None:
    """Trading journal psychology analytics."""


@main.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("--config", default=None, help="TOML config file path")
@click.option("--validate/--no-validate", default=None, help="Override validation.enabled")
@click.option(
    "--log-format",
    type=click.Choice(["json", "console"]),
    default=None,
    help="Log renderer (logs go to stderr)",
)
@click.option("--request-id", default=None, help="Trace id for log entries (default: random)")
def analyze(
    path: str,
    config: str | None,
    validate: bool | None,
    log_format: str | None,
    request_id: str | None,
) -> None:
    """Print emotion radar data and discipline/tilt scores for PATH."""
    from .journal.analyser import PsychologyAnalyser
    from .journal.loader import load_trades

    settings, trace_id = _init("analyze", config, log_format, request_id)
    log = get_logger(__name__)

    try:
        trades = load_trades(path)
    except TradeLoadError as exc:
        log.error("trade_load_failed", path=exc.path, reason=exc.reason)
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    report = PsychologyAnalyser(settings).analyse(
        trades, request_id=trace_id, validate=validate
    )
    click.echo(json.dumps(report.to_dict(), indent=2, default=str))


@main.command("filter")
@click.argument("path", type=click.Path(dir_okay=False))
@click.option(
    "--emotion", "emotions", multiple=True, help="Emotion to search for (repeatable)"
)
@click.option("--config", default=None, help="TOML config file path")
def filter_cmd(path: str, emotions: tuple[str, ...], config: str | None) -> None:
    """Print the trades in PATH tagged with any of the given emotions."""
    from .journal.filtering import filter_trades_by_emotions
    from .journal.loader import load_trades

    _init("filter", config, None)

    try:
        trades = load_trades(path)
    except TradeLoadError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    matched = filter_trades_by_emotions(trades, emotions)
    click.echo(json.dumps([t.to_row() for t in matched], indent=2, default=str))


if __name__ == "__main__":
    main()
