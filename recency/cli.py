from __future__ import annotations

import sys
from pathlib import Path

import typer
import yaml

from recency.config import AppConfig, get_settings
from recency.errors import UnknownActionError
from recency.logger import configure_logging
from recency.playground import Outcome, Playground, Stats, parse_action


app = typer.Typer(help="Interactive playground for a least-recently-used cache")


def _load(config: Path | None, capacity: int | None) -> Playground:
    cfg = AppConfig.from_yaml(config) if config is not None else get_settings()
    configure_logging(cfg.logging.level, json=cfg.logging.json_output)
    return Playground(capacity or cfg.cache.capacity, cfg.cache.initial)


def _render(outcome: Outcome) -> None:
    typer.echo(outcome.message)
    if not outcome.entries:
        typer.echo("  (empty)")
        return
    # newest at the top
    for pos, (key, value) in enumerate(outcome.entries, start=1):
        typer.echo(f"  {pos:>3}. {key!r:<12} {value!r}")


def _render_stats(stats: Stats) -> None:
    typer.echo(
        f"size={stats.size}/{stats.capacity} hits={stats.hits} misses={stats.misses} "
        f"hit_rate={stats.hit_rate:.2f}"
    )


@app.command()
def run(
    actions: list[str] = typer.Argument(..., help='Commands such as "get 1" or "set 4 d"'),
    config: Path | None = typer.Option(None, help="YAML config file"),
    capacity: int | None = typer.Option(None, min=1, help="Override cache capacity"),
) -> None:
    """Apply ACTIONS in order and print the cache after each one."""
    pg = _load(config, capacity)
    for line in actions:
        try:
            action = parse_action(line)
        except UnknownActionError as e:
            typer.echo(f"error: {e}", err=True)
            raise typer.Exit(code=2) from e
        _render(pg.apply(action))
    _render_stats(pg.stats())


@app.command()
def shell(
    config: Path | None = typer.Option(None, help="YAML config file"),
    capacity: int | None = typer.Option(None, min=1, help="Override cache capacity"),
) -> None:
    """Read commands from stdin until EOF or "quit"."""
    pg = _load(config, capacity)
    interactive = sys.stdin.isatty()
    if interactive:
        typer.echo("commands: get K | set K V | delete K | clear | reset | stats | quit")

    while True:
        if interactive:
            typer.echo("> ", nl=False)
        line = sys.stdin.readline()
        if not line:
            break
        line = line.strip()
        if not line:
            continue
        if line.lower() in {"quit", "exit"}:
            break
        if line.lower() == "stats":
            _render_stats(pg.stats())
            continue
        try:
            action = parse_action(line)
        except UnknownActionError as e:
            typer.echo(f"error: {e}", err=True)
            continue
        _render(pg.apply(action))

    _render_stats(pg.stats())


@app.command("show-config")
def show_config(
    config: Path | None = typer.Option(None, help="YAML config file"),
) -> None:
    """Print the effective settings, env overrides applied, as YAML."""
    cfg = AppConfig.from_yaml(config)
    data = cfg.model_dump(mode="json", by_alias=True)
    typer.echo(yaml.safe_dump(data, sort_keys=False, allow_unicode=True).rstrip())


if __name__ == "__main__":
    app()
