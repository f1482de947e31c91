"""CLI entry point for the POAP minter."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from dataclasses import asdict

import click

from poap_minter.app import MinterApp, run_server
from poap_minter.config import load_config
from poap_minter.errors import PoapMinterError
from poap_minter.models.config import PLACEHOLDER, PersonalityCategory


def _require_credentials(cfg):
    """Exit with error if vendor credentials are missing."""
    missing = [m for m in cfg.missing_values() if not m.startswith("events.")]
    if missing:
        click.echo(f"Error: POAP credentials not configured: {', '.join(missing)}", err=True)
        click.echo("Set POAP_API_KEY, POAP_CLIENT_ID and POAP_CLIENT_SECRET.", err=True)
        sys.exit(1)


def _require_events(cfg):
    """Exit with error if any personality category lacks an event binding."""
    missing = [m for m in cfg.missing_values() if m.startswith("events.")]
    if missing:
        click.echo(f"Error: POAP events not configured: {', '.join(missing)}", err=True)
        click.echo("Set POAP_EVENT_ID_<CATEGORY> and POAP_SECRET_CODE_<CATEGORY>.", err=True)
        sys.exit(1)


def _echo_json(payload: dict) -> None:
    click.echo(json.dumps(payload, indent=2))


@click.group()
@click.option("-c", "--config", "config_path", default=None, help="Path to config TOML file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """poap-minter - mint personality quiz POAPs to wallet addresses."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# ── Server ─────────────────────────────────────────────


@cli.command()
@click.option("--host", default=None, help="Bind address (default from config)")
@click.option("--port", default=None, type=int, help="Bind port (default from config)")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None) -> None:
    """Serve the mint/event/token HTTP API."""
    cfg = load_config(ctx.obj["config_path"])
    _require_credentials(cfg)
    _require_events(cfg)
    if not ctx.obj["verbose"]:
        logging.getLogger().setLevel(cfg.log_level.upper())

    click.echo(f"Starting poap-minter API on {host or cfg.host}:{port or cfg.port}")
    run_server(cfg, host, port)


# ── Minting ────────────────────────────────────────────


@cli.command()
@click.argument("category")
@click.argument("address")
@click.pass_context
def mint(ctx: click.Context, category: str, address: str) -> None:
    """Mint the POAP for CATEGORY (e.g. "impact regen") to ADDRESS."""
    cfg = load_config(ctx.obj["config_path"])
    _require_credentials(cfg)

    app = MinterApp(cfg)
    result = asyncio.run(app.service.mint(category, address))
    payload, status = app.presenter.to_response(result)
    _echo_json(payload)
    if status != 200:
        sys.exit(1)


# ── Lookups ────────────────────────────────────────────


@cli.command()
@click.argument("event_id", type=int)
@click.pass_context
def event(ctx: click.Context, event_id: int) -> None:
    """Show POAP event details."""
    cfg = load_config(ctx.obj["config_path"])
    _require_credentials(cfg)

    app = MinterApp(cfg)
    try:
        details = asyncio.run(app.vendor.get_event(event_id))
    except PoapMinterError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    _echo_json(asdict(details))


@cli.command()
@click.argument("token_id", type=int)
@click.pass_context
def token(ctx: click.Context, token_id: int) -> None:
    """Show details of a minted POAP token."""
    cfg = load_config(ctx.obj["config_path"])
    _require_credentials(cfg)

    app = MinterApp(cfg)
    try:
        details = asyncio.run(app.vendor.get_token(token_id))
    except PoapMinterError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    _echo_json(asdict(details))


# ── Info ───────────────────────────────────────────────


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show minter configuration."""
    cfg = load_config(ctx.obj["config_path"])
    missing = cfg.missing_values()
    click.echo(f"POAP API:     {cfg.api_base}")
    click.echo(f"Auth:         {cfg.auth_base}")
    click.echo(f"API key:      {'(not set)' if 'api_key' in missing else '***configured***'}")
    click.echo(f"Client ID:    {'(not set)' if 'client_id' in missing else cfg.client_id}")
    click.echo(f"Secret:       {'(not set)' if 'client_secret' in missing else '***configured***'}")
    click.echo(f"Claim rounds: {cfg.claim.claim_rounds}")
    click.echo(f"Settle delay: {cfg.claim.settle_delay}s")
    click.echo(f"Server:       {cfg.host}:{cfg.port}")

    if missing:
        click.echo(f"Missing:      {', '.join(missing)}")


@cli.command()
@click.pass_context
def categories(ctx: click.Context) -> None:
    """List personality categories and their events."""
    cfg = load_config(ctx.obj["config_path"])
    for category in PersonalityCategory:
        binding = cfg.events[category]
        event_id = binding.event_id or "(not set)"
        secret_set = binding.secret_code and binding.secret_code != PLACEHOLDER
        secret = "***configured***" if secret_set else "(not set)"
        click.echo(f"{category.value:<18} event={event_id}  secret={secret}")


if __name__ == "__main__":
    cli()
