"""Unified CLI for az-backup-pricing.

Subcommands:
    az-backup-pricing web       – run the web API (FastAPI + uvicorn)
    az-backup-pricing mcp       – run the MCP server (stdio, SSE or streamable HTTP)
    az-backup-pricing best-ltr  – print the best LTR price for a region
    az-backup-pricing regions   – print the regions offering SQL Database
    az-backup-pricing plan      – estimate LTR retention costs for a database

Running ``az-backup-pricing`` without a subcommand defaults to ``web``.
"""

import logging

import click

from az_backup_pricing import __version__
from az_backup_pricing.config import BEST_PRICE_CURRENCY, settings

_verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging.",
)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="az-backup-pricing")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Azure SQL Database backup pricing."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(web)


@cli.command()
@click.option("--host", default=settings.host, show_default=True, help="Host to bind to.")
@click.option("--port", default=settings.port, show_default=True, help="Port to listen on.")
@_verbose_option
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Auto-reload on code changes (development only).",
)
def web(host: str, port: int, verbose: bool, reload: bool) -> None:
    """Run the web API (default)."""
    import uvicorn

    from az_backup_pricing.app import _setup_logging, app

    log_level = "debug" if verbose else "info"
    _setup_logging(level=logging.DEBUG if verbose else logging.INFO)

    url = f"http://{host}:{port}"
    click.echo(f"Starting Azure Pricing API server on {click.style(url, fg='cyan', bold=True)}")
    click.echo("  Press Ctrl+C to stop.\n")

    if reload:
        uvicorn.run(
            "az_backup_pricing.app:app",
            host=host,
            port=port,
            log_level=log_level,
            reload=True,
        )
    else:
        uvicorn.run(app, host=host, port=port, log_level=log_level)


@cli.command()
@click.option(
    "--transport",
    "-t",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    default="stdio",
    show_default=True,
    help="MCP transport.",
)
@click.option("--host", default=settings.host, show_default=True, help="Host for HTTP transports.")
@click.option("--port", default=settings.port, show_default=True, help="Port for HTTP transports.")
@_verbose_option
def mcp(transport: str, host: str, port: int, verbose: bool) -> None:
    """Run the MCP server."""
    from az_backup_pricing.app import _setup_logging
    from az_backup_pricing.mcp_server import mcp as mcp_server

    # stdio carries the protocol on stdout; logs go to stderr.
    _setup_logging(level=logging.DEBUG if verbose else logging.WARNING)

    if transport != "stdio":
        mcp_server.settings.host = host
        mcp_server.settings.port = port
    mcp_server.run(transport=transport)  # type: ignore[arg-type]


@cli.command("best-ltr")
@click.argument("region")
def best_ltr(region: str) -> None:
    """Print the best LTR backup price for REGION."""
    from az_backup_pricing.pricing import get_resolver

    price = get_resolver().get_best_ltr_price(region)
    click.echo(f"{region}: {price} {BEST_PRICE_CURRENCY} per GB/month")


@cli.command()
def regions() -> None:
    """Print the ARM regions offering SQL Database, one per line."""
    from az_backup_pricing.pricing import get_resolver

    for name in get_resolver().get_available_regions():
        click.echo(name)


@cli.command()
@click.argument("region")
@click.option("--db-size", type=float, required=True, help="Database size in GB.")
@click.option("--growth-rate", type=float, default=0.0, show_default=True, help="Annual growth in percent.")
@click.option("--weekly", type=click.IntRange(min=0), default=0, help="Weekly backups kept.")
@click.option("--monthly", type=click.IntRange(min=0), default=0, help="Monthly backups kept.")
@click.option("--yearly", type=click.IntRange(min=0), default=0, help="Yearly backups kept.")
@click.option("--price", type=float, default=None, help="Override the price per GB/month.")
def plan(
    region: str,
    db_size: float,
    growth_rate: float,
    weekly: int,
    monthly: int,
    yearly: int,
    price: float | None,
) -> None:
    """Estimate LTR retention costs for a database in REGION."""
    from az_backup_pricing.models import RetentionPlanRequest, RetentionSettings
    from az_backup_pricing.planner import plan_retention
    from az_backup_pricing.pricing import get_resolver

    request = RetentionPlanRequest(
        region=region,
        dbSize=db_size,
        growthRate=growth_rate,
        retention=RetentionSettings(weekly=weekly, monthly=monthly, yearly=yearly),
        storagePrice=price,
    )
    result = plan_retention(request, get_resolver())
    b = result.breakdown
    click.echo(f"Price: {result.storagePrice} {result.currency} per GB/month ({region})")
    click.echo(f"  Weekly backups:  {b.weeklyBackupCost:.2f}")
    click.echo(f"  Monthly backups: {b.monthlyBackupCost:.2f}")
    click.echo(f"  Yearly backups:  {b.yearlyBackupCost:.2f}")
    click.echo(f"  Total per month: {b.totalMonthlyCost:.2f}")
    click.echo(f"  Total per year:  {b.totalYearlyCost:.2f}")
