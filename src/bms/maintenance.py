"""
BMS maintenance commands run against the configured database.

Examples:
    bms-maintenance fix-counter-indexes
    bms-maintenance backfill-product-ids
    bms-maintenance set-counter invoice 120 --year 2024-25
"""

import asyncio

import structlog
import typer

from bms.app import App
from bms.config import Config
from bms.core.core import Core
from bms.core.modules.counter.models import DocumentType
from bms.errors import UserError
from bms.logging import setup_logging

logger = structlog.get_logger(__name__)

app = typer.Typer(
    name="bms-maintenance",
    help="Maintenance commands for counters and catalog data",
    no_args_is_help=True,
)


def _load_config() -> Config:
    config = Config()
    setup_logging(config.debug)
    return config


async def _fix_counter_indexes(core: Core) -> None:
    # Services are not started here: starting would create the new indexes before the old ones are gone
    try:
        dropped = await core.services.counter.fix_indexes()
    finally:
        await core.mongo_client.aclose()
    logger.info("counter_index_migration_done", dropped=dropped)


async def _backfill_product_ids(bms: App) -> None:
    async with bms.lifespan():
        updated = await bms.backfill_product_ids()
    logger.info("product_backfill_done", updated=updated)


async def _set_counter(bms: App, document_type: DocumentType, value: int, year: str | None) -> str | None:
    async with bms.lifespan():
        scope = await bms.set_counter(document_type, value, year)
    return scope.year


@app.command("fix-counter-indexes")
def fix_counter_indexes() -> None:
    """Replace legacy counter indexes with the partial unique indexes."""
    asyncio.run(_fix_counter_indexes(Core(_load_config())))


@app.command("backfill-product-ids")
def backfill_product_ids() -> None:
    """Give every product stored without a product_id its id and SKU."""
    asyncio.run(_backfill_product_ids(App(_load_config())))


@app.command("set-counter")
def set_counter(
    document_type: DocumentType = typer.Argument(..., help="Counter to overwrite"),
    value: int = typer.Argument(..., min=0, help="Last issued value; the next allocation returns value + 1"),
    year: str | None = typer.Option(
        None,
        "--year",
        "-y",
        help="Fiscal year label such as 2024-25 (invoice and bill only, defaults to the current one)",
    ),
) -> None:
    """
    Seed or reset a counter.

    Use when importing documents numbered elsewhere, or to restart a sequence
    after data was removed by hand.
    """
    try:
        fiscal_year = asyncio.run(_set_counter(App(_load_config()), document_type, value, year))
    except UserError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    typer.echo(f"{document_type} counter{f' for {fiscal_year}' if fiscal_year else ''} set to {value}")


if __name__ == "__main__":
    app()
