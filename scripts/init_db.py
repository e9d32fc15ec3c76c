#!/usr/bin/env python3
"""Initialize the review database, optionally wiping progress."""

import logging
from dataclasses import dataclass

from rich.console import Console
from rich.panel import Panel
import simple_parsing as sp

from flagmaster.catalog.loader import CatalogError, load_catalog
from flagmaster.config import Config
from flagmaster.db.database import Database
from flagmaster.review.scheduler import ReviewScheduler


@dataclass
class Args:
    """Initialize the Flagmaster database."""

    reset: bool = False  # Forget all review progress (cannot be undone)


console = Console()


def main() -> None:
    args = sp.parse(Args)
    console.rule("[bold blue]Initializing Flagmaster Database")

    config = Config.from_env()
    logging.basicConfig(level=config.log_level)
    config.ensure_database_dir()
    console.print(f"Database path: {config.database_path}")

    db = Database(config.database_path)
    db.init_schema()
    console.print("[green]✓ Schema created[/green]")

    try:
        catalog = load_catalog(config.catalog_path)
        console.print(f"[green]✓ Catalog has {len(catalog)} flags[/green]")
    except CatalogError as e:
        console.print(f"[red]Catalog problem: {e}[/red]")

    if args.reset:
        scheduler = ReviewScheduler(db)
        scheduler.reset()
        console.print("[yellow]Review progress reset[/yellow]")
    else:
        console.print(f"Stored review cards: {db.count_cards()}")

    console.print(Panel("[bold green]Database initialized successfully!", title="Done"))


if __name__ == "__main__":
    main()
