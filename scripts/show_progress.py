#!/usr/bin/env python3
"""Show the review dashboard: mastered, learning, struggling and due flags."""

import logging

from rich.console import Console
from rich.table import Table

from flagmaster.catalog.loader import load_catalog
from flagmaster.config import Config
from flagmaster.db.database import Database
from flagmaster.review.scheduler import ReviewScheduler


console = Console()


def main() -> None:
    config = Config.from_env()
    logging.basicConfig(level=config.log_level)
    catalog = load_catalog(config.catalog_path)

    db = Database(config.database_path)
    db.init_schema()
    scheduler = ReviewScheduler(db, count_new_as_due=config.count_new_as_due)
    scheduler.load()
    summary = scheduler.summary(catalog)

    table = Table(title="Progress")
    table.add_column("Status", style="cyan")
    table.add_column("Flags", style="green")
    table.add_row("Mastered", str(summary.mastered))
    table.add_row("Learning", str(summary.learning))
    table.add_row("New", str(summary.new))
    table.add_row("Struggling", str(summary.struggling))
    table.add_row("Due today", str(summary.due))
    console.print(table)

    by_category = Table(title="Catalog")
    by_category.add_column("Continent", style="cyan")
    by_category.add_column("Flags", style="yellow")
    for category, count in summary.by_category.items():
        by_category.add_row(category, str(count))
    console.print(by_category)


if __name__ == "__main__":
    main()
