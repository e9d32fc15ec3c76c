#!/usr/bin/env python3
"""Play a flag quiz session in the terminal.

Run: uv run python scripts/play.py --mode normal
     uv run python scripts/play.py --mode category --category Europe
"""

from dataclasses import dataclass
import logging
import random
import time

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
import simple_parsing as sp

from flagmaster.catalog.loader import CatalogError, categories, load_catalog
from flagmaster.config import Config
from flagmaster.db.database import Database
from flagmaster.db.models import AnswerOutcome
from flagmaster.review.scheduler import ReviewScheduler
from flagmaster.session.controller import Question, SessionController
from flagmaster.session.queue_builder import InvalidModeError


@dataclass
class Args:
    """Terminal flag quiz."""

    mode: str = "normal"  # normal, hard, category, endless, timed
    category: str = ""  # Continent for category mode
    seed: int | None = None  # Fix the random seed for a reproducible session


console = Console()


def ask(question: Question) -> tuple[str | None, int]:
    """Prompt for an answer; returns (answer or None to quit, response time in ms)."""
    item = question.item
    console.print(
        f"\n[bold]Question {question.tick}[/bold]  "
        f"{', '.join(item.colors)} [dim]({item.layout}, {item.category})[/dim]"
    )
    if question.from_retry:
        console.print("[yellow]Retry: you missed this one earlier[/yellow]")

    started = time.monotonic()
    if question.options:
        for index, option in enumerate(question.options, start=1):
            console.print(f"  {index}. {option.name}")
        choices = [str(i) for i in range(1, len(question.options) + 1)] + ["q"]
        picked = Prompt.ask("Which country?", choices=choices, show_choices=False)
        answer = None if picked == "q" else question.options[int(picked) - 1].name
    else:
        answer = Prompt.ask("Which country? (q to quit)")
        if answer.strip().lower() == "q":
            answer = None

    elapsed_ms = int((time.monotonic() - started) * 1000)
    return answer, elapsed_ms


def report(outcome: AnswerOutcome) -> None:
    """Outcome listener: print the verdict."""
    if outcome.was_correct:
        console.print(f"[green]Correct![/green] score {outcome.score}, streak {outcome.streak}")
    else:
        console.print(f"[red]Wrong.[/red] It was [bold]{outcome.correct_answer}[/bold]")


def main() -> None:
    args = sp.parse(Args)
    config = Config.from_env()
    logging.basicConfig(level=config.log_level)
    config.ensure_database_dir()

    try:
        catalog = load_catalog(config.catalog_path)
    except CatalogError as e:
        console.print(f"[red]Cannot start a session: {e}[/red]")
        return

    db = Database(config.database_path)
    db.init_schema()
    scheduler = ReviewScheduler(db, count_new_as_due=config.count_new_as_due)
    scheduler.load()

    seed = args.seed if args.seed is not None else config.random_seed
    try:
        session = SessionController.from_config(
            config,
            catalog,
            scheduler,
            args.mode,
            category=args.category or None,
            listeners=[report],
            rng=random.Random(seed),
        )
    except (InvalidModeError, CatalogError) as e:
        console.print(f"[red]{e}[/red]")
        console.print(f"Categories: {', '.join(categories(catalog))}")
        return

    console.rule(f"[bold blue]Flagmaster - {session.mode.value} mode")

    while (question := session.next_question()) is not None:
        answer, elapsed_ms = ask(question)
        if answer is None:
            session.end()
            break
        session.submit_answer(answer, response_time_ms=elapsed_ms)
        session.tick_timer(max(1, elapsed_ms // 1000))

    state = session.state
    if session.daily_goal_complete():
        title, message = "Daily Goal Complete!", "All due flags reviewed. Come back tomorrow!"
    else:
        title, message = "Session Complete!", "Great work. Keep the streak going!"

    console.print(
        Panel(
            f"{message}\n\nScore: {state.score:+d} | Correct: {state.correct_count} | "
            f"Wrong: {state.wrong_count} | Best streak: {state.best_streak}",
            title=title,
        )
    )
    db.close()


if __name__ == "__main__":
    main()
