"""Interactive CLI application."""
import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

from spaced_review.agenda import INTRO, build_agenda, next_pending_review, subtheme_progress, upcoming_reviews
from spaced_review.config import Settings
from spaced_review.db import init_db
from spaced_review.models import COMPLETED, DIFFICULTIES, MEDIUM
from spaced_review.store import add_theme, load_themes, record_review, run_daily_update

console = Console()

STATUS_COLORS = {"queue": "dim", "active": "cyan", "completed": "green"}


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def show_welcome():
    console.print(Panel(
        "[bold]Spaced Review[/bold]\n[dim]One new subtheme a day, five reviews each[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("today", "Activate today's subtheme and show the agenda"),
        ("review", "Complete a due review"),
        ("add", "Add a theme with subthemes"),
        ("upcoming", "Reviews due in the next 7 days"),
        ("themes", "Progress per subtheme"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def due_review_items(db_path: str) -> list:
    return [
        item for item in build_agenda(load_themes(db_path))
        if item.kind != INTRO and item.status != COMPLETED and not item.locked
    ]


def cmd_today(db_path: str):
    result = run_daily_update(db_path)
    if result is not None:
        console.print(f"[dim]Processed {result.processed_date}[/dim]")
    items = build_agenda(load_themes(db_path))
    if not items:
        console.print("[yellow]Nothing scheduled for today.[/yellow]")
        return
    table = Table(title="Today")
    table.add_column("Theme", style="cyan")
    table.add_column("Subtheme")
    table.add_column("Item")
    table.add_column("Due")
    table.add_column("Status")
    for item in items:
        label = "Introduction" if item.kind == INTRO else f"Review {item.review_number}"
        status = f"[green]{item.status}[/green]" if item.status == COMPLETED else item.status
        table.add_row(item.theme_title, item.subtheme_title, label, item.date, status)
    console.print(table)


def cmd_review(db_path: str):
    items = due_review_items(db_path)
    if not items:
        console.print("[yellow]No reviews due right now![/yellow]")
        return
    for i, item in enumerate(items, 1):
        console.print(
            f"  [cyan]{i}[/cyan]) {item.theme_title} / {item.subtheme_title}"
            f" - review {item.review_number} (due {item.date})"
        )
    choice = IntPrompt.ask("Select review", choices=[str(i) for i in range(1, len(items) + 1)])
    item = items[choice - 1]
    difficulty = Prompt.ask("How hard was it?", choices=list(DIFFICULTIES), default=MEDIUM)
    summary = Prompt.ask("[dim]Notes (optional)[/dim]", default="")
    if record_review(db_path, item.subtheme_id, item.review_number, difficulty, summary=summary or None):
        console.print("[green]Review complete![/green]")
    else:
        console.print("[red]That review can't be completed yet.[/red]")


def cmd_add(db_path: str):
    title = Prompt.ask("Theme title")
    raw = Prompt.ask("Subthemes (comma separated)")
    subtopics = [s.strip() for s in raw.split(",") if s.strip()]
    theme = add_theme(db_path, title, subtopics)
    console.print(f"[green]Added {theme.title} with {len(theme.subthemes)} queued subthemes.[/green]")


def cmd_upcoming(db_path: str):
    items = upcoming_reviews(load_themes(db_path))
    if not items:
        console.print("[green]Nothing due in the next 7 days.[/green]")
        return
    table = Table(title="Upcoming Reviews")
    table.add_column("Date", justify="right")
    table.add_column("Theme", style="cyan")
    table.add_column("Subtheme")
    table.add_column("Review", justify="right")
    for item in items:
        table.add_row(item.date, item.theme_title, item.subtheme_title, str(item.review_number))
    console.print(table)


def cmd_themes(db_path: str):
    themes = load_themes(db_path)
    if not themes:
        console.print("[yellow]No themes yet. Use 'add' to create one.[/yellow]")
        return
    table = Table(title="Themes")
    table.add_column("Theme", style="cyan")
    table.add_column("Subtheme")
    table.add_column("Status")
    table.add_column("Reviews", justify="right")
    table.add_column("Next")
    for theme in themes:
        for st in theme.subthemes:
            progress = subtheme_progress(st)
            nxt = next_pending_review(st)
            color = STATUS_COLORS.get(st.status, "white")
            table.add_row(
                theme.title,
                st.title,
                f"[{color}]{st.status}[/{color}]",
                f"{progress['completed']}/{progress['total']}",
                nxt.date if nxt else "",
            )
    console.print(table)


def main():
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    db_path = settings.db_path
    init_db(db_path)

    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="today").strip().lower()
        try:
            if choice == "today":
                cmd_today(db_path)
            elif choice == "review":
                cmd_review(db_path)
            elif choice == "add":
                cmd_add(db_path)
            elif choice == "upcoming":
                cmd_upcoming(db_path)
            elif choice == "themes":
                cmd_themes(db_path)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]See you tomorrow![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
