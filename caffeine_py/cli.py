"""Command-line interface for caffeine_py."""

import signal
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from .client import CaffeineClient
from .config import ContestConfig
from .config.local_config import CONFIG_FILENAME
from .contest import (
    ContestRunner,
    ContestSelector,
    QuitController,
    WatchEvent,
    list_code_files,
    submit_solution,
)
from .errors import CaffeineError
from .utils.terminal import choose_option, create_table, format_verdict_color


console = Console()


@click.group()
@click.version_option(version=__version__)
def cli():
    """caffeine_py - contest automation for Codeforces on top of caffeine."""
    pass


def notify_event(event: WatchEvent) -> None:
    """Print a watch notification."""
    console.bell()
    console.print(
        f"[bold]{event.title}[/bold] ({escape(event.user)}) "
        f"Problem: {escape(event.problem_index)} ({format_verdict_color(event.verdict)})"
    )


@contextmanager
def quit_on_signal(quit: QuitController):
    """Turn the first Ctrl-C (or SIGTERM) into a quit request."""

    def handler(signum, frame):
        console.print("\n[red]Quitting contest... (press Ctrl-C again to abort)[/red]")
        quit.request_quit()
        signal.signal(signal.SIGINT, signal.default_int_handler)

    previous_int = signal.signal(signal.SIGINT, handler)
    previous_term = signal.signal(signal.SIGTERM, handler)
    try:
        yield quit
    finally:
        signal.signal(signal.SIGINT, previous_int)
        signal.signal(signal.SIGTERM, previous_term)


@cli.command()
@click.option(
    "-r",
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="Folder to create solution and testcase files in",
)
@click.option("-c", "--contest-id", type=int, help="Contest ID (default: choose from list)")
@click.option("-n", "--limit", type=int, default=30, help="Number of contests to offer")
@click.option("-u", "--user", "users", multiple=True, help="Extra handle to watch")
@click.option("-t", "--template", help="Solution template file")
@click.option("--poll-delay", type=float, help="Seconds between polling rounds")
@click.option("--intra-poll-delay", type=float, help="Seconds between polled users")
@click.option("--debug", is_flag=True, default=False, help="Enable debug output")
def init(
    root: Path,
    contest_id: Optional[int],
    limit: int,
    users: Tuple[str, ...],
    template: Optional[str],
    poll_delay: Optional[float],
    intra_poll_delay: Optional[float],
    debug: bool,
):
    """Start a contest: create files, then watch submissions until Ctrl-C."""
    config_path = ContestConfig.find_config(root) or root / CONFIG_FILENAME
    config = ContestConfig.load_or_default(config_path)
    if template is not None:
        config.template_location = template
    if poll_delay is not None:
        config.poll_delay = poll_delay
    if intra_poll_delay is not None:
        config.intra_poll_delay = intra_poll_delay

    client = CaffeineClient(config.executable, debug=debug)
    quit = QuitController()
    runner = ContestRunner(
        client,
        config,
        root,
        quit,
        choose=lambda title, names: choose_option(title, names[:limit]),
        notify=notify_event,
        config_path=config_path,
    )

    with quit_on_signal(quit):
        try:
            runner.run(contest_id=contest_id, extra_users=users)
        except CaffeineError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            raise click.exceptions.Exit(1)


@cli.command()
@click.argument("file", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-p", "--problem", help="Problem index (default: choose from standings)")
@click.option("--debug", is_flag=True, default=False, help="Enable debug output")
def submit(file: Optional[Path], problem: Optional[str], debug: bool):
    """Submit a solution to the current contest."""
    config = ContestConfig.load_or_default()
    if config.contest_id is None:
        console.print(
            "[red]You can't submit to a contest before you have started one![/red]"
        )
        raise click.exceptions.Exit(1)

    client = CaffeineClient(config.executable, debug=debug)
    try:
        if problem is None:
            problem = choose_option(
                "Problems", client.get_problem_indices(config.contest_id)
            )
        if file is None:
            filename = choose_option("Code Files", list_code_files(Path.cwd()))
            file = Path.cwd() / filename if filename else None
        if not problem or file is None:
            console.print("[yellow]Cancelled[/yellow]")
            raise click.exceptions.Exit(1)

        ack = submit_solution(client, config.contest_id, problem, file.resolve())
    except CaffeineError as e:
        console.print(f"[red]Failed to submit to problem: {escape(str(e))}[/red]")
        raise click.exceptions.Exit(1)

    console.print(escape(ack.strip()))


@cli.command()
@click.option("-n", "--limit", type=int, default=30, help="Number of contests to show")
def contests(limit: int):
    """Show the most recent and upcoming contests."""
    config = ContestConfig.load_or_default()
    # Listing only, nothing is ever chosen.
    selector = ContestSelector(
        CaffeineClient(config.executable), lambda title, names: None
    )

    console.print("[cyan]Fetching available contests...[/cyan]")
    try:
        catalog = selector.fetch_catalog()
    except CaffeineError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise click.exceptions.Exit(1)

    if not catalog:
        console.print("[red]No contests found.[/red]")
        return

    table = create_table("Available Contests", ["ID", "Name", "Duration", "Starts in"])
    for contest in list(catalog.values())[:limit]:
        starts_in = (
            f"{-contest.relative_time_seconds // 60} min"
            if not contest.has_started
            else "started"
        )
        table.add_row(
            str(contest.id),
            escape(contest.name),
            f"{contest.duration_seconds // 60} min",
            starts_in,
        )
    console.print(table)


@cli.group()
def config():
    """Manage local contest configuration."""
    pass


@config.command(name="show")
def config_show():
    """Display the effective local configuration."""
    path = ContestConfig.find_config()
    current = ContestConfig.load_or_default(path)

    if path is None:
        console.print("[yellow]No local configuration found, using defaults.[/yellow]")
        console.print("Run 'caffeine_py config init' to create one.")
    else:
        console.print(f"[bold cyan]Config file:[/bold cyan] {escape(str(path))}")

    table = create_table("Configuration", ["Setting", "Value"])
    for key, value in vars(current).items():
        table.add_row(key, escape(str(value)))
    console.print(table)


@config.command(name="init")
def config_init():
    """Write a default configuration to the current directory."""
    path = Path.cwd() / CONFIG_FILENAME
    if path.exists():
        console.print(f"[yellow]{escape(str(path))} already exists.[/yellow]")
        return

    ContestConfig().save(path)
    console.print(f"[green]Created {escape(str(path))}[/green]")


@cli.command()
def version():
    """Show version information."""
    config = ContestConfig.load_or_default()
    console.print(
        f"[bold cyan]caffeine_py[/bold cyan] version [green]{__version__}[/green]"
    )
    try:
        console.print(escape(CaffeineClient(config.executable).version()))
    except CaffeineError as e:
        console.print(f"[red]{escape(str(e))}[/red]")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
