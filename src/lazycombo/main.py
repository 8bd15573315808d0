"""Command line entry point: launches the LazyCombo demo TUI."""

from typing import Optional

import typer

from lazycombo.config import ComboConfig
from lazycombo.logger import get_logger, setup_logger

cli = typer.Typer(
    name="lazycombo",
    help="Demo of a combo box populated lazily by a cancellable lookup callback",
    epilog="""
    Examples:
    $ lazycombo --delay 1.5 --log-level DEBUG
    $ lazycombo --not-editable
    """,
    add_completion=False,
)


@cli.command()
def main(
    delay: Optional[float] = typer.Option(
        None,
        "--delay",
        min=0.0,
        help="Simulated lookup latency in seconds (default: LAZYCOMBO_LOOKUP_DELAY or 0.3)",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level (default: LAZYCOMBO_LOG_LEVEL or INFO)",
    ),
    not_editable: bool = typer.Option(
        False,
        "--not-editable",
        help="Disable typing; the dropdown lists the whole catalogue",
    ),
    env_file: Optional[str] = typer.Option(
        None,
        "--env-file",
        help="Path to a .env file with LAZYCOMBO_* settings",
    ),
) -> None:
    """Launch the demo TUI."""
    config = ComboConfig.from_env(env_file)
    if delay is not None:
        config.lookup_delay = delay
    if log_level is not None:
        config.log_level = log_level.upper()
    if not_editable:
        config.is_editable = False

    setup_logger(log_file=config.log_file, log_level=config.log_level, console_output=config.console_output)
    logger = get_logger("main")
    logger.info(f"Starting LazyCombo demo (delay={config.lookup_delay}s, editable={config.is_editable})")

    # Imported late so --help stays fast
    from lazycombo.presentation.tui import LazyComboDemoApp

    LazyComboDemoApp(config).run()
    logger.info("LazyCombo demo exited")


if __name__ == "__main__":
    cli()
